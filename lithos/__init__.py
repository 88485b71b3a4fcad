"""Resource graphs for declarative Roblox deployments: inputs and outputs,
dependency ordering, diffing and evaluation against a resource manager."""

__version__ = "0.1.0"