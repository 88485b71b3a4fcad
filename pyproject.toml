[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lithos"
version = "0.1.0"
description = "Resource graphs for declarative Roblox deployments: ordering, diffing and evaluating desired state against previous state."
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["roblox", "deployment", "infrastructure-as-code", "resource-graph", "state"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Software Distribution",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["lithos"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
