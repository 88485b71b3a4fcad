"""The concrete resource type stored in a Roblox resource graph."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

import yaml

from lithos.inputs import RobloxInputs
from lithos.outputs import RobloxOutputs


def yaml_hash(data: Any) -> str:
    """Render data as block-style YAML, used both as a change hash and for display."""
    text = yaml.safe_dump(
        data, sort_keys=False, default_flow_style=False, allow_unicode=True
    )
    if text.endswith("...\n"):
        text = text[: -len("...\n")]
    return text.rstrip()


@dataclass
class RobloxResource:
    """A resource: its id, desired inputs, realized outputs and dependency ids."""

    id: str
    inputs: RobloxInputs
    outputs: RobloxOutputs | None = None
    dependencies: list[str] = field(default_factory=list)

    @classmethod
    def existing(
        cls,
        id: str,
        inputs: RobloxInputs,
        outputs: RobloxOutputs,
        dependencies: Iterable[RobloxResource] = (),
    ) -> RobloxResource:
        """Build a resource that already exists, depending on the given resources."""
        return cls(id, inputs, outputs, [dependency.id for dependency in dependencies])

    def add_dependency(self, dependency: RobloxResource) -> RobloxResource:
        """Make this resource depend on another; returns self for chaining."""
        self.dependencies.append(dependency.id)
        return self

    def inputs_hash(self) -> str:
        """Return the YAML rendering of the inputs."""
        return yaml_hash(self.inputs.to_data())

    def outputs_hash(self) -> str:
        """Return the YAML rendering of the outputs, if any."""
        return yaml_hash(None if self.outputs is None else self.outputs.to_data())

    def to_data(self) -> dict[str, Any]:
        """Return the serializable form of the resource."""
        return {
            "id": self.id,
            "inputs": self.inputs.to_data(),
            "outputs": None if self.outputs is None else self.outputs.to_data(),
            "dependencies": list(self.dependencies),
        }

    @classmethod
    def from_data(cls, data: Mapping[str, Any]) -> RobloxResource:
        """Build a resource from its serialized form."""
        try:
            resource_id = data["id"]
            inputs = RobloxInputs.from_data(data["inputs"])
        except KeyError as error:
            raise ValueError(f"missing field {error.args[0]!r} in resource") from None
        raw_outputs = data.get("outputs")
        outputs = None if raw_outputs is None else RobloxOutputs.from_data(raw_outputs)
        return cls(resource_id, inputs, outputs, list(data.get("dependencies") or []))