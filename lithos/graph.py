"""A graph of resources ordered by their dependencies."""

from __future__ import annotations

import copy
from collections.abc import Iterable
from typing import Any, Protocol

from lithos.changes import (
    ResourceAddition,
    ResourceChange,
    ResourceDependencyChange,
    ResourceGraphDiff,
    ResourceRemoval,
)
from lithos.resource import yaml_hash


class Resource(Protocol):
    """What the graph needs from a resource."""

    id: str
    inputs: Any
    outputs: Any
    dependencies: list[str]

    def inputs_hash(self) -> str: ...

    def outputs_hash(self) -> str: ...


class GraphCycleError(ValueError):
    """The graph cannot be ordered because of a cycle or an unknown dependency."""

    def __init__(self) -> None:
        super().__init__("Cannot evaluate resource graph because it has cycles")


def _plain(value: Any) -> Any:
    to_data = getattr(value, "to_data", None)
    return to_data() if callable(to_data) else value


def dependency_outputs_hash(dependency_outputs: Iterable[Any]) -> str:
    """Render a list of dependency outputs as YAML, used to detect changes."""
    return yaml_hash([_plain(output) for output in dependency_outputs])


class ResourceGraph:
    """Resources keyed by id; the graph holds its own copies of them."""

    def __init__(self, resources: Iterable[Resource] = ()) -> None:
        self.resources: dict[str, Any] = {
            resource.id: copy.deepcopy(resource) for resource in resources
        }

    def get_outputs(self, resource_id: str) -> Any:
        """Return the outputs of a resource, or None if absent or not yet realized."""
        resource = self.resources.get(resource_id)
        return None if resource is None else resource.outputs

    def topological_order(self) -> list[str]:
        """Return resource ids so that each comes after all its dependencies."""
        remaining = {
            resource_id: list(self.resources[resource_id].dependencies)
            for resource_id in sorted(self.resources)
        }
        start_nodes = [node for node, deps in remaining.items() if not deps]
        ordered: list[str] = []
        while start_nodes:
            start_node = start_nodes.pop()
            ordered.append(start_node)
            for node, deps in remaining.items():
                if start_node in deps:
                    deps[:] = [dep for dep in deps if dep != start_node]
                    if not deps:
                        start_nodes.append(node)
        if any(remaining.values()):
            raise GraphCycleError()
        return ordered

    def get_resource_list(self) -> list[Any]:
        """Return the resources in dependency order."""
        return [self.resources[resource_id] for resource_id in self.topological_order()]

    def dependency_outputs(self, resource: Resource) -> list[Any] | None:
        """Return the outputs of each dependency, or None if any is missing."""
        outputs = []
        for dependency in resource.dependencies:
            found = self.resources.get(dependency)
            if found is None or found.outputs is None:
                return None
            outputs.append(found.outputs)
        return outputs

    def diff(self, previous_graph: ResourceGraph) -> ResourceGraphDiff:
        """Compare this graph against a previous one."""
        result = ResourceGraphDiff()

        for resource_id in reversed(previous_graph.topological_order()):
            if resource_id in self.resources:
                continue
            previous = previous_graph.resources[resource_id]
            result.removals[resource_id] = ResourceRemoval(
                previous_inputs_hash=previous.inputs_hash(),
                previous_outputs_hash=previous.outputs_hash(),
            )

        for resource_id in self.topological_order():
            resource = self.resources[resource_id]
            inputs_hash = resource.inputs_hash()
            previous = previous_graph.resources.get(resource_id)

            if previous is None:
                result.additions[resource_id] = ResourceAddition(
                    current_inputs_hash=inputs_hash
                )
                continue

            previous_hash = previous.inputs_hash()
            if previous_hash != inputs_hash:
                result.changes[resource_id] = ResourceChange(
                    previous_inputs_hash=previous_hash,
                    previous_outputs_hash=previous.outputs_hash(),
                    current_inputs_hash=inputs_hash,
                )
                continue

            changed = [
                dependency
                for dependency in resource.dependencies
                if dependency in result.additions or dependency in result.changes
            ]
            if changed:
                result.dependency_changes[resource_id] = ResourceDependencyChange(
                    previous_inputs_hash=previous_hash,
                    previous_outputs_hash=previous.outputs_hash(),
                    current_inputs_hash=inputs_hash,
                    changed_dependencies=changed,
                )

        return result