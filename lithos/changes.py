"""Records describing how one resource graph differs from another."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass
class ResourceRemoval:
    """A resource present before and absent now."""

    previous_inputs_hash: str
    previous_outputs_hash: str


@dataclass
class ResourceAddition:
    """A resource absent before and present now."""

    current_inputs_hash: str


@dataclass
class ResourceChange:
    """A resource whose own inputs changed."""

    previous_inputs_hash: str
    previous_outputs_hash: str
    current_inputs_hash: str


@dataclass
class ResourceDependencyChange:
    """A resource whose inputs are unchanged but whose dependencies changed."""

    previous_inputs_hash: str
    previous_outputs_hash: str
    current_inputs_hash: str
    changed_dependencies: list[str] = field(default_factory=list)


def _sorted_records(records: Mapping[str, Any]) -> dict[str, dict[str, Any]]:
    return {key: dataclasses.asdict(records[key]) for key in sorted(records)}


@dataclass
class ResourceGraphDiff:
    """All removals, additions, changes and dependency changes between two graphs."""

    removals: dict[str, ResourceRemoval] = field(default_factory=dict)
    additions: dict[str, ResourceAddition] = field(default_factory=dict)
    changes: dict[str, ResourceChange] = field(default_factory=dict)
    dependency_changes: dict[str, ResourceDependencyChange] = field(
        default_factory=dict
    )

    def to_dict(self) -> dict[str, dict[str, dict[str, Any]]]:
        """Return the serializable form, with each section ordered by resource id."""
        return {
            "removals": _sorted_records(self.removals),
            "additions": _sorted_records(self.additions),
            "changes": _sorted_records(self.changes),
            "dependency_changes": _sorted_records(self.dependency_changes),
        }