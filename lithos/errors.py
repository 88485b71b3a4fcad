"""Errors and result records produced while evaluating a resource graph."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass
class Diagnostic:
    """Extra context attached to a failed operation."""

    detail: str | None = None
    probable_causes: list[str] = field(default_factory=list)
    next_steps: list[str] = field(default_factory=list)


class OperationError(Exception):
    """A create, update or delete operation on a resource failed."""

    def __init__(self, message: str, diagnostics: Iterable[Diagnostic] = ()) -> None:
        super().__init__(message)
        self.message = message
        self._diagnostics = list(diagnostics)

    def summary(self) -> str:
        """Return the one-line description of the failure."""
        return self.message

    def diagnostics(self) -> list[Diagnostic]:
        """Return the diagnostics attached to the failure."""
        return list(self._diagnostics)


@dataclass
class ResourceFailure:
    """A failed operation together with the resource it was applied to."""

    resource_id: str
    error: OperationError


@dataclass
class EvaluateResults:
    """Counts of what happened to each resource during an evaluation."""

    created_count: int = 0
    updated_count: int = 0
    deleted_count: int = 0
    noop_count: int = 0
    skipped_count: int = 0


class EvaluateError(Exception):
    """Evaluation finished with at least one failed resource."""

    def __init__(
        self, results: EvaluateResults, failures: Iterable[ResourceFailure]
    ) -> None:
        self.results = results
        self.failures = list(failures)
        super().__init__(
            f"Failed {len(self.failures)} change(s) while evaluating the resource graph."
        )

    def failure_count(self) -> int:
        """Return how many resources failed."""
        return len(self.failures)

    def applied_mutation_count(self) -> int:
        """Return how many creations, updates and deletions were applied."""
        return (
            self.results.created_count
            + self.results.updated_count
            + self.results.deleted_count
        )