"""Applying a resource graph: creating, updating and deleting resources so
that the realized state matches the desired one."""

from __future__ import annotations

import copy
import dataclasses
import difflib
import logging
from collections.abc import Awaitable
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Protocol

from lithos.errors import EvaluateError, EvaluateResults, OperationError, ResourceFailure
from lithos.graph import GraphCycleError, ResourceGraph, dependency_outputs_hash

logger = logging.getLogger(__name__)


class ResourceManager(Protocol):
    """Performs the side effects for each resource; raises OperationError on failure."""

    async def get_create_price(
        self, resource_id: str, inputs: Any, dependency_outputs: list[Any]
    ) -> int | None: ...

    async def create(
        self, resource_id: str, inputs: Any, dependency_outputs: list[Any], price: int | None
    ) -> Any: ...

    async def get_update_price(
        self, resource_id: str, inputs: Any, outputs: Any, dependency_outputs: list[Any]
    ) -> int | None: ...

    async def update(
        self,
        resource_id: str,
        inputs: Any,
        outputs: Any,
        dependency_outputs: list[Any],
        price: int | None,
    ) -> Any: ...

    async def delete(
        self, resource_id: str, outputs: Any, dependency_outputs: list[Any]
    ) -> None: ...


class EvaluateProgressHandler(Protocol):
    """Persists the graph after each applied change; raises on failure."""

    async def persist_progress(
        self,
        current_graph: ResourceGraph,
        results: EvaluateResults,
        failures: list[ResourceFailure],
    ) -> None: ...


class _Status(Enum):
    SKIPPED = auto()
    NOOP = auto()
    FAILED = auto()
    DELETED = auto()
    CREATED = auto()
    UPDATED = auto()


@dataclass
class _Outcome:
    status: _Status
    payload: Any = None


_MISSING_DEPENDENCY = "A dependency failed to produce outputs."


def _log_changeset(previous: str, current: str) -> None:
    for line in difflib.ndiff(previous.splitlines(), current.splitlines()):
        if not line.startswith("?"):
            logger.info("  %s", line)


def _existing_outputs(resource: Any) -> Any:
    if resource.outputs is None:
        raise ValueError("Existing resource should have outputs.")
    return resource.outputs


def _complete_dependency_outputs(graph: ResourceGraph, resource: Any) -> list[Any]:
    outputs = graph.dependency_outputs(resource)
    if outputs is None:
        raise ValueError("Previous graph should be complete.")
    return outputs


async def _purchase(
    price_request: Awaitable[int | None], allow_purchases: bool
) -> tuple[int | None, _Outcome | None]:
    try:
        price = await price_request
    except OperationError as error:
        return None, _Outcome(_Status.FAILED, error)
    if price is not None and price > 0:
        if not allow_purchases:
            return None, _Outcome(
                _Status.SKIPPED,
                f"Resource would cost {price} Robux to create. Give Mantle permission "
                "to make purchases with --allow-purchases.",
            )
        logger.info("")
        logger.info("%s Robux will be charged from your account.", price)
        return price, None
    return None, None


async def _evaluate_delete(
    previous_graph: ResourceGraph, manager: ResourceManager, resource_id: str
) -> _Outcome:
    resource = previous_graph.resources[resource_id]
    dependency_outputs = _complete_dependency_outputs(previous_graph, resource)
    dependencies_hash = dependency_outputs_hash(dependency_outputs)

    logger.info("- Deleting: %s", resource.id)
    logger.info("Dependencies:")
    _log_changeset(dependencies_hash, dependencies_hash)
    logger.info("Inputs:")
    _log_changeset(resource.inputs_hash(), "")

    try:
        await manager.delete(resource_id, _existing_outputs(resource), dependency_outputs)
    except OperationError as error:
        return _Outcome(_Status.FAILED, error)
    return _Outcome(_Status.DELETED)


async def _evaluate_create_or_update(
    graph: ResourceGraph,
    previous_graph: ResourceGraph,
    manager: ResourceManager,
    resource_id: str,
    allow_purchases: bool,
) -> _Outcome:
    resource = graph.resources[resource_id]
    inputs_hash = resource.inputs_hash()
    dependency_outputs = graph.dependency_outputs(resource)
    previous = previous_graph.resources.get(resource_id)

    if previous is not None:
        previous_hash = previous.inputs_hash()
        previous_dependencies_hash = dependency_outputs_hash(
            _complete_dependency_outputs(previous_graph, previous)
        )

        if dependency_outputs is None:
            logger.info("○ Update or Noop: %s", resource.id)
            return _Outcome(_Status.SKIPPED, _MISSING_DEPENDENCY)
        dependencies_hash = dependency_outputs_hash(dependency_outputs)

        if previous_hash == inputs_hash and previous_dependencies_hash == dependencies_hash:
            return _Outcome(_Status.NOOP)

        logger.info("~ Updating: %s", resource_id)
        logger.info("Dependencies:")
        _log_changeset(previous_dependencies_hash, dependencies_hash)
        logger.info("Inputs:")
        _log_changeset(previous_hash, inputs_hash)

        outputs = _existing_outputs(previous)
        price, outcome = await _purchase(
            manager.get_update_price(
                resource_id, resource.inputs, outputs, list(dependency_outputs)
            ),
            allow_purchases,
        )
        if outcome is not None:
            return outcome
        try:
            new_outputs = await manager.update(
                resource_id, resource.inputs, outputs, dependency_outputs, price
            )
        except OperationError as error:
            return _Outcome(_Status.FAILED, error)
        return _Outcome(_Status.UPDATED, new_outputs)

    logger.info("+ Creating: %s", resource_id)
    if dependency_outputs is None:
        return _Outcome(_Status.SKIPPED, _MISSING_DEPENDENCY)
    dependencies_hash = dependency_outputs_hash(dependency_outputs)

    logger.info("Dependencies:")
    _log_changeset(dependencies_hash, dependencies_hash)
    logger.info("Inputs:")
    _log_changeset("", inputs_hash)

    price, outcome = await _purchase(
        manager.get_create_price(resource_id, resource.inputs, list(dependency_outputs)),
        allow_purchases,
    )
    if outcome is not None:
        return outcome
    try:
        new_outputs = await manager.create(
            resource_id, resource.inputs, dependency_outputs, price
        )
    except OperationError as error:
        return _Outcome(_Status.FAILED, error)
    return _Outcome(_Status.CREATED, new_outputs)


def _restore_previous(graph: ResourceGraph, previous_graph: ResourceGraph, resource_id: str) -> None:
    previous = previous_graph.resources.get(resource_id)
    if previous is not None:
        graph.resources[resource_id] = copy.deepcopy(previous)
    else:
        graph.resources.pop(resource_id, None)


def _apply_outcome(
    graph: ResourceGraph,
    previous_graph: ResourceGraph,
    resource_id: str,
    outcome: _Outcome,
    results: EvaluateResults,
    failures: list[ResourceFailure],
) -> bool:
    """Record an outcome in the graph and results; return True for a mutation."""
    status = outcome.status

    if status is _Status.DELETED:
        results.deleted_count += 1
        logger.info("Succeeded with outputs:")
        _log_changeset(previous_graph.resources[resource_id].outputs_hash(), "")
        return True

    if status is _Status.CREATED:
        resource = graph.resources[resource_id]
        resource.outputs = outcome.payload
        results.created_count += 1
        logger.info("Succeeded with outputs:")
        _log_changeset("", resource.outputs_hash())
        return True

    if status is _Status.UPDATED:
        resource = graph.resources[resource_id]
        resource.outputs = outcome.payload
        results.updated_count += 1
        logger.info("Succeeded with outputs:")
        _log_changeset(
            previous_graph.resources[resource_id].outputs_hash(), resource.outputs_hash()
        )
        return True

    if status is _Status.NOOP:
        previous = previous_graph.resources[resource_id]
        graph.resources[resource_id].outputs = copy.deepcopy(_existing_outputs(previous))
        results.noop_count += 1
        return False

    if status is _Status.SKIPPED:
        _restore_previous(graph, previous_graph, resource_id)
        results.skipped_count += 1
        logger.info("Skipped: %s", outcome.payload)
        return False

    error: OperationError = outcome.payload
    _restore_previous(graph, previous_graph, resource_id)
    failures.append(ResourceFailure(resource_id=resource_id, error=error))
    for diagnostic in error.diagnostics():
        if diagnostic.detail is not None:
            logger.info("  %s", diagnostic.detail)
        for cause in diagnostic.probable_causes:
            logger.info("  likely: %s", cause)
        for next_step in diagnostic.next_steps:
            logger.info("  next: %s", next_step)
    logger.info("Failed: %s", error.summary())
    return False


def _ordered(graph: ResourceGraph, results: EvaluateResults) -> list[str]:
    try:
        return graph.topological_order()
    except GraphCycleError as error:
        raise EvaluateError(
            dataclasses.replace(results),
            [ResourceFailure("resource-graph", OperationError(str(error)))],
        ) from error


async def _persist(
    graph: ResourceGraph,
    progress: EvaluateProgressHandler | None,
    results: EvaluateResults,
    failures: list[ResourceFailure],
    resource_id: str,
) -> None:
    if progress is None:
        return
    try:
        await progress.persist_progress(graph, results, failures)
    except Exception as error:
        raise EvaluateError(
            dataclasses.replace(results),
            [
                ResourceFailure(
                    resource_id,
                    OperationError(
                        "Failed to persist deployment progress after applying "
                        f"{resource_id}\n\t{error}"
                    ),
                )
            ],
        ) from error


async def evaluate(
    graph: ResourceGraph,
    previous_graph: ResourceGraph,
    manager: ResourceManager,
    allow_purchases: bool = False,
) -> EvaluateResults:
    """Bring ``graph`` into being, starting from ``previous_graph``."""
    return await evaluate_with_progress(graph, previous_graph, manager, allow_purchases)


async def evaluate_with_progress(
    graph: ResourceGraph,
    previous_graph: ResourceGraph,
    manager: ResourceManager,
    allow_purchases: bool = False,
    progress: EvaluateProgressHandler | None = None,
) -> EvaluateResults:
    """Like :func:`evaluate`, persisting progress after every applied change.

    Removed resources are deleted first, leaves before their dependencies;
    the remaining resources are then created or updated in dependency order.
    ``graph`` is updated in place with the realized outputs. Raises
    EvaluateError if any resource failed or progress could not be persisted.
    """
    results = EvaluateResults()
    failures: list[ResourceFailure] = []

    for resource_id in reversed(_ordered(previous_graph, results)):
        if resource_id in graph.resources:
            continue
        outcome = await _evaluate_delete(previous_graph, manager, resource_id)
        if _apply_outcome(graph, previous_graph, resource_id, outcome, results, failures):
            await _persist(graph, progress, results, failures, resource_id)

    for resource_id in _ordered(graph, results):
        outcome = await _evaluate_create_or_update(
            graph, previous_graph, manager, resource_id, allow_purchases
        )
        if _apply_outcome(graph, previous_graph, resource_id, outcome, results, failures):
            await _persist(graph, progress, results, failures, resource_id)

    if failures:
        raise EvaluateError(results, failures)
    return results