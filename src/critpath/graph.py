"""Dependency graph construction and cycle detection."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum

from .exceptions import (
    CrossProjectReferenceError,
    CyclicDependencyError,
    DuplicateDependencyError,
    InvalidDependencyError,
    ValidationError,
)
from .models import Dependency


class VisitState(Enum):
    """Per-node state of a depth-first traversal."""

    UNVISITED = "unvisited"
    IN_PROGRESS = "in_progress"
    DONE = "done"


@dataclass(frozen=True)
class DependencyGraph:
    """Forward and reverse adjacency over a fixed set of task IDs.

    Both maps contain every task ID, in task input order. Isolated tasks map
    to empty lists.
    """

    task_ids: tuple[str, ...]
    forward: Mapping[str, list[str]]  # predecessor -> successors
    reverse: Mapping[str, list[str]]  # successor -> predecessors

    def successors(self, task_id: str) -> list[str]:
        """Tasks that cannot start before task_id finishes."""
        return self.forward[task_id]

    def predecessors(self, task_id: str) -> list[str]:
        """Tasks that must finish before task_id starts."""
        return self.reverse[task_id]

    @property
    def edge_count(self) -> int:
        """Number of edges, duplicates included."""
        return sum(len(succs) for succs in self.forward.values())


def depth_first_post_order(
    roots: Iterable[str],
    neighbours: Mapping[str, Sequence[str]],
    on_done: Callable[[str], None] | None = None,
) -> list[str]:
    """Visit nodes depth-first and return them in post-order.

    A node is finished only after all of its neighbours are finished, so with
    reverse adjacency the result lists predecessors before successors. Each
    node is finished exactly once; on_done is called as it happens.

    An explicit stack keeps deep graphs clear of the recursion limit.

    Raises:
        CyclicDependencyError: If a neighbour is reached while still in progress
    """
    state = dict.fromkeys(neighbours, VisitState.UNVISITED)
    order: list[str] = []

    for root in roots:
        if state[root] is not VisitState.UNVISITED:
            continue

        state[root] = VisitState.IN_PROGRESS
        stack: list[tuple[str, Iterator[str]]] = [(root, iter(neighbours[root]))]

        while stack:
            node, pending = stack[-1]
            for child in pending:
                child_state = state[child]
                if child_state is VisitState.IN_PROGRESS:
                    path = [entry[0] for entry in stack]
                    raise CyclicDependencyError(path[path.index(child) :] + [child])
                if child_state is VisitState.UNVISITED:
                    state[child] = VisitState.IN_PROGRESS
                    stack.append((child, iter(neighbours[child])))
                    break
            else:
                stack.pop()
                state[node] = VisitState.DONE
                order.append(node)
                if on_done is not None:
                    on_done(node)

    return order


def _check_endpoints(dependency: Dependency, known_ids: set[str]) -> None:
    if dependency.predecessor_id == dependency.successor_id:
        raise InvalidDependencyError(
            f"Task {dependency.predecessor_id} cannot depend on itself"
        )
    for endpoint in (dependency.predecessor_id, dependency.successor_id):
        if endpoint not in known_ids:
            raise CrossProjectReferenceError(
                f"Dependency {dependency} references task {endpoint}, "
                "which is not part of this project"
            )


def build_graph(task_ids: Sequence[str], dependencies: Iterable[Dependency]) -> DependencyGraph:
    """Build forward and reverse adjacency and verify the result is a DAG.

    Raises:
        ValidationError: If a task ID appears more than once
        InvalidDependencyError: If an edge is a self-loop
        CrossProjectReferenceError: If an edge endpoint is not in task_ids
        CyclicDependencyError: If the edges form a cycle
    """
    known_ids: set[str] = set()
    for task_id in task_ids:
        if task_id in known_ids:
            raise ValidationError(f"Duplicate task id: {task_id}")
        known_ids.add(task_id)

    forward: dict[str, list[str]] = {task_id: [] for task_id in task_ids}
    reverse: dict[str, list[str]] = {task_id: [] for task_id in task_ids}

    for dep in dependencies:
        _check_endpoints(dep, known_ids)
        forward[dep.predecessor_id].append(dep.successor_id)
        reverse[dep.successor_id].append(dep.predecessor_id)

    depth_first_post_order(task_ids, forward)

    return DependencyGraph(task_ids=tuple(task_ids), forward=forward, reverse=reverse)


def topological_order(graph: DependencyGraph) -> list[str]:
    """Task IDs ordered so that every predecessor precedes its successors."""
    return depth_first_post_order(graph.task_ids, graph.reverse)


def validate_new_dependency(
    task_ids: Sequence[str],
    dependencies: Iterable[Dependency],
    new_dependency: Dependency,
) -> None:
    """Check that a single proposed edge can be added to an existing project.

    Checks, in order: self-loop, endpoints within the project, duplicate
    edge, and whether the existing edges plus the proposed one form a cycle.

    Raises:
        InvalidDependencyError, CrossProjectReferenceError,
        DuplicateDependencyError, CyclicDependencyError
    """
    existing = list(dependencies)
    _check_endpoints(new_dependency, set(task_ids))

    if any(dep.key == new_dependency.key for dep in existing):
        raise DuplicateDependencyError(f"Dependency already exists: {new_dependency}")

    build_graph(task_ids, [*existing, new_dependency])
