"""Forward and backward passes of the critical path method."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from .graph import DependencyGraph, depth_first_post_order
from .observers import ScheduleObserver


@dataclass(frozen=True)
class ForwardPassResult:
    """Early start and early finish per task."""

    early_start: dict[str, float]
    early_finish: dict[str, float]

    @property
    def project_duration(self) -> float:
        """Latest early finish, 0 when there are no tasks."""
        return project_duration(self.early_finish)


@dataclass(frozen=True)
class BackwardPassResult:
    """Late start and late finish per task."""

    late_start: dict[str, float]
    late_finish: dict[str, float]


def project_duration(early_finish: Mapping[str, float]) -> float:
    """Project duration is the largest early finish."""
    return max(early_finish.values(), default=0.0)


def forward_pass(
    graph: DependencyGraph,
    durations: Mapping[str, float],
    observer: ScheduleObserver | None = None,
) -> ForwardPassResult:
    """Compute ES/EF, visiting every predecessor before its successors.

    ES(n) = max(EF(p) for each predecessor p), or 0 without predecessors.
    EF(n) = ES(n) + duration(n).

    Raises:
        CyclicDependencyError: If the graph turns out to contain a cycle
    """
    early_start: dict[str, float] = {}
    early_finish: dict[str, float] = {}

    def resolve(task_id: str) -> None:
        start = max((early_finish[pred] for pred in graph.predecessors(task_id)), default=0.0)
        early_start[task_id] = start
        early_finish[task_id] = start + durations[task_id]
        if observer is not None:
            observer.forward_resolved(task_id, start, early_finish[task_id])

    depth_first_post_order(graph.task_ids, graph.reverse, on_done=resolve)
    return ForwardPassResult(early_start=early_start, early_finish=early_finish)


def backward_pass(
    graph: DependencyGraph,
    durations: Mapping[str, float],
    duration: float,
    observer: ScheduleObserver | None = None,
) -> BackwardPassResult:
    """Compute LS/LF, visiting every successor before its predecessors.

    LF(n) = min(LS(s) for each successor s), or the project duration for
    tasks without successors. LS(n) = LF(n) - duration(n).

    Raises:
        CyclicDependencyError: If the graph turns out to contain a cycle
    """
    late_start: dict[str, float] = {}
    late_finish: dict[str, float] = {}

    def resolve(task_id: str) -> None:
        finish = min((late_start[succ] for succ in graph.successors(task_id)), default=duration)
        late_finish[task_id] = finish
        late_start[task_id] = finish - durations[task_id]
        if observer is not None:
            observer.backward_resolved(task_id, late_start[task_id], finish)

    depth_first_post_order(graph.task_ids, graph.forward, on_done=resolve)
    return BackwardPassResult(late_start=late_start, late_finish=late_finish)
