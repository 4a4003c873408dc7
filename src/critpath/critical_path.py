"""Slack computation and critical path extraction."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from .config import CriticalEdgeMode, EngineConfig
from .exceptions import InsufficientDataError
from .models import Dependency, ScheduleEntry, Task
from .observers import ScheduleObserver
from .passes import BackwardPassResult, ForwardPassResult


def check_preconditions(
    task_count: int, dependency_count: int, config: EngineConfig | None = None
) -> None:
    """Ensure there is enough data for a meaningful analysis.

    Raises:
        InsufficientDataError: If there are too few tasks or no dependencies
    """
    config = config or EngineConfig()
    if task_count < config.min_tasks:
        raise InsufficientDataError(f"Need at least {config.min_tasks} tasks for PERT analysis")
    if dependency_count < config.min_dependencies:
        noun = "dependency" if config.min_dependencies == 1 else "dependencies"
        raise InsufficientDataError(
            f"Need at least {config.min_dependencies} {noun} for PERT analysis"
        )


def is_critical(slack: float, config: EngineConfig | None = None) -> bool:
    """Zero slack, within the rounding tolerance of three-point estimates."""
    return abs(slack) < (config or EngineConfig()).critical_tolerance


def build_entries(  # noqa: PLR0913 - one argument per pass result
    tasks: Sequence[Task],
    durations: Mapping[str, float],
    forward: ForwardPassResult,
    backward: BackwardPassResult,
    config: EngineConfig | None = None,
    observer: ScheduleObserver | None = None,
) -> list[ScheduleEntry]:
    """Combine pass results into schedule entries, in task input order."""
    entries: list[ScheduleEntry] = []
    for task in tasks:
        early_start = forward.early_start[task.id]
        late_start = backward.late_start[task.id]
        slack = late_start - early_start
        critical = is_critical(slack, config)
        if observer is not None:
            observer.slack_resolved(task.id, slack, critical)
        entries.append(
            ScheduleEntry(
                task_id=task.id,
                name=task.name,
                duration=durations[task.id],
                early_start=early_start,
                early_finish=forward.early_finish[task.id],
                late_start=late_start,
                late_finish=backward.late_finish[task.id],
                slack=slack,
                is_critical=critical,
            )
        )
    return entries


def critical_edges(
    entries: Sequence[ScheduleEntry],
    dependencies: Sequence[Dependency],
    config: EngineConfig | None = None,
) -> list[Dependency]:
    """Edges whose endpoints are both critical.

    This approximates membership of the longest path: with several parallel
    zero-slack chains, an edge joining two critical tasks from different
    chains is reported too. CriticalEdgeMode.TIGHT narrows it down to edges
    where the successor starts exactly when the predecessor finishes.
    """
    config = config or EngineConfig()
    by_id = {entry.task_id: entry for entry in entries}

    result: list[Dependency] = []
    for dep in dependencies:
        pred = by_id[dep.predecessor_id]
        succ = by_id[dep.successor_id]
        if not (pred.is_critical and succ.is_critical):
            continue
        if config.critical_edges is CriticalEdgeMode.TIGHT and not is_critical(
            succ.early_start - pred.early_finish, config
        ):
            continue
        result.append(dep)
    return result


def critical_task_ids(entries: Sequence[ScheduleEntry]) -> list[str]:
    """IDs of critical tasks, in task input order."""
    return [entry.task_id for entry in entries if entry.is_critical]
