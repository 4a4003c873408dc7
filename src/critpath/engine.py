"""Critical path scheduling engine.

compute_schedule() runs the four stages in order:

1. resolve an effective duration for every task
2. build and validate the dependency graph
3. forward pass (ES/EF), then backward pass (LS/LF)
4. derive slack, critical tasks and critical edges

It is a pure function of its arguments: each call builds its own working
tables and either returns a complete schedule or raises.
"""

from __future__ import annotations

from collections.abc import Sequence

from .config import EngineConfig
from .critical_path import build_entries, check_preconditions, critical_edges, critical_task_ids
from .duration import resolve_durations
from .graph import build_graph
from .models import Dependency, ProjectSchedule, Task
from .observers import LoggingObserver, ScheduleObserver
from .passes import backward_pass, forward_pass


def compute_schedule(
    tasks: Sequence[Task],
    dependencies: Sequence[Dependency],
    config: EngineConfig | None = None,
    observer: ScheduleObserver | None = None,
) -> ProjectSchedule:
    """Compute the PERT/CPM schedule of a project.

    Args:
        tasks: Tasks in the order they should be reported
        dependencies: Precedence edges between those tasks
        config: Engine constants, defaults if omitted
        observer: Receives step-level events; defaults to LoggingObserver

    Returns:
        ProjectSchedule with one entry per task

    Raises:
        InsufficientDataError: Fewer than 2 tasks or no dependencies
        ValidationError: Duplicate task IDs
        InvalidDependencyError: A task depends on itself
        CrossProjectReferenceError: An edge references an unknown task
        CyclicDependencyError: The dependencies contain a cycle
    """
    config = config or EngineConfig()
    if observer is None:
        observer = LoggingObserver()

    check_preconditions(len(tasks), len(dependencies), config)

    resolutions = resolve_durations(list(tasks), config)
    for resolution in resolutions.values():
        observer.duration_resolved(resolution)
    durations = {task_id: resolution.value for task_id, resolution in resolutions.items()}

    graph = build_graph([task.id for task in tasks], dependencies)
    observer.graph_built(graph)

    forward = forward_pass(graph, durations, observer)
    duration = forward.project_duration
    backward = backward_pass(graph, durations, duration, observer)

    entries = build_entries(tasks, durations, forward, backward, config, observer)
    critical_ids = critical_task_ids(entries)
    observer.completed(duration, critical_ids)

    return ProjectSchedule(
        entries=entries,
        dependencies=list(dependencies),
        project_duration=duration,
        critical_task_ids=critical_ids,
        critical_edges=critical_edges(entries, dependencies, config),
        metadata={
            "duration_sources": {
                task_id: resolution.source.value for task_id, resolution in resolutions.items()
            },
        },
    )
