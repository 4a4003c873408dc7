"""Step-level tracing for the scheduling engine.

The engine reports its progress to an observer instead of logging directly,
so the computation stays independent of any output channel. LoggingObserver
forwards everything to the critpath logger; tests can pass a
RecordingObserver to inspect what happened.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol

from .logger import checks_enabled, debug_enabled, get_logger

if TYPE_CHECKING:
    from .duration import DurationResolution
    from .graph import DependencyGraph

logger = get_logger()


class ScheduleObserver(Protocol):
    """Receives engine events as each stage resolves a task."""

    def duration_resolved(self, resolution: DurationResolution) -> None: ...

    def graph_built(self, graph: DependencyGraph) -> None: ...

    def forward_resolved(self, task_id: str, early_start: float, early_finish: float) -> None: ...

    def backward_resolved(self, task_id: str, late_start: float, late_finish: float) -> None: ...

    def slack_resolved(self, task_id: str, slack: float, is_critical: bool) -> None: ...

    def completed(self, project_duration: float, critical_task_ids: list[str]) -> None: ...


class LoggingObserver:
    """Observer that writes engine events to the critpath logger."""

    def duration_resolved(self, resolution: DurationResolution) -> None:
        if debug_enabled():
            logger.debug(
                f"  Task {resolution.task_id}: duration field={resolution.duration_field}, "
                f"estimates=({resolution.optimistic}, {resolution.most_likely}, "
                f"{resolution.pessimistic}), expected={resolution.expected}"
            )
            if resolution.three_point is not None:
                logger.debug(f"    Three-point estimate: {resolution.three_point}")
        if resolution.clamped:
            logger.changes(
                f"Task {resolution.task_id}: duration below minimum, using {resolution.value}"
            )
        elif checks_enabled():
            logger.checks(
                f"  Task {resolution.task_id}: duration {resolution.value} "
                f"(from {resolution.source.value})"
            )

    def graph_built(self, graph: DependencyGraph) -> None:
        logger.changes(f"Dependency graph: {len(graph.task_ids)} tasks, {graph.edge_count} edges")

    def forward_resolved(self, task_id: str, early_start: float, early_finish: float) -> None:
        if checks_enabled():
            logger.checks(f"  Forward {task_id}: ES={early_start}, EF={early_finish}")

    def backward_resolved(self, task_id: str, late_start: float, late_finish: float) -> None:
        if checks_enabled():
            logger.checks(f"  Backward {task_id}: LS={late_start}, LF={late_finish}")

    def slack_resolved(self, task_id: str, slack: float, is_critical: bool) -> None:
        if checks_enabled():
            logger.checks(f"  Slack {task_id}: {slack}{' (critical)' if is_critical else ''}")

    def completed(self, project_duration: float, critical_task_ids: list[str]) -> None:
        logger.changes(f"Project duration: {project_duration}")
        logger.changes(f"Critical path: {' -> '.join(critical_task_ids)}")


def _default_events() -> list[tuple[str, Any]]:
    return []


@dataclass
class RecordingObserver:
    """Observer that keeps every event in order, as (kind, payload) tuples."""

    events: list[tuple[str, Any]] = field(default_factory=_default_events)

    def duration_resolved(self, resolution: DurationResolution) -> None:
        self.events.append(("duration", resolution))

    def graph_built(self, graph: DependencyGraph) -> None:
        self.events.append(("graph", graph))

    def forward_resolved(self, task_id: str, early_start: float, early_finish: float) -> None:
        self.events.append(("forward", (task_id, early_start, early_finish)))

    def backward_resolved(self, task_id: str, late_start: float, late_finish: float) -> None:
        self.events.append(("backward", (task_id, late_start, late_finish)))

    def slack_resolved(self, task_id: str, slack: float, is_critical: bool) -> None:
        self.events.append(("slack", (task_id, slack, is_critical)))

    def completed(self, project_duration: float, critical_task_ids: list[str]) -> None:
        self.events.append(("completed", (project_duration, list(critical_task_ids))))

    def of_kind(self, kind: str) -> list[Any]:
        """Payloads of all events of one kind."""
        return [payload for event_kind, payload in self.events if event_kind == kind]
