"""Data models for critpath."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

# Raw duration fields arrive from the task store untyped
RawValue = int | float | str | None


@dataclass(frozen=True)
class Task:
    """A task as supplied by the task store.

    The engine only reads tasks. Raw duration fields are kept exactly as
    stored; the duration resolver turns them into one effective number.
    """

    id: str
    name: str
    duration: RawValue = None
    optimistic: RawValue = None
    most_likely: RawValue = None
    pessimistic: RawValue = None
    expected: RawValue = None
    project_id: str | None = None

    def with_estimates(self, value: RawValue) -> Task:
        """Return a copy with every three-point field set to value."""
        return replace(
            self, optimistic=value, most_likely=value, pessimistic=value, expected=value
        )


@dataclass(frozen=True)
class Dependency:
    """Precedence edge: the predecessor must finish before the successor starts."""

    predecessor_id: str
    successor_id: str
    id: str | None = None
    project_id: str | None = None

    @property
    def key(self) -> tuple[str, str]:
        """The (predecessor, successor) pair identifying this edge."""
        return (self.predecessor_id, self.successor_id)

    def __str__(self) -> str:
        return f"{self.predecessor_id} -> {self.successor_id}"


@dataclass
class ScheduleEntry:
    """Computed schedule values for one task."""

    task_id: str
    name: str
    duration: float
    early_start: float
    early_finish: float
    late_start: float
    late_finish: float
    slack: float
    is_critical: bool


def _default_entries() -> list[ScheduleEntry]:
    return []


def _default_str_list() -> list[str]:
    return []


def _default_dependencies() -> list[Dependency]:
    return []


def _default_dict() -> dict[str, Any]:
    return {}


@dataclass
class ProjectSchedule:
    """Complete result of one scheduling run."""

    entries: list[ScheduleEntry] = field(default_factory=_default_entries)
    dependencies: list[Dependency] = field(default_factory=_default_dependencies)
    project_duration: float = 0.0
    critical_task_ids: list[str] = field(default_factory=_default_str_list)
    critical_edges: list[Dependency] = field(default_factory=_default_dependencies)
    metadata: dict[str, Any] = field(default_factory=_default_dict)

    def get_entry(self, task_id: str) -> ScheduleEntry | None:
        """Get the schedule entry for a task ID."""
        for entry in self.entries:
            if entry.task_id == task_id:
                return entry
        return None

    def is_critical_edge(self, dependency: Dependency) -> bool:
        """Check whether an edge was classified as critical."""
        return dependency.key in {edge.key for edge in self.critical_edges}


@dataclass
class ProjectData:
    """Tasks and dependencies of one project, as loaded from a store or file."""

    project_id: str
    tasks: list[Task]
    dependencies: list[Dependency]
    title: str | None = None

    def get_task(self, task_id: str) -> Task | None:
        """Get a task by its ID."""
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None
