"""Task store interface and an in-memory implementation."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Protocol

from .models import Dependency, ProjectData, Task
from .parser import parse_dependencies, parse_tasks


class TaskStore(Protocol):
    """Source of tasks and dependencies, keyed by project."""

    def list_tasks(self, project_id: str) -> list[Task]:
        """Return all tasks of a project, in display order."""
        ...

    def list_dependencies(self, project_id: str) -> list[Dependency]:
        """Return all dependencies of a project."""
        ...


class InMemoryTaskStore:
    """TaskStore backed by ProjectData objects held in memory."""

    def __init__(self, projects: Iterable[ProjectData] = ()):
        self._projects: dict[str, ProjectData] = {}
        for project in projects:
            self.add_project(project)

    def add_project(self, project: ProjectData) -> None:
        """Add or replace a project."""
        self._projects[project.project_id] = project

    def get_project(self, project_id: str) -> ProjectData:
        """Look up a project.

        Raises:
            KeyError: If the project is unknown
        """
        if project_id not in self._projects:
            raise KeyError(f"Unknown project: {project_id}")
        return self._projects[project_id]

    def list_tasks(self, project_id: str) -> list[Task]:
        return list(self.get_project(project_id).tasks)

    def list_dependencies(self, project_id: str) -> list[Dependency]:
        return list(self.get_project(project_id).dependencies)

    @classmethod
    def from_records(
        cls,
        project_id: str,
        tasks: list[dict[str, Any]],
        dependencies: list[dict[str, Any]],
        title: str | None = None,
    ) -> InMemoryTaskStore:
        """Build a single-project store from raw store records.

        Records use the store's field names (optimistic_time or
        optimisticTime, predecessor_task_id or predecessorTaskId, ...).
        """
        project = ProjectData(
            project_id=str(project_id),
            title=title,
            tasks=parse_tasks(tasks),
            dependencies=parse_dependencies(dependencies),
        )
        return cls([project])
