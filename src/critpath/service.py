"""High-level PERT service over a task store."""

from __future__ import annotations

from .config import EngineConfig
from .duration import fix_placeholder_estimates, resolve_duration
from .engine import compute_schedule
from .exceptions import CritpathError, InsufficientDataError
from .graph import validate_new_dependency
from .logger import get_logger
from .models import Dependency, Task
from .observers import ScheduleObserver
from .report import error_response, to_response
from .schemas import DebugDependency, DebugReport, DebugTask, PertResponse
from .store import TaskStore

logger = get_logger()


class PertService:
    """Runs PERT analyses for projects held in a task store.

    The service never raises for scheduling problems: the presentation layer
    always receives either a complete result or an error-shaped one.
    """

    def __init__(
        self,
        store: TaskStore,
        config: EngineConfig | None = None,
        observer: ScheduleObserver | None = None,
    ):
        """Initialize the service.

        Args:
            store: Source of tasks and dependencies
            config: Engine configuration, defaults if omitted
            observer: Optional observer passed through to the engine
        """
        self.store = store
        self.config = config or EngineConfig()
        self.observer = observer

    def generate(self, project_id: str) -> PertResponse:
        """Compute the PERT chart of a project."""
        tasks = self.store.list_tasks(project_id)
        dependencies = self.store.list_dependencies(project_id)
        logger.changes(
            f"PERT generation for project {project_id}: "
            f"{len(tasks)} tasks, {len(dependencies)} dependencies"
        )

        try:
            schedule = compute_schedule(tasks, dependencies, self.config, self.observer)
        except InsufficientDataError as e:
            logger.changes(f"Skipping project {project_id}: {e}")
            return error_response(e)
        except CritpathError as e:
            logger.error(f"PERT generation failed for project {project_id}: {e}")
            return error_response(e)

        return to_response(schedule, self.config)

    def debug(self, project_id: str) -> DebugReport:
        """Report raw and cleaned duration fields of every task."""
        tasks = self.store.list_tasks(project_id)
        dependencies = self.store.list_dependencies(project_id)
        names = {task.id: task.name for task in tasks}

        debug_tasks: list[DebugTask] = []
        for task in tasks:
            resolution = resolve_duration(task, self.config)
            debug_tasks.append(
                DebugTask(
                    id=task.id,
                    name=task.name,
                    duration=task.duration,
                    optimistic_time_raw=task.optimistic,
                    most_likely_time_raw=task.most_likely,
                    pessimistic_time_raw=task.pessimistic,
                    expected_time_raw=task.expected,
                    duration_clean=resolution.duration_field,
                    optimistic_clean=resolution.optimistic,
                    most_likely_clean=resolution.most_likely,
                    pessimistic_clean=resolution.pessimistic,
                    expected_clean=resolution.expected,
                    has_valid_pert=resolution.has_valid_estimates,
                    resolved_duration=resolution.value,
                    duration_source=resolution.source.value,
                )
            )

        debug_dependencies = [
            DebugDependency(
                id=dep.id,
                from_id=dep.predecessor_id,
                from_name=names.get(dep.predecessor_id, "Unknown"),
                to_id=dep.successor_id,
                to_name=names.get(dep.successor_id, "Unknown"),
            )
            for dep in dependencies
        ]

        return DebugReport(
            project_id=project_id,
            tasks=debug_tasks,
            dependencies=debug_dependencies,
            counts={"tasks": len(tasks), "dependencies": len(dependencies)},
            is_pert_possible=(
                len(tasks) >= self.config.min_tasks
                and len(dependencies) >= self.config.min_dependencies
            ),
        )

    def fix_durations(self, project_id: str) -> tuple[list[Task], int]:
        """Replace placeholder estimates with durations, see fix_placeholder_estimates().

        The store is not modified; callers persist the returned tasks.
        """
        tasks, fixed = fix_placeholder_estimates(self.store.list_tasks(project_id), self.config)
        logger.changes(f"Fixed {fixed} tasks in project {project_id}")
        return tasks, fixed

    def check_dependency(
        self, project_id: str, predecessor_id: str, successor_id: str
    ) -> Dependency:
        """Validate a dependency before it is added to a project.

        Returns:
            The validated Dependency

        Raises:
            InvalidDependencyError, CrossProjectReferenceError,
            DuplicateDependencyError, CyclicDependencyError
        """
        candidate = Dependency(
            predecessor_id=predecessor_id, successor_id=successor_id, project_id=project_id
        )
        task_ids = [task.id for task in self.store.list_tasks(project_id)]
        validate_new_dependency(task_ids, self.store.list_dependencies(project_id), candidate)
        return candidate
