"""Project file parsing and writing.

Project files hold one project's tasks and dependencies in YAML (JSON files
are accepted too, being valid YAML). They stand in for the task store when
the engine is driven from the command line.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ParseError, ValidationError
from .models import Dependency, ProjectData, Task
from .schemas import DependencySchema, ProjectFileSchema, TaskSchema


def task_from_schema(schema: TaskSchema) -> Task:
    """Convert a validated task record into a Task."""
    return Task(
        id=schema.id,
        name=schema.name,
        duration=schema.duration,
        optimistic=schema.optimistic,
        most_likely=schema.most_likely,
        pessimistic=schema.pessimistic,
        expected=schema.expected,
        project_id=schema.project_id,
    )


def dependency_from_schema(schema: DependencySchema) -> Dependency:
    """Convert a validated dependency record into a Dependency."""
    return Dependency(
        predecessor_id=schema.predecessor_id,
        successor_id=schema.successor_id,
        id=schema.id,
        project_id=schema.project_id,
    )


def parse_tasks(records: list[dict[str, Any]]) -> list[Task]:
    """Validate raw task records, as returned by a store's list_tasks()."""
    try:
        return [task_from_schema(TaskSchema.model_validate(record)) for record in records]
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid task record: {e}") from e


def parse_dependencies(records: list[dict[str, Any]]) -> list[Dependency]:
    """Validate raw dependency records, as returned by list_dependencies()."""
    try:
        return [
            dependency_from_schema(DependencySchema.model_validate(record)) for record in records
        ]
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid dependency record: {e}") from e


class ProjectParser:
    """Parser for project files."""

    def parse_file(self, file_path: Path | str) -> ProjectData:
        """Parse a YAML or JSON file into ProjectData."""
        path = Path(file_path)
        if not path.exists():
            raise ParseError(f"File not found: {file_path}")

        try:
            with path.open(encoding="utf-8") as f:
                data: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ParseError(f"Failed to parse YAML: {e}") from e

        if not isinstance(data, dict):
            raise ParseError("Project file must contain a dictionary at the root level")

        return self.parse_data(data)  # type: ignore[arg-type]

    def parse_data(self, data: dict[str, Any]) -> ProjectData:
        """Validate loaded file contents and convert to domain models."""
        try:
            schema = ProjectFileSchema.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid project file structure: {e}") from e

        project_id = schema.project.id
        tasks = [task_from_schema(t) for t in schema.tasks]
        dependencies = [dependency_from_schema(d) for d in schema.dependencies]

        return ProjectData(
            project_id=project_id,
            title=schema.project.title,
            tasks=tasks,
            dependencies=dependencies,
        )


def _task_to_dict(task: Task) -> dict[str, Any]:
    result: dict[str, Any] = {"id": task.id, "name": task.name, "duration": task.duration}
    for key, value in (
        ("optimistic_time", task.optimistic),
        ("most_likely_time", task.most_likely),
        ("pessimistic_time", task.pessimistic),
        ("expected_time", task.expected),
        ("project_id", task.project_id),
    ):
        if value is not None:
            result[key] = value
    return result


def project_to_dict(project: ProjectData) -> dict[str, Any]:
    """Convert ProjectData back to the project file layout."""
    header: dict[str, Any] = {"id": project.project_id}
    if project.title:
        header["title"] = project.title

    dependencies: list[dict[str, Any]] = []
    for dep in project.dependencies:
        record: dict[str, Any] = {
            "predecessor_task_id": dep.predecessor_id,
            "successor_task_id": dep.successor_id,
        }
        if dep.id is not None:
            record["id"] = dep.id
        if dep.project_id is not None:
            record["project_id"] = dep.project_id
        dependencies.append(record)

    return {
        "project": header,
        "tasks": [_task_to_dict(task) for task in project.tasks],
        "dependencies": dependencies,
    }


def write_project_file(project: ProjectData, file_path: Path | str) -> None:
    """Write a project file, as JSON for .json paths and YAML otherwise."""
    path = Path(file_path)
    data = project_to_dict(project)
    if path.suffix.lower() == ".json":
        path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    else:
        path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
