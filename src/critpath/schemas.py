"""Pydantic schemas for project files and PERT result objects."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

RawField = int | float | str | None


def _coerce_id(v: Any) -> Any:
    """Stores hand out integer IDs; the engine works with strings."""
    if v is None or isinstance(v, str):
        return v
    return str(v)


class TaskSchema(BaseModel):
    """Schema for one task record.

    Accepts the snake_case column names of the task store as well as the
    camelCase names used by the API.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str = ""
    duration: RawField = None
    optimistic: RawField = Field(
        default=None,
        validation_alias=AliasChoices("optimistic_time", "optimisticTime", "optimistic"),
    )
    most_likely: RawField = Field(
        default=None,
        validation_alias=AliasChoices("most_likely_time", "mostLikelyTime", "most_likely"),
    )
    pessimistic: RawField = Field(
        default=None,
        validation_alias=AliasChoices("pessimistic_time", "pessimisticTime", "pessimistic"),
    )
    expected: RawField = Field(
        default=None,
        validation_alias=AliasChoices("expected_time", "expectedTime", "expected"),
    )
    project_id: str | None = Field(
        default=None, validation_alias=AliasChoices("project_id", "projectId")
    )

    @field_validator("id", "project_id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        """Ensure IDs are strings."""
        return _coerce_id(v)

    @model_validator(mode="after")
    def default_name(self) -> TaskSchema:
        """Unnamed tasks are labelled by their ID."""
        if not self.name:
            self.name = f"Task {self.id}"
        return self


class DependencySchema(BaseModel):
    """Schema for one dependency record."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    predecessor_id: str = Field(
        validation_alias=AliasChoices("predecessor_task_id", "predecessorTaskId", "from")
    )
    successor_id: str = Field(
        validation_alias=AliasChoices("successor_task_id", "successorTaskId", "to")
    )
    id: str | None = None
    project_id: str | None = Field(
        default=None, validation_alias=AliasChoices("project_id", "projectId")
    )

    @field_validator("predecessor_id", "successor_id", "id", "project_id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        """Ensure IDs are strings."""
        return _coerce_id(v)


class ProjectInfoSchema(BaseModel):
    """Schema for the project header of a project file."""

    id: str = "default"
    title: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        """Ensure IDs are strings."""
        return _coerce_id(v)


class ProjectFileSchema(BaseModel):
    """Schema for a whole project file."""

    project: ProjectInfoSchema = Field(default_factory=ProjectInfoSchema)
    tasks: list[TaskSchema] = Field(default_factory=list)
    dependencies: list[DependencySchema] = Field(default_factory=list)

    @field_validator("tasks", "dependencies", mode="before")
    @classmethod
    def ensure_list(cls, v: Any) -> Any:
        """Treat an empty section as an empty list."""
        if v is None:
            return []
        return v


class _ResultModel(BaseModel):
    """Result objects serialise with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PertNode(_ResultModel):
    """One task of the PERT chart."""

    id: str
    label: str
    name: str
    full_label: str = Field(alias="full_label")  # key the chart UI reads
    duration: float
    es: float
    ef: float
    ls: float
    lf: float
    slack: float
    critical: bool


class PertEdge(_ResultModel):
    """One dependency of the PERT chart."""

    id: str
    from_id: str = Field(alias="from")
    to_id: str = Field(alias="to")
    critical: bool


class PertSummary(_ResultModel):
    """Counts shown alongside the chart."""

    total_tasks: int
    total_dependencies: int
    critical_tasks: int


class PertResponse(_ResultModel):
    """The result object handed to the presentation layer.

    Either a complete schedule (error is None) or an error with every
    collection empty and a project duration of 0.
    """

    error: str | None = None
    error_code: str | None = None
    nodes: list[PertNode] = Field(default_factory=list)
    edges: list[PertEdge] = Field(default_factory=list)
    critical_path: list[str] = Field(default_factory=list)
    project_duration: float = 0.0
    summary: PertSummary | None = None

    @property
    def ok(self) -> bool:
        """True if the response holds a schedule."""
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        """Serialise with camelCase keys, leaving out unset optional parts."""
        return self.model_dump(by_alias=True, exclude_none=True)


class DebugTask(BaseModel):
    """Raw and cleaned duration fields of one task."""

    id: str
    name: str
    duration: RawField
    optimistic_time_raw: RawField
    most_likely_time_raw: RawField
    pessimistic_time_raw: RawField
    expected_time_raw: RawField
    duration_clean: float
    optimistic_clean: float
    most_likely_clean: float
    pessimistic_clean: float
    expected_clean: float
    has_valid_pert: bool
    resolved_duration: float
    duration_source: str


class DebugDependency(BaseModel):
    """A dependency with the names of both tasks."""

    id: str | None
    from_id: str
    from_name: str
    to_id: str
    to_name: str


class DebugReport(BaseModel):
    """Diagnostic view of a project's scheduling inputs."""

    project_id: str
    tasks: list[DebugTask]
    dependencies: list[DebugDependency]
    counts: dict[str, int]
    is_pert_possible: bool
