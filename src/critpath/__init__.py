"""critpath - PERT/CPM critical path analysis.

Main entry points:
- compute_schedule: pure scheduling function over tasks and dependencies
- PertService: runs analyses for projects held in a task store
- ProjectParser: loads project files
"""

from .config import CriticalEdgeMode, EngineConfig, load_config
from .duration import DurationResolution, DurationSource, clean_number, resolve_duration
from .engine import compute_schedule
from .exceptions import (
    CritpathError,
    CrossProjectReferenceError,
    CyclicDependencyError,
    DuplicateDependencyError,
    InsufficientDataError,
    InvalidDependencyError,
    ParseError,
    ValidationError,
)
from .graph import DependencyGraph, build_graph, validate_new_dependency
from .models import Dependency, ProjectData, ProjectSchedule, ScheduleEntry, Task
from .observers import LoggingObserver, RecordingObserver, ScheduleObserver
from .parser import ProjectParser
from .report import to_response
from .schemas import PertResponse
from .service import PertService
from .store import InMemoryTaskStore, TaskStore

__all__ = [
    # Engine
    "compute_schedule",
    "EngineConfig",
    "CriticalEdgeMode",
    "load_config",
    # Models
    "Task",
    "Dependency",
    "ScheduleEntry",
    "ProjectSchedule",
    "ProjectData",
    # Stages
    "DurationResolution",
    "DurationSource",
    "clean_number",
    "resolve_duration",
    "DependencyGraph",
    "build_graph",
    "validate_new_dependency",
    # Observers
    "ScheduleObserver",
    "LoggingObserver",
    "RecordingObserver",
    # Service layer
    "PertService",
    "PertResponse",
    "to_response",
    "TaskStore",
    "InMemoryTaskStore",
    "ProjectParser",
    # Errors
    "CritpathError",
    "ValidationError",
    "InsufficientDataError",
    "InvalidDependencyError",
    "CrossProjectReferenceError",
    "DuplicateDependencyError",
    "CyclicDependencyError",
    "ParseError",
]
