"""Custom exceptions for critpath."""

from __future__ import annotations


class CritpathError(Exception):
    """Base exception for all critpath errors."""

    pass


class ValidationError(CritpathError):
    """Raised when the task/dependency structure is invalid."""

    pass


class InsufficientDataError(CritpathError):
    """Raised when there are too few tasks or dependencies to run an analysis."""

    pass


class InvalidDependencyError(ValidationError):
    """Raised when a dependency points from a task to itself."""

    pass


class CrossProjectReferenceError(ValidationError):
    """Raised when a dependency references a task outside the scheduling scope."""

    pass


class DuplicateDependencyError(ValidationError):
    """Raised when a proposed dependency already exists."""

    pass


class CyclicDependencyError(ValidationError):
    """Raised when a circular dependency is detected."""

    def __init__(self, cycle: list[str]):
        self.cycle = cycle
        super().__init__(f"Circular dependency detected: {' -> '.join(cycle)}")


class ParseError(CritpathError):
    """Raised when a project or config file cannot be parsed."""

    pass
