"""Pytest configuration and fixtures for critpath tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from critpath.config import set_config_path
from critpath.logger import reset_logger
from critpath.models import Dependency, ProjectData, Task

EXAMPLES_DIR = Path(__file__).resolve().parent.parent / "examples"


@pytest.fixture(autouse=True)
def clean_global_state() -> Iterator[None]:
    """Silence the logger and clear the CLI config path around each test."""
    reset_logger()
    set_config_path(None)
    yield
    reset_logger()
    set_config_path(None)


def tasks(**durations: float | str | None) -> list[Task]:
    """Create tasks named after their IDs from keyword durations.

    Example:
        tasks(A=2, B=3) -> [Task(id="A", name="A", duration=2), ...]
    """
    return [Task(id=task_id, name=task_id, duration=d) for task_id, d in durations.items()]


def edges(*pairs: str) -> list[Dependency]:
    """Create dependencies from "A>B" strings.

    Example:
        edges("A>B", "B>C")
    """
    result: list[Dependency] = []
    for pair in pairs:
        pred, succ = pair.split(">")
        result.append(Dependency(predecessor_id=pred, successor_id=succ))
    return result


@pytest.fixture
def linear_chain() -> tuple[list[Task], list[Dependency]]:
    """A(2) -> B(3) -> C(5)."""
    return tasks(A=2, B=3, C=5), edges("A>B", "B>C")


@pytest.fixture
def parallel_branches() -> tuple[list[Task], list[Dependency]]:
    """A(4) and B(2) both precede C(3)."""
    return tasks(A=4, B=2, C=3), edges("A>C", "B>C")


@pytest.fixture
def website_project() -> ProjectData:
    """Project with messy duration fields, mirroring examples/website_project.yaml."""
    return ProjectData(
        project_id="1",
        title="Company website relaunch",
        tasks=[
            Task(id="1", name="Requirements", duration=2),
            Task(
                id="2",
                name="Design",
                duration=1,
                optimistic=2,
                most_likely=3,
                pessimistic=5,
            ),
            Task(id="3", name="Content writing", duration="0004"),
            Task(id="4", name="Frontend build", duration="16 hours"),
            Task(
                id="5",
                name="Launch",
                duration=1,
                optimistic=1,
                most_likely=1,
                pessimistic=1,
            ),
        ],
        dependencies=[
            Dependency(predecessor_id="1", successor_id="2"),
            Dependency(predecessor_id="1", successor_id="3"),
            Dependency(predecessor_id="2", successor_id="4"),
            Dependency(predecessor_id="3", successor_id="5"),
            Dependency(predecessor_id="4", successor_id="5"),
        ],
    )
