"""Tests for the end-to-end scheduling engine."""

import pytest

from critpath.config import EngineConfig
from critpath.engine import compute_schedule
from critpath.exceptions import (
    CrossProjectReferenceError,
    CyclicDependencyError,
    InsufficientDataError,
    InvalidDependencyError,
)
from critpath.models import Dependency, ProjectData, ProjectSchedule, Task
from critpath.observers import RecordingObserver
from tests.conftest import edges, tasks


def assert_schedule_invariants(schedule: ProjectSchedule) -> None:
    """Check the relations every computed schedule must satisfy."""
    for entry in schedule.entries:
        assert entry.early_finish - entry.early_start == pytest.approx(entry.duration)
        assert entry.late_finish - entry.late_start == pytest.approx(entry.duration)
        assert entry.slack == pytest.approx(entry.late_start - entry.early_start)
        assert entry.slack > -1e-9
        assert entry.duration >= 1.0
    assert schedule.project_duration == pytest.approx(
        max(entry.early_finish for entry in schedule.entries)
    )

    by_id = {entry.task_id: entry for entry in schedule.entries}
    for dep in schedule.dependencies:
        pred = by_id[dep.predecessor_id]
        succ = by_id[dep.successor_id]
        assert succ.early_start >= pred.early_finish - 1e-9
        assert pred.late_finish <= succ.late_start + 1e-9


class TestScenarios:
    """Worked examples with known schedules."""

    def test_linear_chain(self, linear_chain) -> None:  # type: ignore[no-untyped-def]
        all_tasks, deps = linear_chain
        schedule = compute_schedule(all_tasks, deps)

        assert [e.early_start for e in schedule.entries] == [0, 2, 5]
        assert [e.early_finish for e in schedule.entries] == [2, 5, 10]
        assert [e.late_start for e in schedule.entries] == [0, 2, 5]
        assert [e.late_finish for e in schedule.entries] == [2, 5, 10]
        assert schedule.project_duration == 10
        assert schedule.critical_task_ids == ["A", "B", "C"]
        assert [str(e) for e in schedule.critical_edges] == ["A -> B", "B -> C"]
        assert_schedule_invariants(schedule)

    def test_parallel_branches(self, parallel_branches) -> None:  # type: ignore[no-untyped-def]
        all_tasks, deps = parallel_branches
        schedule = compute_schedule(all_tasks, deps)

        c = schedule.get_entry("C")
        b = schedule.get_entry("B")
        assert c is not None and b is not None
        assert c.early_start == 4
        assert c.early_finish == 7
        assert b.slack == 2
        assert not b.is_critical
        assert schedule.critical_task_ids == ["A", "C"]
        assert_schedule_invariants(schedule)

    def test_three_point_estimate_overrides_placeholder_duration(self) -> None:
        all_tasks = [
            Task(id="A", name="A", duration=1, optimistic=2, most_likely=3, pessimistic=5),
            Task(id="B", name="B", duration=1),
        ]
        schedule = compute_schedule(all_tasks, edges("A>B"))

        a = schedule.get_entry("A")
        assert a is not None
        assert a.duration == pytest.approx(3.1667, abs=1e-4)
        assert schedule.project_duration == pytest.approx(4.1667, abs=1e-4)
        assert schedule.metadata["duration_sources"] == {
            "A": "three_point",
            "B": "duration",
        }

    def test_hours_are_converted_to_days(self) -> None:
        schedule = compute_schedule(tasks(A=16, B=2), edges("A>B"))

        a = schedule.get_entry("A")
        assert a is not None
        assert a.duration == 2.0
        assert schedule.project_duration == 4.0

    def test_website_project(self, website_project: ProjectData) -> None:
        schedule = compute_schedule(website_project.tasks, website_project.dependencies)

        assert schedule.project_duration == pytest.approx(8.1667, abs=1e-4)
        assert schedule.critical_task_ids == ["1", "2", "4", "5"]
        content = schedule.get_entry("3")
        assert content is not None
        assert content.duration == 4.0
        assert content.slack == pytest.approx(1.1667, abs=1e-4)
        assert [str(e) for e in schedule.critical_edges] == ["1 -> 2", "2 -> 4", "4 -> 5"]
        assert_schedule_invariants(schedule)

    def test_entries_follow_task_input_order(self) -> None:
        schedule = compute_schedule(tasks(C=1, A=2, B=3), edges("A>B", "B>C"))
        assert [e.task_id for e in schedule.entries] == ["C", "A", "B"]
        assert schedule.critical_task_ids == ["C", "A", "B"]

    def test_disconnected_task_ends_with_project(self) -> None:
        """A task without any edge may finish as late as the whole project."""
        schedule = compute_schedule(tasks(A=2, B=3, Z=1), edges("A>B"))

        z = schedule.get_entry("Z")
        assert z is not None
        assert z.early_start == 0
        assert z.late_finish == 5
        assert z.slack == 4
        assert_schedule_invariants(schedule)

    def test_multiple_end_tasks_share_project_duration(self) -> None:
        schedule = compute_schedule(tasks(A=1, B=5, C=2), edges("A>B", "A>C"))
        assert {e.task_id: e.late_finish for e in schedule.entries} == {"A": 1, "B": 6, "C": 6}


class TestBoundaries:
    """Inputs too small or malformed for an analysis."""

    def test_no_tasks(self) -> None:
        with pytest.raises(InsufficientDataError):
            compute_schedule([], [])

    def test_single_task(self) -> None:
        with pytest.raises(InsufficientDataError):
            compute_schedule(tasks(A=1), [])

    def test_two_unconnected_tasks(self) -> None:
        with pytest.raises(InsufficientDataError, match="dependency"):
            compute_schedule(tasks(A=1, B=1), [])

    def test_minimums_can_be_lowered(self) -> None:
        config = EngineConfig(min_tasks=1, min_dependencies=0)
        schedule = compute_schedule(tasks(A=3), [], config)
        assert schedule.project_duration == 3
        assert schedule.critical_task_ids == ["A"]

    def test_cycle(self) -> None:
        with pytest.raises(CyclicDependencyError):
            compute_schedule(tasks(A=1, B=1, C=1), edges("A>B", "B>C", "C>A"))

    def test_self_dependency(self) -> None:
        with pytest.raises(InvalidDependencyError):
            compute_schedule(tasks(A=1, B=1), edges("A>A"))

    def test_edge_to_unknown_task(self) -> None:
        with pytest.raises(CrossProjectReferenceError):
            compute_schedule(tasks(A=1, B=1), [Dependency("A", "elsewhere")])

    def test_zero_durations_are_clamped(self) -> None:
        schedule = compute_schedule(tasks(A=0, B=None), edges("A>B"))
        assert [e.duration for e in schedule.entries] == [1.0, 1.0]
        assert schedule.project_duration == 2.0


class TestPurity:
    """The engine keeps no state between calls."""

    def test_repeated_runs_are_identical(self, website_project: ProjectData) -> None:
        first = compute_schedule(website_project.tasks, website_project.dependencies)
        second = compute_schedule(website_project.tasks, website_project.dependencies)
        assert first == second

    def test_inputs_are_not_modified(self, website_project: ProjectData) -> None:
        task_snapshot = list(website_project.tasks)
        dep_snapshot = list(website_project.dependencies)
        compute_schedule(website_project.tasks, website_project.dependencies)
        assert website_project.tasks == task_snapshot
        assert website_project.dependencies == dep_snapshot

    def test_failed_run_does_not_affect_next_one(self, linear_chain) -> None:  # type: ignore[no-untyped-def]
        with pytest.raises(CyclicDependencyError):
            compute_schedule(tasks(A=1, B=1), edges("A>B", "B>A"))
        all_tasks, deps = linear_chain
        assert compute_schedule(all_tasks, deps).project_duration == 10


class TestObserver:
    """Events reported while scheduling."""

    def test_stage_order(self, linear_chain) -> None:  # type: ignore[no-untyped-def]
        all_tasks, deps = linear_chain
        observer = RecordingObserver()
        compute_schedule(all_tasks, deps, observer=observer)

        kinds = [kind for kind, _ in observer.events]
        assert kinds == (
            ["duration"] * 3 + ["graph"] + ["forward"] * 3 + ["backward"] * 3 + ["slack"] * 3
        ) + ["completed"]

    def test_completed_payload(self, parallel_branches) -> None:  # type: ignore[no-untyped-def]
        all_tasks, deps = parallel_branches
        observer = RecordingObserver()
        compute_schedule(all_tasks, deps, observer=observer)

        assert observer.of_kind("completed") == [(7, ["A", "C"])]
        assert ("B", 2, False) in observer.of_kind("slack")

    def test_no_events_when_preconditions_fail(self) -> None:
        observer = RecordingObserver()
        with pytest.raises(InsufficientDataError):
            compute_schedule(tasks(A=1), [], observer=observer)
        assert observer.events == []
