"""Duration resolution: turn raw task fields into one effective duration.

Task stores hand over durations in whatever shape users typed them: numbers,
zero-padded strings ("0004"), strings with units ("12 hours"), placeholder
three-point estimates of 0 or 1, and occasionally hours where days were
meant. Nothing here raises: malformed input degrades to a best-effort number
so that a schedule can always be produced.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum

from .config import EngineConfig
from .logger import get_logger
from .models import RawValue, Task

logger = get_logger()

_ZERO_PADDED = re.compile(r"^0+(\d+)$")
_FIRST_NUMBER = re.compile(r"(\d+\.?\d*)")


class DurationSource(str, Enum):
    """Which input decided the effective duration."""

    DURATION_FIELD = "duration"
    THREE_POINT = "three_point"


@dataclass(frozen=True)
class DurationResolution:
    """Effective duration of a task together with how it was derived."""

    task_id: str
    value: float
    source: DurationSource
    duration_field: float
    optimistic: float
    most_likely: float
    pessimistic: float
    expected: float
    three_point: float | None
    clamped: bool

    @property
    def has_valid_estimates(self) -> bool:
        """True if the three-point fields were usable (not placeholders)."""
        return self.three_point is not None


def parse_number(value: RawValue) -> float:
    """Parse a raw field into a finite number without unit conversion.

    - None and unparseable values become 0
    - "0004" becomes 4
    - otherwise the first numeric substring is used ("12 hours" -> 12)
    """
    if value is None or isinstance(value, bool):
        return 0.0

    if isinstance(value, str):
        text = value.strip()
        match = _ZERO_PADDED.match(text) or _FIRST_NUMBER.search(text)
        if match is None:
            return 0.0
        result = float(match.group(1))
    elif isinstance(value, (int, float)):
        try:
            result = float(value)
        except OverflowError:
            return 0.0
    else:
        return 0.0

    if not math.isfinite(result):
        return 0.0
    return result


def clean_number(value: RawValue, config: EngineConfig | None = None) -> float:
    """Parse a raw field and apply the hours-to-days heuristic.

    A value larger than one workday (config.hours_per_day) is assumed to be a
    count of hours and divided by hours_per_day. The heuristic cannot tell a
    nine-day task from a nine-hour one; it is kept because stored data relies
    on it and can be disabled with convert_hours.
    """
    config = config or EngineConfig()
    result = parse_number(value)

    if config.convert_hours and result > config.hours_per_day:
        converted = result / config.hours_per_day
        logger.debug(f"    Converted hours to days: {result} -> {converted}")
        result = converted

    return result


def three_point_estimate(optimistic: float, most_likely: float, pessimistic: float) -> float:
    """PERT expected duration: (o + 4m + p) / 6."""
    return (optimistic + 4 * most_likely + pessimistic) / 6


def has_valid_estimates(
    optimistic: float,
    most_likely: float,
    pessimistic: float,
    config: EngineConfig | None = None,
) -> bool:
    """Check that all three estimates are above the placeholder ceiling."""
    ceiling = (config or EngineConfig()).placeholder_ceiling
    return optimistic > ceiling and most_likely > ceiling and pessimistic > ceiling


def resolve_duration(task: Task, config: EngineConfig | None = None) -> DurationResolution:
    """Compute the effective duration of a task.

    The duration field is authoritative unless plausible three-point
    estimates disagree with it by more than config.estimate_tolerance, in
    which case the PERT estimate wins. The result is clamped to
    config.min_duration.
    """
    config = config or EngineConfig()

    duration_field = clean_number(task.duration, config)
    optimistic = clean_number(task.optimistic, config)
    most_likely = clean_number(task.most_likely, config)
    pessimistic = clean_number(task.pessimistic, config)
    expected = clean_number(task.expected, config)

    estimate: float | None = None
    value = duration_field
    source = DurationSource.DURATION_FIELD

    if has_valid_estimates(optimistic, most_likely, pessimistic, config):
        estimate = three_point_estimate(optimistic, most_likely, pessimistic)
        if abs(estimate - duration_field) > config.estimate_tolerance:
            value = estimate
            source = DurationSource.THREE_POINT

    clamped = value < config.min_duration
    if clamped:
        value = config.min_duration

    return DurationResolution(
        task_id=task.id,
        value=value,
        source=source,
        duration_field=duration_field,
        optimistic=optimistic,
        most_likely=most_likely,
        pessimistic=pessimistic,
        expected=expected,
        three_point=estimate,
        clamped=clamped,
    )


def resolve_durations(
    tasks: list[Task], config: EngineConfig | None = None
) -> dict[str, DurationResolution]:
    """Resolve every task, keyed by task ID in input order."""
    return {task.id: resolve_duration(task, config) for task in tasks}


def fix_placeholder_estimates(
    tasks: list[Task], config: EngineConfig | None = None
) -> tuple[list[Task], int]:
    """Replace placeholder three-point fields with the task's duration.

    Applies to tasks that have a positive duration while all three estimates
    are placeholders (at or below the ceiling). Returns new task objects; the
    input list is left untouched.

    Returns:
        Tuple of (tasks, number of tasks that were fixed)
    """
    config = config or EngineConfig()
    ceiling = config.placeholder_ceiling

    result: list[Task] = []
    fixed = 0
    for task in tasks:
        if clean_number(task.duration, config) > 0:
            optimistic = clean_number(task.optimistic, config)
            most_likely = clean_number(task.most_likely, config)
            pessimistic = clean_number(task.pessimistic, config)
            if optimistic <= ceiling and most_likely <= ceiling and pessimistic <= ceiling:
                logger.changes(
                    f"Fixed estimates for task {task.id} '{task.name}': "
                    f"set all to duration={task.duration}"
                )
                result.append(task.with_estimates(task.duration))
                fixed += 1
                continue
        result.append(task)

    return result, fixed
