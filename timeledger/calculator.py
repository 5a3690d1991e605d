from __future__ import annotations

from .clock import MINUTES_PER_DAY, TimeOfDay

DEFAULT_BREAK_HOURS = 0.5


def spans_midnight(start: TimeOfDay, end: TimeOfDay) -> bool:
    return end.minute_of_day < start.minute_of_day


def compute_hours(
    start: TimeOfDay,
    end: TimeOfDay,
    deduct_break: bool,
    break_hours: float = DEFAULT_BREAK_HOURS,
) -> float:
    """Elapsed hours between two times of day.

    An end earlier than the start is read as a shift that ran past midnight.
    The result is never negative and is not rounded.
    """
    if break_hours < 0:
        raise ValueError(f"break_hours must not be negative, got {break_hours}")

    raw_minutes = end.minute_of_day - start.minute_of_day
    if raw_minutes < 0:
        raw_minutes += MINUTES_PER_DAY

    hours = raw_minutes / 60.0
    if deduct_break:
        hours -= break_hours
    return max(0.0, hours)
