from __future__ import annotations
import re
from dataclasses import dataclass
from datetime import time

from .errors import InvalidFormat

MINUTES_PER_DAY = 24 * 60

_TIME_PATTERN = re.compile(r"([0-9]{1,2}):([0-9]{1,2})")


@dataclass(frozen=True, order=True)
class TimeOfDay:
    """A point within a day at minute resolution."""

    minute_of_day: int

    def __post_init__(self) -> None:
        if not 0 <= self.minute_of_day < MINUTES_PER_DAY:
            raise ValueError(f"minute_of_day out of range: {self.minute_of_day}")

    @classmethod
    def of(cls, hour: int, minute: int = 0) -> TimeOfDay:
        return cls(hour * 60 + minute)

    @classmethod
    def from_time(cls, value: time) -> TimeOfDay:
        return cls.of(value.hour, value.minute)

    @property
    def hour(self) -> int:
        return self.minute_of_day // 60

    @property
    def minute(self) -> int:
        return self.minute_of_day % 60

    def to_time(self) -> time:
        return time(self.hour, self.minute)

    def __str__(self) -> str:
        return format_time_of_day(self)


def parse_time_of_day(text: str) -> TimeOfDay:
    if not isinstance(text, str):
        raise InvalidFormat(text)
    match = _TIME_PATTERN.fullmatch(text.strip())
    if not match:
        raise InvalidFormat(text)
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise InvalidFormat(text)
    return TimeOfDay.of(hour, minute)


def format_time_of_day(value: TimeOfDay) -> str:
    return f"{value.hour:02d}:{value.minute:02d}"


def coerce_time_of_day(value: TimeOfDay | time | str) -> TimeOfDay:
    if isinstance(value, TimeOfDay):
        return value
    if isinstance(value, time):
        return TimeOfDay.from_time(value)
    return parse_time_of_day(value)
