"""
Time value objects for scheduling.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from healthapp.core.domain import ValueObject


def to_clinic_time(value: datetime) -> datetime:
    """Convert an aware datetime to naive local time; naive values are returned as is."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


@dataclass(frozen=True)
class TimeRange(ValueObject):
    """
    Half-open interval [start, end) on the clinic's local clock.

    Two ranges overlap iff s1 < e2 and s2 < e1, so back-to-back
    appointments do not conflict.
    """

    start: datetime
    end: datetime

    def _validate(self) -> None:
        if self.start >= self.end:
            raise ValueError("Start must be before end")

    @classmethod
    def starting_at(cls, start: datetime, duration_minutes: int) -> "TimeRange":
        """Build a range from a start and a length in minutes."""
        if duration_minutes <= 0:
            raise ValueError("Duration must be positive")
        start = to_clinic_time(start)
        return cls(start=start, end=start + timedelta(minutes=duration_minutes))

    @property
    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds() // 60)

    def overlaps_with(self, other: "TimeRange") -> bool:
        """Check if the range overlaps with another."""
        return self.start < other.end and other.start < self.end

    def is_single_day(self) -> bool:
        """True when the range starts and ends on the same calendar day."""
        return self.start.date() == self.end.date()

    def __str__(self) -> str:
        return f"{self.start.strftime('%Y-%m-%d %H:%M')} - {self.end.strftime('%H:%M')}"
