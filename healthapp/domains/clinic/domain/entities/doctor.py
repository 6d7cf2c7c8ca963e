"""
Doctor Entity and weekly Schedule windows.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from healthapp.core.domain import Entity, ValidationException

from ..value_objects import TimeRange

WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


@dataclass
class Doctor(Entity[int]):
    """
    Doctor profile, linked one-to-one to a user account.
    """

    user_id: str = ""
    first_name: str = ""
    last_name: str = ""
    email: str | None = None
    phone: str | None = None
    specialization: str | None = None
    license_number: str | None = None
    is_active: bool = True

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def display_name(self) -> str:
        """Name as shown to patients and in reports."""
        return f"Dr. {self.full_name}"


@dataclass
class Schedule(Entity[int]):
    """
    Recurring weekly availability window for a doctor.

    day_of_week follows date.weekday(): 0 is Monday, 6 is Sunday.
    max_appointments of 0 means the window has no booking cap.
    """

    doctor_id: int = 0
    day_of_week: int = 0
    start_time: time = time(9, 0)
    end_time: time = time(17, 0)
    max_appointments: int = 0

    def __post_init__(self):
        if not 0 <= self.day_of_week <= 6:
            raise ValidationException("day_of_week must be between 0 (Monday) and 6 (Sunday)", field="day_of_week")
        if self.start_time >= self.end_time:
            raise ValidationException("Schedule start must be before its end", field="start_time")
        if self.max_appointments < 0:
            raise ValidationException("max_appointments cannot be negative", field="max_appointments")

    @property
    def day_name(self) -> str:
        return WEEKDAY_NAMES[self.day_of_week]

    def window_on(self, day: date) -> TimeRange | None:
        """Concrete window for a calendar date, or None if the weekday differs."""
        if day.weekday() != self.day_of_week:
            return None
        return TimeRange(
            start=datetime.combine(day, self.start_time),
            end=datetime.combine(day, self.end_time),
        )

    def covers(self, slot: TimeRange) -> bool:
        """True if the slot lies entirely inside this window on its own date."""
        if not slot.is_single_day():
            return False
        window = self.window_on(slot.start.date())
        if window is None:
            return False
        return window.start <= slot.start and slot.end <= window.end

    def has_capacity(self, booked_in_window: int) -> bool:
        return self.max_appointments == 0 or booked_in_window < self.max_appointments

    def iter_slots(self, day: date, step_minutes: int = 30):
        """Yield consecutive slots of step_minutes that fit in the window on day."""
        window = self.window_on(day)
        if window is None:
            return
        cursor = window.start
        step = timedelta(minutes=step_minutes)
        while cursor + step <= window.end:
            yield TimeRange(start=cursor, end=cursor + step)
            cursor += step
