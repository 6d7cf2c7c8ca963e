"""
Scheduling Service for the Clinic Domain

Domain service deciding whether a doctor can take an appointment in a
given slot, and listing the free slots of a day.
"""

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Iterable

from healthapp.core.domain import AppointmentConflictException

from ..entities.appointment import Appointment
from ..entities.doctor import Schedule
from ..value_objects import TimeRange


@dataclass
class AvailableSlot:
    """A free appointment slot."""

    doctor_id: int
    date: date
    start_time: time
    end_time: time

    @property
    def start_at(self) -> datetime:
        return datetime.combine(self.date, self.start_time)

    def to_dict(self) -> dict[str, Any]:
        return {
            "doctor_id": self.doctor_id,
            "date": self.date.isoformat(),
            "start_time": self.start_time.strftime("%H:%M"),
            "end_time": self.end_time.strftime("%H:%M"),
        }


class SchedulingService:
    """
    Domain service for appointment scheduling.

    A slot is available for a doctor iff:
    - it lies entirely inside one of the doctor's windows for that weekday,
    - that window has not reached its max_appointments on that date,
    - it does not overlap any of the doctor's appointments that still hold their slot.

    Example:
        ```python
        service = SchedulingService()
        slot = TimeRange.starting_at(datetime(2025, 3, 3, 9, 0), 30)
        service.ensure_slot_available(doctor_id=3, slot=slot, schedules=schedules, appointments=booked)
        ```
    """

    def __init__(self, slot_minutes: int = 30):
        """
        Initialize scheduling service.

        Args:
            slot_minutes: Step used when listing available slots
        """
        self.slot_minutes = slot_minutes

    def find_covering_window(self, slot: TimeRange, schedules: Iterable[Schedule]) -> Schedule | None:
        for schedule in schedules:
            if schedule.covers(slot):
                return schedule
        return None

    def ensure_slot_available(
        self,
        doctor_id: int,
        slot: TimeRange,
        schedules: Iterable[Schedule],
        appointments: Iterable[Appointment],
        ignore_appointment_id: int | None = None,
    ) -> None:
        """
        Raise unless the slot can be booked.

        Args:
            doctor_id: Doctor being booked
            slot: Requested interval
            schedules: The doctor's weekly windows
            appointments: The doctor's appointments around the slot date
            ignore_appointment_id: Appointment being moved (its own slot is not a conflict)

        Raises:
            AppointmentConflictException: reason is "outside_schedule", "window_full" or "conflict"
        """
        window = self.find_covering_window(slot, schedules)
        if window is None:
            raise AppointmentConflictException(
                doctor_id=doctor_id,
                time_slot=str(slot),
                message="Requested time is outside the doctor's schedule",
                reason="outside_schedule",
            )

        holding = [
            a
            for a in appointments
            if a.doctor_id == doctor_id
            and a.status.occupies_slot()
            and not a.is_deleted
            and (ignore_appointment_id is None or a.id != ignore_appointment_id)
        ]

        for existing in holding:
            if existing.time_range.overlaps_with(slot):
                raise AppointmentConflictException(
                    doctor_id=doctor_id,
                    time_slot=str(slot),
                    message=f"Doctor already has an appointment at {existing.time_range}",
                    reason="conflict",
                )

        booked_in_window = sum(1 for a in holding if window.covers(a.time_range))
        if not window.has_capacity(booked_in_window):
            raise AppointmentConflictException(
                doctor_id=doctor_id,
                time_slot=str(slot),
                message=f"The {window.day_name} window is fully booked",
                reason="window_full",
            )

    def is_slot_available(
        self,
        doctor_id: int,
        slot: TimeRange,
        schedules: Iterable[Schedule],
        appointments: Iterable[Appointment],
        ignore_appointment_id: int | None = None,
    ) -> bool:
        try:
            self.ensure_slot_available(doctor_id, slot, schedules, appointments, ignore_appointment_id)
        except AppointmentConflictException:
            return False
        return True

    def find_available_slots(
        self,
        doctor_id: int,
        day: date,
        schedules: Iterable[Schedule],
        appointments: Iterable[Appointment],
        not_before: datetime | None = None,
        slot_minutes: int | None = None,
    ) -> list[AvailableSlot]:
        """
        List free slots for a doctor on a date, in chronological order.

        Args:
            not_before: Drop slots starting before this moment (e.g. now)
            slot_minutes: Slot length; defaults to the service step
        """
        step = slot_minutes or self.slot_minutes
        schedules = list(schedules)
        appointments = list(appointments)

        slots: list[AvailableSlot] = []
        seen: set[datetime] = set()
        for schedule in sorted(schedules, key=lambda s: s.start_time):
            for candidate in schedule.iter_slots(day, step):
                if candidate.start in seen:
                    continue
                if not_before is not None and candidate.start < not_before:
                    continue
                if self.is_slot_available(doctor_id, candidate, schedules, appointments):
                    seen.add(candidate.start)
                    slots.append(
                        AvailableSlot(
                            doctor_id=doctor_id,
                            date=day,
                            start_time=candidate.start.time(),
                            end_time=candidate.end.time(),
                        )
                    )
        slots.sort(key=lambda s: s.start_time)
        return slots
