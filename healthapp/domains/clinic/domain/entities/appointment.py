"""
Appointment Entity for the Clinic Domain

Represents a booked consultation between a patient and a doctor,
with status tracking and the cancellation policy.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from healthapp.core.domain import (
    AggregateRoot,
    BusinessRuleViolationException,
    InvalidOperationException,
)

from ..value_objects import AppointmentStatus, TimeRange


@dataclass
class Appointment(AggregateRoot[int]):
    """
    Appointment aggregate root.

    Every status change goes through the transition table on
    AppointmentStatus; illegal moves raise InvalidOperationException.

    Example:
        ```python
        appointment = Appointment.book(
            patient_id=7,
            doctor_id=3,
            start_at=datetime(2025, 3, 3, 9, 0),
            reason="Annual checkup",
        )
        appointment.approve()
        appointment.complete(notes="All good")
        ```
    """

    # References
    patient_id: int = 0
    doctor_id: int = 0

    # Scheduling
    start_at: datetime | None = None
    end_at: datetime | None = None
    duration_minutes: int = 30

    # Status
    status: AppointmentStatus = AppointmentStatus.PENDING
    reason: str | None = None
    cancellation_reason: str | None = None
    notes: str | None = None

    # Reminders
    reminder_sent: bool = False

    is_deleted: bool = False

    def __post_init__(self):
        if self.start_at and not self.end_at:
            self.end_at = self.start_at + timedelta(minutes=self.duration_minutes)

    @classmethod
    def book(
        cls,
        patient_id: int,
        doctor_id: int,
        start_at: datetime,
        reason: str | None = None,
        duration_minutes: int = 30,
    ) -> "Appointment":
        """Factory method for a freshly booked, pending appointment."""
        slot = TimeRange.starting_at(start_at, duration_minutes)
        return cls(
            patient_id=patient_id,
            doctor_id=doctor_id,
            start_at=slot.start,
            end_at=slot.end,
            duration_minutes=duration_minutes,
            reason=reason,
        )

    @property
    def time_range(self) -> TimeRange:
        if self.start_at is None or self.end_at is None:
            raise InvalidOperationException(operation="time_range", current_state="unscheduled")
        return TimeRange(start=self.start_at, end=self.end_at)

    def conflicts_with(self, other: "Appointment") -> bool:
        """Same doctor, both holding their slot, and overlapping intervals."""
        if self.doctor_id != other.doctor_id:
            return False
        if not (self.status.occupies_slot() and other.status.occupies_slot()):
            return False
        return self.time_range.overlaps_with(other.time_range)

    # Status Transitions

    def _transition(self, new_status: AppointmentStatus, operation: str) -> None:
        if not self.status.can_transition_to(new_status):
            raise InvalidOperationException(operation=operation, current_state=self.status.value)
        self.status = new_status
        self.increment_version()
        self.touch()

    def approve(self) -> None:
        self._transition(AppointmentStatus.APPROVED, "approve")

    def reject(self, reason: str | None = None) -> None:
        """Reject the request; the reason is kept in cancellation_reason."""
        self._transition(AppointmentStatus.REJECTED, "reject")
        self.cancellation_reason = reason

    def complete(self, notes: str | None = None) -> None:
        self._transition(AppointmentStatus.COMPLETED, "complete")
        if notes:
            self.notes = notes

    def cancel(
        self,
        reason: str,
        now: datetime,
        window_hours: int = 48,
        override: bool = False,
    ) -> None:
        """
        Cancel the appointment.

        Args:
            reason: Stored verbatim
            now: Current time on the clinic clock
            window_hours: Minimum notice before the start
            override: Skip the notice check (administrative cancellation)

        Raises:
            BusinessRuleViolationException: Start is less than window_hours away
            InvalidOperationException: Appointment is already closed
        """
        if not self.status.can_transition_to(AppointmentStatus.CANCELLED):
            raise InvalidOperationException(operation="cancel", current_state=self.status.value)
        if not override and not self.is_outside_cancellation_window(now, window_hours):
            raise BusinessRuleViolationException(
                rule="cancellation_window",
                message=f"Appointments can only be cancelled at least {window_hours} hours in advance",
                details={"appointment_id": self.id, "window_hours": window_hours},
            )
        self._transition(AppointmentStatus.CANCELLED, "cancel")
        self.cancellation_reason = reason

    def reschedule(self, new_start: datetime) -> None:
        """Move to a new start, keeping the duration."""
        slot = TimeRange.starting_at(new_start, self.duration_minutes)
        self._transition(AppointmentStatus.RESCHEDULED, "reschedule")
        self.start_at = slot.start
        self.end_at = slot.end
        self.reminder_sent = False

    # Policies

    def is_outside_cancellation_window(self, now: datetime, window_hours: int = 48) -> bool:
        """True if the start is at least window_hours after now."""
        return self.time_range.start - now >= timedelta(hours=window_hours)

    def needs_reminder(self, now: datetime, hours_ahead: int = 24) -> bool:
        """Active, not yet reminded, and starting within the horizon."""
        if self.reminder_sent or self.is_deleted or not self.status.is_active():
            return False
        if self.start_at is None:
            return False
        return now <= self.start_at <= now + timedelta(hours=hours_ahead)

    def mark_reminder_sent(self) -> None:
        self.reminder_sent = True
        self.touch()

    def soft_delete(self) -> None:
        self.is_deleted = True
        self.touch()

    def to_summary_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "patient_id": self.patient_id,
            "doctor_id": self.doctor_id,
            "start_at": self.start_at.isoformat() if self.start_at else None,
            "end_at": self.end_at.isoformat() if self.end_at else None,
            "status": self.status.value,
        }
