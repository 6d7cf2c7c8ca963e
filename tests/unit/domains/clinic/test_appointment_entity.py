"""
Unit tests for the Appointment aggregate, its status table and TimeRange.
"""

from datetime import date, datetime, time, timedelta

import pytest

from healthapp.core.domain import BusinessRuleViolationException, InvalidOperationException
from healthapp.domains.clinic.domain.entities import Appointment
from healthapp.domains.clinic.domain.value_objects import AppointmentStatus, TimeRange

MONDAY = date(2025, 3, 3)


def at(hour: int, minute: int = 0, day: date = MONDAY) -> datetime:
    return datetime.combine(day, time(hour, minute))


def make_appointment(status: AppointmentStatus = AppointmentStatus.PENDING, start: datetime | None = None):
    appointment = Appointment.book(patient_id=7, doctor_id=1, start_at=start or at(9))
    appointment.id = 100
    appointment.status = status
    return appointment


# ============================================================================
# TimeRange
# ============================================================================


@pytest.mark.unit
def test_time_range_back_to_back_does_not_overlap():
    first = TimeRange.starting_at(at(9), 30)
    second = TimeRange.starting_at(at(9, 30), 30)

    assert first.overlaps_with(second) is False
    assert second.overlaps_with(first) is False


@pytest.mark.unit
def test_time_range_partial_overlap():
    first = TimeRange.starting_at(at(9), 30)
    second = TimeRange.starting_at(at(9, 15), 30)

    assert first.overlaps_with(second) is True


@pytest.mark.unit
def test_time_range_rejects_empty_interval():
    with pytest.raises(ValueError):
        TimeRange(start=at(10), end=at(10))

    with pytest.raises(ValueError):
        TimeRange.starting_at(at(10), 0)


@pytest.mark.unit
def test_time_range_duration_and_single_day():
    late = TimeRange.starting_at(at(23, 45), 30)

    assert late.duration_minutes == 30
    assert late.is_single_day() is False


# ============================================================================
# Booking
# ============================================================================


@pytest.mark.unit
def test_book_starts_pending_with_end_from_duration():
    appointment = Appointment.book(patient_id=7, doctor_id=1, start_at=at(9), duration_minutes=45)

    assert appointment.status == AppointmentStatus.PENDING
    assert appointment.end_at == at(9, 45)
    assert appointment.reminder_sent is False
    assert appointment.is_deleted is False


@pytest.mark.unit
def test_conflicts_with_ignores_cancelled():
    first = make_appointment()
    second = make_appointment(start=at(9, 15))
    assert first.conflicts_with(second) is True

    second.status = AppointmentStatus.CANCELLED
    assert first.conflicts_with(second) is False


@pytest.mark.unit
def test_rejected_and_completed_still_hold_their_slot():
    first = make_appointment()
    for status in (AppointmentStatus.REJECTED, AppointmentStatus.COMPLETED):
        other = make_appointment(status=status, start=at(9))
        assert first.conflicts_with(other) is True


# ============================================================================
# Status transitions
# ============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "current, target, allowed",
    [
        (AppointmentStatus.PENDING, AppointmentStatus.APPROVED, True),
        (AppointmentStatus.PENDING, AppointmentStatus.COMPLETED, False),
        (AppointmentStatus.APPROVED, AppointmentStatus.COMPLETED, True),
        (AppointmentStatus.APPROVED, AppointmentStatus.REJECTED, False),
        (AppointmentStatus.RESCHEDULED, AppointmentStatus.APPROVED, True),
        (AppointmentStatus.RESCHEDULED, AppointmentStatus.COMPLETED, False),
        (AppointmentStatus.CANCELLED, AppointmentStatus.APPROVED, False),
        (AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED, False),
        (AppointmentStatus.REJECTED, AppointmentStatus.RESCHEDULED, False),
    ],
)
def test_status_transition_table(current, target, allowed):
    assert current.can_transition_to(target) is allowed


@pytest.mark.unit
def test_terminal_statuses():
    assert AppointmentStatus.CANCELLED.is_terminal()
    assert AppointmentStatus.COMPLETED.is_terminal()
    assert AppointmentStatus.REJECTED.is_terminal()
    assert not AppointmentStatus.PENDING.is_terminal()


@pytest.mark.unit
def test_approve_then_complete_records_notes():
    appointment = make_appointment()

    appointment.approve()
    appointment.complete(notes="Follow up in 6 months")

    assert appointment.status == AppointmentStatus.COMPLETED
    assert appointment.notes == "Follow up in 6 months"
    assert appointment.version == 2


@pytest.mark.unit
def test_complete_pending_appointment_is_invalid():
    appointment = make_appointment()

    with pytest.raises(InvalidOperationException):
        appointment.complete()

    assert appointment.status == AppointmentStatus.PENDING


@pytest.mark.unit
def test_reject_keeps_reason():
    appointment = make_appointment()

    appointment.reject("Doctor unavailable")

    assert appointment.status == AppointmentStatus.REJECTED
    assert appointment.cancellation_reason == "Doctor unavailable"


# ============================================================================
# Cancellation window
# ============================================================================


@pytest.mark.unit
def test_cancel_less_than_48_hours_before_is_refused():
    appointment = make_appointment()
    now = at(9) - timedelta(hours=47, minutes=59)

    with pytest.raises(BusinessRuleViolationException) as exc_info:
        appointment.cancel(reason="Travel", now=now)

    assert exc_info.value.rule == "cancellation_window"
    assert appointment.status == AppointmentStatus.PENDING
    assert appointment.cancellation_reason is None


@pytest.mark.unit
def test_cancel_exactly_48_hours_before_is_allowed():
    appointment = make_appointment()
    now = at(9) - timedelta(hours=48)

    appointment.cancel(reason="Feeling better, thanks", now=now)

    assert appointment.status == AppointmentStatus.CANCELLED
    assert appointment.cancellation_reason == "Feeling better, thanks"


@pytest.mark.unit
def test_cancel_with_override_ignores_window():
    appointment = make_appointment()

    appointment.cancel(reason="Clinic closed", now=at(8), override=True)

    assert appointment.status == AppointmentStatus.CANCELLED


@pytest.mark.unit
def test_cancel_completed_is_invalid_even_with_override():
    appointment = make_appointment(status=AppointmentStatus.COMPLETED)

    with pytest.raises(InvalidOperationException):
        appointment.cancel(reason="Oops", now=at(8) - timedelta(days=10), override=True)


# ============================================================================
# Reschedule and reminders
# ============================================================================


@pytest.mark.unit
def test_reschedule_keeps_duration_and_resets_reminder():
    appointment = make_appointment()
    appointment.reminder_sent = True

    appointment.reschedule(at(11))

    assert appointment.status == AppointmentStatus.RESCHEDULED
    assert appointment.start_at == at(11)
    assert appointment.end_at == at(11, 30)
    assert appointment.reminder_sent is False


@pytest.mark.unit
def test_needs_reminder_within_horizon_only():
    appointment = make_appointment()
    now = at(9) - timedelta(hours=20)

    assert appointment.needs_reminder(now, hours_ahead=24) is True
    assert appointment.needs_reminder(now, hours_ahead=12) is False

    appointment.mark_reminder_sent()
    assert appointment.needs_reminder(now, hours_ahead=24) is False


@pytest.mark.unit
def test_needs_reminder_skips_closed_appointments():
    appointment = make_appointment(status=AppointmentStatus.CANCELLED)

    assert appointment.needs_reminder(at(8), hours_ahead=24) is False
