"""
Unit tests for Clinic Appointment Use Cases.

Tests:
- BookAppointmentUseCase
- CancelAppointmentUseCase
- RescheduleAppointmentUseCase
- ReviewAppointmentUseCase
- SendRemindersUseCase
- GetAvailableSlotsUseCase
- ListAppointmentsUseCase / DeleteAppointmentUseCase
"""

from datetime import date, datetime, time, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from healthapp.core.domain import ErrorKind
from healthapp.domains.clinic.application.use_cases import (
    BookAppointmentRequest,
    BookAppointmentUseCase,
    CancelAppointmentRequest,
    CancelAppointmentUseCase,
    DeleteAppointmentRequest,
    DeleteAppointmentUseCase,
    GetAvailableSlotsRequest,
    GetAvailableSlotsUseCase,
    ListAppointmentsRequest,
    ListAppointmentsUseCase,
    RescheduleAppointmentRequest,
    RescheduleAppointmentUseCase,
    ReviewAction,
    ReviewAppointmentRequest,
    ReviewAppointmentUseCase,
    SendRemindersRequest,
    SendRemindersUseCase,
)
from healthapp.domains.clinic.domain.entities import Appointment, Patient
from healthapp.domains.clinic.domain.value_objects import AppointmentStatus

MONDAY = date(2025, 3, 3)


def at(hour: int, minute: int = 0, day: date = MONDAY) -> datetime:
    return datetime.combine(day, time(hour, minute))


LAST_FRIDAY = at(12, day=date(2025, 2, 28))


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def book_use_case(
    mock_appointment_repository,
    mock_doctor_repository,
    mock_patient_repository,
    mock_schedule_repository,
    mock_notification_service,
    access_policy,
):
    mock_appointment_repository.find_by_doctor_between.return_value = []
    return BookAppointmentUseCase(
        appointment_repository=mock_appointment_repository,
        doctor_repository=mock_doctor_repository,
        patient_repository=mock_patient_repository,
        schedule_repository=mock_schedule_repository,
        notification_service=mock_notification_service,
        access_policy=access_policy,
        clock=lambda: LAST_FRIDAY,
    )


def cancel_use_case(repo, notifications, policy, now: datetime) -> CancelAppointmentUseCase:
    return CancelAppointmentUseCase(
        appointment_repository=repo,
        notification_service=notifications,
        access_policy=policy,
        window_hours=48,
        clock=lambda: now,
    )


# ============================================================================
# BookAppointmentUseCase Tests
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_book_appointment_success(
    book_use_case,
    patient_identity,
    mock_appointment_repository,
    mock_notification_service,
):
    """Monday 09:00 inside the 09:00-12:00 window is booked as Pending."""
    # Arrange
    request = BookAppointmentRequest(
        identity=patient_identity,
        doctor_id=1,
        patient_id=7,
        start_at=at(9),
        reason="Checkup",
    )

    # Act
    result = await book_use_case.execute(request)

    # Assert
    assert result.success is True
    appointment = result.data
    assert appointment.status == AppointmentStatus.PENDING
    assert appointment.start_at == at(9)
    assert appointment.end_at == at(9, 30)
    mock_appointment_repository.save.assert_awaited_once()
    mock_notification_service.send_appointment_confirmation.assert_awaited_once_with(appointment)


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_book_appointment_conflict(
    book_use_case,
    patient_identity,
    mock_appointment_repository,
    sample_appointment,
    mock_notification_service,
):
    """A second booking overlapping 09:00-09:30 is refused."""
    # Arrange
    mock_appointment_repository.find_by_doctor_between.return_value = [sample_appointment]
    request = BookAppointmentRequest(identity=patient_identity, doctor_id=1, patient_id=7, start_at=at(9, 15))

    # Act
    result = await book_use_case.execute(request)

    # Assert
    assert result.success is False
    assert result.error_kind == ErrorKind.VALIDATION
    assert result.error_code == "APPOINTMENT_CONFLICT"
    mock_appointment_repository.save.assert_not_called()
    mock_notification_service.send_appointment_confirmation.assert_not_called()


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_book_appointment_after_cancellation_reuses_slot(
    book_use_case,
    patient_identity,
    mock_appointment_repository,
    sample_appointment,
):
    sample_appointment.status = AppointmentStatus.CANCELLED
    mock_appointment_repository.find_by_doctor_between.return_value = [sample_appointment]

    result = await book_use_case.execute(
        BookAppointmentRequest(identity=patient_identity, doctor_id=1, patient_id=7, start_at=at(9))
    )

    assert result.success is True


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_book_appointment_outside_schedule(book_use_case, patient_identity, mock_appointment_repository):
    """Monday 14:00 is outside the doctor's window."""
    result = await book_use_case.execute(
        BookAppointmentRequest(identity=patient_identity, doctor_id=1, patient_id=7, start_at=at(14))
    )

    assert result.success is False
    assert result.error_kind == ErrorKind.VALIDATION
    mock_appointment_repository.save.assert_not_called()


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_book_appointment_in_the_past(book_use_case, patient_identity):
    result = await book_use_case.execute(
        BookAppointmentRequest(
            identity=patient_identity,
            doctor_id=1,
            patient_id=7,
            start_at=at(9, day=date(2025, 2, 24)),
        )
    )

    assert result.success is False
    assert result.error_kind == ErrorKind.VALIDATION


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_book_appointment_unknown_doctor(book_use_case, patient_identity, mock_doctor_repository):
    mock_doctor_repository.find_by_id.return_value = None

    result = await book_use_case.execute(
        BookAppointmentRequest(identity=patient_identity, doctor_id=99, patient_id=7, start_at=at(9))
    )

    assert result.success is False
    assert result.error_kind == ErrorKind.NOT_FOUND


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_patient_cannot_book_for_someone_else(book_use_case, patient_identity, mock_patient_repository):
    mock_patient_repository.find_by_id.return_value = Patient(id=8, user_id="someone-else", first_name="A")

    result = await book_use_case.execute(
        BookAppointmentRequest(identity=patient_identity, doctor_id=1, patient_id=8, start_at=at(9))
    )

    assert result.success is False
    assert result.error_kind == ErrorKind.FORBIDDEN


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_book_appointment_notification_failure_keeps_booking(
    book_use_case,
    patient_identity,
    mock_notification_service,
):
    """The booking stands even when the confirmation cannot be sent."""
    mock_notification_service.send_appointment_confirmation.side_effect = RuntimeError("bus down")

    async def deliver(pending):
        try:
            return await pending
        except RuntimeError:
            return None

    mock_notification_service.deliver.side_effect = deliver

    result = await book_use_case.execute(
        BookAppointmentRequest(identity=patient_identity, doctor_id=1, patient_id=7, start_at=at(10))
    )

    assert result.success is True


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_book_with_utc_timestamp_is_stored_as_local_time(book_use_case, patient_identity):
    """An offset-aware start is converted to naive local time before any comparison."""
    request = BookAppointmentRequest(
        identity=patient_identity,
        doctor_id=1,
        patient_id=7,
        start_at=at(9).astimezone(timezone.utc),
    )

    result = await book_use_case.execute(request)

    assert result.success is True
    assert result.data.start_at == at(9)
    assert result.data.start_at.tzinfo is None


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_book_with_offset_timestamp_and_system_clock(book_use_case, patient_identity):
    book_use_case.clock = datetime.now
    start = datetime.combine(date.today() + timedelta(days=7 - date.today().weekday()), time(9, 0))

    result = await book_use_case.execute(
        BookAppointmentRequest(identity=patient_identity, doctor_id=1, patient_id=7, start_at=start.astimezone())
    )

    assert result.success is True
    assert result.data.start_at == start


# ============================================================================
# CancelAppointmentUseCase Tests
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_cancel_within_48_hours_is_refused(
    mock_appointment_repository,
    mock_notification_service,
    access_policy,
    patient_identity,
    sample_appointment,
):
    # Arrange
    mock_appointment_repository.find_by_id.return_value = sample_appointment
    use_case = cancel_use_case(
        mock_appointment_repository, mock_notification_service, access_policy, at(9) - timedelta(hours=47)
    )

    # Act
    result = await use_case.execute(
        CancelAppointmentRequest(identity=patient_identity, appointment_id=100, reason="Travel")
    )

    # Assert
    assert result.success is False
    assert result.error_kind == ErrorKind.POLICY_VIOLATION
    assert sample_appointment.status == AppointmentStatus.PENDING
    mock_appointment_repository.save.assert_not_called()
    mock_notification_service.send_appointment_cancellation.assert_not_called()


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_cancel_with_enough_notice_stores_reason_verbatim(
    mock_appointment_repository,
    mock_notification_service,
    access_policy,
    patient_identity,
    sample_appointment,
):
    # Arrange
    mock_appointment_repository.find_by_id.return_value = sample_appointment
    use_case = cancel_use_case(
        mock_appointment_repository, mock_notification_service, access_policy, at(9) - timedelta(hours=48)
    )

    # Act
    result = await use_case.execute(
        CancelAppointmentRequest(identity=patient_identity, appointment_id=100, reason="  Family emergency  ")
    )

    # Assert
    assert result.success is True
    assert result.data.status == AppointmentStatus.CANCELLED
    assert result.data.cancellation_reason == "  Family emergency  "
    mock_notification_service.send_appointment_cancellation.assert_awaited_once()


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_only_admin_may_override_window(
    mock_appointment_repository,
    mock_notification_service,
    access_policy,
    patient_identity,
    admin_identity,
    sample_appointment,
):
    mock_appointment_repository.find_by_id.return_value = sample_appointment
    use_case = cancel_use_case(mock_appointment_repository, mock_notification_service, access_policy, at(8))

    refused = await use_case.execute(
        CancelAppointmentRequest(identity=patient_identity, appointment_id=100, reason="x", override_window=True)
    )
    allowed = await use_case.execute(
        CancelAppointmentRequest(identity=admin_identity, appointment_id=100, reason="Clinic closed", override_window=True)
    )

    assert refused.error_kind == ErrorKind.FORBIDDEN
    assert allowed.success is True
    assert allowed.data.status == AppointmentStatus.CANCELLED


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_cancel_by_unrelated_patient_is_forbidden(
    mock_appointment_repository,
    mock_notification_service,
    access_policy,
    patient_identity,
    mock_patient_repository,
    sample_appointment,
):
    mock_appointment_repository.find_by_id.return_value = sample_appointment
    mock_patient_repository.find_by_user_id.return_value = Patient(id=8, user_id=patient_identity.user_id)
    use_case = cancel_use_case(
        mock_appointment_repository, mock_notification_service, access_policy, at(9) - timedelta(days=5)
    )

    result = await use_case.execute(
        CancelAppointmentRequest(identity=patient_identity, appointment_id=100, reason="x")
    )

    assert result.error_kind == ErrorKind.FORBIDDEN


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_cancel_missing_appointment(
    mock_appointment_repository, mock_notification_service, access_policy, admin_identity
):
    mock_appointment_repository.find_by_id.return_value = None
    use_case = cancel_use_case(mock_appointment_repository, mock_notification_service, access_policy, at(8))

    result = await use_case.execute(CancelAppointmentRequest(identity=admin_identity, appointment_id=404, reason="x"))

    assert result.error_kind == ErrorKind.NOT_FOUND


# ============================================================================
# RescheduleAppointmentUseCase Tests
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_reschedule_into_own_slot_overlap(
    mock_appointment_repository,
    mock_schedule_repository,
    mock_notification_service,
    access_policy,
    doctor_identity,
    sample_appointment,
):
    """Moving 09:00 to 09:15 only overlaps the appointment itself."""
    # Arrange
    mock_appointment_repository.find_by_id.return_value = sample_appointment
    mock_appointment_repository.find_by_doctor_between.return_value = [sample_appointment]
    use_case = RescheduleAppointmentUseCase(
        appointment_repository=mock_appointment_repository,
        schedule_repository=mock_schedule_repository,
        notification_service=mock_notification_service,
        access_policy=access_policy,
        clock=lambda: LAST_FRIDAY,
    )

    # Act
    result = await use_case.execute(
        RescheduleAppointmentRequest(identity=doctor_identity, appointment_id=100, new_start_at=at(9, 15))
    )

    # Assert
    assert result.success is True
    assert result.data.status == AppointmentStatus.RESCHEDULED
    assert result.data.start_at == at(9, 15)
    assert result.data.end_at == at(9, 45)
    mock_notification_service.send_appointment_reschedule.assert_awaited_once()


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_reschedule_completed_is_invalid(
    mock_appointment_repository,
    mock_schedule_repository,
    mock_notification_service,
    access_policy,
    admin_identity,
    sample_appointment,
):
    sample_appointment.status = AppointmentStatus.COMPLETED
    mock_appointment_repository.find_by_id.return_value = sample_appointment
    use_case = RescheduleAppointmentUseCase(
        appointment_repository=mock_appointment_repository,
        schedule_repository=mock_schedule_repository,
        notification_service=mock_notification_service,
        access_policy=access_policy,
        clock=lambda: LAST_FRIDAY,
    )

    result = await use_case.execute(
        RescheduleAppointmentRequest(identity=admin_identity, appointment_id=100, new_start_at=at(10))
    )

    assert result.error_kind == ErrorKind.INVALID_STATE
    mock_appointment_repository.save.assert_not_called()


# ============================================================================
# ReviewAppointmentUseCase Tests
# ============================================================================


@pytest.fixture
def review_use_case(mock_appointment_repository, mock_notification_service, access_policy, sample_appointment):
    mock_appointment_repository.find_by_id.return_value = sample_appointment
    return ReviewAppointmentUseCase(
        appointment_repository=mock_appointment_repository,
        notification_service=mock_notification_service,
        access_policy=access_policy,
    )


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_doctor_approves_pending_appointment(review_use_case, doctor_identity, mock_notification_service):
    result = await review_use_case.execute(
        ReviewAppointmentRequest(identity=doctor_identity, appointment_id=100, action=ReviewAction.APPROVE)
    )

    assert result.success is True
    assert result.data.status == AppointmentStatus.APPROVED
    mock_notification_service.send_appointment_approval.assert_awaited_once()


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_doctor_rejects_with_reason(review_use_case, doctor_identity, mock_notification_service):
    result = await review_use_case.execute(
        ReviewAppointmentRequest(
            identity=doctor_identity,
            appointment_id=100,
            action=ReviewAction.REJECT,
            reason="Please see a specialist",
        )
    )

    assert result.data.status == AppointmentStatus.REJECTED
    assert result.data.cancellation_reason == "Please see a specialist"
    mock_notification_service.send_appointment_rejection.assert_awaited_once()


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_patient_cannot_approve(review_use_case, patient_identity, mock_appointment_repository):
    result = await review_use_case.execute(
        ReviewAppointmentRequest(identity=patient_identity, appointment_id=100, action=ReviewAction.APPROVE)
    )

    assert result.error_kind == ErrorKind.FORBIDDEN
    mock_appointment_repository.save.assert_not_called()


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_complete_pending_is_invalid(review_use_case, doctor_identity):
    result = await review_use_case.execute(
        ReviewAppointmentRequest(identity=doctor_identity, appointment_id=100, action=ReviewAction.COMPLETE)
    )

    assert result.success is False
    assert result.error_kind == ErrorKind.INVALID_STATE


# ============================================================================
# SendRemindersUseCase Tests
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_send_reminders_marks_appointments(
    mock_appointment_repository,
    mock_notification_service,
    admin_identity,
    sample_appointment,
):
    # Arrange
    mock_appointment_repository.find_due_for_reminder.return_value = [sample_appointment]
    use_case = SendRemindersUseCase(
        appointment_repository=mock_appointment_repository,
        notification_service=mock_notification_service,
        hours_ahead=24,
        clock=lambda: at(9) - timedelta(hours=20),
    )

    # Act
    result = await use_case.execute(SendRemindersRequest(identity=admin_identity))

    # Assert
    assert result.success is True
    assert result.data == [100]
    assert sample_appointment.reminder_sent is True
    mock_appointment_repository.save.assert_awaited_once_with(sample_appointment)
    mock_notification_service.send_appointment_reminder.assert_awaited_once()


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_send_reminders_leaves_flag_when_delivery_fails(
    mock_appointment_repository,
    mock_notification_service,
    admin_identity,
    sample_appointment,
):
    mock_appointment_repository.find_due_for_reminder.return_value = [sample_appointment]
    mock_notification_service.send_appointment_reminder.side_effect = RuntimeError("db down")

    async def deliver(pending):
        try:
            return await pending
        except RuntimeError:
            return None

    mock_notification_service.deliver.side_effect = deliver
    use_case = SendRemindersUseCase(
        appointment_repository=mock_appointment_repository,
        notification_service=mock_notification_service,
        clock=lambda: at(9) - timedelta(hours=20),
    )

    result = await use_case.execute(SendRemindersRequest(identity=admin_identity))

    assert result.success is True
    assert result.data == []
    assert sample_appointment.reminder_sent is False
    mock_appointment_repository.save.assert_not_called()


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_send_reminders_requires_admin(
    mock_appointment_repository, mock_notification_service, doctor_identity
):
    use_case = SendRemindersUseCase(
        appointment_repository=mock_appointment_repository,
        notification_service=mock_notification_service,
    )

    result = await use_case.execute(SendRemindersRequest(identity=doctor_identity))

    assert result.error_kind == ErrorKind.FORBIDDEN
    mock_appointment_repository.find_due_for_reminder.assert_not_called()


# ============================================================================
# GetAvailableSlotsUseCase Tests
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_available_slots_exclude_booked(
    mock_doctor_repository,
    mock_schedule_repository,
    mock_appointment_repository,
    sample_appointment,
):
    # Arrange
    mock_appointment_repository.find_by_doctor_between.return_value = [sample_appointment]
    use_case = GetAvailableSlotsUseCase(
        doctor_repository=mock_doctor_repository,
        schedule_repository=mock_schedule_repository,
        appointment_repository=mock_appointment_repository,
        clock=lambda: LAST_FRIDAY,
    )

    # Act
    result = await use_case.execute(GetAvailableSlotsRequest(doctor_id=1, day=MONDAY))

    # Assert
    assert result.success is True
    assert len(result.data) == 5
    assert result.data[0].start_time == time(9, 30)


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_available_slots_invalid_length(
    mock_doctor_repository, mock_schedule_repository, mock_appointment_repository
):
    use_case = GetAvailableSlotsUseCase(
        doctor_repository=mock_doctor_repository,
        schedule_repository=mock_schedule_repository,
        appointment_repository=mock_appointment_repository,
    )

    result = await use_case.execute(GetAvailableSlotsRequest(doctor_id=1, day=MONDAY, slot_minutes=0))

    assert result.error_kind == ErrorKind.VALIDATION


# ============================================================================
# Query Use Case Tests
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_patient_lists_only_own_appointments(
    mock_appointment_repository, access_policy, patient_identity, sample_appointment
):
    mock_appointment_repository.find_by_patient.return_value = [sample_appointment]
    use_case = ListAppointmentsUseCase(mock_appointment_repository, access_policy)

    result = await use_case.execute(ListAppointmentsRequest(identity=patient_identity))

    assert result.data == [sample_appointment]
    mock_appointment_repository.find_by_patient.assert_awaited_once_with(7)
    mock_appointment_repository.find_all.assert_not_called()


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_admin_lists_all_appointments(mock_appointment_repository, access_policy, admin_identity):
    mock_appointment_repository.find_all.return_value = []
    use_case = ListAppointmentsUseCase(mock_appointment_repository, access_policy)

    result = await use_case.execute(ListAppointmentsRequest(identity=admin_identity))

    assert result.success is True
    mock_appointment_repository.find_all.assert_awaited_once()


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_delete_appointment_is_admin_only(mock_appointment_repository, admin_identity, doctor_identity):
    mock_appointment_repository.delete = AsyncMock(return_value=True)
    use_case = DeleteAppointmentUseCase(mock_appointment_repository)

    refused = await use_case.execute(DeleteAppointmentRequest(identity=doctor_identity, appointment_id=100))
    deleted = await use_case.execute(DeleteAppointmentRequest(identity=admin_identity, appointment_id=100))

    assert refused.error_kind == ErrorKind.FORBIDDEN
    assert deleted.success is True
    assert deleted.data == 100
    mock_appointment_repository.delete.assert_awaited_once_with(100)


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_delete_missing_appointment(mock_appointment_repository, admin_identity):
    mock_appointment_repository.delete = AsyncMock(return_value=False)
    use_case = DeleteAppointmentUseCase(mock_appointment_repository)

    result = await use_case.execute(DeleteAppointmentRequest(identity=admin_identity, appointment_id=404))

    assert result.error_kind == ErrorKind.NOT_FOUND


def test_appointment_fixture_is_monday_morning(sample_appointment: Appointment):
    assert sample_appointment.start_at.weekday() == 0
