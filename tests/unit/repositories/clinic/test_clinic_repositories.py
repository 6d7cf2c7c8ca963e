"""
Unit tests for the clinic SQLAlchemy repositories.

The session is mocked; these tests cover entity/model mapping and the
insert-or-update decisions, not SQL.
"""

from datetime import datetime
from unittest.mock import MagicMock

import pytest

from healthapp.domains.clinic.domain.entities import Appointment, Notification, Prescription, User
from healthapp.domains.clinic.domain.value_objects import (
    AppointmentStatus,
    NotificationType,
    RenewalStatus,
    UserRole,
)
from healthapp.domains.clinic.infrastructure.persistence.sqlalchemy.models import (
    AppointmentModel,
    DoctorModel,
    NotificationModel,
    PrescriptionModel,
    UserModel,
)
from healthapp.domains.clinic.infrastructure.repositories import (
    SQLAlchemyAppointmentRepository,
    SQLAlchemyDoctorRepository,
    SQLAlchemyNotificationRepository,
    SQLAlchemyPrescriptionRepository,
    SQLAlchemyUserRepository,
)


def scalar_result(value):
    """Mock execute() result returning a single row (or None)."""
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    result.scalar_one.return_value = value
    result.scalars.return_value.first.return_value = value
    return result


def scalars_result(values):
    result = MagicMock()
    result.scalars.return_value.all.return_value = values
    return result


@pytest.fixture
def appointment_model() -> AppointmentModel:
    return AppointmentModel(
        id=100,
        patient_id=7,
        doctor_id=1,
        start_at=datetime(2025, 3, 3, 9, 0),
        end_at=datetime(2025, 3, 3, 9, 30),
        duration_minutes=30,
        status=AppointmentStatus.APPROVED,
        reason="Checkup",
        reminder_sent=False,
        is_deleted=False,
    )


@pytest.fixture
def prescription_model() -> PrescriptionModel:
    return PrescriptionModel(
        id=50,
        appointment_id=100,
        doctor_id=1,
        patient_id=7,
        medication="Amoxicillin",
        dosage="500mg",
        frequency="Every 8 hours",
        duration_days=10,
        allow_refills=True,
        refills_allowed=1,
        prescribed_at=datetime(2025, 3, 3, 10, 0),
        expires_at=datetime(2025, 3, 13, 10, 0),
        renewal_status=RenewalStatus.NONE,
    )


# ============================================================================
# Appointment repository
# ============================================================================


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_find_appointment_maps_model(mock_async_session, appointment_model):
    mock_async_session.execute.return_value = scalar_result(appointment_model)
    repo = SQLAlchemyAppointmentRepository(mock_async_session)

    appointment = await repo.find_by_id(100)

    assert isinstance(appointment, Appointment)
    assert appointment.id == 100
    assert appointment.status == AppointmentStatus.APPROVED
    assert appointment.end_at == datetime(2025, 3, 3, 9, 30)
    assert appointment.reason == "Checkup"


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_find_appointment_missing(mock_async_session):
    mock_async_session.execute.return_value = scalar_result(None)
    repo = SQLAlchemyAppointmentRepository(mock_async_session)

    assert await repo.find_by_id(404) is None


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_save_new_appointment_adds_and_commits(mock_async_session, sample_appointment):
    sample_appointment.id = None
    repo = SQLAlchemyAppointmentRepository(mock_async_session)

    saved = await repo.save(sample_appointment)

    mock_async_session.add.assert_called_once()
    added = mock_async_session.add.call_args.args[0]
    assert isinstance(added, AppointmentModel)
    assert added.status == AppointmentStatus.PENDING
    mock_async_session.commit.assert_awaited_once()
    mock_async_session.refresh.assert_awaited_once_with(added)
    assert saved.start_at == sample_appointment.start_at


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_save_existing_appointment_updates_row(mock_async_session, appointment_model, sample_appointment):
    mock_async_session.execute.return_value = scalar_result(appointment_model)
    sample_appointment.cancel(reason="Travel", now=datetime(2025, 2, 20), window_hours=48)
    repo = SQLAlchemyAppointmentRepository(mock_async_session)

    saved = await repo.save(sample_appointment)

    mock_async_session.add.assert_not_called()
    assert appointment_model.status == AppointmentStatus.CANCELLED
    assert appointment_model.cancellation_reason == "Travel"
    assert saved.status == AppointmentStatus.CANCELLED


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_delete_is_soft(mock_async_session, appointment_model):
    mock_async_session.execute.return_value = scalar_result(appointment_model)
    repo = SQLAlchemyAppointmentRepository(mock_async_session)

    assert await repo.delete(100) is True
    assert appointment_model.is_deleted is True
    mock_async_session.delete.assert_not_called()
    mock_async_session.commit.assert_awaited_once()


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_delete_missing_appointment(mock_async_session):
    mock_async_session.execute.return_value = scalar_result(None)
    repo = SQLAlchemyAppointmentRepository(mock_async_session)

    assert await repo.delete(404) is False
    mock_async_session.commit.assert_not_called()


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_find_by_doctor_between(mock_async_session, appointment_model):
    mock_async_session.execute.return_value = scalars_result([appointment_model])
    repo = SQLAlchemyAppointmentRepository(mock_async_session)

    appointments = await repo.find_by_doctor_between(1, datetime(2025, 3, 3), datetime(2025, 3, 4))

    assert [a.id for a in appointments] == [100]


# ============================================================================
# Prescription repository
# ============================================================================


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_prescription_mapping(mock_async_session, prescription_model):
    mock_async_session.execute.return_value = scalar_result(prescription_model)
    repo = SQLAlchemyPrescriptionRepository(mock_async_session)

    prescription = await repo.find_by_id(50)

    assert isinstance(prescription, Prescription)
    assert prescription.refills_allowed == 1
    assert prescription.expires_at == datetime(2025, 3, 13, 10, 0)
    assert prescription.renewal_status == RenewalStatus.NONE


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_update_prescription_only_moves_workflow(mock_async_session, prescription_model, sample_prescription):
    mock_async_session.execute.return_value = scalar_result(prescription_model)
    sample_prescription.request_renewal()
    sample_prescription.medication = "Changed"
    repo = SQLAlchemyPrescriptionRepository(mock_async_session)

    await repo.save(sample_prescription)

    assert prescription_model.renewal_status == RenewalStatus.REQUESTED
    assert prescription_model.medication == "Amoxicillin"


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_has_renewal(mock_async_session):
    mock_async_session.execute.return_value = scalar_result(1)
    repo = SQLAlchemyPrescriptionRepository(mock_async_session)

    assert await repo.has_renewal(50) is True


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_find_all_prescriptions(mock_async_session, prescription_model):
    mock_async_session.execute.return_value = scalars_result([prescription_model])
    repo = SQLAlchemyPrescriptionRepository(mock_async_session)

    prescriptions = await repo.find_all()

    assert [p.id for p in prescriptions] == [50]


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_delete_prescription_is_hard(mock_async_session, prescription_model):
    mock_async_session.execute.return_value = scalar_result(prescription_model)
    repo = SQLAlchemyPrescriptionRepository(mock_async_session)

    assert await repo.delete(50) is True
    mock_async_session.delete.assert_awaited_once_with(prescription_model)
    mock_async_session.commit.assert_awaited_once()


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_delete_missing_prescription(mock_async_session):
    mock_async_session.execute.return_value = scalar_result(None)
    repo = SQLAlchemyPrescriptionRepository(mock_async_session)

    assert await repo.delete(404) is False
    mock_async_session.delete.assert_not_called()


# ============================================================================
# User and notification repositories
# ============================================================================


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_save_new_user_inserts_with_domain_id(mock_async_session):
    mock_async_session.execute.return_value = scalar_result(None)
    user = User(email="wilson@clinic.test", first_name="James", last_name="Wilson", role=UserRole.DOCTOR)
    repo = SQLAlchemyUserRepository(mock_async_session)

    saved = await repo.save(user)

    added = mock_async_session.add.call_args.args[0]
    assert isinstance(added, UserModel)
    assert added.id == user.id
    assert saved.id == user.id
    assert saved.role == UserRole.DOCTOR


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_mark_notification_read_updates_flag_only(mock_async_session):
    model = NotificationModel(
        id=9,
        user_id="u-1",
        message="Hello",
        notification_type=NotificationType.SYSTEM,
        is_read=False,
    )
    mock_async_session.execute.return_value = scalar_result(model)
    notification = Notification(id=9, user_id="u-1", message="Edited", is_read=True)
    repo = SQLAlchemyNotificationRepository(mock_async_session)

    saved = await repo.save(notification)

    assert model.is_read is True
    assert model.message == "Hello"
    assert saved.is_read is True
    mock_async_session.add.assert_not_called()


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_notification_history_for_user(mock_async_session):
    read = NotificationModel(id=8, user_id="u-1", message="Old", notification_type=NotificationType.SYSTEM, is_read=True)
    unread = NotificationModel(
        id=9, user_id="u-1", message="New", notification_type=NotificationType.SYSTEM, is_read=False
    )
    mock_async_session.execute.return_value = scalars_result([unread, read])
    repo = SQLAlchemyNotificationRepository(mock_async_session)

    history = await repo.find_by_user("u-1")

    assert [(n.id, n.is_read) for n in history] == [(9, False), (8, True)]


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_find_doctors_by_specialization_ignores_case(mock_async_session):
    model = DoctorModel(
        id=1,
        user_id="u-2",
        first_name="Gregory",
        last_name="House",
        specialization="Diagnostics",
        is_active=True,
    )
    mock_async_session.execute.return_value = scalars_result([model])
    repo = SQLAlchemyDoctorRepository(mock_async_session)

    doctors = await repo.find_by_specialization("DIAGNOSTICS")

    assert [d.specialization for d in doctors] == ["Diagnostics"]
    statement = mock_async_session.execute.await_args.args[0]
    assert "lower(doctors.specialization)" in str(statement)
    assert "diagnostics" in statement.compile().params.values()
