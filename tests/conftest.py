"""
Shared pytest fixtures for all tests.

Provides mock sessions and repositories, caller identities, and sample
clinic entities. The reference week starts on Monday 2025-03-03.
"""

import os
from datetime import date, datetime, time
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

# Ensure test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["NOTIFICATION_BUS_ENABLED"] = "false"

from healthapp.domains.clinic.application.dto import Identity  # noqa: E402
from healthapp.domains.clinic.application.services import AccessPolicy  # noqa: E402
from healthapp.domains.clinic.domain.entities import (  # noqa: E402
    Appointment,
    Doctor,
    Patient,
    Prescription,
    Schedule,
)
from healthapp.domains.clinic.domain.value_objects import UserRole  # noqa: E402

MONDAY = date(2025, 3, 3)
ADMIN_USER_ID = "00000000-0000-0000-0000-000000000001"
DOCTOR_USER_ID = "00000000-0000-0000-0000-000000000002"
PATIENT_USER_ID = "00000000-0000-0000-0000-000000000003"


def at(hour: int, minute: int = 0, day: date = MONDAY) -> datetime:
    """Naive clinic-local datetime on the reference Monday."""
    return datetime.combine(day, time(hour, minute))


# ============================================================================
# DATABASE FIXTURES
# ============================================================================


@pytest.fixture
def mock_async_session():
    """Create a mock async database session."""
    session = AsyncMock(spec=AsyncSession)
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.refresh = AsyncMock()
    session.add = MagicMock()
    session.delete = AsyncMock()
    return session


# ============================================================================
# IDENTITY FIXTURES
# ============================================================================


@pytest.fixture
def admin_identity() -> Identity:
    return Identity(user_id=ADMIN_USER_ID, role=UserRole.ADMIN)


@pytest.fixture
def doctor_identity() -> Identity:
    return Identity(user_id=DOCTOR_USER_ID, role=UserRole.DOCTOR)


@pytest.fixture
def patient_identity() -> Identity:
    return Identity(user_id=PATIENT_USER_ID, role=UserRole.PATIENT)


# ============================================================================
# ENTITY FIXTURES
# ============================================================================


@pytest.fixture
def sample_doctor() -> Doctor:
    return Doctor(
        id=1,
        user_id=DOCTOR_USER_ID,
        first_name="Gregory",
        last_name="House",
        email="house@clinic.test",
        specialization="Diagnostics",
        license_number="LIC-1001",
    )


@pytest.fixture
def sample_patient() -> Patient:
    return Patient(
        id=7,
        user_id=PATIENT_USER_ID,
        first_name="Jane",
        last_name="Doe",
        email="jane@clinic.test",
        date_of_birth=date(1990, 6, 15),
    )


@pytest.fixture
def monday_schedule() -> Schedule:
    """Monday 09:00-12:00 window of doctor 1."""
    return Schedule(id=1, doctor_id=1, day_of_week=0, start_time=time(9, 0), end_time=time(12, 0))


@pytest.fixture
def sample_appointment() -> Appointment:
    """Pending Monday 09:00-09:30 appointment of patient 7 with doctor 1."""
    appointment = Appointment.book(patient_id=7, doctor_id=1, start_at=at(9), reason="Checkup")
    appointment.id = 100
    return appointment


@pytest.fixture
def sample_prescription() -> Prescription:
    return Prescription(
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
        prescribed_at=at(10),
    )


# ============================================================================
# REPOSITORY AND SERVICE MOCKS
# ============================================================================


@pytest.fixture
def mock_appointment_repository():
    repo = AsyncMock()
    repo.save.side_effect = lambda entity: entity
    return repo


@pytest.fixture
def mock_prescription_repository():
    repo = AsyncMock()
    repo.has_renewal.return_value = False
    repo.find_by_appointment.return_value = None
    return repo


@pytest.fixture
def mock_doctor_repository(sample_doctor):
    repo = AsyncMock()
    repo.find_by_id.return_value = sample_doctor
    repo.find_by_user_id.return_value = sample_doctor
    return repo


@pytest.fixture
def mock_patient_repository(sample_patient):
    repo = AsyncMock()
    repo.find_by_id.return_value = sample_patient
    repo.find_by_user_id.return_value = sample_patient
    return repo


@pytest.fixture
def mock_schedule_repository(monday_schedule):
    repo = AsyncMock()
    repo.find_by_doctor.return_value = [monday_schedule]
    return repo


@pytest.fixture
def mock_notification_service():
    """NotificationService double; deliver awaits the pending send like the real one."""
    service = MagicMock()
    for name in (
        "notify",
        "send_appointment_confirmation",
        "send_appointment_reminder",
        "send_appointment_cancellation",
        "send_appointment_approval",
        "send_appointment_rejection",
        "send_appointment_reschedule",
        "send_appointment_completion",
        "send_prescription_issued",
        "send_renewal_requested",
        "send_renewal_approved",
        "send_renewal_rejected",
    ):
        setattr(service, name, AsyncMock(return_value=MagicMock()))

    async def deliver(pending):
        return await pending

    service.deliver = AsyncMock(side_effect=deliver)
    return service


@pytest.fixture
def access_policy(mock_patient_repository, mock_doctor_repository) -> AccessPolicy:
    return AccessPolicy(mock_patient_repository, mock_doctor_repository)
