"""
Clinic Infrastructure Repositories

Repository implementations for the clinic domain.
"""

from healthapp.domains.clinic.infrastructure.repositories.appointment_repository import (
    SQLAlchemyAppointmentRepository,
)
from healthapp.domains.clinic.infrastructure.repositories.doctor_repository import (
    SQLAlchemyDoctorRepository,
    SQLAlchemyScheduleRepository,
)
from healthapp.domains.clinic.infrastructure.repositories.notification_repository import (
    SQLAlchemyNotificationRepository,
)
from healthapp.domains.clinic.infrastructure.repositories.patient_repository import (
    SQLAlchemyPatientRepository,
)
from healthapp.domains.clinic.infrastructure.repositories.prescription_repository import (
    SQLAlchemyPrescriptionRepository,
)
from healthapp.domains.clinic.infrastructure.repositories.user_repository import (
    SQLAlchemyUserRepository,
)

__all__ = [
    "SQLAlchemyAppointmentRepository",
    "SQLAlchemyDoctorRepository",
    "SQLAlchemyNotificationRepository",
    "SQLAlchemyPatientRepository",
    "SQLAlchemyPrescriptionRepository",
    "SQLAlchemyScheduleRepository",
    "SQLAlchemyUserRepository",
]
