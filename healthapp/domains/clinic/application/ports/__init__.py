from .appointment_repository import IAppointmentRepository
from .doctor_repository import IDoctorRepository, IScheduleRepository
from .notification_repository import IEventBus, INotificationRepository
from .patient_repository import IPatientRepository
from .prescription_repository import IPrescriptionRepository
from .user_repository import IUserRepository

__all__ = [
    "IAppointmentRepository",
    "IDoctorRepository",
    "IEventBus",
    "INotificationRepository",
    "IPatientRepository",
    "IPrescriptionRepository",
    "IScheduleRepository",
    "IUserRepository",
]
