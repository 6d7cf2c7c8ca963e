from .models import (
    AppointmentModel,
    DoctorModel,
    NotificationModel,
    PatientModel,
    PrescriptionModel,
    ScheduleModel,
    UserModel,
)

__all__ = [
    "AppointmentModel",
    "DoctorModel",
    "NotificationModel",
    "PatientModel",
    "PrescriptionModel",
    "ScheduleModel",
    "UserModel",
]
