from .appointment import Appointment
from .doctor import WEEKDAY_NAMES, Doctor, Schedule
from .notification import Notification
from .patient import Patient
from .prescription import Prescription
from .user import User

__all__ = [
    "Appointment",
    "Doctor",
    "Notification",
    "Patient",
    "Prescription",
    "Schedule",
    "User",
    "WEEKDAY_NAMES",
]
