"""
Clinic Domain Layer

Entities, value objects and domain services for appointments,
prescriptions and notifications.
"""

from .entities import Appointment, Doctor, Notification, Patient, Prescription, Schedule, User
from .services import AvailableSlot, SchedulingService
from .value_objects import AppointmentStatus, NotificationType, RenewalStatus, TimeRange, UserRole

__all__ = [
    "Appointment",
    "AppointmentStatus",
    "AvailableSlot",
    "Doctor",
    "Notification",
    "NotificationType",
    "Patient",
    "Prescription",
    "RenewalStatus",
    "Schedule",
    "SchedulingService",
    "TimeRange",
    "User",
    "UserRole",
]
