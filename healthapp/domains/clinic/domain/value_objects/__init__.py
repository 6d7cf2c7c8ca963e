from .clinic_status import AppointmentStatus, NotificationType, RenewalStatus, UserRole
from .time_range import TimeRange, to_clinic_time

__all__ = [
    "AppointmentStatus",
    "NotificationType",
    "RenewalStatus",
    "TimeRange",
    "UserRole",
    "to_clinic_time",
]
