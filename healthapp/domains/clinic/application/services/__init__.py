from .access_policy import AccessPolicy
from .notification_service import NotificationService
from .report_service import ADMIN_REPORT_HEADER, DOCTOR_SCHEDULE_HEADER, ReportService

__all__ = [
    "ADMIN_REPORT_HEADER",
    "AccessPolicy",
    "DOCTOR_SCHEDULE_HEADER",
    "NotificationService",
    "ReportService",
]
