"""
Clinic Domain Container.

Single Responsibility: Wire all clinic domain dependencies.
"""

import logging
from typing import TYPE_CHECKING

from healthapp.domains.clinic.application.services import AccessPolicy, NotificationService, ReportService
from healthapp.domains.clinic.application.use_cases import (
    AddScheduleUseCase,
    BookAppointmentUseCase,
    BroadcastNotificationUseCase,
    CancelAppointmentUseCase,
    CreateDoctorUseCase,
    CreatePatientUseCase,
    CreateUserUseCase,
    DeactivateUserUseCase,
    DeleteAppointmentUseCase,
    DeletePrescriptionUseCase,
    ExportAppointmentsUseCase,
    ExportDoctorScheduleUseCase,
    GetAppointmentUseCase,
    GetAvailableSlotsUseCase,
    GetDoctorUseCase,
    GetPatientUseCase,
    GetPrescriptionUseCase,
    GetUserUseCase,
    IssuePrescriptionUseCase,
    ListAppointmentsUseCase,
    ListDoctorsUseCase,
    ListNotificationsUseCase,
    ListPatientsUseCase,
    ListPrescriptionsUseCase,
    ListSchedulesUseCase,
    ListUnreadNotificationsUseCase,
    ListUsersUseCase,
    MarkNotificationReadUseCase,
    RemoveScheduleUseCase,
    RenewPrescriptionUseCase,
    RequestRenewalUseCase,
    RescheduleAppointmentUseCase,
    RespondToRenewalUseCase,
    ReviewAppointmentUseCase,
    SendRemindersUseCase,
    SendNotificationUseCase,
    UpdatePatientUseCase,
    UpdateScheduleUseCase,
)
from healthapp.domains.clinic.domain.services import SchedulingService
from healthapp.domains.clinic.infrastructure.repositories import (
    SQLAlchemyAppointmentRepository,
    SQLAlchemyDoctorRepository,
    SQLAlchemyNotificationRepository,
    SQLAlchemyPatientRepository,
    SQLAlchemyPrescriptionRepository,
    SQLAlchemyScheduleRepository,
    SQLAlchemyUserRepository,
)

if TYPE_CHECKING:
    from healthapp.core.container.base import BaseContainer

logger = logging.getLogger(__name__)


class ClinicContainer:
    """
    Clinic domain container.

    Single Responsibility: Create clinic repositories, services and use cases.
    Every factory takes the request-scoped AsyncSession.
    """

    def __init__(self, base: "BaseContainer"):
        """
        Initialize clinic container.

        Args:
            base: BaseContainer with shared singletons
        """
        self._base = base

    @property
    def settings(self):
        return self._base.settings

    # ==================== REPOSITORIES ====================

    def create_user_repository(self, db) -> SQLAlchemyUserRepository:
        return SQLAlchemyUserRepository(session=db)

    def create_patient_repository(self, db) -> SQLAlchemyPatientRepository:
        """Create Patient Repository."""
        return SQLAlchemyPatientRepository(session=db)

    def create_doctor_repository(self, db) -> SQLAlchemyDoctorRepository:
        """Create Doctor Repository."""
        return SQLAlchemyDoctorRepository(session=db)

    def create_schedule_repository(self, db) -> SQLAlchemyScheduleRepository:
        return SQLAlchemyScheduleRepository(session=db)

    def create_appointment_repository(self, db) -> SQLAlchemyAppointmentRepository:
        """Create Appointment Repository."""
        return SQLAlchemyAppointmentRepository(session=db)

    def create_prescription_repository(self, db) -> SQLAlchemyPrescriptionRepository:
        return SQLAlchemyPrescriptionRepository(session=db)

    def create_notification_repository(self, db) -> SQLAlchemyNotificationRepository:
        return SQLAlchemyNotificationRepository(session=db)

    # ==================== SERVICES ====================

    def create_notification_service(self, db) -> NotificationService:
        return NotificationService(
            notification_repository=self.create_notification_repository(db),
            event_bus=self._base.get_event_bus(),
            patient_repository=self.create_patient_repository(db),
            doctor_repository=self.create_doctor_repository(db),
            channel=self._base.notification_channel,
        )

    def create_access_policy(self, db) -> AccessPolicy:
        return AccessPolicy(
            patient_repository=self.create_patient_repository(db),
            doctor_repository=self.create_doctor_repository(db),
        )

    def create_scheduling_service(self) -> SchedulingService:
        return SchedulingService(slot_minutes=self.settings.DEFAULT_APPOINTMENT_MINUTES)

    def create_report_service(self, db) -> ReportService:
        return ReportService(
            appointment_repository=self.create_appointment_repository(db),
            patient_repository=self.create_patient_repository(db),
            doctor_repository=self.create_doctor_repository(db),
        )

    # ==================== APPOINTMENT USE CASES ====================

    def create_book_appointment_use_case(self, db) -> BookAppointmentUseCase:
        """Create BookAppointmentUseCase with dependencies."""
        return BookAppointmentUseCase(
            appointment_repository=self.create_appointment_repository(db),
            doctor_repository=self.create_doctor_repository(db),
            patient_repository=self.create_patient_repository(db),
            schedule_repository=self.create_schedule_repository(db),
            notification_service=self.create_notification_service(db),
            access_policy=self.create_access_policy(db),
            scheduling_service=self.create_scheduling_service(),
            default_duration_minutes=self.settings.DEFAULT_APPOINTMENT_MINUTES,
        )

    def create_cancel_appointment_use_case(self, db) -> CancelAppointmentUseCase:
        return CancelAppointmentUseCase(
            appointment_repository=self.create_appointment_repository(db),
            notification_service=self.create_notification_service(db),
            access_policy=self.create_access_policy(db),
            window_hours=self.settings.CANCELLATION_WINDOW_HOURS,
        )

    def create_reschedule_appointment_use_case(self, db) -> RescheduleAppointmentUseCase:
        return RescheduleAppointmentUseCase(
            appointment_repository=self.create_appointment_repository(db),
            schedule_repository=self.create_schedule_repository(db),
            notification_service=self.create_notification_service(db),
            access_policy=self.create_access_policy(db),
            scheduling_service=self.create_scheduling_service(),
        )

    def create_review_appointment_use_case(self, db) -> ReviewAppointmentUseCase:
        return ReviewAppointmentUseCase(
            appointment_repository=self.create_appointment_repository(db),
            notification_service=self.create_notification_service(db),
            access_policy=self.create_access_policy(db),
        )

    def create_get_available_slots_use_case(self, db) -> GetAvailableSlotsUseCase:
        return GetAvailableSlotsUseCase(
            doctor_repository=self.create_doctor_repository(db),
            schedule_repository=self.create_schedule_repository(db),
            appointment_repository=self.create_appointment_repository(db),
            scheduling_service=self.create_scheduling_service(),
        )

    def create_send_reminders_use_case(self, db) -> SendRemindersUseCase:
        return SendRemindersUseCase(
            appointment_repository=self.create_appointment_repository(db),
            notification_service=self.create_notification_service(db),
            hours_ahead=self.settings.REMINDER_HOURS_AHEAD,
        )

    def create_get_appointment_use_case(self, db) -> GetAppointmentUseCase:
        return GetAppointmentUseCase(
            appointment_repository=self.create_appointment_repository(db),
            access_policy=self.create_access_policy(db),
        )

    def create_list_appointments_use_case(self, db) -> ListAppointmentsUseCase:
        return ListAppointmentsUseCase(
            appointment_repository=self.create_appointment_repository(db),
            access_policy=self.create_access_policy(db),
        )

    def create_delete_appointment_use_case(self, db) -> DeleteAppointmentUseCase:
        return DeleteAppointmentUseCase(appointment_repository=self.create_appointment_repository(db))

    # ==================== PRESCRIPTION USE CASES ====================

    def create_issue_prescription_use_case(self, db) -> IssuePrescriptionUseCase:
        return IssuePrescriptionUseCase(
            prescription_repository=self.create_prescription_repository(db),
            appointment_repository=self.create_appointment_repository(db),
            notification_service=self.create_notification_service(db),
            access_policy=self.create_access_policy(db),
        )

    def create_get_prescription_use_case(self, db) -> GetPrescriptionUseCase:
        return GetPrescriptionUseCase(
            prescription_repository=self.create_prescription_repository(db),
            access_policy=self.create_access_policy(db),
        )

    def create_list_prescriptions_use_case(self, db) -> ListPrescriptionsUseCase:
        return ListPrescriptionsUseCase(
            prescription_repository=self.create_prescription_repository(db),
            access_policy=self.create_access_policy(db),
        )

    def create_request_renewal_use_case(self, db) -> RequestRenewalUseCase:
        return RequestRenewalUseCase(
            prescription_repository=self.create_prescription_repository(db),
            patient_repository=self.create_patient_repository(db),
            notification_service=self.create_notification_service(db),
        )

    def create_respond_to_renewal_use_case(self, db) -> RespondToRenewalUseCase:
        return RespondToRenewalUseCase(
            prescription_repository=self.create_prescription_repository(db),
            notification_service=self.create_notification_service(db),
            access_policy=self.create_access_policy(db),
        )

    def create_renew_prescription_use_case(self, db) -> RenewPrescriptionUseCase:
        return RenewPrescriptionUseCase(
            prescription_repository=self.create_prescription_repository(db),
            notification_service=self.create_notification_service(db),
            access_policy=self.create_access_policy(db),
        )

    def create_delete_prescription_use_case(self, db) -> DeletePrescriptionUseCase:
        return DeletePrescriptionUseCase(
            prescription_repository=self.create_prescription_repository(db),
            access_policy=self.create_access_policy(db),
        )

    # ==================== NOTIFICATION USE CASES ====================

    def create_list_unread_notifications_use_case(self, db) -> ListUnreadNotificationsUseCase:
        return ListUnreadNotificationsUseCase(notification_repository=self.create_notification_repository(db))

    def create_list_notifications_use_case(self, db) -> ListNotificationsUseCase:
        return ListNotificationsUseCase(notification_repository=self.create_notification_repository(db))

    def create_mark_notification_read_use_case(self, db) -> MarkNotificationReadUseCase:
        return MarkNotificationReadUseCase(notification_repository=self.create_notification_repository(db))

    def create_broadcast_notification_use_case(self, db) -> BroadcastNotificationUseCase:
        return BroadcastNotificationUseCase(
            user_repository=self.create_user_repository(db),
            notification_service=self.create_notification_service(db),
        )

    def create_send_notification_use_case(self, db) -> SendNotificationUseCase:
        return SendNotificationUseCase(
            user_repository=self.create_user_repository(db),
            notification_service=self.create_notification_service(db),
        )

    # ==================== USERS AND PROFILES ====================

    def create_create_user_use_case(self, db) -> CreateUserUseCase:
        return CreateUserUseCase(user_repository=self.create_user_repository(db))

    def create_get_user_use_case(self, db) -> GetUserUseCase:
        return GetUserUseCase(user_repository=self.create_user_repository(db))

    def create_list_users_use_case(self, db) -> ListUsersUseCase:
        return ListUsersUseCase(user_repository=self.create_user_repository(db))

    def create_deactivate_user_use_case(self, db) -> DeactivateUserUseCase:
        return DeactivateUserUseCase(user_repository=self.create_user_repository(db))

    def create_create_doctor_use_case(self, db) -> CreateDoctorUseCase:
        return CreateDoctorUseCase(
            doctor_repository=self.create_doctor_repository(db),
            user_repository=self.create_user_repository(db),
        )

    def create_get_doctor_use_case(self, db) -> GetDoctorUseCase:
        return GetDoctorUseCase(doctor_repository=self.create_doctor_repository(db))

    def create_list_doctors_use_case(self, db) -> ListDoctorsUseCase:
        return ListDoctorsUseCase(doctor_repository=self.create_doctor_repository(db))

    def create_add_schedule_use_case(self, db) -> AddScheduleUseCase:
        return AddScheduleUseCase(
            schedule_repository=self.create_schedule_repository(db),
            doctor_repository=self.create_doctor_repository(db),
            access_policy=self.create_access_policy(db),
        )

    def create_list_schedules_use_case(self, db) -> ListSchedulesUseCase:
        return ListSchedulesUseCase(schedule_repository=self.create_schedule_repository(db))

    def create_update_schedule_use_case(self, db) -> UpdateScheduleUseCase:
        return UpdateScheduleUseCase(
            schedule_repository=self.create_schedule_repository(db),
            access_policy=self.create_access_policy(db),
        )

    def create_remove_schedule_use_case(self, db) -> RemoveScheduleUseCase:
        return RemoveScheduleUseCase(
            schedule_repository=self.create_schedule_repository(db),
            access_policy=self.create_access_policy(db),
        )

    def create_create_patient_use_case(self, db) -> CreatePatientUseCase:
        return CreatePatientUseCase(
            patient_repository=self.create_patient_repository(db),
            user_repository=self.create_user_repository(db),
        )

    def create_update_patient_use_case(self, db) -> UpdatePatientUseCase:
        return UpdatePatientUseCase(
            patient_repository=self.create_patient_repository(db),
            access_policy=self.create_access_policy(db),
        )

    def create_get_patient_use_case(self, db) -> GetPatientUseCase:
        return GetPatientUseCase(
            patient_repository=self.create_patient_repository(db),
            access_policy=self.create_access_policy(db),
        )

    def create_list_patients_use_case(self, db) -> ListPatientsUseCase:
        return ListPatientsUseCase(patient_repository=self.create_patient_repository(db))

    # ==================== REPORTS ====================

    def create_export_appointments_use_case(self, db) -> ExportAppointmentsUseCase:
        return ExportAppointmentsUseCase(report_service=self.create_report_service(db))

    def create_export_doctor_schedule_use_case(self, db) -> ExportDoctorScheduleUseCase:
        return ExportDoctorScheduleUseCase(
            report_service=self.create_report_service(db),
            doctor_repository=self.create_doctor_repository(db),
            access_policy=self.create_access_policy(db),
        )
