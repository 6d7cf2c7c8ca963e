"""
Clinic API Dependencies

FastAPI dependencies for the clinic domain. Each use case is built per
request around the request-scoped database session.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from healthapp.core.container import get_container
from healthapp.database.async_db import get_async_db
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
    SendNotificationUseCase,
    SendRemindersUseCase,
    UpdatePatientUseCase,
    UpdateScheduleUseCase,
)

# Type alias for database session dependency
DbSession = Annotated[AsyncSession, Depends(get_async_db)]


def get_book_appointment_use_case(db: DbSession) -> BookAppointmentUseCase:
    return get_container().clinic.create_book_appointment_use_case(db)


def get_cancel_appointment_use_case(db: DbSession) -> CancelAppointmentUseCase:
    return get_container().clinic.create_cancel_appointment_use_case(db)


def get_reschedule_appointment_use_case(db: DbSession) -> RescheduleAppointmentUseCase:
    return get_container().clinic.create_reschedule_appointment_use_case(db)


def get_review_appointment_use_case(db: DbSession) -> ReviewAppointmentUseCase:
    return get_container().clinic.create_review_appointment_use_case(db)


def get_available_slots_use_case(db: DbSession) -> GetAvailableSlotsUseCase:
    return get_container().clinic.create_get_available_slots_use_case(db)


def get_send_reminders_use_case(db: DbSession) -> SendRemindersUseCase:
    return get_container().clinic.create_send_reminders_use_case(db)


def get_appointment_use_case(db: DbSession) -> GetAppointmentUseCase:
    return get_container().clinic.create_get_appointment_use_case(db)


def get_list_appointments_use_case(db: DbSession) -> ListAppointmentsUseCase:
    return get_container().clinic.create_list_appointments_use_case(db)


def get_delete_appointment_use_case(db: DbSession) -> DeleteAppointmentUseCase:
    return get_container().clinic.create_delete_appointment_use_case(db)


def get_issue_prescription_use_case(db: DbSession) -> IssuePrescriptionUseCase:
    return get_container().clinic.create_issue_prescription_use_case(db)


def get_prescription_use_case(db: DbSession) -> GetPrescriptionUseCase:
    return get_container().clinic.create_get_prescription_use_case(db)


def get_list_prescriptions_use_case(db: DbSession) -> ListPrescriptionsUseCase:
    return get_container().clinic.create_list_prescriptions_use_case(db)


def get_delete_prescription_use_case(db: DbSession) -> DeletePrescriptionUseCase:
    return get_container().clinic.create_delete_prescription_use_case(db)


def get_request_renewal_use_case(db: DbSession) -> RequestRenewalUseCase:
    return get_container().clinic.create_request_renewal_use_case(db)


def get_respond_to_renewal_use_case(db: DbSession) -> RespondToRenewalUseCase:
    return get_container().clinic.create_respond_to_renewal_use_case(db)


def get_renew_prescription_use_case(db: DbSession) -> RenewPrescriptionUseCase:
    return get_container().clinic.create_renew_prescription_use_case(db)


def get_list_unread_notifications_use_case(db: DbSession) -> ListUnreadNotificationsUseCase:
    return get_container().clinic.create_list_unread_notifications_use_case(db)


def get_list_notifications_use_case(db: DbSession) -> ListNotificationsUseCase:
    return get_container().clinic.create_list_notifications_use_case(db)


def get_send_notification_use_case(db: DbSession) -> SendNotificationUseCase:
    return get_container().clinic.create_send_notification_use_case(db)


def get_mark_notification_read_use_case(db: DbSession) -> MarkNotificationReadUseCase:
    return get_container().clinic.create_mark_notification_read_use_case(db)


def get_broadcast_notification_use_case(db: DbSession) -> BroadcastNotificationUseCase:
    return get_container().clinic.create_broadcast_notification_use_case(db)


def get_create_user_use_case(db: DbSession) -> CreateUserUseCase:
    return get_container().clinic.create_create_user_use_case(db)


def get_user_use_case(db: DbSession) -> GetUserUseCase:
    return get_container().clinic.create_get_user_use_case(db)


def get_list_users_use_case(db: DbSession) -> ListUsersUseCase:
    return get_container().clinic.create_list_users_use_case(db)


def get_deactivate_user_use_case(db: DbSession) -> DeactivateUserUseCase:
    return get_container().clinic.create_deactivate_user_use_case(db)


def get_create_doctor_use_case(db: DbSession) -> CreateDoctorUseCase:
    return get_container().clinic.create_create_doctor_use_case(db)


def get_doctor_use_case(db: DbSession) -> GetDoctorUseCase:
    return get_container().clinic.create_get_doctor_use_case(db)


def get_list_doctors_use_case(db: DbSession) -> ListDoctorsUseCase:
    return get_container().clinic.create_list_doctors_use_case(db)


def get_add_schedule_use_case(db: DbSession) -> AddScheduleUseCase:
    return get_container().clinic.create_add_schedule_use_case(db)


def get_list_schedules_use_case(db: DbSession) -> ListSchedulesUseCase:
    return get_container().clinic.create_list_schedules_use_case(db)


def get_update_schedule_use_case(db: DbSession) -> UpdateScheduleUseCase:
    return get_container().clinic.create_update_schedule_use_case(db)


def get_remove_schedule_use_case(db: DbSession) -> RemoveScheduleUseCase:
    return get_container().clinic.create_remove_schedule_use_case(db)


def get_create_patient_use_case(db: DbSession) -> CreatePatientUseCase:
    return get_container().clinic.create_create_patient_use_case(db)


def get_update_patient_use_case(db: DbSession) -> UpdatePatientUseCase:
    return get_container().clinic.create_update_patient_use_case(db)


def get_patient_use_case(db: DbSession) -> GetPatientUseCase:
    return get_container().clinic.create_get_patient_use_case(db)


def get_list_patients_use_case(db: DbSession) -> ListPatientsUseCase:
    return get_container().clinic.create_list_patients_use_case(db)


def get_export_appointments_use_case(db: DbSession) -> ExportAppointmentsUseCase:
    return get_container().clinic.create_export_appointments_use_case(db)


def get_export_doctor_schedule_use_case(db: DbSession) -> ExportDoctorScheduleUseCase:
    return get_container().clinic.create_export_doctor_schedule_use_case(db)
