"""
Clinic Use Cases

Application layer use cases for the clinic domain.
"""

from healthapp.domains.clinic.application.use_cases.book_appointment import (
    BookAppointmentRequest,
    BookAppointmentUseCase,
)
from healthapp.domains.clinic.application.use_cases.cancel_appointment import (
    CancelAppointmentRequest,
    CancelAppointmentUseCase,
)
from healthapp.domains.clinic.application.use_cases.export_reports import (
    ExportAppointmentsRequest,
    ExportAppointmentsUseCase,
    ExportDoctorScheduleRequest,
    ExportDoctorScheduleUseCase,
)
from healthapp.domains.clinic.application.use_cases.get_available_slots import (
    GetAvailableSlotsRequest,
    GetAvailableSlotsUseCase,
)
from healthapp.domains.clinic.application.use_cases.issue_prescription import (
    IssuePrescriptionRequest,
    IssuePrescriptionUseCase,
)
from healthapp.domains.clinic.application.use_cases.manage_doctors import (
    AddScheduleRequest,
    AddScheduleUseCase,
    CreateDoctorRequest,
    CreateDoctorUseCase,
    GetDoctorRequest,
    GetDoctorUseCase,
    ListDoctorsRequest,
    ListDoctorsUseCase,
    ListSchedulesRequest,
    ListSchedulesUseCase,
    RemoveScheduleRequest,
    RemoveScheduleUseCase,
    UpdateScheduleRequest,
    UpdateScheduleUseCase,
)
from healthapp.domains.clinic.application.use_cases.manage_patients import (
    CreatePatientRequest,
    CreatePatientUseCase,
    GetPatientRequest,
    GetPatientUseCase,
    ListPatientsRequest,
    ListPatientsUseCase,
    UpdatePatientRequest,
    UpdatePatientUseCase,
)
from healthapp.domains.clinic.application.use_cases.manage_users import (
    CreateUserRequest,
    CreateUserUseCase,
    DeactivateUserRequest,
    DeactivateUserUseCase,
    GetUserRequest,
    GetUserUseCase,
    ListUsersRequest,
    ListUsersUseCase,
)
from healthapp.domains.clinic.application.use_cases.notifications import (
    BroadcastNotificationRequest,
    BroadcastNotificationUseCase,
    ListNotificationsRequest,
    ListNotificationsUseCase,
    ListUnreadNotificationsRequest,
    ListUnreadNotificationsUseCase,
    MarkNotificationReadRequest,
    MarkNotificationReadUseCase,
    SendNotificationRequest,
    SendNotificationUseCase,
)
from healthapp.domains.clinic.application.use_cases.prescription_renewal import (
    RenewalOutcome,
    RenewPrescriptionRequest,
    RenewPrescriptionUseCase,
    RequestRenewalRequest,
    RequestRenewalUseCase,
    RespondToRenewalRequest,
    RespondToRenewalUseCase,
)
from healthapp.domains.clinic.application.use_cases.query_appointments import (
    DeleteAppointmentRequest,
    DeleteAppointmentUseCase,
    GetAppointmentRequest,
    GetAppointmentUseCase,
    ListAppointmentsRequest,
    ListAppointmentsUseCase,
)
from healthapp.domains.clinic.application.use_cases.query_prescriptions import (
    DeletePrescriptionRequest,
    DeletePrescriptionUseCase,
    GetPrescriptionRequest,
    GetPrescriptionUseCase,
    ListPrescriptionsRequest,
    ListPrescriptionsUseCase,
)
from healthapp.domains.clinic.application.use_cases.reschedule_appointment import (
    RescheduleAppointmentRequest,
    RescheduleAppointmentUseCase,
)
from healthapp.domains.clinic.application.use_cases.review_appointment import (
    ReviewAction,
    ReviewAppointmentRequest,
    ReviewAppointmentUseCase,
)
from healthapp.domains.clinic.application.use_cases.send_reminders import (
    SendRemindersRequest,
    SendRemindersUseCase,
)

__all__ = [
    # Appointments
    "BookAppointmentRequest",
    "BookAppointmentUseCase",
    "CancelAppointmentRequest",
    "CancelAppointmentUseCase",
    "RescheduleAppointmentRequest",
    "RescheduleAppointmentUseCase",
    "ReviewAction",
    "ReviewAppointmentRequest",
    "ReviewAppointmentUseCase",
    "GetAvailableSlotsRequest",
    "GetAvailableSlotsUseCase",
    "SendRemindersRequest",
    "SendRemindersUseCase",
    "GetAppointmentRequest",
    "GetAppointmentUseCase",
    "ListAppointmentsRequest",
    "ListAppointmentsUseCase",
    "DeleteAppointmentRequest",
    "DeleteAppointmentUseCase",
    # Prescriptions
    "IssuePrescriptionRequest",
    "IssuePrescriptionUseCase",
    "GetPrescriptionRequest",
    "GetPrescriptionUseCase",
    "ListPrescriptionsRequest",
    "ListPrescriptionsUseCase",
    "RenewalOutcome",
    "RequestRenewalRequest",
    "RequestRenewalUseCase",
    "RespondToRenewalRequest",
    "RespondToRenewalUseCase",
    "RenewPrescriptionRequest",
    "RenewPrescriptionUseCase",
    "DeletePrescriptionRequest",
    "DeletePrescriptionUseCase",
    # Notifications
    "ListUnreadNotificationsRequest",
    "ListUnreadNotificationsUseCase",
    "MarkNotificationReadRequest",
    "MarkNotificationReadUseCase",
    "BroadcastNotificationRequest",
    "BroadcastNotificationUseCase",
    "ListNotificationsRequest",
    "ListNotificationsUseCase",
    "SendNotificationRequest",
    "SendNotificationUseCase",
    # Users and profiles
    "CreateUserRequest",
    "CreateUserUseCase",
    "GetUserRequest",
    "GetUserUseCase",
    "ListUsersRequest",
    "ListUsersUseCase",
    "DeactivateUserRequest",
    "DeactivateUserUseCase",
    "CreateDoctorRequest",
    "CreateDoctorUseCase",
    "GetDoctorRequest",
    "GetDoctorUseCase",
    "ListDoctorsRequest",
    "ListDoctorsUseCase",
    "AddScheduleRequest",
    "AddScheduleUseCase",
    "ListSchedulesRequest",
    "ListSchedulesUseCase",
    "RemoveScheduleRequest",
    "RemoveScheduleUseCase",
    "UpdateScheduleRequest",
    "UpdateScheduleUseCase",
    "CreatePatientRequest",
    "CreatePatientUseCase",
    "UpdatePatientRequest",
    "UpdatePatientUseCase",
    "GetPatientRequest",
    "GetPatientUseCase",
    "ListPatientsRequest",
    "ListPatientsUseCase",
    # Reports
    "ExportAppointmentsRequest",
    "ExportAppointmentsUseCase",
    "ExportDoctorScheduleRequest",
    "ExportDoctorScheduleUseCase",
]
