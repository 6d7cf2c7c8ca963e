"""
Clinic API Schemas

Pydantic schemas for API request/response validation.
"""

from datetime import date, datetime, time

from pydantic import BaseModel, ConfigDict, Field, field_validator

from healthapp.domains.clinic.domain.entities import Patient
from healthapp.domains.clinic.domain.value_objects import (
    AppointmentStatus,
    NotificationType,
    RenewalStatus,
    UserRole,
    to_clinic_time,
)

# ==================== USERS ====================


class UserCreateRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    role: UserRole


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    first_name: str
    last_name: str
    full_name: str
    role: UserRole
    is_active: bool


# ==================== DOCTORS AND SCHEDULES ====================


class DoctorCreateRequest(BaseModel):
    """Doctor profile for an existing doctor account. Names default to the account's."""

    user_id: str
    specialization: str | None = Field(default=None, max_length=100)
    license_number: str | None = Field(default=None, max_length=50)
    phone: str | None = Field(default=None, max_length=20)
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)


class DoctorResponse(BaseModel):
    """Doctor response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    first_name: str
    last_name: str
    full_name: str
    display_name: str
    email: str | None = None
    phone: str | None = None
    specialization: str | None = None
    license_number: str | None = None
    is_active: bool


class ScheduleCreateRequest(BaseModel):
    day_of_week: int = Field(..., ge=0, le=6, description="0 = Monday, 6 = Sunday")
    start_time: time
    end_time: time
    max_appointments: int = Field(default=0, ge=0, description="0 means no cap")


class ScheduleUpdateRequest(ScheduleCreateRequest):
    """Full replacement of a window; the doctor cannot change."""


class ScheduleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    doctor_id: int
    day_of_week: int
    day_name: str
    start_time: time
    end_time: time
    max_appointments: int


class SlotResponse(BaseModel):
    doctor_id: int
    day: date
    start_time: time
    end_time: time


# ==================== PATIENTS ====================


class PatientCreateRequest(BaseModel):
    user_id: str
    phone: str | None = Field(default=None, max_length=20)
    date_of_birth: date | None = None
    address: str | None = Field(default=None, max_length=255)
    blood_type: str | None = Field(default=None, max_length=5)
    allergies: str | None = None
    medical_history: str | None = None


class PatientUpdateRequest(BaseModel):
    phone: str | None = Field(default=None, max_length=20)
    address: str | None = Field(default=None, max_length=255)
    blood_type: str | None = Field(default=None, max_length=5)
    allergies: str | None = None
    medical_history: str | None = None


class PatientResponse(BaseModel):
    """Patient response schema."""

    id: int
    user_id: str
    first_name: str
    last_name: str
    full_name: str
    date_of_birth: date | None = None
    age: int | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    blood_type: str | None = None
    allergies: str | None = None
    medical_history: str | None = None

    @classmethod
    def from_entity(cls, patient: Patient, today: date | None = None) -> "PatientResponse":
        return cls(
            id=patient.id or 0,
            user_id=patient.user_id,
            first_name=patient.first_name,
            last_name=patient.last_name,
            full_name=patient.full_name,
            date_of_birth=patient.date_of_birth,
            age=patient.age_on(today or date.today()),
            email=patient.email,
            phone=patient.phone,
            address=patient.address,
            blood_type=patient.blood_type,
            allergies=patient.allergies,
            medical_history=patient.medical_history,
        )


# ==================== APPOINTMENTS ====================


class AppointmentCreateRequest(BaseModel):
    """Appointment request schema."""

    doctor_id: int
    patient_id: int
    start_at: datetime
    reason: str | None = Field(default=None, max_length=500)
    duration_minutes: int | None = Field(default=None, ge=5, le=240)

    @field_validator("start_at")
    @classmethod
    def to_local_time(cls, v: datetime) -> datetime:
        """Timestamps with an offset are stored as naive clinic time."""
        return to_clinic_time(v)


class AppointmentCancelRequest(BaseModel):
    reason: str = Field(..., min_length=1, max_length=500)
    override_window: bool = Field(default=False, description="Admins only: ignore the cancellation cutoff")


class AppointmentRescheduleRequest(BaseModel):
    new_start_at: datetime

    @field_validator("new_start_at")
    @classmethod
    def to_local_time(cls, v: datetime) -> datetime:
        return to_clinic_time(v)


class AppointmentRejectRequest(BaseModel):
    reason: str | None = Field(default=None, max_length=500)


class AppointmentCompleteRequest(BaseModel):
    notes: str | None = None


class AppointmentResponse(BaseModel):
    """Appointment response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    patient_id: int
    doctor_id: int
    start_at: datetime
    end_at: datetime
    duration_minutes: int
    status: AppointmentStatus
    reason: str | None = None
    cancellation_reason: str | None = None
    notes: str | None = None
    reminder_sent: bool


class RemindersResponse(BaseModel):
    sent: int
    appointment_ids: list[int]


# ==================== PRESCRIPTIONS ====================


class PrescriptionCreateRequest(BaseModel):
    appointment_id: int
    medication: str = Field(..., min_length=1, max_length=200)
    dosage: str = Field(..., max_length=100)
    frequency: str = Field(..., max_length=100)
    duration_days: int | None = Field(default=None, ge=1)
    instructions: str | None = None
    notes: str | None = None
    allow_refills: bool = False
    refills_allowed: int = Field(default=0, ge=0)


class RenewalDecisionRequest(BaseModel):
    approve: bool
    note: str | None = Field(default=None, max_length=500)


class PrescriptionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    appointment_id: int | None = None
    doctor_id: int
    patient_id: int
    medication: str
    dosage: str
    frequency: str
    duration_days: int | None = None
    instructions: str | None = None
    notes: str | None = None
    allow_refills: bool
    refills_allowed: int
    prescribed_at: datetime | None = None
    expires_at: datetime | None = None
    renewal_status: RenewalStatus
    renewal_note: str | None = None
    renewed_from_id: int | None = None


class RenewalDecisionResponse(BaseModel):
    prescription: PrescriptionResponse
    renewed: PrescriptionResponse | None = None


# ==================== NOTIFICATIONS ====================


class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    message: str
    notification_type: NotificationType
    related_entity_id: int | None = None
    is_read: bool
    created_at: datetime


class BroadcastRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=1000)
    role: UserRole | None = None


class BroadcastResponse(BaseModel):
    sent: int


class NotificationSendRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1, max_length=1000)
    notification_type: NotificationType = NotificationType.SYSTEM
    related_entity_id: int | None = None
