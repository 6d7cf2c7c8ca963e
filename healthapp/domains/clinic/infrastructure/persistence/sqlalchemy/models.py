"""
Clinic SQLAlchemy Models

Database models for clinic domain persistence.
"""

from typing import Any

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Enum as SQLEnum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Time,
)
from sqlalchemy.orm import relationship

from healthapp.database.base import Base, TimestampMixin
from healthapp.domains.clinic.domain.value_objects import (
    AppointmentStatus,
    NotificationType,
    RenewalStatus,
    UserRole,
)


def _enum_values(enum_cls) -> list[str]:
    # Persist the display values ("Pending"), not the member names
    return [member.value for member in enum_cls]


class UserModel(Base, TimestampMixin):
    """SQLAlchemy model for User accounts."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    first_name = Column(String(100), nullable=False, default="")
    last_name = Column(String(100), nullable=False, default="")
    role = Column(
        SQLEnum(UserRole, name="user_role", values_callable=_enum_values),
        default=UserRole.PATIENT,
        nullable=False,
        index=True,
    )
    is_active = Column(Boolean, default=True, nullable=False)


class DoctorModel(Base, TimestampMixin):
    """SQLAlchemy model for Doctor entity."""

    __tablename__ = "doctors"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), unique=True, nullable=False)

    # Personal information
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(20), nullable=True)

    # Professional information
    specialization = Column(String(100), nullable=True)
    license_number = Column(String(50), unique=True, nullable=True, index=True)

    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    schedules = relationship("ScheduleModel", back_populates="doctor", cascade="all, delete-orphan")
    appointments = relationship("AppointmentModel", back_populates="doctor")

    @property
    def full_name(self) -> str:
        """Get full name with title."""
        return f"Dr. {self.first_name} {self.last_name}"


class PatientModel(Base, TimestampMixin):
    """SQLAlchemy model for Patient entity."""

    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), unique=True, nullable=False)

    # Personal information
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    date_of_birth = Column(Date, nullable=True)

    # Contact information
    email = Column(String(255), nullable=True)
    phone = Column(String(20), nullable=True)
    address = Column(String(255), nullable=True)

    # Medical information
    blood_type = Column(String(5), nullable=True)
    allergies = Column(Text, nullable=True)
    medical_history = Column(Text, nullable=True)

    # Relationships
    appointments = relationship("AppointmentModel", back_populates="patient")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "full_name": f"{self.first_name} {self.last_name}",
            "date_of_birth": self.date_of_birth.isoformat() if self.date_of_birth else None,
            "email": self.email,
            "phone": self.phone,
            "blood_type": self.blood_type,
        }


class ScheduleModel(Base, TimestampMixin):
    """Weekly availability window of a doctor."""

    __tablename__ = "schedules"

    id = Column(Integer, primary_key=True, index=True)
    doctor_id = Column(Integer, ForeignKey("doctors.id"), nullable=False, index=True)
    day_of_week = Column(Integer, nullable=False)  # 0 = Monday
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    max_appointments = Column(Integer, default=0, nullable=False)

    doctor = relationship("DoctorModel", back_populates="schedules")


class AppointmentModel(Base, TimestampMixin):
    """SQLAlchemy model for Appointment entity."""

    __tablename__ = "appointments"
    __table_args__ = (Index("ix_appointments_doctor_start", "doctor_id", "start_at"),)

    id = Column(Integer, primary_key=True, index=True)

    # References
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False, index=True)
    doctor_id = Column(Integer, ForeignKey("doctors.id"), nullable=False, index=True)

    # Scheduling (clinic local time)
    start_at = Column(DateTime, nullable=False)
    end_at = Column(DateTime, nullable=False)
    duration_minutes = Column(Integer, default=30, nullable=False)

    # Status
    status = Column(
        SQLEnum(AppointmentStatus, name="appointment_status", values_callable=_enum_values),
        default=AppointmentStatus.PENDING,
        nullable=False,
        index=True,
    )
    reason = Column(Text, nullable=True)
    cancellation_reason = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    # Reminders
    reminder_sent = Column(Boolean, default=False, nullable=False)

    is_deleted = Column(Boolean, default=False, nullable=False)

    # Relationships
    patient = relationship("PatientModel", back_populates="appointments")
    doctor = relationship("DoctorModel", back_populates="appointments")


class PrescriptionModel(Base, TimestampMixin):
    """SQLAlchemy model for Prescription entity."""

    __tablename__ = "prescriptions"

    id = Column(Integer, primary_key=True, index=True)

    # References; renewals share their source's appointment
    appointment_id = Column(Integer, ForeignKey("appointments.id"), nullable=True, index=True)
    doctor_id = Column(Integer, ForeignKey("doctors.id"), nullable=False, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False, index=True)
    renewed_from_id = Column(Integer, ForeignKey("prescriptions.id"), nullable=True, index=True)

    # Medication
    medication = Column(String(200), nullable=False)
    dosage = Column(String(100), nullable=False, default="")
    frequency = Column(String(100), nullable=False, default="")
    duration_days = Column(Integer, nullable=True)
    instructions = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    # Refills
    allow_refills = Column(Boolean, default=False, nullable=False)
    refills_allowed = Column(Integer, default=0, nullable=False)

    prescribed_at = Column(DateTime, nullable=False)
    expires_at = Column(DateTime, nullable=True)

    # Renewal workflow
    renewal_status = Column(
        SQLEnum(RenewalStatus, name="renewal_status", values_callable=_enum_values),
        default=RenewalStatus.NONE,
        nullable=False,
    )
    renewal_note = Column(Text, nullable=True)


class NotificationModel(Base, TimestampMixin):
    """Per-user notification row."""

    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    message = Column(Text, nullable=False)
    notification_type = Column(
        SQLEnum(NotificationType, name="notification_type", values_callable=_enum_values),
        nullable=False,
    )
    related_entity_id = Column(Integer, nullable=True)
    is_read = Column(Boolean, default=False, nullable=False, index=True)
