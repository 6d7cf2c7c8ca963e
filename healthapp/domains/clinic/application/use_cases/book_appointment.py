"""
Book Appointment Use Case

Books a pending appointment after checking the doctor's schedule and
existing bookings, then sends the confirmation notification.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, time
from typing import Callable

from healthapp.core.domain import (
    AuthorizationException,
    DomainException,
    EntityNotFoundException,
    ErrorKind,
    ValidationException,
)
from healthapp.domains.clinic.application.dto import Identity, UseCaseResult
from healthapp.domains.clinic.application.ports import (
    IAppointmentRepository,
    IDoctorRepository,
    IPatientRepository,
    IScheduleRepository,
)
from healthapp.domains.clinic.application.services import AccessPolicy, NotificationService
from healthapp.domains.clinic.domain.entities import Appointment
from healthapp.domains.clinic.domain.services import SchedulingService
from healthapp.domains.clinic.domain.value_objects import TimeRange

logger = logging.getLogger(__name__)


@dataclass
class BookAppointmentRequest:
    """Request for booking an appointment."""

    identity: Identity
    doctor_id: int
    patient_id: int
    start_at: datetime
    reason: str | None = None
    duration_minutes: int | None = None


async def load_day_appointments(
    appointment_repo: IAppointmentRepository,
    doctor_id: int,
    slot: TimeRange,
) -> list[Appointment]:
    """The doctor's appointments on the slot's calendar day."""
    day = slot.start.date()
    return await appointment_repo.find_by_doctor_between(
        doctor_id,
        datetime.combine(day, time.min),
        datetime.combine(day, time.max),
    )


class BookAppointmentUseCase:
    """
    Use case for booking appointments.

    Single Responsibility: Only handles appointment booking logic
    Dependency Inversion: Depends on interfaces, not implementations
    """

    def __init__(
        self,
        appointment_repository: IAppointmentRepository,
        doctor_repository: IDoctorRepository,
        patient_repository: IPatientRepository,
        schedule_repository: IScheduleRepository,
        notification_service: NotificationService,
        access_policy: AccessPolicy,
        scheduling_service: SchedulingService | None = None,
        default_duration_minutes: int = 30,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize use case with dependencies.

        Args:
            appointment_repository: Appointment data access
            doctor_repository: Doctor data access
            patient_repository: Patient data access
            schedule_repository: Weekly schedule windows
            notification_service: Sends the confirmation
            access_policy: Ownership checks for the caller
            scheduling_service: Slot availability rules
            default_duration_minutes: Length used when the request gives none
            clock: Current local time
        """
        self.appointment_repo = appointment_repository
        self.doctor_repo = doctor_repository
        self.patient_repo = patient_repository
        self.schedule_repo = schedule_repository
        self.notifications = notification_service
        self.access = access_policy
        self.scheduling = scheduling_service or SchedulingService(default_duration_minutes)
        self.default_duration_minutes = default_duration_minutes
        self.clock = clock

    async def execute(self, request: BookAppointmentRequest) -> UseCaseResult[Appointment]:
        """
        Execute appointment booking use case.

        Args:
            request: Booking request parameters

        Returns:
            Result with the pending appointment, or the failure kind
        """
        try:
            # 1. Resolve both parties
            doctor = await self.doctor_repo.find_by_id(request.doctor_id)
            if doctor is None:
                raise EntityNotFoundException(entity_type="Doctor", entity_id=request.doctor_id)
            patient = await self.patient_repo.find_by_id(request.patient_id)
            if patient is None:
                raise EntityNotFoundException(entity_type="Patient", entity_id=request.patient_id)

            # 2. Patients may only book for themselves
            if request.identity.is_patient and patient.user_id != request.identity.user_id:
                raise AuthorizationException(
                    operation="book_appointment",
                    resource=f"Patient {patient.id}",
                    user_id=request.identity.user_id,
                )

            if not doctor.is_active:
                raise ValidationException("Doctor is not accepting appointments", field="doctor_id")

            # 3. Build the slot
            duration = request.duration_minutes or self.default_duration_minutes
            try:
                slot = TimeRange.starting_at(request.start_at, duration)
            except ValueError as e:
                raise ValidationException(str(e), field="duration_minutes") from e
            if slot.start < self.clock():
                raise ValidationException("Cannot book an appointment in the past", field="start_at")

            # 4. Availability
            schedules = await self.schedule_repo.find_by_doctor(doctor.id)
            booked = await load_day_appointments(self.appointment_repo, doctor.id, slot)
            self.scheduling.ensure_slot_available(doctor.id, slot, schedules, booked)

            # 5. Persist
            appointment = Appointment.book(
                patient_id=patient.id,
                doctor_id=doctor.id,
                start_at=slot.start,
                reason=request.reason,
                duration_minutes=duration,
            )
            saved = await self.appointment_repo.save(appointment)

            logger.info(
                f"Appointment booked: {saved.id} for patient {patient.id} with doctor {doctor.id} at {slot}"
            )

            # 6. Confirmation
            await self.notifications.deliver(self.notifications.send_appointment_confirmation(saved))

            return UseCaseResult.ok(saved)

        except DomainException as e:
            logger.warning(f"Booking rejected: {e}")
            return UseCaseResult.from_exception(e)
        except Exception as e:
            logger.error(f"Error booking appointment: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to book appointment")
