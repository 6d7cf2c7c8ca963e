"""
Reschedule Appointment Use Case
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from healthapp.core.domain import (
    DomainException,
    EntityNotFoundException,
    ErrorKind,
    InvalidOperationException,
    ValidationException,
)
from healthapp.domains.clinic.application.dto import Identity, UseCaseResult
from healthapp.domains.clinic.application.ports import IAppointmentRepository, IScheduleRepository
from healthapp.domains.clinic.application.services import AccessPolicy, NotificationService
from healthapp.domains.clinic.domain.entities import Appointment
from healthapp.domains.clinic.domain.services import SchedulingService
from healthapp.domains.clinic.domain.value_objects import AppointmentStatus, TimeRange

from .book_appointment import load_day_appointments

logger = logging.getLogger(__name__)


@dataclass
class RescheduleAppointmentRequest:
    identity: Identity
    appointment_id: int
    new_start_at: datetime


class RescheduleAppointmentUseCase:
    """
    Moves an appointment to a new start with the same duration.

    The appointment's current slot does not count as a conflict.
    """

    def __init__(
        self,
        appointment_repository: IAppointmentRepository,
        schedule_repository: IScheduleRepository,
        notification_service: NotificationService,
        access_policy: AccessPolicy,
        scheduling_service: SchedulingService | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.appointment_repo = appointment_repository
        self.schedule_repo = schedule_repository
        self.notifications = notification_service
        self.access = access_policy
        self.scheduling = scheduling_service or SchedulingService()
        self.clock = clock

    async def execute(self, request: RescheduleAppointmentRequest) -> UseCaseResult[Appointment]:
        try:
            appointment = await self.appointment_repo.find_by_id(request.appointment_id)
            if appointment is None:
                raise EntityNotFoundException(entity_type="Appointment", entity_id=request.appointment_id)

            await self.access.ensure_party(request.identity, appointment, "reschedule_appointment")

            if not appointment.status.can_transition_to(AppointmentStatus.RESCHEDULED):
                raise InvalidOperationException(operation="reschedule", current_state=appointment.status.value)

            slot = TimeRange.starting_at(request.new_start_at, appointment.duration_minutes)
            if slot.start < self.clock():
                raise ValidationException("Cannot reschedule into the past", field="new_start_at")

            schedules = await self.schedule_repo.find_by_doctor(appointment.doctor_id)
            booked = await load_day_appointments(self.appointment_repo, appointment.doctor_id, slot)
            self.scheduling.ensure_slot_available(
                appointment.doctor_id,
                slot,
                schedules,
                booked,
                ignore_appointment_id=appointment.id,
            )

            appointment.reschedule(slot.start)
            saved = await self.appointment_repo.save(appointment)
            logger.info(f"Appointment {saved.id} rescheduled to {slot}")

            await self.notifications.deliver(self.notifications.send_appointment_reschedule(saved))
            return UseCaseResult.ok(saved)

        except DomainException as e:
            logger.warning(f"Reschedule rejected for appointment {request.appointment_id}: {e}")
            return UseCaseResult.from_exception(e)
        except Exception as e:
            logger.error(f"Error rescheduling appointment: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to reschedule appointment")
