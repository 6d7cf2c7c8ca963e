"""
Get Available Slots Use Case
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Callable

from healthapp.core.domain import DomainException, EntityNotFoundException, ErrorKind, ValidationException
from healthapp.domains.clinic.application.dto import UseCaseResult
from healthapp.domains.clinic.application.ports import (
    IAppointmentRepository,
    IDoctorRepository,
    IScheduleRepository,
)
from healthapp.domains.clinic.domain.services import AvailableSlot, SchedulingService

logger = logging.getLogger(__name__)


@dataclass
class GetAvailableSlotsRequest:
    doctor_id: int
    day: date
    slot_minutes: int | None = None


class GetAvailableSlotsUseCase:
    """Free slots of a doctor on a given date; past slots are left out."""

    def __init__(
        self,
        doctor_repository: IDoctorRepository,
        schedule_repository: IScheduleRepository,
        appointment_repository: IAppointmentRepository,
        scheduling_service: SchedulingService | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.doctor_repo = doctor_repository
        self.schedule_repo = schedule_repository
        self.appointment_repo = appointment_repository
        self.scheduling = scheduling_service or SchedulingService()
        self.clock = clock

    async def execute(self, request: GetAvailableSlotsRequest) -> UseCaseResult[list[AvailableSlot]]:
        try:
            if request.slot_minutes is not None and request.slot_minutes <= 0:
                raise ValidationException("slot_minutes must be positive", field="slot_minutes")

            doctor = await self.doctor_repo.find_by_id(request.doctor_id)
            if doctor is None:
                raise EntityNotFoundException(entity_type="Doctor", entity_id=request.doctor_id)
            if not doctor.is_active:
                return UseCaseResult.ok([])

            schedules = await self.schedule_repo.find_by_doctor(doctor.id)
            booked = await self.appointment_repo.find_by_doctor_between(
                doctor.id,
                datetime.combine(request.day, time.min),
                datetime.combine(request.day, time.max),
            )
            slots = self.scheduling.find_available_slots(
                doctor_id=doctor.id,
                day=request.day,
                schedules=schedules,
                appointments=booked,
                not_before=self.clock(),
                slot_minutes=request.slot_minutes,
            )
            return UseCaseResult.ok(slots)

        except DomainException as e:
            logger.warning(f"Slot lookup failed for doctor {request.doctor_id}: {e}")
            return UseCaseResult.from_exception(e)
        except Exception as e:
            logger.error(f"Error listing available slots: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to list available slots")
