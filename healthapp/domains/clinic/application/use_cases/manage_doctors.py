"""
Doctor profile and weekly schedule use cases.
"""

import logging
from dataclasses import dataclass
from datetime import time

from healthapp.core.domain import (
    DomainException,
    DuplicateEntityException,
    EntityNotFoundException,
    ErrorKind,
    ValidationException,
)
from healthapp.domains.clinic.application.dto import Identity, UseCaseResult
from healthapp.domains.clinic.application.ports import IDoctorRepository, IScheduleRepository, IUserRepository
from healthapp.domains.clinic.application.services import AccessPolicy
from healthapp.domains.clinic.domain.entities import Doctor, Schedule
from healthapp.domains.clinic.domain.value_objects import UserRole

logger = logging.getLogger(__name__)


def ensure_no_overlap(schedule: Schedule, existing_windows: list[Schedule]) -> None:
    """Raise if the window overlaps another window of the same doctor on the same weekday."""
    for existing in existing_windows:
        if existing.id is not None and existing.id == schedule.id:
            continue
        if existing.day_of_week != schedule.day_of_week:
            continue
        if schedule.start_time < existing.end_time and existing.start_time < schedule.end_time:
            raise ValidationException(
                f"Window overlaps the existing {existing.day_name} window "
                f"{existing.start_time:%H:%M}-{existing.end_time:%H:%M}",
                field="start_time",
            )


@dataclass
class CreateDoctorRequest:
    identity: Identity
    user_id: str
    specialization: str | None = None
    license_number: str | None = None
    phone: str | None = None
    first_name: str | None = None
    last_name: str | None = None


@dataclass
class GetDoctorRequest:
    doctor_id: int


@dataclass
class ListDoctorsRequest:
    active_only: bool = True
    specialization: str | None = None


@dataclass
class AddScheduleRequest:
    identity: Identity
    doctor_id: int
    day_of_week: int
    start_time: time
    end_time: time
    max_appointments: int = 0


@dataclass
class UpdateScheduleRequest:
    identity: Identity
    schedule_id: int
    day_of_week: int
    start_time: time
    end_time: time
    max_appointments: int = 0


@dataclass
class ListSchedulesRequest:
    doctor_id: int


@dataclass
class RemoveScheduleRequest:
    identity: Identity
    schedule_id: int


class CreateDoctorUseCase:
    """Attach a doctor profile to an existing doctor account (admin only)."""

    def __init__(self, doctor_repository: IDoctorRepository, user_repository: IUserRepository):
        self.doctor_repo = doctor_repository
        self.user_repo = user_repository

    async def execute(self, request: CreateDoctorRequest) -> UseCaseResult[Doctor]:
        try:
            AccessPolicy.require_role(request.identity, "create_doctor", UserRole.ADMIN)

            user = await self.user_repo.find_by_id(request.user_id)
            if user is None:
                raise EntityNotFoundException(entity_type="User", entity_id=request.user_id)
            if user.role is not UserRole.DOCTOR:
                raise ValidationException(f"User {user.id} does not have the doctor role", field="user_id")
            if await self.doctor_repo.find_by_user_id(user.id) is not None:
                raise DuplicateEntityException(entity_type="Doctor", field="user_id", value=user.id)

            doctor = Doctor(
                user_id=user.id,
                first_name=request.first_name or user.first_name,
                last_name=request.last_name or user.last_name,
                email=user.email,
                phone=request.phone,
                specialization=request.specialization,
                license_number=request.license_number,
            )
            saved = await self.doctor_repo.save(doctor)
            logger.info(f"Doctor profile {saved.id} created for user {user.id}")
            return UseCaseResult.ok(saved)

        except DomainException as e:
            logger.warning(f"Doctor profile not created: {e}")
            return UseCaseResult.from_exception(e)
        except Exception as e:
            logger.error(f"Error creating doctor: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to create doctor")


class GetDoctorUseCase:
    def __init__(self, doctor_repository: IDoctorRepository):
        self.doctor_repo = doctor_repository

    async def execute(self, request: GetDoctorRequest) -> UseCaseResult[Doctor]:
        try:
            doctor = await self.doctor_repo.find_by_id(request.doctor_id)
            if doctor is None:
                raise EntityNotFoundException(entity_type="Doctor", entity_id=request.doctor_id)
            return UseCaseResult.ok(doctor)
        except DomainException as e:
            return UseCaseResult.from_exception(e)
        except Exception as e:
            logger.error(f"Error loading doctor: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to load doctor")


class ListDoctorsUseCase:
    def __init__(self, doctor_repository: IDoctorRepository):
        self.doctor_repo = doctor_repository

    async def execute(self, request: ListDoctorsRequest) -> UseCaseResult[list[Doctor]]:
        try:
            if request.specialization:
                doctors = await self.doctor_repo.find_by_specialization(
                    request.specialization.strip(), active_only=request.active_only
                )
            else:
                doctors = await self.doctor_repo.find_all(active_only=request.active_only)
            return UseCaseResult.ok(doctors)
        except Exception as e:
            logger.error(f"Error listing doctors: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to list doctors")


class AddScheduleUseCase:
    """
    Add a weekly window. Windows of the same doctor on the same weekday
    may not overlap, so every slot belongs to exactly one window.
    """

    def __init__(
        self,
        schedule_repository: IScheduleRepository,
        doctor_repository: IDoctorRepository,
        access_policy: AccessPolicy,
    ):
        self.schedule_repo = schedule_repository
        self.doctor_repo = doctor_repository
        self.access = access_policy

    async def execute(self, request: AddScheduleRequest) -> UseCaseResult[Schedule]:
        try:
            await self.access.ensure_doctor_access(request.identity, request.doctor_id, "add_schedule")
            if await self.doctor_repo.find_by_id(request.doctor_id) is None:
                raise EntityNotFoundException(entity_type="Doctor", entity_id=request.doctor_id)

            schedule = Schedule(
                doctor_id=request.doctor_id,
                day_of_week=request.day_of_week,
                start_time=request.start_time,
                end_time=request.end_time,
                max_appointments=request.max_appointments,
            )

            ensure_no_overlap(schedule, await self.schedule_repo.find_by_doctor(request.doctor_id))

            saved = await self.schedule_repo.save(schedule)
            logger.info(f"Schedule {saved.id} added for doctor {saved.doctor_id} on {saved.day_name}")
            return UseCaseResult.ok(saved)

        except DomainException as e:
            logger.warning(f"Schedule not added for doctor {request.doctor_id}: {e}")
            return UseCaseResult.from_exception(e)
        except Exception as e:
            logger.error(f"Error adding schedule: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to add schedule")


class ListSchedulesUseCase:
    def __init__(self, schedule_repository: IScheduleRepository):
        self.schedule_repo = schedule_repository

    async def execute(self, request: ListSchedulesRequest) -> UseCaseResult[list[Schedule]]:
        try:
            schedules = await self.schedule_repo.find_by_doctor(request.doctor_id)
            schedules.sort(key=lambda s: (s.day_of_week, s.start_time))
            return UseCaseResult.ok(schedules)
        except Exception as e:
            logger.error(f"Error listing schedules: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to list schedules")


class RemoveScheduleUseCase:
    """Existing bookings inside a removed window are left as they are."""

    def __init__(self, schedule_repository: IScheduleRepository, access_policy: AccessPolicy):
        self.schedule_repo = schedule_repository
        self.access = access_policy

    async def execute(self, request: RemoveScheduleRequest) -> UseCaseResult[int]:
        try:
            schedule = await self.schedule_repo.find_by_id(request.schedule_id)
            if schedule is None:
                raise EntityNotFoundException(entity_type="Schedule", entity_id=request.schedule_id)
            await self.access.ensure_doctor_access(request.identity, schedule.doctor_id, "remove_schedule")

            await self.schedule_repo.delete(schedule.id)
            logger.info(f"Schedule {schedule.id} removed for doctor {schedule.doctor_id}")
            return UseCaseResult.ok(schedule.id)

        except DomainException as e:
            return UseCaseResult.from_exception(e)
        except Exception as e:
            logger.error(f"Error removing schedule: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to remove schedule")


class UpdateScheduleUseCase:
    """
    Change the weekday, hours or cap of a window.

    The window keeps its doctor and id. Bookings already made are not
    revalidated against the new hours.
    """

    def __init__(self, schedule_repository: IScheduleRepository, access_policy: AccessPolicy):
        self.schedule_repo = schedule_repository
        self.access = access_policy

    async def execute(self, request: UpdateScheduleRequest) -> UseCaseResult[Schedule]:
        try:
            current = await self.schedule_repo.find_by_id(request.schedule_id)
            if current is None:
                raise EntityNotFoundException(entity_type="Schedule", entity_id=request.schedule_id)
            await self.access.ensure_doctor_access(request.identity, current.doctor_id, "update_schedule")

            schedule = Schedule(
                id=current.id,
                doctor_id=current.doctor_id,
                day_of_week=request.day_of_week,
                start_time=request.start_time,
                end_time=request.end_time,
                max_appointments=request.max_appointments,
            )
            ensure_no_overlap(schedule, await self.schedule_repo.find_by_doctor(current.doctor_id))

            saved = await self.schedule_repo.save(schedule)
            logger.info(f"Schedule {saved.id} of doctor {saved.doctor_id} moved to {saved.day_name}")
            return UseCaseResult.ok(saved)

        except DomainException as e:
            logger.warning(f"Schedule {request.schedule_id} not updated: {e}")
            return UseCaseResult.from_exception(e)
        except Exception as e:
            logger.error(f"Error updating schedule: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to update schedule")
