"""
Doctor and Schedule Repository Implementations

SQLAlchemy implementations of IDoctorRepository and IScheduleRepository.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from healthapp.domains.clinic.application.ports import IDoctorRepository, IScheduleRepository
from healthapp.domains.clinic.domain.entities import Doctor, Schedule
from healthapp.domains.clinic.infrastructure.persistence.sqlalchemy.models import DoctorModel, ScheduleModel

logger = logging.getLogger(__name__)


class SQLAlchemyDoctorRepository(IDoctorRepository):
    """
    SQLAlchemy implementation of doctor repository.

    Handles all doctor data persistence operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_id(self, doctor_id: int) -> Doctor | None:
        """Find doctor by ID."""
        result = await self.session.execute(select(DoctorModel).where(DoctorModel.id == doctor_id))
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def find_by_user_id(self, user_id: str) -> Doctor | None:
        """Find the doctor profile of a user account."""
        result = await self.session.execute(select(DoctorModel).where(DoctorModel.user_id == user_id))
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def find_all(self, active_only: bool = True) -> list[Doctor]:
        query = select(DoctorModel)
        if active_only:
            query = query.where(DoctorModel.is_active.is_(True))
        query = query.order_by(DoctorModel.last_name, DoctorModel.first_name)

        result = await self.session.execute(query)
        models = result.scalars().all()
        return [self._to_entity(m) for m in models]

    async def find_by_specialization(self, specialization: str, active_only: bool = True) -> list[Doctor]:
        query = select(DoctorModel).where(func.lower(DoctorModel.specialization) == specialization.lower())
        if active_only:
            query = query.where(DoctorModel.is_active.is_(True))
        query = query.order_by(DoctorModel.last_name, DoctorModel.first_name)

        result = await self.session.execute(query)
        return [self._to_entity(m) for m in result.scalars().all()]

    async def save(self, doctor: Doctor) -> Doctor:
        """Save or update doctor."""
        if doctor.id:
            result = await self.session.execute(select(DoctorModel).where(DoctorModel.id == doctor.id))
            model = result.scalar_one_or_none()
            if model:
                self._update_model(model, doctor)
            else:
                model = self._to_model(doctor)
                self.session.add(model)
        else:
            model = self._to_model(doctor)
            self.session.add(model)

        await self.session.commit()
        await self.session.refresh(model)

        return self._to_entity(model)

    # Mapping methods

    def _to_entity(self, model: DoctorModel) -> Doctor:
        doctor = Doctor(
            id=model.id,  # type: ignore[arg-type]
            user_id=model.user_id,  # type: ignore[arg-type]
            first_name=model.first_name,  # type: ignore[arg-type]
            last_name=model.last_name,  # type: ignore[arg-type]
            email=model.email,  # type: ignore[arg-type]
            phone=model.phone,  # type: ignore[arg-type]
            specialization=model.specialization,  # type: ignore[arg-type]
            license_number=model.license_number,  # type: ignore[arg-type]
            is_active=model.is_active if model.is_active is not None else True,  # type: ignore[arg-type]
        )
        if model.created_at:
            doctor.created_at = model.created_at  # type: ignore[assignment]
        if model.updated_at:
            doctor.updated_at = model.updated_at  # type: ignore[assignment]
        return doctor

    def _to_model(self, doctor: Doctor) -> DoctorModel:
        return DoctorModel(
            user_id=doctor.user_id,
            first_name=doctor.first_name,
            last_name=doctor.last_name,
            email=doctor.email,
            phone=doctor.phone,
            specialization=doctor.specialization,
            license_number=doctor.license_number,
            is_active=doctor.is_active,
        )

    def _update_model(self, model: DoctorModel, doctor: Doctor) -> None:
        model.first_name = doctor.first_name  # type: ignore[assignment]
        model.last_name = doctor.last_name  # type: ignore[assignment]
        model.email = doctor.email  # type: ignore[assignment]
        model.phone = doctor.phone  # type: ignore[assignment]
        model.specialization = doctor.specialization  # type: ignore[assignment]
        model.license_number = doctor.license_number  # type: ignore[assignment]
        model.is_active = doctor.is_active  # type: ignore[assignment]


class SQLAlchemyScheduleRepository(IScheduleRepository):
    """SQLAlchemy implementation of the weekly schedule repository."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_doctor(self, doctor_id: int) -> list[Schedule]:
        result = await self.session.execute(
            select(ScheduleModel)
            .where(ScheduleModel.doctor_id == doctor_id)
            .order_by(ScheduleModel.day_of_week, ScheduleModel.start_time)
        )
        models = result.scalars().all()
        return [self._to_entity(m) for m in models]

    async def find_by_id(self, schedule_id: int) -> Schedule | None:
        result = await self.session.execute(select(ScheduleModel).where(ScheduleModel.id == schedule_id))
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def save(self, schedule: Schedule) -> Schedule:
        model = None
        if schedule.id:
            result = await self.session.execute(select(ScheduleModel).where(ScheduleModel.id == schedule.id))
            model = result.scalar_one_or_none()
        if model:
            model.day_of_week = schedule.day_of_week  # type: ignore[assignment]
            model.start_time = schedule.start_time  # type: ignore[assignment]
            model.end_time = schedule.end_time  # type: ignore[assignment]
            model.max_appointments = schedule.max_appointments  # type: ignore[assignment]
        else:
            model = ScheduleModel(
                doctor_id=schedule.doctor_id,
                day_of_week=schedule.day_of_week,
                start_time=schedule.start_time,
                end_time=schedule.end_time,
                max_appointments=schedule.max_appointments,
            )
            self.session.add(model)

        await self.session.commit()
        await self.session.refresh(model)

        return self._to_entity(model)

    async def delete(self, schedule_id: int) -> bool:
        result = await self.session.execute(select(ScheduleModel).where(ScheduleModel.id == schedule_id))
        model = result.scalar_one_or_none()
        if model:
            await self.session.delete(model)
            await self.session.commit()
            return True
        return False

    def _to_entity(self, model: ScheduleModel) -> Schedule:
        return Schedule(
            id=model.id,  # type: ignore[arg-type]
            doctor_id=model.doctor_id,  # type: ignore[arg-type]
            day_of_week=model.day_of_week,  # type: ignore[arg-type]
            start_time=model.start_time,  # type: ignore[arg-type]
            end_time=model.end_time,  # type: ignore[arg-type]
            max_appointments=model.max_appointments or 0,  # type: ignore[arg-type]
        )
