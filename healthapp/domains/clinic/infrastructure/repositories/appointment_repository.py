"""
Appointment Repository Implementation

SQLAlchemy implementation of IAppointmentRepository.
"""

import logging
from datetime import datetime

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from healthapp.domains.clinic.application.ports import IAppointmentRepository
from healthapp.domains.clinic.domain.entities import Appointment
from healthapp.domains.clinic.domain.value_objects import AppointmentStatus
from healthapp.domains.clinic.infrastructure.persistence.sqlalchemy.models import AppointmentModel

logger = logging.getLogger(__name__)

_ACTIVE_STATUSES = [s for s in AppointmentStatus if s.is_active()]


class SQLAlchemyAppointmentRepository(IAppointmentRepository):
    """
    SQLAlchemy implementation of appointment repository.

    Soft-deleted rows are invisible to every finder.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, appointment_id: int) -> Appointment | None:
        """Find appointment by ID."""
        result = await self.session.execute(
            select(AppointmentModel).where(
                and_(AppointmentModel.id == appointment_id, AppointmentModel.is_deleted.is_(False))
            )
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def find_by_doctor_between(
        self,
        doctor_id: int,
        start: datetime,
        end: datetime,
    ) -> list[Appointment]:
        """Find a doctor's appointments overlapping [start, end)."""
        result = await self.session.execute(
            select(AppointmentModel)
            .where(
                and_(
                    AppointmentModel.doctor_id == doctor_id,
                    AppointmentModel.is_deleted.is_(False),
                    AppointmentModel.start_at < end,
                    AppointmentModel.end_at > start,
                )
            )
            .order_by(AppointmentModel.start_at)
        )
        models = result.scalars().all()
        return [self._to_entity(m) for m in models]

    async def find_by_doctor(self, doctor_id: int) -> list[Appointment]:
        """Find appointments for a doctor."""
        result = await self.session.execute(
            select(AppointmentModel)
            .where(and_(AppointmentModel.doctor_id == doctor_id, AppointmentModel.is_deleted.is_(False)))
            .order_by(AppointmentModel.start_at)
        )
        models = result.scalars().all()
        return [self._to_entity(m) for m in models]

    async def find_by_patient(self, patient_id: int) -> list[Appointment]:
        """Find appointments for a patient."""
        result = await self.session.execute(
            select(AppointmentModel)
            .where(and_(AppointmentModel.patient_id == patient_id, AppointmentModel.is_deleted.is_(False)))
            .order_by(AppointmentModel.start_at)
        )
        models = result.scalars().all()
        return [self._to_entity(m) for m in models]

    async def find_all(self) -> list[Appointment]:
        result = await self.session.execute(
            select(AppointmentModel).where(AppointmentModel.is_deleted.is_(False)).order_by(AppointmentModel.start_at)
        )
        models = result.scalars().all()
        return [self._to_entity(m) for m in models]

    async def find_due_for_reminder(self, start: datetime, end: datetime) -> list[Appointment]:
        """Find appointments needing reminders."""
        result = await self.session.execute(
            select(AppointmentModel)
            .where(
                and_(
                    AppointmentModel.reminder_sent.is_(False),
                    AppointmentModel.is_deleted.is_(False),
                    AppointmentModel.status.in_(_ACTIVE_STATUSES),
                    AppointmentModel.start_at >= start,
                    AppointmentModel.start_at <= end,
                )
            )
            .order_by(AppointmentModel.start_at)
        )
        models = result.scalars().all()
        return [self._to_entity(m) for m in models]

    async def save(self, appointment: Appointment) -> Appointment:
        """Save or update appointment."""
        if appointment.id:
            result = await self.session.execute(
                select(AppointmentModel).where(AppointmentModel.id == appointment.id)
            )
            model = result.scalar_one_or_none()
            if model:
                self._update_model(model, appointment)
            else:
                model = self._to_model(appointment)
                self.session.add(model)
        else:
            model = self._to_model(appointment)
            self.session.add(model)

        await self.session.commit()
        await self.session.refresh(model)

        return self._to_entity(model)

    async def delete(self, appointment_id: int) -> bool:
        """Soft-delete appointment."""
        result = await self.session.execute(
            select(AppointmentModel).where(
                and_(AppointmentModel.id == appointment_id, AppointmentModel.is_deleted.is_(False))
            )
        )
        model = result.scalar_one_or_none()
        if model:
            model.is_deleted = True  # type: ignore[assignment]
            await self.session.commit()
            return True
        return False

    # Mapping methods

    def _to_entity(self, model: AppointmentModel) -> Appointment:
        """Convert model to entity."""
        appointment = Appointment(
            id=model.id,  # type: ignore[arg-type]
            patient_id=model.patient_id,  # type: ignore[arg-type]
            doctor_id=model.doctor_id,  # type: ignore[arg-type]
            start_at=model.start_at,  # type: ignore[arg-type]
            end_at=model.end_at,  # type: ignore[arg-type]
            duration_minutes=model.duration_minutes or 30,  # type: ignore[arg-type]
            status=model.status or AppointmentStatus.PENDING,  # type: ignore[arg-type]
            reason=model.reason,  # type: ignore[arg-type]
            cancellation_reason=model.cancellation_reason,  # type: ignore[arg-type]
            notes=model.notes,  # type: ignore[arg-type]
            reminder_sent=model.reminder_sent or False,  # type: ignore[arg-type]
            is_deleted=model.is_deleted or False,  # type: ignore[arg-type]
        )

        if model.created_at:
            appointment.created_at = model.created_at  # type: ignore[assignment]
        if model.updated_at:
            appointment.updated_at = model.updated_at  # type: ignore[assignment]

        return appointment

    def _to_model(self, appointment: Appointment) -> AppointmentModel:
        """Convert entity to model."""
        return AppointmentModel(
            patient_id=appointment.patient_id,
            doctor_id=appointment.doctor_id,
            start_at=appointment.start_at,
            end_at=appointment.end_at,
            duration_minutes=appointment.duration_minutes,
            status=appointment.status,
            reason=appointment.reason,
            cancellation_reason=appointment.cancellation_reason,
            notes=appointment.notes,
            reminder_sent=appointment.reminder_sent,
            is_deleted=appointment.is_deleted,
        )

    def _update_model(self, model: AppointmentModel, appointment: Appointment) -> None:
        """Update model from entity."""
        model.start_at = appointment.start_at  # type: ignore[assignment]
        model.end_at = appointment.end_at  # type: ignore[assignment]
        model.duration_minutes = appointment.duration_minutes  # type: ignore[assignment]
        model.status = appointment.status  # type: ignore[assignment]
        model.reason = appointment.reason  # type: ignore[assignment]
        model.cancellation_reason = appointment.cancellation_reason  # type: ignore[assignment]
        model.notes = appointment.notes  # type: ignore[assignment]
        model.reminder_sent = appointment.reminder_sent  # type: ignore[assignment]
        model.is_deleted = appointment.is_deleted  # type: ignore[assignment]
