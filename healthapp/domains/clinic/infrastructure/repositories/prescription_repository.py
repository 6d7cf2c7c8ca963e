"""
Prescription Repository Implementation

SQLAlchemy implementation of IPrescriptionRepository.
"""

import logging

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from healthapp.domains.clinic.application.ports import IPrescriptionRepository
from healthapp.domains.clinic.domain.entities import Prescription
from healthapp.domains.clinic.domain.value_objects import RenewalStatus
from healthapp.domains.clinic.infrastructure.persistence.sqlalchemy.models import PrescriptionModel

logger = logging.getLogger(__name__)


class SQLAlchemyPrescriptionRepository(IPrescriptionRepository):
    """SQLAlchemy implementation of prescription repository."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_id(self, prescription_id: int) -> Prescription | None:
        result = await self.session.execute(
            select(PrescriptionModel).where(PrescriptionModel.id == prescription_id)
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def find_all(self) -> list[Prescription]:
        result = await self.session.execute(
            select(PrescriptionModel).order_by(PrescriptionModel.prescribed_at.desc())
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    async def find_by_patient(self, patient_id: int) -> list[Prescription]:
        result = await self.session.execute(
            select(PrescriptionModel)
            .where(PrescriptionModel.patient_id == patient_id)
            .order_by(PrescriptionModel.prescribed_at.desc())
        )
        models = result.scalars().all()
        return [self._to_entity(m) for m in models]

    async def find_by_doctor(self, doctor_id: int) -> list[Prescription]:
        result = await self.session.execute(
            select(PrescriptionModel)
            .where(PrescriptionModel.doctor_id == doctor_id)
            .order_by(PrescriptionModel.prescribed_at.desc())
        )
        models = result.scalars().all()
        return [self._to_entity(m) for m in models]

    async def find_by_appointment(self, appointment_id: int) -> Prescription | None:
        """The original prescription of an appointment (renewals excluded)."""
        result = await self.session.execute(
            select(PrescriptionModel).where(
                and_(
                    PrescriptionModel.appointment_id == appointment_id,
                    PrescriptionModel.renewed_from_id.is_(None),
                )
            )
        )
        model = result.scalars().first()
        return self._to_entity(model) if model else None

    async def has_renewal(self, prescription_id: int) -> bool:
        result = await self.session.execute(
            select(func.count()).where(PrescriptionModel.renewed_from_id == prescription_id)
        )
        return result.scalar_one() > 0

    async def save(self, prescription: Prescription) -> Prescription:
        """Save or update prescription."""
        if prescription.id:
            result = await self.session.execute(
                select(PrescriptionModel).where(PrescriptionModel.id == prescription.id)
            )
            model = result.scalar_one_or_none()
            if model:
                self._update_model(model, prescription)
            else:
                model = self._to_model(prescription)
                self.session.add(model)
        else:
            model = self._to_model(prescription)
            self.session.add(model)

        await self.session.commit()
        await self.session.refresh(model)

        return self._to_entity(model)

    async def delete(self, prescription_id: int) -> bool:
        result = await self.session.execute(
            select(PrescriptionModel).where(PrescriptionModel.id == prescription_id)
        )
        model = result.scalar_one_or_none()
        if model is None:
            return False
        await self.session.delete(model)
        await self.session.commit()
        return True

    # Mapping methods

    def _to_entity(self, model: PrescriptionModel) -> Prescription:
        prescription = Prescription(
            id=model.id,  # type: ignore[arg-type]
            appointment_id=model.appointment_id,  # type: ignore[arg-type]
            doctor_id=model.doctor_id,  # type: ignore[arg-type]
            patient_id=model.patient_id,  # type: ignore[arg-type]
            medication=model.medication,  # type: ignore[arg-type]
            dosage=model.dosage or "",  # type: ignore[arg-type]
            frequency=model.frequency or "",  # type: ignore[arg-type]
            duration_days=model.duration_days,  # type: ignore[arg-type]
            instructions=model.instructions,  # type: ignore[arg-type]
            notes=model.notes,  # type: ignore[arg-type]
            allow_refills=model.allow_refills or False,  # type: ignore[arg-type]
            refills_allowed=model.refills_allowed or 0,  # type: ignore[arg-type]
            prescribed_at=model.prescribed_at,  # type: ignore[arg-type]
            expires_at=model.expires_at,  # type: ignore[arg-type]
            renewal_status=model.renewal_status or RenewalStatus.NONE,  # type: ignore[arg-type]
            renewal_note=model.renewal_note,  # type: ignore[arg-type]
            renewed_from_id=model.renewed_from_id,  # type: ignore[arg-type]
        )
        if model.created_at:
            prescription.created_at = model.created_at  # type: ignore[assignment]
        if model.updated_at:
            prescription.updated_at = model.updated_at  # type: ignore[assignment]
        return prescription

    def _to_model(self, prescription: Prescription) -> PrescriptionModel:
        return PrescriptionModel(
            appointment_id=prescription.appointment_id,
            doctor_id=prescription.doctor_id,
            patient_id=prescription.patient_id,
            medication=prescription.medication,
            dosage=prescription.dosage,
            frequency=prescription.frequency,
            duration_days=prescription.duration_days,
            instructions=prescription.instructions,
            notes=prescription.notes,
            allow_refills=prescription.allow_refills,
            refills_allowed=prescription.refills_allowed,
            prescribed_at=prescription.prescribed_at,
            expires_at=prescription.expires_at,
            renewal_status=prescription.renewal_status,
            renewal_note=prescription.renewal_note,
            renewed_from_id=prescription.renewed_from_id,
        )

    def _update_model(self, model: PrescriptionModel, prescription: Prescription) -> None:
        # Medication fields are fixed once issued; only the workflow moves
        model.renewal_status = prescription.renewal_status  # type: ignore[assignment]
        model.renewal_note = prescription.renewal_note  # type: ignore[assignment]
        model.refills_allowed = prescription.refills_allowed  # type: ignore[assignment]
        model.notes = prescription.notes  # type: ignore[assignment]
