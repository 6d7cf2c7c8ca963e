"""
Patient Repository Implementation

SQLAlchemy implementation of IPatientRepository.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from healthapp.domains.clinic.application.ports import IPatientRepository
from healthapp.domains.clinic.domain.entities import Patient
from healthapp.domains.clinic.infrastructure.persistence.sqlalchemy.models import PatientModel

logger = logging.getLogger(__name__)


class SQLAlchemyPatientRepository(IPatientRepository):
    """
    SQLAlchemy implementation of patient repository.

    Handles all patient data persistence operations.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, patient_id: int) -> Patient | None:
        """Find patient by ID."""
        result = await self.session.execute(select(PatientModel).where(PatientModel.id == patient_id))
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def find_by_user_id(self, user_id: str) -> Patient | None:
        """Find the patient profile of a user account."""
        result = await self.session.execute(select(PatientModel).where(PatientModel.user_id == user_id))
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def find_all(self) -> list[Patient]:
        result = await self.session.execute(
            select(PatientModel).order_by(PatientModel.last_name, PatientModel.first_name)
        )
        models = result.scalars().all()
        return [self._to_entity(m) for m in models]

    async def save(self, patient: Patient) -> Patient:
        """Save or update patient."""
        if patient.id:
            result = await self.session.execute(select(PatientModel).where(PatientModel.id == patient.id))
            model = result.scalar_one_or_none()
            if model:
                self._update_model(model, patient)
            else:
                model = self._to_model(patient)
                self.session.add(model)
        else:
            model = self._to_model(patient)
            self.session.add(model)

        await self.session.commit()
        await self.session.refresh(model)

        return self._to_entity(model)

    # Mapping methods

    def _to_entity(self, model: PatientModel) -> Patient:
        """Convert model to entity."""
        patient = Patient(
            id=model.id,  # type: ignore[arg-type]
            user_id=model.user_id,  # type: ignore[arg-type]
            first_name=model.first_name,  # type: ignore[arg-type]
            last_name=model.last_name,  # type: ignore[arg-type]
            email=model.email,  # type: ignore[arg-type]
            phone=model.phone,  # type: ignore[arg-type]
            date_of_birth=model.date_of_birth,  # type: ignore[arg-type]
            address=model.address,  # type: ignore[arg-type]
            blood_type=model.blood_type,  # type: ignore[arg-type]
            allergies=model.allergies,  # type: ignore[arg-type]
            medical_history=model.medical_history,  # type: ignore[arg-type]
        )
        if model.created_at:
            patient.created_at = model.created_at  # type: ignore[assignment]
        if model.updated_at:
            patient.updated_at = model.updated_at  # type: ignore[assignment]
        return patient

    def _to_model(self, patient: Patient) -> PatientModel:
        """Convert entity to model."""
        return PatientModel(
            user_id=patient.user_id,
            first_name=patient.first_name,
            last_name=patient.last_name,
            email=patient.email,
            phone=patient.phone,
            date_of_birth=patient.date_of_birth,
            address=patient.address,
            blood_type=patient.blood_type,
            allergies=patient.allergies,
            medical_history=patient.medical_history,
        )

    def _update_model(self, model: PatientModel, patient: Patient) -> None:
        """Update model from entity."""
        model.first_name = patient.first_name  # type: ignore[assignment]
        model.last_name = patient.last_name  # type: ignore[assignment]
        model.email = patient.email  # type: ignore[assignment]
        model.phone = patient.phone  # type: ignore[assignment]
        model.date_of_birth = patient.date_of_birth  # type: ignore[assignment]
        model.address = patient.address  # type: ignore[assignment]
        model.blood_type = patient.blood_type  # type: ignore[assignment]
        model.allergies = patient.allergies  # type: ignore[assignment]
        model.medical_history = patient.medical_history  # type: ignore[assignment]
