"""
Patient profile use cases.
"""

import logging
from dataclasses import dataclass
from datetime import date

from healthapp.core.domain import (
    AuthorizationException,
    DomainException,
    DuplicateEntityException,
    EntityNotFoundException,
    ErrorKind,
    ValidationException,
)
from healthapp.domains.clinic.application.dto import Identity, UseCaseResult
from healthapp.domains.clinic.application.ports import IPatientRepository, IUserRepository
from healthapp.domains.clinic.application.services import AccessPolicy
from healthapp.domains.clinic.domain.entities import Patient
from healthapp.domains.clinic.domain.value_objects import UserRole

logger = logging.getLogger(__name__)


@dataclass
class CreatePatientRequest:
    identity: Identity
    user_id: str
    phone: str | None = None
    date_of_birth: date | None = None
    address: str | None = None
    blood_type: str | None = None
    allergies: str | None = None
    medical_history: str | None = None


@dataclass
class UpdatePatientRequest:
    identity: Identity
    patient_id: int
    phone: str | None = None
    address: str | None = None
    blood_type: str | None = None
    allergies: str | None = None
    medical_history: str | None = None


@dataclass
class GetPatientRequest:
    identity: Identity
    patient_id: int


@dataclass
class ListPatientsRequest:
    identity: Identity


class CreatePatientUseCase:
    """
    Create the patient profile of a patient account.

    Admins create any profile; a patient may create their own.
    """

    def __init__(self, patient_repository: IPatientRepository, user_repository: IUserRepository):
        self.patient_repo = patient_repository
        self.user_repo = user_repository

    async def execute(self, request: CreatePatientRequest) -> UseCaseResult[Patient]:
        try:
            identity = request.identity
            if not identity.is_admin and identity.user_id != request.user_id:
                raise AuthorizationException(
                    operation="create_patient", resource=f"User {request.user_id}", user_id=identity.user_id
                )

            user = await self.user_repo.find_by_id(request.user_id)
            if user is None:
                raise EntityNotFoundException(entity_type="User", entity_id=request.user_id)
            if user.role is not UserRole.PATIENT:
                raise ValidationException(f"User {user.id} does not have the patient role", field="user_id")
            if await self.patient_repo.find_by_user_id(user.id) is not None:
                raise DuplicateEntityException(entity_type="Patient", field="user_id", value=user.id)

            patient = Patient(
                user_id=user.id,
                first_name=user.first_name,
                last_name=user.last_name,
                email=user.email,
                phone=request.phone,
                date_of_birth=request.date_of_birth,
                address=request.address,
                blood_type=request.blood_type,
                allergies=request.allergies,
                medical_history=request.medical_history,
            )
            saved = await self.patient_repo.save(patient)
            logger.info(f"Patient profile {saved.id} created for user {user.id}")
            return UseCaseResult.ok(saved)

        except DomainException as e:
            logger.warning(f"Patient profile not created: {e}")
            return UseCaseResult.from_exception(e)
        except Exception as e:
            logger.error(f"Error creating patient: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to create patient")


class UpdatePatientUseCase:
    """Update contact and medical fields; None leaves a field unchanged."""

    def __init__(self, patient_repository: IPatientRepository, access_policy: AccessPolicy):
        self.patient_repo = patient_repository
        self.access = access_policy

    async def execute(self, request: UpdatePatientRequest) -> UseCaseResult[Patient]:
        try:
            await self.access.ensure_patient_access(request.identity, request.patient_id, "update_patient")
            patient = await self.patient_repo.find_by_id(request.patient_id)
            if patient is None:
                raise EntityNotFoundException(entity_type="Patient", entity_id=request.patient_id)

            for field_name in ("phone", "address", "blood_type", "allergies", "medical_history"):
                value = getattr(request, field_name)
                if value is not None:
                    setattr(patient, field_name, value)
            patient.touch()

            saved = await self.patient_repo.save(patient)
            return UseCaseResult.ok(saved)

        except DomainException as e:
            return UseCaseResult.from_exception(e)
        except Exception as e:
            logger.error(f"Error updating patient: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to update patient")


class GetPatientUseCase:
    def __init__(self, patient_repository: IPatientRepository, access_policy: AccessPolicy):
        self.patient_repo = patient_repository
        self.access = access_policy

    async def execute(self, request: GetPatientRequest) -> UseCaseResult[Patient]:
        try:
            await self.access.ensure_patient_access(request.identity, request.patient_id, "view_patient")
            patient = await self.patient_repo.find_by_id(request.patient_id)
            if patient is None:
                raise EntityNotFoundException(entity_type="Patient", entity_id=request.patient_id)
            return UseCaseResult.ok(patient)
        except DomainException as e:
            return UseCaseResult.from_exception(e)
        except Exception as e:
            logger.error(f"Error loading patient: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to load patient")


class ListPatientsUseCase:
    def __init__(self, patient_repository: IPatientRepository):
        self.patient_repo = patient_repository

    async def execute(self, request: ListPatientsRequest) -> UseCaseResult[list[Patient]]:
        try:
            AccessPolicy.require_role(request.identity, "list_patients", UserRole.ADMIN, UserRole.DOCTOR)
            return UseCaseResult.ok(await self.patient_repo.find_all())
        except DomainException as e:
            return UseCaseResult.from_exception(e)
        except Exception as e:
            logger.error(f"Error listing patients: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to list patients")
