"""
Prescription query and removal use cases.
"""

import logging
from dataclasses import dataclass

from healthapp.core.domain import (
    BusinessRuleViolationException,
    DomainException,
    EntityNotFoundException,
    ErrorKind,
)
from healthapp.domains.clinic.application.dto import Identity, UseCaseResult
from healthapp.domains.clinic.application.ports import IPrescriptionRepository
from healthapp.domains.clinic.application.services import AccessPolicy
from healthapp.domains.clinic.domain.entities import Prescription

logger = logging.getLogger(__name__)


@dataclass
class GetPrescriptionRequest:
    identity: Identity
    prescription_id: int


@dataclass
class ListPrescriptionsRequest:
    identity: Identity
    patient_id: int | None = None


@dataclass
class DeletePrescriptionRequest:
    identity: Identity
    prescription_id: int


class GetPrescriptionUseCase:
    def __init__(self, prescription_repository: IPrescriptionRepository, access_policy: AccessPolicy):
        self.prescription_repo = prescription_repository
        self.access = access_policy

    async def execute(self, request: GetPrescriptionRequest) -> UseCaseResult[Prescription]:
        try:
            prescription = await self.prescription_repo.find_by_id(request.prescription_id)
            if prescription is None:
                raise EntityNotFoundException(entity_type="Prescription", entity_id=request.prescription_id)
            await self.access.ensure_party(request.identity, prescription, "view_prescription")
            return UseCaseResult.ok(prescription)
        except DomainException as e:
            return UseCaseResult.from_exception(e)
        except Exception as e:
            logger.error(f"Error loading prescription: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to load prescription")


class ListPrescriptionsUseCase:
    """
    Patients list their own prescriptions; doctors list the ones they wrote
    (optionally for one patient); admins see every prescription unless they
    name a patient.
    """

    def __init__(self, prescription_repository: IPrescriptionRepository, access_policy: AccessPolicy):
        self.prescription_repo = prescription_repository
        self.access = access_policy

    async def execute(self, request: ListPrescriptionsRequest) -> UseCaseResult[list[Prescription]]:
        try:
            identity = request.identity
            if identity.is_patient:
                patient = await self.access.patient_profile(identity, "list_prescriptions")
                if request.patient_id is not None:
                    await self.access.ensure_patient_access(identity, request.patient_id, "list_prescriptions")
                prescriptions = await self.prescription_repo.find_by_patient(patient.id)
            elif identity.is_doctor:
                doctor = await self.access.doctor_profile(identity, "list_prescriptions")
                prescriptions = await self.prescription_repo.find_by_doctor(doctor.id)
                if request.patient_id is not None:
                    prescriptions = [p for p in prescriptions if p.patient_id == request.patient_id]
            elif request.patient_id is not None:
                prescriptions = await self.prescription_repo.find_by_patient(request.patient_id)
            else:
                prescriptions = await self.prescription_repo.find_all()
            return UseCaseResult.ok(prescriptions)
        except DomainException as e:
            return UseCaseResult.from_exception(e)
        except Exception as e:
            logger.error(f"Error listing prescriptions: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to list prescriptions")


class DeletePrescriptionUseCase:
    """
    Remove a prescription. Allowed to admins and the prescribing doctor.

    A prescription that was renewed is the source of its clones' lineage and
    cannot be removed; remove the newest renewal first.
    """

    def __init__(self, prescription_repository: IPrescriptionRepository, access_policy: AccessPolicy):
        self.prescription_repo = prescription_repository
        self.access = access_policy

    async def execute(self, request: DeletePrescriptionRequest) -> UseCaseResult[int]:
        try:
            prescription = await self.prescription_repo.find_by_id(request.prescription_id)
            if prescription is None:
                raise EntityNotFoundException(entity_type="Prescription", entity_id=request.prescription_id)
            await self.access.ensure_party(request.identity, prescription, "delete_prescription", allow_patient=False)

            if await self.prescription_repo.has_renewal(prescription.id):
                raise BusinessRuleViolationException(
                    rule="renewed_prescription_kept",
                    message=f"Prescription {prescription.id} has renewals and cannot be deleted",
                )

            await self.prescription_repo.delete(prescription.id)
            logger.info(f"Prescription {prescription.id} deleted by {request.identity.role.value}")
            return UseCaseResult.ok(prescription.id)

        except DomainException as e:
            logger.warning(f"Prescription {request.prescription_id} not deleted: {e}")
            return UseCaseResult.from_exception(e)
        except Exception as e:
            logger.error(f"Error deleting prescription: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to delete prescription")
