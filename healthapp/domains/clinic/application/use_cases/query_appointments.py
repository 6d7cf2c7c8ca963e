"""
Appointment query and housekeeping use cases.
"""

import logging
from dataclasses import dataclass

from healthapp.core.domain import DomainException, EntityNotFoundException, ErrorKind
from healthapp.domains.clinic.application.dto import Identity, UseCaseResult
from healthapp.domains.clinic.application.ports import IAppointmentRepository
from healthapp.domains.clinic.application.services import AccessPolicy
from healthapp.domains.clinic.domain.entities import Appointment
from healthapp.domains.clinic.domain.value_objects import UserRole

logger = logging.getLogger(__name__)


@dataclass
class GetAppointmentRequest:
    identity: Identity
    appointment_id: int


@dataclass
class ListAppointmentsRequest:
    identity: Identity
    doctor_id: int | None = None
    patient_id: int | None = None


@dataclass
class DeleteAppointmentRequest:
    identity: Identity
    appointment_id: int


class GetAppointmentUseCase:
    def __init__(self, appointment_repository: IAppointmentRepository, access_policy: AccessPolicy):
        self.appointment_repo = appointment_repository
        self.access = access_policy

    async def execute(self, request: GetAppointmentRequest) -> UseCaseResult[Appointment]:
        try:
            appointment = await self.appointment_repo.find_by_id(request.appointment_id)
            if appointment is None:
                raise EntityNotFoundException(entity_type="Appointment", entity_id=request.appointment_id)
            await self.access.ensure_party(request.identity, appointment, "view_appointment")
            return UseCaseResult.ok(appointment)
        except DomainException as e:
            return UseCaseResult.from_exception(e)
        except Exception as e:
            logger.error(f"Error loading appointment: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to load appointment")


class ListAppointmentsUseCase:
    """
    Lists appointments visible to the caller.

    Patients see their own, doctors see theirs, admins may filter by
    doctor or patient or list everything.
    """

    def __init__(self, appointment_repository: IAppointmentRepository, access_policy: AccessPolicy):
        self.appointment_repo = appointment_repository
        self.access = access_policy

    async def execute(self, request: ListAppointmentsRequest) -> UseCaseResult[list[Appointment]]:
        try:
            identity = request.identity
            if identity.is_patient:
                patient = await self.access.patient_profile(identity, "list_appointments")
                if request.patient_id is not None and request.patient_id != patient.id:
                    await self.access.ensure_patient_access(identity, request.patient_id, "list_appointments")
                appointments = await self.appointment_repo.find_by_patient(patient.id)
            elif identity.is_doctor:
                doctor = await self.access.doctor_profile(identity, "list_appointments")
                if request.doctor_id is not None:
                    await self.access.ensure_doctor_access(identity, request.doctor_id, "list_appointments")
                appointments = await self.appointment_repo.find_by_doctor(doctor.id)
                if request.patient_id is not None:
                    appointments = [a for a in appointments if a.patient_id == request.patient_id]
            elif request.doctor_id is not None:
                appointments = await self.appointment_repo.find_by_doctor(request.doctor_id)
                if request.patient_id is not None:
                    appointments = [a for a in appointments if a.patient_id == request.patient_id]
            elif request.patient_id is not None:
                appointments = await self.appointment_repo.find_by_patient(request.patient_id)
            else:
                appointments = await self.appointment_repo.find_all()
            return UseCaseResult.ok(appointments)
        except DomainException as e:
            return UseCaseResult.from_exception(e)
        except Exception as e:
            logger.error(f"Error listing appointments: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to list appointments")


class DeleteAppointmentUseCase:
    """Soft-delete an appointment (admin only); the row is kept with is_deleted set."""

    def __init__(self, appointment_repository: IAppointmentRepository):
        self.appointment_repo = appointment_repository

    async def execute(self, request: DeleteAppointmentRequest) -> UseCaseResult[int]:
        try:
            AccessPolicy.require_role(request.identity, "delete_appointment", UserRole.ADMIN)
            deleted = await self.appointment_repo.delete(request.appointment_id)
            if not deleted:
                raise EntityNotFoundException(entity_type="Appointment", entity_id=request.appointment_id)
            logger.info(f"Appointment {request.appointment_id} soft-deleted")
            return UseCaseResult.ok(request.appointment_id)
        except DomainException as e:
            return UseCaseResult.from_exception(e)
        except Exception as e:
            logger.error(f"Error deleting appointment: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to delete appointment")
