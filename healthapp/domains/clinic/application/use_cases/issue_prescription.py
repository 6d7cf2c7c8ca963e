"""
Issue Prescription Use Case
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from healthapp.core.domain import (
    DomainException,
    DuplicateEntityException,
    EntityNotFoundException,
    ErrorKind,
    InvalidOperationException,
    ValidationException,
)
from healthapp.domains.clinic.application.dto import Identity, UseCaseResult
from healthapp.domains.clinic.application.ports import IAppointmentRepository, IPrescriptionRepository
from healthapp.domains.clinic.application.services import AccessPolicy, NotificationService
from healthapp.domains.clinic.domain.entities import Prescription
from healthapp.domains.clinic.domain.value_objects import AppointmentStatus

logger = logging.getLogger(__name__)


@dataclass
class IssuePrescriptionRequest:
    """Request for issuing a prescription on an appointment."""

    identity: Identity
    appointment_id: int
    medication: str
    dosage: str
    frequency: str
    duration_days: int | None = None
    instructions: str | None = None
    notes: str | None = None
    allow_refills: bool = False
    refills_allowed: int = 0


class IssuePrescriptionUseCase:
    """
    The appointment's doctor (or an admin) writes the prescription for it.

    One original prescription per appointment; renewals are separate rows.
    """

    def __init__(
        self,
        prescription_repository: IPrescriptionRepository,
        appointment_repository: IAppointmentRepository,
        notification_service: NotificationService,
        access_policy: AccessPolicy,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.prescription_repo = prescription_repository
        self.appointment_repo = appointment_repository
        self.notifications = notification_service
        self.access = access_policy
        self.clock = clock

    async def execute(self, request: IssuePrescriptionRequest) -> UseCaseResult[Prescription]:
        try:
            if not request.medication.strip():
                raise ValidationException("Medication is required", field="medication")
            if request.refills_allowed < 0:
                raise ValidationException("refills_allowed cannot be negative", field="refills_allowed")
            if request.refills_allowed > 0 and not request.allow_refills:
                raise ValidationException(
                    "refills_allowed must be 0 when refills are not allowed", field="refills_allowed"
                )

            appointment = await self.appointment_repo.find_by_id(request.appointment_id)
            if appointment is None:
                raise EntityNotFoundException(entity_type="Appointment", entity_id=request.appointment_id)

            await self.access.ensure_party(request.identity, appointment, "issue_prescription", allow_patient=False)

            if appointment.status in (AppointmentStatus.CANCELLED, AppointmentStatus.REJECTED):
                raise InvalidOperationException(
                    operation="issue_prescription",
                    current_state=appointment.status.value,
                )

            existing = await self.prescription_repo.find_by_appointment(appointment.id)
            if existing is not None:
                raise DuplicateEntityException(entity_type="Prescription", field="appointment_id", value=appointment.id)

            prescription = Prescription(
                appointment_id=appointment.id,
                doctor_id=appointment.doctor_id,
                patient_id=appointment.patient_id,
                medication=request.medication.strip(),
                dosage=request.dosage,
                frequency=request.frequency,
                duration_days=request.duration_days,
                instructions=request.instructions,
                notes=request.notes,
                allow_refills=request.allow_refills,
                refills_allowed=request.refills_allowed,
                prescribed_at=self.clock(),
            )
            saved = await self.prescription_repo.save(prescription)
            logger.info(f"Prescription {saved.id} issued for appointment {appointment.id}")

            await self.notifications.deliver(self.notifications.send_prescription_issued(saved))
            return UseCaseResult.ok(saved)

        except DomainException as e:
            logger.warning(f"Prescription not issued for appointment {request.appointment_id}: {e}")
            return UseCaseResult.from_exception(e)
        except Exception as e:
            logger.error(f"Error issuing prescription: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to issue prescription")
