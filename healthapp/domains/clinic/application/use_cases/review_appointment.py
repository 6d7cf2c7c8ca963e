"""
Review Appointment Use Case

Doctor-side status changes: approve, reject and complete. Each one
moves the appointment through the status machine and notifies the patient.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from healthapp.core.domain import DomainException, EntityNotFoundException, ErrorKind
from healthapp.domains.clinic.application.dto import Identity, UseCaseResult
from healthapp.domains.clinic.application.ports import IAppointmentRepository
from healthapp.domains.clinic.application.services import AccessPolicy, NotificationService
from healthapp.domains.clinic.domain.entities import Appointment

logger = logging.getLogger(__name__)


class ReviewAction(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"
    COMPLETE = "complete"


@dataclass
class ReviewAppointmentRequest:
    identity: Identity
    appointment_id: int
    action: ReviewAction
    reason: str | None = None
    notes: str | None = None


class ReviewAppointmentUseCase:
    """Approve, reject or complete an appointment (its doctor or an admin)."""

    def __init__(
        self,
        appointment_repository: IAppointmentRepository,
        notification_service: NotificationService,
        access_policy: AccessPolicy,
    ):
        self.appointment_repo = appointment_repository
        self.notifications = notification_service
        self.access = access_policy

    async def execute(self, request: ReviewAppointmentRequest) -> UseCaseResult[Appointment]:
        operation = f"{request.action.value}_appointment"
        try:
            appointment = await self.appointment_repo.find_by_id(request.appointment_id)
            if appointment is None:
                raise EntityNotFoundException(entity_type="Appointment", entity_id=request.appointment_id)

            await self.access.ensure_party(request.identity, appointment, operation, allow_patient=False)

            if request.action is ReviewAction.APPROVE:
                appointment.approve()
            elif request.action is ReviewAction.REJECT:
                appointment.reject(request.reason)
            else:
                appointment.complete(request.notes)

            saved = await self.appointment_repo.save(appointment)
            logger.info(f"Appointment {saved.id} -> {saved.status.value}")

            if request.action is ReviewAction.APPROVE:
                pending = self.notifications.send_appointment_approval(saved)
            elif request.action is ReviewAction.REJECT:
                pending = self.notifications.send_appointment_rejection(saved)
            else:
                pending = self.notifications.send_appointment_completion(saved)
            await self.notifications.deliver(pending)

            return UseCaseResult.ok(saved)

        except DomainException as e:
            logger.warning(f"{operation} rejected for appointment {request.appointment_id}: {e}")
            return UseCaseResult.from_exception(e)
        except Exception as e:
            logger.error(f"Error during {operation}: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, f"Failed to {request.action.value} appointment")
