"""
Cancel Appointment Use Case

Enforces the cancellation notice window. Administrators may override it.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from healthapp.core.domain import AuthorizationException, DomainException, EntityNotFoundException, ErrorKind
from healthapp.domains.clinic.application.dto import Identity, UseCaseResult
from healthapp.domains.clinic.application.ports import IAppointmentRepository
from healthapp.domains.clinic.application.services import AccessPolicy, NotificationService
from healthapp.domains.clinic.domain.entities import Appointment

logger = logging.getLogger(__name__)


@dataclass
class CancelAppointmentRequest:
    identity: Identity
    appointment_id: int
    reason: str
    override_window: bool = False


class CancelAppointmentUseCase:
    """
    Cancels an appointment at least `window_hours` before it starts.

    The reason is recorded verbatim and the patient is notified.
    """

    def __init__(
        self,
        appointment_repository: IAppointmentRepository,
        notification_service: NotificationService,
        access_policy: AccessPolicy,
        window_hours: int = 48,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.appointment_repo = appointment_repository
        self.notifications = notification_service
        self.access = access_policy
        self.window_hours = window_hours
        self.clock = clock

    async def execute(self, request: CancelAppointmentRequest) -> UseCaseResult[Appointment]:
        try:
            appointment = await self.appointment_repo.find_by_id(request.appointment_id)
            if appointment is None:
                raise EntityNotFoundException(entity_type="Appointment", entity_id=request.appointment_id)

            await self.access.ensure_party(request.identity, appointment, "cancel_appointment")

            if request.override_window and not request.identity.is_admin:
                raise AuthorizationException(
                    operation="override_cancellation_window",
                    resource=f"Appointment {appointment.id}",
                    user_id=request.identity.user_id,
                )

            appointment.cancel(
                reason=request.reason,
                now=self.clock(),
                window_hours=self.window_hours,
                override=request.override_window,
            )
            saved = await self.appointment_repo.save(appointment)
            logger.info(f"Appointment {saved.id} cancelled by {request.identity.role.value}")

            await self.notifications.deliver(self.notifications.send_appointment_cancellation(saved))
            return UseCaseResult.ok(saved)

        except DomainException as e:
            logger.warning(f"Cancellation rejected for appointment {request.appointment_id}: {e}")
            return UseCaseResult.from_exception(e)
        except Exception as e:
            logger.error(f"Error cancelling appointment: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to cancel appointment")
