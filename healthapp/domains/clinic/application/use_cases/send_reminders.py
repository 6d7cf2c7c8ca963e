"""
Send Appointment Reminders Use Case

Triggered by an operator or an external scheduler (cron hitting the
endpoint); there is no in-process background worker.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable

from healthapp.core.domain import DomainException, ErrorKind
from healthapp.domains.clinic.application.dto import Identity, UseCaseResult
from healthapp.domains.clinic.application.ports import IAppointmentRepository
from healthapp.domains.clinic.application.services import AccessPolicy, NotificationService
from healthapp.domains.clinic.domain.value_objects import UserRole

logger = logging.getLogger(__name__)


@dataclass
class SendRemindersRequest:
    identity: Identity
    hours_ahead: int | None = None


class SendRemindersUseCase:
    """Send one reminder per upcoming active appointment and flag it as reminded."""

    def __init__(
        self,
        appointment_repository: IAppointmentRepository,
        notification_service: NotificationService,
        hours_ahead: int = 24,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.appointment_repo = appointment_repository
        self.notifications = notification_service
        self.hours_ahead = hours_ahead
        self.clock = clock

    async def execute(self, request: SendRemindersRequest) -> UseCaseResult[list[int]]:
        """
        Returns:
            Result with the IDs of the appointments that were reminded
        """
        try:
            AccessPolicy.require_role(request.identity, "send_reminders", UserRole.ADMIN)

            now = self.clock()
            horizon = request.hours_ahead or self.hours_ahead
            candidates = await self.appointment_repo.find_due_for_reminder(now, now + timedelta(hours=horizon))

            reminded: list[int] = []
            for appointment in candidates:
                if not appointment.needs_reminder(now, horizon):
                    continue
                sent = await self.notifications.deliver(self.notifications.send_appointment_reminder(appointment))
                if sent is None:
                    continue
                appointment.mark_reminder_sent()
                await self.appointment_repo.save(appointment)
                reminded.append(appointment.id)

            logger.info(f"Sent {len(reminded)} appointment reminders (horizon {horizon}h)")
            return UseCaseResult.ok(reminded)

        except DomainException as e:
            logger.warning(f"Reminder run rejected: {e}")
            return UseCaseResult.from_exception(e)
        except Exception as e:
            logger.error(f"Error sending reminders: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to send reminders")
