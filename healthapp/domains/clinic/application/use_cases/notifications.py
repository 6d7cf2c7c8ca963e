"""
Notification inbox use cases.
"""

import logging
from dataclasses import dataclass

from healthapp.core.domain import (
    AuthorizationException,
    DomainException,
    EntityNotFoundException,
    ErrorKind,
    ValidationException,
)
from healthapp.domains.clinic.application.dto import Identity, UseCaseResult
from healthapp.domains.clinic.application.ports import INotificationRepository, IUserRepository
from healthapp.domains.clinic.application.services import AccessPolicy, NotificationService
from healthapp.domains.clinic.domain.entities import Notification
from healthapp.domains.clinic.domain.value_objects import NotificationType, UserRole

logger = logging.getLogger(__name__)


@dataclass
class ListUnreadNotificationsRequest:
    identity: Identity


@dataclass
class ListNotificationsRequest:
    identity: Identity
    user_id: str | None = None


@dataclass
class MarkNotificationReadRequest:
    identity: Identity
    notification_id: int


@dataclass
class BroadcastNotificationRequest:
    identity: Identity
    message: str
    role: UserRole | None = None


@dataclass
class SendNotificationRequest:
    identity: Identity
    user_id: str
    message: str
    notification_type: NotificationType = NotificationType.SYSTEM
    related_entity_id: int | None = None


class ListUnreadNotificationsUseCase:
    def __init__(self, notification_repository: INotificationRepository):
        self.notification_repo = notification_repository

    async def execute(self, request: ListUnreadNotificationsRequest) -> UseCaseResult[list[Notification]]:
        try:
            notifications = await self.notification_repo.find_unread_by_user(request.identity.user_id)
            return UseCaseResult.ok(notifications)
        except Exception as e:
            logger.error(f"Error listing notifications: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to list notifications")


class ListNotificationsUseCase:
    """
    Notification history, read and unread.

    Users see their own; admins may name any user or, naming nobody,
    see every notification.
    """

    def __init__(self, notification_repository: INotificationRepository):
        self.notification_repo = notification_repository

    async def execute(self, request: ListNotificationsRequest) -> UseCaseResult[list[Notification]]:
        try:
            identity = request.identity
            if identity.is_admin:
                if request.user_id is None:
                    return UseCaseResult.ok(await self.notification_repo.find_all())
                return UseCaseResult.ok(await self.notification_repo.find_by_user(request.user_id))

            if request.user_id is not None and request.user_id != identity.user_id:
                raise AuthorizationException(
                    operation="list_notifications",
                    resource=f"Notifications of {request.user_id}",
                    user_id=identity.user_id,
                )
            return UseCaseResult.ok(await self.notification_repo.find_by_user(identity.user_id))

        except DomainException as e:
            return UseCaseResult.from_exception(e)
        except Exception as e:
            logger.error(f"Error listing notification history: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to list notifications")


class MarkNotificationReadUseCase:
    """Flip the read flag; only the recipient may do so."""

    def __init__(self, notification_repository: INotificationRepository):
        self.notification_repo = notification_repository

    async def execute(self, request: MarkNotificationReadRequest) -> UseCaseResult[Notification]:
        try:
            notification = await self.notification_repo.find_by_id(request.notification_id)
            if notification is None:
                raise EntityNotFoundException(entity_type="Notification", entity_id=request.notification_id)
            if notification.user_id != request.identity.user_id:
                raise AuthorizationException(
                    operation="mark_notification_read",
                    resource=f"Notification {notification.id}",
                    user_id=request.identity.user_id,
                )

            if notification.is_read:
                return UseCaseResult.ok(notification)

            notification.mark_as_read()
            saved = await self.notification_repo.save(notification)
            return UseCaseResult.ok(saved)

        except DomainException as e:
            return UseCaseResult.from_exception(e)
        except Exception as e:
            logger.error(f"Error marking notification read: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to update notification")


class BroadcastNotificationUseCase:
    """
    Admin announcement: one system notification per active user,
    optionally restricted to a role.
    """

    def __init__(self, user_repository: IUserRepository, notification_service: NotificationService):
        self.user_repo = user_repository
        self.notifications = notification_service

    async def execute(self, request: BroadcastNotificationRequest) -> UseCaseResult[int]:
        """
        Returns:
            Result with the number of notifications created
        """
        try:
            AccessPolicy.require_role(request.identity, "broadcast_notification", UserRole.ADMIN)
            message = request.message.strip()
            if not message:
                raise ValidationException("Message is required", field="message")

            users = await self.user_repo.find_all(role=request.role, active_only=True)
            sent = 0
            for user in users:
                created = await self.notifications.deliver(
                    self.notifications.notify(user.id, message, NotificationType.SYSTEM)
                )
                if created is not None:
                    sent += 1

            logger.info(f"Broadcast delivered to {sent}/{len(users)} users (role={request.role})")
            return UseCaseResult.ok(sent)

        except DomainException as e:
            logger.warning(f"Broadcast rejected: {e}")
            return UseCaseResult.from_exception(e)
        except Exception as e:
            logger.error(f"Error broadcasting notification: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to broadcast notification")


class SendNotificationUseCase:
    """Admin message to a single user."""

    def __init__(self, user_repository: IUserRepository, notification_service: NotificationService):
        self.user_repo = user_repository
        self.notifications = notification_service

    async def execute(self, request: SendNotificationRequest) -> UseCaseResult[Notification]:
        try:
            AccessPolicy.require_role(request.identity, "send_notification", UserRole.ADMIN)
            message = request.message.strip()
            if not message:
                raise ValidationException("Message is required", field="message")

            user = await self.user_repo.find_by_id(request.user_id)
            if user is None:
                raise EntityNotFoundException(entity_type="User", entity_id=request.user_id)

            notification = await self.notifications.notify(
                user.id, message, request.notification_type, request.related_entity_id
            )
            logger.info(f"Notification {notification.id} sent to user {user.id}")
            return UseCaseResult.ok(notification)

        except DomainException as e:
            logger.warning(f"Notification not sent: {e}")
            return UseCaseResult.from_exception(e)
        except Exception as e:
            logger.error(f"Error sending notification: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to send notification")
