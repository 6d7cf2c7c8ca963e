"""
Notification Repository and Event Bus Interfaces
"""

from typing import Protocol, runtime_checkable

from healthapp.domains.clinic.domain.entities.notification import Notification


@runtime_checkable
class INotificationRepository(Protocol):
    """Interface for notification rows."""

    async def find_by_id(self, notification_id: int) -> Notification | None:
        ...

    async def find_unread_by_user(self, user_id: str) -> list[Notification]:
        """Unread notifications of a user, newest first."""
        ...

    async def find_by_user(self, user_id: str) -> list[Notification]:
        """Read and unread notifications of a user, newest first."""
        ...

    async def find_all(self) -> list[Notification]:
        """Every notification, newest first."""
        ...

    async def save(self, notification: Notification) -> Notification:
        ...


@runtime_checkable
class IEventBus(Protocol):
    """
    Outbound message bus.

    Implementations may raise on transport errors; callers decide
    whether publishing is best-effort.
    """

    async def publish(self, channel: str, message: str) -> None:
        """Publish a serialized message on a channel."""
        ...
