"""
Notification Entity
"""

from dataclasses import dataclass
from typing import Any

from healthapp.core.domain import Entity

from ..value_objects import NotificationType


@dataclass
class Notification(Entity[int]):
    """Per-user notification row; only the read flag changes after creation."""

    user_id: str = ""
    message: str = ""
    notification_type: NotificationType = NotificationType.SYSTEM
    related_entity_id: int | None = None
    is_read: bool = False

    def mark_as_read(self) -> None:
        self.is_read = True
        self.touch()

    def to_event_payload(self) -> dict[str, Any]:
        """Message published on the notification bus."""
        return {
            "notification_id": self.id,
            "type": self.notification_type.value,
            "user_id": self.user_id,
            "message": self.message,
            "related_entity_id": self.related_entity_id,
            "created_at": self.created_at.isoformat(),
        }
