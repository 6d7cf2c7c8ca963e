"""
Base Container - Shared Singletons.

Single Responsibility: Manage resources shared by every request (notification bus).
"""

import logging

from healthapp.config.settings import get_settings
from healthapp.domains.clinic.application.ports import IEventBus
from healthapp.domains.clinic.infrastructure.messaging import LoggingEventBus, RedisEventBus

logger = logging.getLogger(__name__)


class BaseContainer:
    """
    Base container for shared singletons.

    Single Responsibility: Create and cache process-wide resources.
    """

    def __init__(self, config: dict | None = None):
        """
        Initialize base container.

        Args:
            config: Optional configuration dict (overrides settings)
        """
        self.settings = get_settings()
        self.config = config or {}

        self._event_bus_instance: RedisEventBus | LoggingEventBus | None = None

        logger.info("BaseContainer initialized")

    def get_event_bus(self) -> IEventBus:
        """
        Get notification bus (singleton).

        Returns:
            RedisEventBus when NOTIFICATION_BUS_ENABLED, otherwise LoggingEventBus
        """
        if self._event_bus_instance is None:
            enabled = self.config.get("notification_bus_enabled", self.settings.NOTIFICATION_BUS_ENABLED)
            if enabled:
                logger.info(f"Creating RedisEventBus on channel '{self.notification_channel}'")
                self._event_bus_instance = RedisEventBus(self.settings)
            else:
                logger.info("Notification bus disabled, using LoggingEventBus")
                self._event_bus_instance = LoggingEventBus()

        return self._event_bus_instance

    @property
    def notification_channel(self) -> str:
        return self.config.get("notification_channel", self.settings.NOTIFICATION_CHANNEL)

    async def close(self) -> None:
        """Release the bus connection, if one was opened."""
        if self._event_bus_instance is not None:
            await self._event_bus_instance.close()
            self._event_bus_instance = None

    def get_config(self) -> dict:
        """Get current configuration."""
        return {
            "notification_channel": self.notification_channel,
            "cancellation_window_hours": self.settings.CANCELLATION_WINDOW_HOURS,
            "default_appointment_minutes": self.settings.DEFAULT_APPOINTMENT_MINUTES,
            "reminder_hours_ahead": self.settings.REMINDER_HOURS_AHEAD,
            "domains": ["clinic"],
        }
