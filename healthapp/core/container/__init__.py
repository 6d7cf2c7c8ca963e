"""
Dependency Injection Container.

Centralized container for creating and managing all application dependencies.
Wires concrete implementations to the ports the use cases depend on.

This module is the facade that composes the domain-specific containers.
"""

from __future__ import annotations

import logging

from healthapp.domains.clinic.application.ports import IEventBus

from .base import BaseContainer
from .clinic import ClinicContainer

logger = logging.getLogger(__name__)


class DependencyContainer:
    """
    Dependency Injection Container (Facade).

    Single Responsibility: Compose and delegate to domain-specific containers.
    """

    def __init__(self, config: dict | None = None):
        """
        Initialize container with all domain sub-containers.

        Args:
            config: Optional configuration dict (overrides settings)
        """
        self._base = BaseContainer(config)
        self._clinic = ClinicContainer(self._base)

        logger.info("DependencyContainer initialized")

    @property
    def settings(self):
        return self._base.settings

    @property
    def config(self):
        return self._base.config

    # ============================================================
    # SINGLETONS (delegated to BaseContainer)
    # ============================================================

    def get_event_bus(self) -> IEventBus:
        """Get notification bus (singleton)."""
        return self._base.get_event_bus()

    def get_config(self) -> dict:
        """Get current configuration."""
        return self._base.get_config()

    async def close(self) -> None:
        await self._base.close()

    # ============================================================
    # CLINIC (delegated to ClinicContainer)
    # ============================================================

    @property
    def clinic(self) -> ClinicContainer:
        """Factories for clinic repositories and use cases."""
        return self._clinic


# ============================================================
# GLOBAL CONTAINER INSTANCE
# ============================================================

_container: DependencyContainer | None = None


def get_container(config: dict | None = None) -> DependencyContainer:
    """
    Get global container instance (singleton).

    Args:
        config: Optional configuration (only used on first call)

    Returns:
        DependencyContainer instance
    """
    global _container

    if _container is None:
        logger.info("Initializing global DependencyContainer")
        _container = DependencyContainer(config)
    elif config is not None:
        logger.warning(
            "Container already initialized, ignoring new config. "
            "Call reset_container() first to change config."
        )

    return _container


def reset_container() -> None:
    """
    Reset global container instance.

    Useful for testing or reconfiguration.
    """
    global _container
    logger.info("Resetting global DependencyContainer")
    _container = None


__all__ = [
    "DependencyContainer",
    "get_container",
    "reset_container",
    "BaseContainer",
    "ClinicContainer",
]
