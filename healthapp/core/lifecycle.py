"""
Application lifecycle management using the FastAPI lifespan pattern.

Handles startup checks and graceful shutdown of pooled resources.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy import text

from healthapp.config.settings import get_settings
from healthapp.core.container import get_container
from healthapp.database import dispose_engine, get_async_db_context

logger = logging.getLogger(__name__)


class LifecycleManager:
    """
    Manages application lifecycle events.

    Startup verifies configuration and database connectivity and opens the
    notification bus; shutdown closes the bus and the database engine.
    """

    def __init__(self) -> None:
        self._initialized = False

    async def startup(self) -> None:
        if self._initialized:
            logger.warning("Lifecycle already initialized, skipping startup")
            return

        logger.info("Starting application lifecycle...")

        self._verify_configurations()
        await self._verify_database()
        await self._connect_notification_bus()

        self._initialized = True
        logger.info("Application lifecycle startup completed")

    async def shutdown(self) -> None:
        if not self._initialized:
            logger.warning("Lifecycle not initialized, skipping shutdown")
            return

        logger.info("Stopping application lifecycle...")

        try:
            await get_container().close()
        except Exception as e:
            logger.error(f"Error closing container resources: {e}")

        await dispose_engine()

        self._initialized = False
        logger.info("Application lifecycle shutdown completed")

    def _verify_configurations(self) -> None:
        settings = get_settings()
        if not settings.NOTIFICATION_BUS_ENABLED:
            logger.info("Notification bus disabled - notifications are only stored and logged")
        if not settings.SENTRY_DSN:
            logger.info("SENTRY_DSN not configured - error tracking disabled")
        logger.info(
            f"Clinic rules: cancellation window {settings.CANCELLATION_WINDOW_HOURS}h, "
            f"slot length {settings.DEFAULT_APPOINTMENT_MINUTES}min, "
            f"reminders {settings.REMINDER_HOURS_AHEAD}h ahead"
        )

    async def _connect_notification_bus(self) -> None:
        """Open the bus connection early. Failure is logged; publishing reconnects after the cooldown."""
        try:
            await get_container().get_event_bus().connect()
        except ConnectionError as e:
            logger.warning(f"Notification bus unavailable at startup: {e}")

    async def _verify_database(self) -> None:
        """Check the database is reachable. Failure is logged, not fatal."""
        try:
            async with get_async_db_context() as session:
                await session.execute(text("SELECT 1"))
            logger.info("Database connectivity verified")
        except Exception as e:
            logger.error(f"Database connectivity check failed: {e}")


# Global lifecycle manager instance
_lifecycle_manager: LifecycleManager | None = None


def get_lifecycle_manager() -> LifecycleManager:
    """Get or create the global lifecycle manager instance."""
    global _lifecycle_manager
    if _lifecycle_manager is None:
        _lifecycle_manager = LifecycleManager()
    return _lifecycle_manager


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Usage:
        app = FastAPI(lifespan=lifespan)
    """
    lifecycle = get_lifecycle_manager()

    await lifecycle.startup()

    yield

    await lifecycle.shutdown()
