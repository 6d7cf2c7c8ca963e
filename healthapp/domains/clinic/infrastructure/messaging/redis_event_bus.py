"""
Notification Event Bus

Publishes notification messages on Redis pub/sub channels using
redis.asyncio. A logging-only bus stands in when the bus is disabled.
"""

import asyncio
import logging
import time
from typing import Callable

import redis.asyncio as aioredis

from healthapp.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

_REDIS_ERRORS = (aioredis.ConnectionError, aioredis.TimeoutError)


class RedisEventBus:
    """
    Async Redis pub/sub publisher.

    The connection is opened at startup by connect(), or on first publish.
    A publish makes a single attempt bounded by NOTIFICATION_BUS_TIMEOUT;
    once Redis is found unreachable, publishes fail fast until
    NOTIFICATION_BUS_RETRY_COOLDOWN has elapsed. Errors propagate to the
    caller, which decides whether a failed publish matters.

    Usage:
        bus = RedisEventBus()
        await bus.connect()
        await bus.publish("notifications", '{"type": "AppointmentReminder"}')
        await bus.close()
    """

    def __init__(self, settings: Settings | None = None, clock: Callable[[], float] = time.monotonic):
        self.settings = settings or get_settings()
        self._redis_client: aioredis.Redis | None = None
        self._lock = asyncio.Lock()
        self._clock = clock
        self._retry_after = 0.0

    @property
    def is_connected(self) -> bool:
        return self._redis_client is not None

    @property
    def in_cooldown(self) -> bool:
        return self._redis_client is None and self._clock() < self._retry_after

    async def connect(self, max_retries: int = 3, retry_delay: float = 1.0, timeout: float = 5.0) -> None:
        """Initialize async Redis connection with retries."""
        last_error: Exception | None = None

        for attempt in range(1, max_retries + 1):
            try:
                await self._open(timeout)
                return
            except _REDIS_ERRORS as e:
                last_error = e
                logger.warning(f"Notification bus connection attempt {attempt}/{max_retries} failed: {e}")
                if attempt < max_retries:
                    await asyncio.sleep(retry_delay)

        self._mark_unavailable()
        raise ConnectionError(f"Could not connect notification bus after {max_retries} attempts: {last_error}")

    async def publish(self, channel: str, message: str) -> None:
        """Publish a message; returns once Redis accepted it."""
        client = await self._get_client()
        try:
            receivers = await client.publish(channel, message)
        except _REDIS_ERRORS as e:
            self._redis_client = None
            self._mark_unavailable()
            raise ConnectionError(f"Notification bus publish failed: {e}") from e
        logger.debug(f"Published to {channel} ({receivers} subscribers)")

    async def close(self) -> None:
        if self._redis_client is not None:
            await self._redis_client.aclose()
            self._redis_client = None
            logger.info("Notification bus connection closed")

    async def _get_client(self) -> aioredis.Redis:
        if self._redis_client is not None:
            return self._redis_client
        if self.in_cooldown:
            raise ConnectionError("Notification bus unavailable, reconnect deferred")

        # One short attempt; concurrent publishers wait for it instead of racing
        async with self._lock:
            if self._redis_client is None:
                if self.in_cooldown:
                    raise ConnectionError("Notification bus unavailable, reconnect deferred")
                try:
                    await self._open(self.settings.NOTIFICATION_BUS_TIMEOUT)
                except _REDIS_ERRORS as e:
                    self._mark_unavailable()
                    raise ConnectionError(f"Notification bus unavailable: {e}") from e
        return self._redis_client  # type: ignore[return-value]

    async def _open(self, timeout: float) -> None:
        client = aioredis.Redis(
            host=self.settings.REDIS_HOST,
            port=self.settings.REDIS_PORT,
            db=self.settings.REDIS_DB,
            password=self.settings.REDIS_PASSWORD,
            decode_responses=True,
            socket_timeout=timeout,
            socket_connect_timeout=timeout,
        )
        await client.ping()
        self._redis_client = client
        self._retry_after = 0.0
        logger.info(f"Notification bus connected: {self.settings.REDIS_HOST}:{self.settings.REDIS_PORT}")

    def _mark_unavailable(self) -> None:
        cooldown = self.settings.NOTIFICATION_BUS_RETRY_COOLDOWN
        self._retry_after = self._clock() + cooldown
        logger.warning(f"Notification bus marked unavailable for {cooldown:.0f}s")


class LoggingEventBus:
    """Bus used when NOTIFICATION_BUS_ENABLED is off: messages are only logged."""

    async def connect(self) -> None:
        return None

    async def publish(self, channel: str, message: str) -> None:
        logger.info(f"[bus disabled] {channel}: {message}")

    async def close(self) -> None:
        return None
