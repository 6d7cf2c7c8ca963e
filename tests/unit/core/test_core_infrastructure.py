"""
Tests for settings, the dependency container, the notification bus and logging.
"""

import json
import logging
import time
from unittest.mock import AsyncMock, MagicMock

import pytest
import redis.asyncio as aioredis
from pydantic import ValidationError

from healthapp.config.settings import Settings
from healthapp.core.container import DependencyContainer
from healthapp.core.lifecycle import LifecycleManager
from healthapp.core.shared.logger import ContextLogger, JSONFormatter, get_service_logger
from healthapp.domains.clinic.application.services import NotificationService
from healthapp.domains.clinic.application.use_cases import BookAppointmentUseCase, CancelAppointmentUseCase
from healthapp.domains.clinic.domain.value_objects import NotificationType
from healthapp.domains.clinic.infrastructure.messaging import LoggingEventBus, RedisEventBus

# ============================================================================
# Settings
# ============================================================================


@pytest.mark.unit
def test_cors_origins_from_comma_separated_string():
    settings = Settings(CORS_ORIGINS="https://clinic.example, https://admin.clinic.example ,")

    assert settings.CORS_ORIGINS == ["https://clinic.example", "https://admin.clinic.example"]


@pytest.mark.unit
def test_invalid_log_format_rejected():
    with pytest.raises(ValidationError):
        Settings(LOG_FORMAT="xml")


@pytest.mark.unit
def test_clinic_rules_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(CANCELLATION_WINDOW_HOURS=0)


@pytest.mark.unit
def test_sync_database_url_derived_from_async_url():
    settings = Settings(DATABASE_URL="postgresql+asyncpg://clinic:secret@db:5432/clinic")

    assert settings.database_url == "postgresql://clinic:secret@db:5432/clinic"


@pytest.mark.unit
def test_redis_url_with_password():
    settings = Settings(REDIS_HOST="cache", REDIS_PORT=6380, REDIS_DB=2, REDIS_PASSWORD="pw")

    assert settings.redis_url == "redis://:pw@cache:6380/2"


# ============================================================================
# Container
# ============================================================================


@pytest.mark.unit
def test_container_uses_logging_bus_when_disabled():
    container = DependencyContainer({"notification_bus_enabled": False})

    bus = container.get_event_bus()

    assert isinstance(bus, LoggingEventBus)
    assert container.get_event_bus() is bus


@pytest.mark.unit
def test_container_uses_redis_bus_when_enabled():
    container = DependencyContainer({"notification_bus_enabled": True, "notification_channel": "clinic"})

    assert isinstance(container.get_event_bus(), RedisEventBus)
    assert container.get_config()["notification_channel"] == "clinic"


@pytest.mark.unit
def test_container_builds_use_cases_per_session():
    container = DependencyContainer({"notification_bus_enabled": False})
    session = MagicMock()

    book = container.clinic.create_book_appointment_use_case(session)
    cancel = container.clinic.create_cancel_appointment_use_case(session)

    assert isinstance(book, BookAppointmentUseCase)
    assert isinstance(cancel, CancelAppointmentUseCase)
    assert cancel.window_hours == container.settings.CANCELLATION_WINDOW_HOURS
    assert book.appointment_repo.session is session


# ============================================================================
# Notification bus
# ============================================================================


@pytest.fixture
def fake_redis(monkeypatch):
    client = MagicMock()
    client.ping = AsyncMock(return_value=True)
    client.publish = AsyncMock(return_value=1)
    client.aclose = AsyncMock()
    factory = MagicMock(return_value=client)
    monkeypatch.setattr(aioredis, "Redis", factory)
    return client


@pytest.mark.unit
@pytest.mark.asyncio
async def test_redis_bus_connects_lazily_and_publishes(fake_redis):
    bus = RedisEventBus(Settings())

    await bus.publish("notifications", '{"type": "Reminder"}')
    await bus.publish("notifications", '{"type": "System"}')

    fake_redis.ping.assert_awaited_once()
    assert fake_redis.publish.await_count == 2
    fake_redis.publish.assert_awaited_with("notifications", '{"type": "System"}')

    await bus.close()
    fake_redis.aclose.assert_awaited_once()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_redis_bus_gives_up_after_retries(fake_redis):
    fake_redis.ping.side_effect = aioredis.ConnectionError("refused")
    bus = RedisEventBus(Settings())

    with pytest.raises(ConnectionError):
        await bus.connect(max_retries=2, retry_delay=0)

    assert fake_redis.ping.await_count == 2


@pytest.mark.unit
@pytest.mark.asyncio
async def test_connect_failure_starts_cooldown(fake_redis):
    fake_redis.ping.side_effect = aioredis.ConnectionError("refused")
    bus = RedisEventBus(Settings(NOTIFICATION_BUS_RETRY_COOLDOWN=30), clock=lambda: 100.0)

    with pytest.raises(ConnectionError):
        await bus.connect(max_retries=1)

    assert bus.in_cooldown is True
    with pytest.raises(ConnectionError):
        await bus.publish("notifications", "hello")
    assert fake_redis.ping.await_count == 1


@pytest.mark.unit
@pytest.mark.asyncio
async def test_publish_while_redis_down_fails_fast_then_reconnects(fake_redis):
    now = [0.0]
    fake_redis.ping.side_effect = aioredis.ConnectionError("refused")
    bus = RedisEventBus(Settings(NOTIFICATION_BUS_RETRY_COOLDOWN=30), clock=lambda: now[0])

    for _ in range(3):
        with pytest.raises(ConnectionError):
            await bus.publish("notifications", "hello")

    # a single short attempt, then the cooldown skips reconnecting
    assert fake_redis.ping.await_count == 1
    fake_redis.publish.assert_not_awaited()

    now[0] = 31.0
    fake_redis.ping.side_effect = None
    await bus.publish("notifications", "hello")

    assert fake_redis.ping.await_count == 2
    fake_redis.publish.assert_awaited_once_with("notifications", "hello")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_publish_uses_short_timeout(fake_redis, monkeypatch):
    factory = MagicMock(return_value=fake_redis)
    monkeypatch.setattr(aioredis, "Redis", factory)
    bus = RedisEventBus(Settings(NOTIFICATION_BUS_TIMEOUT=0.25))

    await bus.publish("notifications", "hello")

    assert factory.call_args.kwargs["socket_connect_timeout"] == 0.25
    assert factory.call_args.kwargs["socket_timeout"] == 0.25


@pytest.mark.unit
@pytest.mark.asyncio
async def test_lost_connection_drops_client(fake_redis):
    bus = RedisEventBus(Settings(), clock=lambda: 0.0)
    await bus.publish("notifications", "first")
    fake_redis.publish.side_effect = aioredis.ConnectionError("reset by peer")

    with pytest.raises(ConnectionError):
        await bus.publish("notifications", "second")

    assert bus.is_connected is False
    assert bus.in_cooldown is True


@pytest.mark.unit
@pytest.mark.asyncio
async def test_notifications_are_stored_quickly_while_redis_down(fake_redis):
    fake_redis.ping.side_effect = aioredis.ConnectionError("refused")
    notification_repo = AsyncMock()
    notification_repo.save.side_effect = lambda notification: notification
    service = NotificationService(
        notification_repository=notification_repo,
        event_bus=RedisEventBus(Settings()),
        patient_repository=AsyncMock(),
        doctor_repository=AsyncMock(),
    )

    started = time.monotonic()
    for _ in range(3):
        await service.notify("u-1", "Hello", NotificationType.SYSTEM)

    assert time.monotonic() - started < 1.0
    assert notification_repo.save.await_count == 3
    assert fake_redis.ping.await_count == 1


@pytest.mark.unit
@pytest.mark.asyncio
async def test_logging_bus_only_logs(caplog):
    bus = LoggingEventBus()

    with caplog.at_level(logging.INFO):
        await bus.publish("notifications", "hello")

    assert "[bus disabled] notifications: hello" in caplog.text


# ============================================================================
# Logging
# ============================================================================


@pytest.mark.unit
def test_json_formatter_includes_context():
    record = logging.LogRecord("service.notification", logging.INFO, __file__, 1, "sent", None, None)
    record.extra_data = {"service": "notification", "user_id": "u-1"}

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "sent"
    assert payload["level"] == "INFO"
    assert payload["extra"]["user_id"] == "u-1"


@pytest.mark.unit
def test_service_logger_context():
    service_logger = get_service_logger("notification")
    scoped = service_logger.with_context(appointment_id=100)

    assert isinstance(scoped, ContextLogger)
    assert scoped.name == "service.notification"
    assert scoped._context == {"component": "service", "service": "notification", "appointment_id": 100}


# ============================================================================
# Lifecycle
# ============================================================================


@pytest.mark.unit
@pytest.mark.asyncio
async def test_startup_connects_bus_best_effort(monkeypatch):
    bus = MagicMock()
    bus.connect = AsyncMock(side_effect=ConnectionError("refused"))
    container = MagicMock()
    container.get_event_bus.return_value = bus
    monkeypatch.setattr("healthapp.core.lifecycle.get_container", lambda: container)
    monkeypatch.setattr(LifecycleManager, "_verify_database", AsyncMock())
    lifecycle = LifecycleManager()

    await lifecycle.startup()

    bus.connect.assert_awaited_once()
    assert lifecycle._initialized is True
