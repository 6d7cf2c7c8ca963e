"""
Tests for NotificationService: persistence first, best-effort publishing.
"""

import json
from unittest.mock import AsyncMock

import pytest

from healthapp.domains.clinic.application.services import NotificationService
from healthapp.domains.clinic.domain.value_objects import NotificationType

PATIENT_USER_ID = "00000000-0000-0000-0000-000000000003"
DOCTOR_USER_ID = "00000000-0000-0000-0000-000000000002"


@pytest.fixture
def notification_repo():
    repo = AsyncMock()

    def save(notification):
        notification.id = 1
        return notification

    repo.save.side_effect = save
    return repo


@pytest.fixture
def event_bus():
    return AsyncMock()


@pytest.fixture
def service(notification_repo, event_bus, mock_patient_repository, mock_doctor_repository):
    return NotificationService(
        notification_repository=notification_repo,
        event_bus=event_bus,
        patient_repository=mock_patient_repository,
        doctor_repository=mock_doctor_repository,
        channel="clinic_notifications",
    )


@pytest.mark.unit
@pytest.mark.asyncio
async def test_notify_saves_then_publishes(service, notification_repo, event_bus):
    notification = await service.notify(PATIENT_USER_ID, "Hello", NotificationType.SYSTEM)

    notification_repo.save.assert_awaited_once()
    channel, body = event_bus.publish.await_args.args
    assert channel == "clinic_notifications"
    payload = json.loads(body)
    assert payload["notification_id"] == notification.id
    assert payload["type"] == "System"
    assert payload["user_id"] == PATIENT_USER_ID


@pytest.mark.unit
@pytest.mark.asyncio
async def test_publish_failure_keeps_stored_notification(service, notification_repo, event_bus):
    event_bus.publish.side_effect = ConnectionError("redis unavailable")

    notification = await service.notify(PATIENT_USER_ID, "Hello", NotificationType.SYSTEM)

    assert notification.id == 1
    assert notification.is_read is False
    notification_repo.save.assert_awaited_once()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_deliver_swallows_failures(service, notification_repo):
    notification_repo.save.side_effect = RuntimeError("database is down")

    result = await service.deliver(service.notify(PATIENT_USER_ID, "Hello", NotificationType.SYSTEM))

    assert result is None


@pytest.mark.unit
@pytest.mark.asyncio
async def test_confirmation_goes_to_patient(service, sample_appointment):
    notification = await service.send_appointment_confirmation(sample_appointment)

    assert notification.user_id == PATIENT_USER_ID
    assert notification.notification_type == NotificationType.CONFIRMATION
    assert notification.related_entity_id == 100
    assert "Dr. Gregory House" in notification.message
    assert "Monday, March 3, 2025 9:00 AM" in notification.message


@pytest.mark.unit
@pytest.mark.asyncio
async def test_cancellation_includes_reason(service, sample_appointment):
    sample_appointment.cancellation_reason = "Family emergency"

    notification = await service.send_appointment_cancellation(sample_appointment)

    assert notification.message.endswith("Reason: Family emergency")
    assert notification.notification_type == NotificationType.CANCELLATION


@pytest.mark.unit
@pytest.mark.asyncio
async def test_renewal_request_goes_to_doctor(service, sample_prescription):
    notification = await service.send_renewal_requested(sample_prescription)

    assert notification.user_id == DOCTOR_USER_ID
    assert notification.message == "Jane Doe requested a renewal of Amoxicillin."
    assert notification.notification_type == NotificationType.RENEWAL_REQUEST


@pytest.mark.unit
@pytest.mark.asyncio
async def test_reminder_for_unknown_patient_is_dropped(service, mock_patient_repository, sample_appointment):
    mock_patient_repository.find_by_id.return_value = None

    assert await service.deliver(service.send_appointment_reminder(sample_appointment)) is None
