"""
Notification routes.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from healthapp.api.identity import CurrentIdentity
from healthapp.domains.clinic.api.dependencies import (
    get_broadcast_notification_use_case,
    get_list_notifications_use_case,
    get_list_unread_notifications_use_case,
    get_mark_notification_read_use_case,
    get_send_notification_use_case,
)
from healthapp.domains.clinic.api.errors import unwrap
from healthapp.domains.clinic.api.schemas import (
    BroadcastRequest,
    BroadcastResponse,
    NotificationResponse,
    NotificationSendRequest,
)
from healthapp.domains.clinic.application.use_cases import (
    BroadcastNotificationRequest,
    BroadcastNotificationUseCase,
    ListNotificationsRequest,
    ListNotificationsUseCase,
    ListUnreadNotificationsRequest,
    ListUnreadNotificationsUseCase,
    MarkNotificationReadRequest,
    MarkNotificationReadUseCase,
    SendNotificationRequest,
    SendNotificationUseCase,
)

router = APIRouter(prefix="/notifications", tags=["Notifications"])

ListUnreadUseCaseDep = Annotated[ListUnreadNotificationsUseCase, Depends(get_list_unread_notifications_use_case)]
ListHistoryUseCaseDep = Annotated[ListNotificationsUseCase, Depends(get_list_notifications_use_case)]
MarkReadUseCaseDep = Annotated[MarkNotificationReadUseCase, Depends(get_mark_notification_read_use_case)]
BroadcastUseCaseDep = Annotated[BroadcastNotificationUseCase, Depends(get_broadcast_notification_use_case)]
SendUseCaseDep = Annotated[SendNotificationUseCase, Depends(get_send_notification_use_case)]


@router.get("", response_model=list[NotificationResponse])
async def list_unread(identity: CurrentIdentity, use_case: ListUnreadUseCaseDep):
    """Unread notifications of the caller, newest first."""
    result = await use_case.execute(ListUnreadNotificationsRequest(identity=identity))
    return [NotificationResponse.model_validate(n) for n in unwrap(result)]


@router.get("/history", response_model=list[NotificationResponse])
async def list_history(
    identity: CurrentIdentity,
    use_case: ListHistoryUseCaseDep,
    user_id: str | None = Query(default=None, description="Admins: another user's history; omit for all"),
):
    """Read and unread notifications, newest first."""
    result = await use_case.execute(ListNotificationsRequest(identity=identity, user_id=user_id))
    return [NotificationResponse.model_validate(n) for n in unwrap(result)]


@router.post("", response_model=NotificationResponse, status_code=status.HTTP_201_CREATED)
async def send_notification(request: NotificationSendRequest, identity: CurrentIdentity, use_case: SendUseCaseDep):
    """Send a notification to one user (admin)."""
    result = await use_case.execute(SendNotificationRequest(identity=identity, **request.model_dump()))
    return NotificationResponse.model_validate(unwrap(result))


@router.post("/broadcast", response_model=BroadcastResponse)
async def broadcast(request: BroadcastRequest, identity: CurrentIdentity, use_case: BroadcastUseCaseDep):
    result = await use_case.execute(
        BroadcastNotificationRequest(identity=identity, message=request.message, role=request.role)
    )
    return BroadcastResponse(sent=unwrap(result))


@router.post("/{notification_id}/read", response_model=NotificationResponse)
async def mark_read(notification_id: int, identity: CurrentIdentity, use_case: MarkReadUseCaseDep):
    result = await use_case.execute(MarkNotificationReadRequest(identity=identity, notification_id=notification_id))
    return NotificationResponse.model_validate(unwrap(result))
