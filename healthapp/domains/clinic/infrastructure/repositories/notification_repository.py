"""
Notification Repository Implementation
"""

import logging

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from healthapp.domains.clinic.application.ports import INotificationRepository
from healthapp.domains.clinic.domain.entities import Notification
from healthapp.domains.clinic.infrastructure.persistence.sqlalchemy.models import NotificationModel

logger = logging.getLogger(__name__)


class SQLAlchemyNotificationRepository(INotificationRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_id(self, notification_id: int) -> Notification | None:
        result = await self.session.execute(
            select(NotificationModel).where(NotificationModel.id == notification_id)
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def find_unread_by_user(self, user_id: str) -> list[Notification]:
        """Unread notifications of a user, newest first."""
        result = await self.session.execute(
            select(NotificationModel)
            .where(and_(NotificationModel.user_id == user_id, NotificationModel.is_read.is_(False)))
            .order_by(NotificationModel.created_at.desc())
        )
        models = result.scalars().all()
        return [self._to_entity(m) for m in models]

    async def find_by_user(self, user_id: str) -> list[Notification]:
        result = await self.session.execute(
            select(NotificationModel)
            .where(NotificationModel.user_id == user_id)
            .order_by(NotificationModel.created_at.desc())
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    async def find_all(self) -> list[Notification]:
        result = await self.session.execute(select(NotificationModel).order_by(NotificationModel.created_at.desc()))
        return [self._to_entity(m) for m in result.scalars().all()]

    async def save(self, notification: Notification) -> Notification:
        model = None
        if notification.id:
            result = await self.session.execute(
                select(NotificationModel).where(NotificationModel.id == notification.id)
            )
            model = result.scalar_one_or_none()
        if model:
            model.is_read = notification.is_read  # type: ignore[assignment]
        else:
            model = NotificationModel(
                user_id=notification.user_id,
                message=notification.message,
                notification_type=notification.notification_type,
                related_entity_id=notification.related_entity_id,
                is_read=notification.is_read,
            )
            self.session.add(model)

        await self.session.commit()
        await self.session.refresh(model)

        return self._to_entity(model)

    def _to_entity(self, model: NotificationModel) -> Notification:
        notification = Notification(
            id=model.id,  # type: ignore[arg-type]
            user_id=model.user_id,  # type: ignore[arg-type]
            message=model.message,  # type: ignore[arg-type]
            notification_type=model.notification_type,  # type: ignore[arg-type]
            related_entity_id=model.related_entity_id,  # type: ignore[arg-type]
            is_read=model.is_read or False,  # type: ignore[arg-type]
        )
        if model.created_at:
            notification.created_at = model.created_at  # type: ignore[assignment]
        if model.updated_at:
            notification.updated_at = model.updated_at  # type: ignore[assignment]
        return notification
