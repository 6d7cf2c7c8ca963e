"""
User Repository Implementation
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from healthapp.domains.clinic.application.ports import IUserRepository
from healthapp.domains.clinic.domain.entities import User
from healthapp.domains.clinic.domain.value_objects import UserRole
from healthapp.domains.clinic.infrastructure.persistence.sqlalchemy.models import UserModel

logger = logging.getLogger(__name__)


class SQLAlchemyUserRepository(IUserRepository):
    """
    SQLAlchemy implementation of user repository.

    User IDs are generated by the domain, so save() decides between insert
    and update by looking the row up rather than by the presence of an ID.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_id(self, user_id: str) -> User | None:
        result = await self.session.execute(select(UserModel).where(UserModel.id == user_id))
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def find_by_email(self, email: str) -> User | None:
        result = await self.session.execute(select(UserModel).where(UserModel.email == email.strip().lower()))
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def find_all(self, role: UserRole | None = None, active_only: bool = True) -> list[User]:
        query = select(UserModel)
        if role is not None:
            query = query.where(UserModel.role == role)
        if active_only:
            query = query.where(UserModel.is_active.is_(True))
        query = query.order_by(UserModel.last_name, UserModel.first_name)

        result = await self.session.execute(query)
        models = result.scalars().all()
        return [self._to_entity(m) for m in models]

    async def save(self, user: User) -> User:
        result = await self.session.execute(select(UserModel).where(UserModel.id == user.id))
        model = result.scalar_one_or_none()
        if model:
            model.email = user.email  # type: ignore[assignment]
            model.first_name = user.first_name  # type: ignore[assignment]
            model.last_name = user.last_name  # type: ignore[assignment]
            model.role = user.role  # type: ignore[assignment]
            model.is_active = user.is_active  # type: ignore[assignment]
        else:
            model = UserModel(
                id=user.id,
                email=user.email,
                first_name=user.first_name,
                last_name=user.last_name,
                role=user.role,
                is_active=user.is_active,
            )
            self.session.add(model)

        await self.session.commit()
        await self.session.refresh(model)

        return self._to_entity(model)

    def _to_entity(self, model: UserModel) -> User:
        user = User(
            id=model.id,  # type: ignore[arg-type]
            email=model.email,  # type: ignore[arg-type]
            first_name=model.first_name or "",  # type: ignore[arg-type]
            last_name=model.last_name or "",  # type: ignore[arg-type]
            role=model.role,  # type: ignore[arg-type]
            is_active=model.is_active if model.is_active is not None else True,  # type: ignore[arg-type]
        )
        if model.created_at:
            user.created_at = model.created_at  # type: ignore[assignment]
        if model.updated_at:
            user.updated_at = model.updated_at  # type: ignore[assignment]
        return user
