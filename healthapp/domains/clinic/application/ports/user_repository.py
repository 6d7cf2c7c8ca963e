"""
User Repository Interface
"""

from typing import Protocol, runtime_checkable

from healthapp.domains.clinic.domain.entities.user import User
from healthapp.domains.clinic.domain.value_objects import UserRole


@runtime_checkable
class IUserRepository(Protocol):
    """Interface for user accounts."""

    async def find_by_id(self, user_id: str) -> User | None:
        ...

    async def find_by_email(self, email: str) -> User | None:
        ...

    async def find_all(self, role: UserRole | None = None, active_only: bool = True) -> list[User]:
        """List users, optionally restricted to one role."""
        ...

    async def save(self, user: User) -> User:
        ...
