"""
User account use cases (admin only).

Accounts hold the role the gateway asserts; credentials are not stored here.
"""

import logging
from dataclasses import dataclass

from healthapp.core.domain import (
    AuthorizationException,
    DomainException,
    DuplicateEntityException,
    EntityNotFoundException,
    ErrorKind,
)
from healthapp.domains.clinic.application.dto import Identity, UseCaseResult
from healthapp.domains.clinic.application.ports import IUserRepository
from healthapp.domains.clinic.application.services import AccessPolicy
from healthapp.domains.clinic.domain.entities import User
from healthapp.domains.clinic.domain.value_objects import UserRole

logger = logging.getLogger(__name__)


@dataclass
class CreateUserRequest:
    identity: Identity
    email: str
    first_name: str
    last_name: str
    role: UserRole


@dataclass
class GetUserRequest:
    identity: Identity
    user_id: str


@dataclass
class ListUsersRequest:
    identity: Identity
    role: UserRole | None = None
    active_only: bool = True


@dataclass
class DeactivateUserRequest:
    identity: Identity
    user_id: str


class CreateUserUseCase:
    def __init__(self, user_repository: IUserRepository):
        self.user_repo = user_repository

    async def execute(self, request: CreateUserRequest) -> UseCaseResult[User]:
        try:
            AccessPolicy.require_role(request.identity, "create_user", UserRole.ADMIN)

            user = User(
                email=request.email,
                first_name=request.first_name,
                last_name=request.last_name,
                role=request.role,
            )
            if await self.user_repo.find_by_email(user.email) is not None:
                raise DuplicateEntityException(entity_type="User", field="email", value=user.email)

            saved = await self.user_repo.save(user)
            logger.info(f"User {saved.id} created with role {saved.role.value}")
            return UseCaseResult.ok(saved)

        except DomainException as e:
            logger.warning(f"User not created: {e}")
            return UseCaseResult.from_exception(e)
        except Exception as e:
            logger.error(f"Error creating user: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to create user")


class GetUserUseCase:
    """Admins read any account; everyone else only their own."""

    def __init__(self, user_repository: IUserRepository):
        self.user_repo = user_repository

    async def execute(self, request: GetUserRequest) -> UseCaseResult[User]:
        try:
            if not request.identity.is_admin and request.identity.user_id != request.user_id:
                raise AuthorizationException(
                    operation="view_user", resource=f"User {request.user_id}", user_id=request.identity.user_id
                )
            user = await self.user_repo.find_by_id(request.user_id)
            if user is None:
                raise EntityNotFoundException(entity_type="User", entity_id=request.user_id)
            return UseCaseResult.ok(user)
        except DomainException as e:
            return UseCaseResult.from_exception(e)
        except Exception as e:
            logger.error(f"Error loading user: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to load user")


class ListUsersUseCase:
    def __init__(self, user_repository: IUserRepository):
        self.user_repo = user_repository

    async def execute(self, request: ListUsersRequest) -> UseCaseResult[list[User]]:
        try:
            AccessPolicy.require_role(request.identity, "list_users", UserRole.ADMIN)
            users = await self.user_repo.find_all(role=request.role, active_only=request.active_only)
            return UseCaseResult.ok(users)
        except DomainException as e:
            return UseCaseResult.from_exception(e)
        except Exception as e:
            logger.error(f"Error listing users: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to list users")


class DeactivateUserUseCase:
    def __init__(self, user_repository: IUserRepository):
        self.user_repo = user_repository

    async def execute(self, request: DeactivateUserRequest) -> UseCaseResult[User]:
        try:
            AccessPolicy.require_role(request.identity, "deactivate_user", UserRole.ADMIN)
            user = await self.user_repo.find_by_id(request.user_id)
            if user is None:
                raise EntityNotFoundException(entity_type="User", entity_id=request.user_id)

            user.deactivate()
            saved = await self.user_repo.save(user)
            logger.info(f"User {saved.id} deactivated")
            return UseCaseResult.ok(saved)

        except DomainException as e:
            return UseCaseResult.from_exception(e)
        except Exception as e:
            logger.error(f"Error deactivating user: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to deactivate user")
