"""
User account routes (admin).
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from healthapp.api.identity import CurrentIdentity
from healthapp.domains.clinic.api.dependencies import (
    get_create_user_use_case,
    get_deactivate_user_use_case,
    get_list_users_use_case,
    get_user_use_case,
)
from healthapp.domains.clinic.api.errors import unwrap
from healthapp.domains.clinic.api.schemas import UserCreateRequest, UserResponse
from healthapp.domains.clinic.application.use_cases import (
    CreateUserRequest,
    CreateUserUseCase,
    DeactivateUserRequest,
    DeactivateUserUseCase,
    GetUserRequest,
    GetUserUseCase,
    ListUsersRequest,
    ListUsersUseCase,
)
from healthapp.domains.clinic.domain.value_objects import UserRole

router = APIRouter(prefix="/users", tags=["Users"])

CreateUserUseCaseDep = Annotated[CreateUserUseCase, Depends(get_create_user_use_case)]
GetUserUseCaseDep = Annotated[GetUserUseCase, Depends(get_user_use_case)]
ListUsersUseCaseDep = Annotated[ListUsersUseCase, Depends(get_list_users_use_case)]
DeactivateUserUseCaseDep = Annotated[DeactivateUserUseCase, Depends(get_deactivate_user_use_case)]


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(request: UserCreateRequest, identity: CurrentIdentity, use_case: CreateUserUseCaseDep):
    result = await use_case.execute(
        CreateUserRequest(
            identity=identity,
            email=request.email,
            first_name=request.first_name,
            last_name=request.last_name,
            role=request.role,
        )
    )
    return UserResponse.model_validate(unwrap(result))


@router.get("", response_model=list[UserResponse])
async def list_users(
    identity: CurrentIdentity,
    use_case: ListUsersUseCaseDep,
    role: UserRole | None = Query(default=None),
    active_only: bool = Query(default=True),
):
    result = await use_case.execute(ListUsersRequest(identity=identity, role=role, active_only=active_only))
    return [UserResponse.model_validate(u) for u in unwrap(result)]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, identity: CurrentIdentity, use_case: GetUserUseCaseDep):
    result = await use_case.execute(GetUserRequest(identity=identity, user_id=user_id))
    return UserResponse.model_validate(unwrap(result))


@router.post("/{user_id}/deactivate", response_model=UserResponse)
async def deactivate_user(user_id: str, identity: CurrentIdentity, use_case: DeactivateUserUseCaseDep):
    """Deactivate an account. Deactivated accounts are kept, never deleted."""
    result = await use_case.execute(DeactivateUserRequest(identity=identity, user_id=user_id))
    return UserResponse.model_validate(unwrap(result))
