"""
Caller identity dependency.

The upstream auth gateway authenticates the request and forwards the
account ID and role in X-User-Id / X-User-Role headers.
"""

import logging
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from healthapp.domains.clinic.application.dto import Identity
from healthapp.domains.clinic.domain.value_objects import UserRole

logger = logging.getLogger(__name__)


def get_identity(
    x_user_id: Annotated[str | None, Header()] = None,
    x_user_role: Annotated[str | None, Header()] = None,
) -> Identity:
    """Build the caller Identity from gateway headers; 401 if missing or invalid."""
    if not x_user_id or not x_user_id.strip() or not x_user_role:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Id or X-User-Role header",
        )
    try:
        role = UserRole(x_user_role.strip().lower())
    except ValueError as e:
        logger.warning(f"Rejected unknown role header: {x_user_role}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Unknown role: {x_user_role}",
        ) from e
    return Identity(user_id=x_user_id.strip(), role=role)


CurrentIdentity = Annotated[Identity, Depends(get_identity)]

__all__ = ["CurrentIdentity", "get_identity"]
