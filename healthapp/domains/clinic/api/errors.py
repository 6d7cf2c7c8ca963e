"""
Translate use case results into HTTP responses.
"""

from typing import TypeVar

from fastapi import HTTPException

from healthapp.api.exception_handlers import status_for
from healthapp.domains.clinic.application.dto import UseCaseResult

T = TypeVar("T")


def unwrap(result: UseCaseResult[T]) -> T:
    """Return the result data or raise the HTTPException matching its error kind."""
    if not result.success:
        raise HTTPException(
            status_code=status_for(result.error_kind),
            detail=result.error_message or "Request failed",
        )
    return result.data  # type: ignore[return-value]
