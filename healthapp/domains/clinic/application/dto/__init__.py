"""
Clinic Application DTOs

Identity of the caller and the single result type returned by every use case.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from healthapp.core.domain import DomainException, ErrorKind
from healthapp.domains.clinic.domain.value_objects import UserRole

T = TypeVar("T")


@dataclass(frozen=True)
class Identity:
    """Authenticated caller, as asserted by the upstream gateway."""

    user_id: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN

    @property
    def is_doctor(self) -> bool:
        return self.role is UserRole.DOCTOR

    @property
    def is_patient(self) -> bool:
        return self.role is UserRole.PATIENT


@dataclass
class UseCaseResult(Generic[T]):
    """
    Outcome of a use case.

    Exactly one of data (on success) or error_kind/error_message (on failure) is meaningful.
    """

    success: bool
    data: T | None = None
    error_kind: ErrorKind | None = None
    error_code: str | None = None
    error_message: str | None = None

    @classmethod
    def ok(cls, data: T | None = None) -> "UseCaseResult[T]":
        """Create successful result."""
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, kind: ErrorKind, message: str, code: str | None = None) -> "UseCaseResult[T]":
        """Create error result."""
        return cls(success=False, error_kind=kind, error_code=code or kind.name, error_message=message)

    @classmethod
    def from_exception(cls, exc: DomainException) -> "UseCaseResult[T]":
        return cls.fail(exc.kind, exc.message, exc.code)


__all__ = ["Identity", "UseCaseResult"]
