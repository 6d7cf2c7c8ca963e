"""
Domain Layer - Core DDD building blocks

This module provides base classes shared by all domains:
- Entities: Objects with identity and lifecycle
- Value Objects: Immutable objects compared by value
- Exceptions: Domain-specific error handling
"""

from healthapp.core.domain.entities import (
    AggregateRoot,
    Entity,
    generate_uuid_str,
)
from healthapp.core.domain.exceptions import (
    AppointmentConflictException,
    AuthorizationException,
    BusinessRuleViolationException,
    DomainException,
    DuplicateEntityException,
    EntityNotFoundException,
    ErrorKind,
    InvalidOperationException,
    ValidationException,
)
from healthapp.core.domain.value_objects import (
    Email,
    StatusEnum,
    ValueObject,
)

__all__ = [
    # Entities
    "AggregateRoot",
    "Entity",
    "generate_uuid_str",
    # Exceptions
    "AppointmentConflictException",
    "AuthorizationException",
    "BusinessRuleViolationException",
    "DomainException",
    "DuplicateEntityException",
    "EntityNotFoundException",
    "ErrorKind",
    "InvalidOperationException",
    "ValidationException",
    # Value Objects
    "Email",
    "StatusEnum",
    "ValueObject",
]
