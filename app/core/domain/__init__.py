"""
Domain Layer - Core DDD building blocks

This module provides base classes for Domain-Driven Design:
- Entities: Objects with identity and lifecycle
- Value Objects: Immutable objects compared by value
- Exceptions: Domain-specific error handling
"""

from app.core.domain.entities import (
    AggregateRoot,
    Entity,
)
from app.core.domain.exceptions import (
    BusinessRuleViolationException,
    ConcurrencyException,
    DomainException,
    EntityNotFoundException,
    InvalidOperationException,
    PermanentPersistenceException,
    PersistenceException,
    TenantScopeException,
    TransientPersistenceException,
    ValidationException,
)
from app.core.domain.value_objects import (
    Money,
    StatusEnum,
    ValueObject,
)

__all__ = [
    # Entities
    "Entity",
    "AggregateRoot",
    # Value Objects
    "ValueObject",
    "Money",
    "StatusEnum",
    # Exceptions
    "DomainException",
    "ValidationException",
    "EntityNotFoundException",
    "BusinessRuleViolationException",
    "InvalidOperationException",
    "ConcurrencyException",
    "TenantScopeException",
    "PersistenceException",
    "TransientPersistenceException",
    "PermanentPersistenceException",
]
