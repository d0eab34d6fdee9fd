"""
Domain Exceptions for Domain-Driven Design

These exceptions represent business rule violations and domain-specific errors.
They should be caught and translated to structured results at the use case
boundary, or to HTTP responses in the API layer.
"""

from typing import Any


class DomainException(Exception):
    """
    Base exception for all domain-related errors.

    Provides a standardized way to communicate business rule violations.
    """

    def __init__(self, message: str, code: str | None = None, details: dict[str, Any] | None = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "INVALID_OPERATION")
            details: Additional context about the error
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__.upper()
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(DomainException):
    """
    Raised when domain validation fails.

    Use for invalid entity states, value object creation failures, etc.
    """

    def __init__(self, message: str, field: str | None = None, details: dict[str, Any] | None = None):
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, "VALIDATION_ERROR", details)
        self.field = field


class EntityNotFoundException(DomainException):
    """
    Raised when an entity is not found.
    """

    def __init__(
        self,
        entity_type: str,
        entity_id: Any,
        message: str | None = None,
    ):
        self.entity_type = entity_type
        self.entity_id = entity_id
        msg = message or f"{entity_type} with ID {entity_id} not found"
        super().__init__(
            msg,
            "ENTITY_NOT_FOUND",
            {"entity_type": entity_type, "entity_id": str(entity_id)},
        )


class BusinessRuleViolationException(DomainException):
    """
    Raised when a business rule is violated.

    Use for invariant violations, precondition failures, etc.
    """

    def __init__(self, rule: str, message: str | None = None, details: dict[str, Any] | None = None):
        self.rule = rule
        msg = message or f"Business rule violated: {rule}"
        details = details or {}
        details["rule"] = rule
        super().__init__(msg, "BUSINESS_RULE_VIOLATION", details)


class InvalidOperationException(DomainException):
    """Raised when an operation is not valid in the current state."""

    def __init__(self, operation: str, current_state: str, message: str | None = None):
        self.operation = operation
        self.current_state = current_state
        msg = message or f"Cannot perform '{operation}' in state '{current_state}'"
        super().__init__(
            msg,
            "INVALID_OPERATION",
            {"operation": operation, "current_state": current_state},
        )


class ConcurrencyException(DomainException):
    """Raised when a conditional write loses a race against another writer."""

    def __init__(self, entity_type: str, entity_id: Any, expected: Any, message: str | None = None):
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.expected = expected
        msg = message or (
            f"Concurrency conflict for {entity_type} {entity_id}: "
            f"expected '{expected}' but the row changed underneath"
        )
        super().__init__(
            msg,
            "CONCURRENCY_CONFLICT",
            {
                "entity_type": entity_type,
                "entity_id": str(entity_id),
                "expected": str(expected),
            },
        )


class TenantScopeException(DomainException):
    """Raised when an operation is attempted without a tenant scope."""

    def __init__(self, operation: str, message: str | None = None):
        self.operation = operation
        super().__init__(
            message or "Tenant context required",
            "TENANT_SCOPE_REQUIRED",
            {"operation": operation},
        )


class PersistenceException(DomainException):
    """
    Raised by repositories when the data store call fails.

    Subclasses tell the retry machinery whether the failure is worth
    another attempt. The original driver error is kept for logging.
    """

    retryable: bool = False

    def __init__(self, operation: str, message: str, original_error: Exception | None = None):
        self.operation = operation
        self.original_error = original_error
        details: dict[str, Any] = {"operation": operation}
        if original_error:
            details["original_error"] = str(original_error)
        super().__init__(message, None, details)


class TransientPersistenceException(PersistenceException):
    """Connection drop, timeout or similar; the same call may succeed later."""

    retryable = True

    def __init__(self, operation: str, message: str, original_error: Exception | None = None):
        super().__init__(operation, message, original_error)
        self.code = "TRANSIENT_PERSISTENCE_ERROR"


class PermanentPersistenceException(PersistenceException):
    """Constraint, permission or programming error; retrying will not help."""

    def __init__(self, operation: str, message: str, original_error: Exception | None = None):
        super().__init__(operation, message, original_error)
        self.code = "PERMANENT_PERSISTENCE_ERROR"
