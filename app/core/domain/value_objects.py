"""
Base Value Object Classes for Domain-Driven Design

Value Objects are immutable domain primitives that have no identity.
They are compared by their values, not by reference.
"""

from abc import ABC
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for all value objects.

    Value objects are:
    - Immutable (frozen=True)
    - Compared by value (dataclass equality)
    - Have no identity
    """

    def __post_init__(self):
        """Override to add validation logic."""
        self._validate()

    def _validate(self) -> None:
        """Validate the value object. Override in subclasses."""
        pass


@dataclass(frozen=True)
class Money(ValueObject):
    """
    Money value object for order totals.

    The order lifecycle engine never changes monetary fields; it only
    carries them through for result payloads.
    """

    amount: Decimal
    currency: str = "USD"

    def _validate(self) -> None:
        """Validate money constraints."""
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", Decimal(str(self.amount)))
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")
        if not self.currency or len(self.currency) != 3:
            raise ValueError("Currency must be a 3-letter ISO code")

    def __str__(self) -> str:
        return f"{self.currency} {self.amount:,.2f}"

    @classmethod
    def zero(cls, currency: str = "USD") -> "Money":
        """Create a zero Money value."""
        return cls(amount=Decimal("0"), currency=currency)

    @classmethod
    def from_float(cls, amount: float, currency: str = "USD") -> "Money":
        """Create Money from float (with proper rounding)."""
        return cls(amount=Decimal(str(amount)).quantize(Decimal("0.01"), ROUND_HALF_UP), currency=currency)


class StatusEnum(str, Enum):
    """Base class for status enums; members compare equal to their string values."""
