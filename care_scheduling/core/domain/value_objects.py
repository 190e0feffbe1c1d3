"""
Base Value Object Classes for Domain-Driven Design

Value Objects are immutable domain primitives that have no identity.
They are compared by their values, not by reference.
"""

import re
from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import Self


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


_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass(frozen=True)
class Email(ValueObject):
    """
    Email address value object.

    Validates and normalizes email addresses.
    """

    address: str

    def _validate(self) -> None:
        if not self.address or not _EMAIL_PATTERN.match(self.address.strip()):
            raise ValueError(f"Invalid email address: {self.address}")
        # Normalize to lowercase
        object.__setattr__(self, "address", self.address.lower().strip())

    def __str__(self) -> str:
        return self.address


@dataclass(frozen=True)
class PhoneNumber(ValueObject):
    """
    Phone number value object.

    Keeps digits only; local numbers carry a 2-digit area code followed by
    an 8 or 9 digit subscriber number.
    """

    number: str

    def _validate(self) -> None:
        cleaned = "".join(c for c in self.number if c.isdigit())
        if len(cleaned) not in (10, 11):
            raise ValueError(f"Invalid phone number: {self.number}")
        object.__setattr__(self, "number", cleaned)

    def __str__(self) -> str:
        return self.number


class StatusEnum(str, Enum):
    """
    Base class for status enums.

    Provides common functionality for all status value objects.
    """

    @classmethod
    def values(cls) -> list[str]:
        """Get all possible values."""
        return [e.value for e in cls]

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Create from string value (case-insensitive)."""
        for member in cls:
            if member.value.lower() == value.lower():
                return member
        raise ValueError(f"Invalid {cls.__name__}: {value}")
