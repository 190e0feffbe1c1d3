"""
Domain Layer - Core DDD building blocks

This module provides base classes for Domain-Driven Design:
- Entities: Objects with identity and lifecycle
- Value Objects: Immutable objects compared by value
- Events: Domain events for communication
- Exceptions: Domain-specific error handling
"""

from care_scheduling.core.domain.entities import (
    AggregateRoot,
    Entity,
    generate_uuid_str,
)
from care_scheduling.core.domain.events import (
    DomainEvent,
    DomainEventPublisher,
    EventHandler,
)
from care_scheduling.core.domain.exceptions import (
    AppointmentConflictException,
    DependencyException,
    DomainException,
    EntityNotFoundException,
    InvalidTransitionException,
    ValidationException,
)
from care_scheduling.core.domain.value_objects import (
    Email,
    PhoneNumber,
    StatusEnum,
    ValueObject,
)

__all__ = [
    # Entities
    "Entity",
    "AggregateRoot",
    "generate_uuid_str",
    # Value Objects
    "ValueObject",
    "Email",
    "PhoneNumber",
    "StatusEnum",
    # Events
    "DomainEvent",
    "DomainEventPublisher",
    "EventHandler",
    # Exceptions
    "DomainException",
    "ValidationException",
    "EntityNotFoundException",
    "InvalidTransitionException",
    "DependencyException",
    "AppointmentConflictException",
]
