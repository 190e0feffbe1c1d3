"""
Base Entity Classes for Domain-Driven Design

Entities carry an identity and audit timestamps. Aggregate roots also keep
a version counter and the domain events raised by their transitions.
"""

from abc import ABC
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Generic, TypeVar
from uuid import uuid4

TId = TypeVar("TId")


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass
class Entity(ABC, Generic[TId]):
    """
    Base class for domain entities.

    ``created_at`` and ``updated_at`` are audit timestamps in UTC; they are
    independent of any scheduled (wall-clock) time the entity holds.
    """

    id: TId | None = field(default=None)
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def touch(self) -> None:
        self.updated_at = _utcnow()


@dataclass
class AggregateRoot(Entity[TId], Generic[TId]):
    """
    Base class for aggregate roots.

    Transitions call ``_mark_changed`` and ``_record_event``; the application
    layer stores the aggregate first and publishes what
    ``pull_domain_events`` returns afterwards.

    Example:
        ```python
        appointment.confirm(actor_id="staff-1")
        events = appointment.pull_domain_events()
        await store.update(appointment.id, appointment)
        await publisher.publish_all(events)
        ```
    """

    _domain_events: list[Any] = field(default_factory=list, repr=False, compare=False)
    version: int = field(default=0)

    def _mark_changed(self) -> None:
        """Bump the version and the update timestamp after a transition."""
        self.version += 1
        self.touch()

    def _record_event(self, event: Any) -> None:
        self._domain_events.append(event)

    def get_domain_events(self) -> list[Any]:
        return list(self._domain_events)

    def clear_domain_events(self) -> None:
        self._domain_events.clear()

    def pull_domain_events(self) -> list[Any]:
        """Return recorded events and clear them."""
        events = self.get_domain_events()
        self.clear_domain_events()
        return events


def generate_uuid_str() -> str:
    """Generate a new UUID as string."""
    return str(uuid4())
