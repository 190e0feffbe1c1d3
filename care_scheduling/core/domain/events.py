"""
Base Domain Event Classes for Domain-Driven Design

Domain Events represent significant business occurrences that domain experts
care about. Aggregates record them during a transition; the application layer
publishes them after the primary write, so subscribers (notifications, record
projection) run as a separate post-commit step.
"""

import asyncio
import logging
from abc import ABC
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any, Callable, Coroutine, Literal
from uuid import UUID, uuid4

from care_scheduling.core.domain.exceptions import DependencyException

logger = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class DomainEvent(ABC):
    """
    Base class for all domain events.

    Domain events are immutable records of something that happened
    in the domain. They capture the fact that something occurred.

    Example:
        ```python
        @dataclass(frozen=True, kw_only=True)
        class AppointmentConfirmed(DomainEvent):
            appointment_id: str
            patient_id: str
        ```
    """

    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    version: int = field(default=1)

    @property
    def event_type(self) -> str:
        """Get the event type name (class name)."""
        return self.__class__.__name__

    def to_dict(self) -> dict[str, Any]:
        """Convert event to dictionary for serialization."""
        result: dict[str, Any] = {
            "event_id": str(self.event_id),
            "event_type": self.event_type,
            "occurred_at": self.occurred_at.isoformat(),
            "version": self.version,
        }
        # Add all other fields
        for key, value in self.__dict__.items():
            if key not in result:
                if isinstance(value, datetime):
                    result[key] = value.isoformat()
                elif isinstance(value, UUID):
                    result[key] = str(value)
                elif isinstance(value, Enum):
                    result[key] = value.value
                else:
                    result[key] = value
        return result


# Type aliases for event handlers
EventHandler = Callable[[DomainEvent], Coroutine[Any, Any, None]]
DispatchMode = Literal["inline", "background"]


class DomainEventPublisher:
    """
    In-memory domain event publisher.

    Handlers run either inline (awaited one after another inside ``publish``)
    or in the background (each one scheduled as an asyncio task that the
    publisher keeps a reference to until it finishes). In both modes a failing
    handler is reported as a DependencyException in the log and never reaches
    the code that published the event.
    """

    def __init__(self, dispatch_mode: DispatchMode = "inline"):
        """
        Initialize publisher.

        Args:
            dispatch_mode: 'inline' or 'background'
        """
        if dispatch_mode not in ("inline", "background"):
            raise ValueError(f"Unknown dispatch mode: {dispatch_mode}")
        self.dispatch_mode = dispatch_mode
        self._handlers: dict[str, list[EventHandler]] = {}
        self._pending: set[asyncio.Task[None]] = set()

    def subscribe(self, event_type: type[DomainEvent], handler: EventHandler) -> None:
        """
        Subscribe to an event type.

        Args:
            event_type: Type of event to subscribe to
            handler: Async handler function
        """
        self._handlers.setdefault(event_type.__name__, []).append(handler)

    def handlers_for(self, event_type: type[DomainEvent]) -> list[EventHandler]:
        """Get the handlers registered for an event type."""
        return list(self._handlers.get(event_type.__name__, []))

    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a domain event to all subscribers.

        Args:
            event: Event to publish
        """
        for handler in self._handlers.get(event.event_type, []):
            if self.dispatch_mode == "background":
                task = asyncio.create_task(self._run_handler(handler, event))
                self._pending.add(task)
                task.add_done_callback(self._pending.discard)
            else:
                await self._run_handler(handler, event)

    async def publish_all(self, events: list[DomainEvent]) -> None:
        """
        Publish multiple events.

        Args:
            events: List of events to publish
        """
        for event in events:
            await self.publish(event)

    async def drain(self) -> None:
        """Wait for every background handler, including ones scheduled while waiting."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    @property
    def pending_count(self) -> int:
        """Number of background handlers still running."""
        return len(self._pending)

    def clear_handlers(self) -> None:
        """Clear all event handlers (useful for testing)."""
        self._handlers.clear()

    async def _run_handler(self, handler: EventHandler, event: DomainEvent) -> None:
        handler_name = getattr(handler, "__qualname__", type(handler).__name__)
        try:
            await handler(event)
        except Exception as e:
            error = DependencyException(
                service=handler_name,
                message=f"Error in event handler for {event.event_type}: {e}",
                original_error=e,
            )
            logger.exception(f"{error.message} (event_id={event.event_id})")
