# ============================================================================
# Tests for DomainEventPublisher
# ============================================================================
"""Unit tests for the in-memory domain event publisher."""

import asyncio
import logging
from dataclasses import dataclass

import pytest

from care_scheduling.core.domain import DomainEvent, DomainEventPublisher


@dataclass(frozen=True, kw_only=True)
class SampleHappened(DomainEvent):
    subject_id: str


@dataclass(frozen=True, kw_only=True)
class OtherHappened(DomainEvent):
    pass


class TestDomainEvent:
    """Tests for DomainEvent."""

    @pytest.mark.unit
    def test_event_type_is_class_name(self) -> None:
        assert SampleHappened(subject_id="a").event_type == "SampleHappened"

    @pytest.mark.unit
    def test_to_dict_serializes_fields(self) -> None:
        event = SampleHappened(subject_id="a")
        data = event.to_dict()
        assert data["event_type"] == "SampleHappened"
        assert data["subject_id"] == "a"
        assert data["event_id"] == str(event.event_id)
        assert data["occurred_at"] == event.occurred_at.isoformat()


class TestInlineDispatch:
    """Tests for inline dispatch."""

    @pytest.mark.unit
    def test_rejects_unknown_mode(self) -> None:
        with pytest.raises(ValueError):
            DomainEventPublisher(dispatch_mode="threads")  # type: ignore[arg-type]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_handlers_run_in_subscription_order(self) -> None:
        publisher = DomainEventPublisher()
        calls = []

        async def first(event):
            calls.append(("first", event.subject_id))

        async def second(event):
            calls.append(("second", event.subject_id))

        publisher.subscribe(SampleHappened, first)
        publisher.subscribe(SampleHappened, second)

        await publisher.publish(SampleHappened(subject_id="a"))

        assert calls == [("first", "a"), ("second", "a")]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_only_matching_handlers_run(self) -> None:
        publisher = DomainEventPublisher()
        calls = []

        async def handler(event):
            calls.append(event)

        publisher.subscribe(OtherHappened, handler)
        await publisher.publish(SampleHappened(subject_id="a"))

        assert calls == []
        assert publisher.handlers_for(OtherHappened) == [handler]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_failing_handler_is_isolated(self, caplog) -> None:
        """Should log a failing handler and still run the next one."""
        publisher = DomainEventPublisher()
        calls = []

        async def broken(event):
            raise RuntimeError("gateway down")

        async def healthy(event):
            calls.append(event.subject_id)

        publisher.subscribe(SampleHappened, broken)
        publisher.subscribe(SampleHappened, healthy)

        with caplog.at_level(logging.ERROR):
            await publisher.publish_all([SampleHappened(subject_id="a"), SampleHappened(subject_id="b")])

        assert calls == ["a", "b"]
        assert "gateway down" in caplog.text

    @pytest.mark.unit
    def test_clear_handlers(self) -> None:
        publisher = DomainEventPublisher()

        async def handler(event):
            pass

        publisher.subscribe(SampleHappened, handler)
        publisher.clear_handlers()
        assert publisher.handlers_for(SampleHappened) == []


class TestBackgroundDispatch:
    """Tests for background dispatch."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_publish_returns_before_handlers_finish(self) -> None:
        """Should schedule handlers as tasks and let drain wait for them."""
        publisher = DomainEventPublisher(dispatch_mode="background")
        release = asyncio.Event()
        calls = []

        async def slow(event):
            await release.wait()
            calls.append(event.subject_id)

        publisher.subscribe(SampleHappened, slow)

        await publisher.publish(SampleHappened(subject_id="a"))
        assert calls == []
        assert publisher.pending_count == 1

        release.set()
        await publisher.drain()

        assert calls == ["a"]
        assert publisher.pending_count == 0

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_drain_waits_for_chained_events(self) -> None:
        """Should also wait for handlers scheduled by other handlers."""
        publisher = DomainEventPublisher(dispatch_mode="background")
        calls = []

        async def relay(event):
            await publisher.publish(OtherHappened())

        async def sink(event):
            calls.append(event.event_type)

        publisher.subscribe(SampleHappened, relay)
        publisher.subscribe(OtherHappened, sink)

        await publisher.publish(SampleHappened(subject_id="a"))
        await publisher.drain()

        assert calls == ["OtherHappened"]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_background_failure_is_logged(self, caplog) -> None:
        publisher = DomainEventPublisher(dispatch_mode="background")

        async def broken(event):
            raise RuntimeError("records database unavailable")

        publisher.subscribe(SampleHappened, broken)

        with caplog.at_level(logging.ERROR):
            await publisher.publish(SampleHappened(subject_id="a"))
            await publisher.drain()

        assert "records database unavailable" in caplog.text
