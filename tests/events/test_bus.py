"""Tests for the event bus."""

import asyncio

import pytest

from evocycle.events.bus import EventBus, Event


@pytest.mark.asyncio
async def test_emit_and_subscribe():
    bus = EventBus()
    received = []

    async def handler(event: Event):
        received.append(event)

    bus.subscribe("evolution.initialized", handler)
    await bus.emit("evolution.initialized", {"registry_sizes": {"mutation": 3}})
    await bus.drain()

    assert len(received) == 1
    assert received[0].topic == "evolution.initialized"
    assert received[0].data["registry_sizes"]["mutation"] == 3


@pytest.mark.asyncio
async def test_wildcard_subscribe():
    bus = EventBus()
    received = []

    async def handler(event: Event):
        received.append(event)

    bus.subscribe("evolution.*", handler)
    await bus.emit("evolution.phase_completed", {"cycle_id": "c1"})
    await bus.emit("evolution.cycle_completed", {"cycle_id": "c1"})
    await bus.emit("registry.updated", {"name": "x"})  # should NOT match
    await bus.drain()

    assert len(received) == 2


@pytest.mark.asyncio
async def test_star_matches_all():
    bus = EventBus()
    received = []

    async def handler(event: Event):
        received.append(event)

    bus.subscribe("*", handler)
    await bus.emit("evolution.initialized")
    await bus.emit("evolution.cycle_failed")
    await bus.emit("other.topic")
    await bus.drain()

    assert len(received) == 3


@pytest.mark.asyncio
async def test_unsubscribe():
    bus = EventBus()
    received = []

    async def handler(event: Event):
        received.append(event)

    bus.subscribe("test", handler)
    await bus.emit("test")
    await bus.drain()
    assert len(received) == 1

    bus.unsubscribe("test", handler)
    await bus.emit("test")
    await bus.drain()
    assert len(received) == 1  # no new events


def test_unsubscribe_unknown_is_noop():
    bus = EventBus()

    async def handler(event: Event):
        pass

    bus.unsubscribe("never", handler)
    assert bus.subscriber_count == 0


@pytest.mark.asyncio
async def test_history():
    bus = EventBus()
    await bus.emit("a.1", {"x": 1})
    await bus.emit("a.2", {"x": 2})
    await bus.emit("b.1", {"x": 3})

    all_events = bus.history()
    assert len(all_events) == 3
    assert all_events[0].topic == "b.1"

    a_events = bus.history(topic_filter="a.*")
    assert len(a_events) == 2


@pytest.mark.asyncio
async def test_history_limit():
    bus = EventBus(history_limit=5)
    for i in range(10):
        await bus.emit("test", {"i": i})

    events = bus.history()
    assert len(events) == 5
    assert events[0].data["i"] == 9


@pytest.mark.asyncio
async def test_multiple_subscribers():
    bus = EventBus()
    r1, r2 = [], []

    async def h1(e: Event):
        r1.append(e)

    async def h2(e: Event):
        r2.append(e)

    bus.subscribe("event", h1)
    bus.subscribe("event", h2)
    await bus.emit("event")
    await bus.drain()

    assert len(r1) == 1
    assert len(r2) == 1


@pytest.mark.asyncio
async def test_failing_handler_is_isolated():
    bus = EventBus()
    received = []

    async def broken(e: Event):
        raise RuntimeError("subscriber blew up")

    async def healthy(e: Event):
        received.append(e)

    bus.subscribe("evolution.*", broken)
    bus.subscribe("evolution.*", healthy)
    event = await bus.emit("evolution.cycle_completed", {"cycle": {}})
    await bus.drain()

    assert event.topic == "evolution.cycle_completed"
    assert len(received) == 1


@pytest.mark.asyncio
async def test_sync_raise_before_await_is_isolated():
    bus = EventBus()

    def not_a_coroutine(e: Event):
        raise ValueError("raised before returning an awaitable")

    bus.subscribe("x", not_a_coroutine)
    await bus.emit("x")
    await bus.drain()
    assert bus.pending == 0
    assert len(bus.history()) == 1


@pytest.mark.asyncio
async def test_emit_returns_event():
    bus = EventBus()
    event = await bus.emit("test.topic", {"key": "value"}, source="evolution_engine")

    assert event.topic == "test.topic"
    assert event.data["key"] == "value"
    assert event.source == "evolution_engine"
    assert event.id


@pytest.mark.asyncio
async def test_subscriber_count():
    bus = EventBus()
    assert bus.subscriber_count == 0

    async def h(e):
        pass

    bus.subscribe("a", h)
    bus.subscribe("b", h)
    assert bus.subscriber_count == 2


@pytest.mark.asyncio
async def test_topics():
    bus = EventBus()
    await bus.emit("evolution.initialized")
    await bus.emit("evolution.phase_completed")
    await bus.emit("evolution.initialized")

    topics = bus.topics()
    assert sorted(topics) == ["evolution.initialized", "evolution.phase_completed"]


@pytest.mark.asyncio
async def test_emit_does_not_wait_for_handlers():
    bus = EventBus()
    release = asyncio.Event()
    received = []

    async def stuck(e: Event):
        await release.wait()
        received.append(e)

    bus.subscribe("evolution.*", stuck)
    await asyncio.wait_for(bus.emit("evolution.phase_completed"), timeout=1)

    assert received == []
    assert bus.pending == 1

    release.set()
    await bus.drain()
    assert len(received) == 1
    assert bus.pending == 0


@pytest.mark.asyncio
async def test_drain_without_pending_returns():
    bus = EventBus()
    await bus.emit("nobody.listens")
    await bus.drain()
    assert bus.pending == 0
