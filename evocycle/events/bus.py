"""Event Bus — pub/sub with wildcard matching.

The engine emits lifecycle events; the bus routes them to subscribers.
Supports topic wildcards: "evolution.*" matches "evolution.phase_completed",
"evolution.cycle_completed".
"""

from __future__ import annotations

import asyncio
import fnmatch
import logging
from collections import defaultdict
from datetime import datetime
from typing import Any, Callable, Awaitable

from pydantic import BaseModel, Field

from evocycle.types import new_id, utcnow

logger = logging.getLogger(__name__)

EventHandler = Callable[["Event"], Awaitable[None]]


class Event(BaseModel):
    """A system event."""

    id: str = Field(default_factory=new_id)
    topic: str
    data: dict[str, Any] = Field(default_factory=dict)
    source: str = ""
    timestamp: datetime = Field(default_factory=utcnow)


class EventBus:
    """Async pub/sub event bus with wildcard topic matching.

    Subscribe to "evolution.*" to receive all engine events.
    Subscribe to "*" to receive everything.

    Handlers run as background tasks, so emit() never waits on a
    subscriber. A failing handler is logged and skipped; it never reaches
    the emitter or the other handlers.
    """

    def __init__(self, history_limit: int = 500) -> None:
        self._subscribers: dict[str, list[EventHandler]] = defaultdict(list)
        self._history: list[Event] = []
        self._history_limit = history_limit
        self._lock = asyncio.Lock()
        self._pending: set[asyncio.Task] = set()

    def subscribe(self, pattern: str, handler: EventHandler) -> None:
        """Subscribe to events matching a topic pattern."""
        self._subscribers[pattern].append(handler)

    def unsubscribe(self, pattern: str, handler: EventHandler) -> None:
        """Remove a subscription."""
        handlers = self._subscribers.get(pattern, [])
        if handler in handlers:
            handlers.remove(handler)

    async def emit(self, topic: str, data: dict | None = None, source: str = "") -> Event:
        """Record an event and schedule delivery to matching subscribers.

        Returns as soon as the deliveries are scheduled; use drain() to wait
        for them.
        """
        event = Event(topic=topic, data=data or {}, source=source)

        async with self._lock:
            self._history.append(event)
            if len(self._history) > self._history_limit:
                self._history = self._history[-self._history_limit:]

        # Find matching handlers
        for pattern, subscribed in self._subscribers.items():
            if not fnmatch.fnmatch(topic, pattern):
                continue
            for handler in subscribed:
                task = asyncio.create_task(
                    self._deliver(handler, event),
                    name=f"{topic}:{getattr(handler, '__name__', handler)}",
                )
                self._pending.add(task)
                task.add_done_callback(self._delivered)

        return event

    async def drain(self) -> None:
        """Wait until every scheduled delivery has finished."""
        while self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    @property
    def pending(self) -> int:
        return len(self._pending)

    @staticmethod
    async def _deliver(handler: EventHandler, event: Event) -> None:
        # A handler that raises before returning its awaitable fails this
        # task like any other handler error.
        await handler(event)

    def _delivered(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.warning("Event handler %s failed: %s", task.get_name(), error)

    def history(self, topic_filter: str = "*", limit: int = 50) -> list[Event]:
        """Get recent events, optionally filtered by topic pattern."""
        if topic_filter == "*":
            events = self._history
        else:
            events = [
                e for e in self._history
                if fnmatch.fnmatch(e.topic, topic_filter)
            ]
        return list(reversed(events[-limit:]))

    @property
    def subscriber_count(self) -> int:
        return sum(len(h) for h in self._subscribers.values())

    def topics(self) -> list[str]:
        """Get all topics that have been emitted."""
        return list({e.topic for e in self._history})
