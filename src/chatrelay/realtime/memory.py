"""In-process realtime backend for local development and tests."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections import deque
from dataclasses import dataclass, field
from uuid import uuid4

from chatrelay.realtime.base import RealtimeBackend, RelayCallback, RelayEvent

logger = logging.getLogger("chatrelay.realtime")


class InMemoryRealtime(RealtimeBackend):
    """Deliver relay events to in-process subscribers.

    Stands in for Pusher when no credentials are configured.  Every publish
    is also recorded in :attr:`published` so callers can inspect what would
    have reached the front end.

    Args:
        max_queue_size: Bound of each subscriber backlog and of the
            ``published`` history.  The oldest entries are dropped first.
    """

    def __init__(self, max_queue_size: int = 100) -> None:
        self._max_queue_size = max_queue_size
        self._subscribers: dict[str, _Subscriber] = {}
        self.published: deque[tuple[str, RelayEvent]] = deque(maxlen=max_queue_size)
        self._closed = False

    async def publish(self, channel: str, event: RelayEvent) -> None:
        if self._closed:
            return
        self.published.append((channel, event))
        for subscriber in self._subscribers.values():
            if subscriber.channel == channel:
                subscriber.push(event)

    async def subscribe(self, channel: str, callback: RelayCallback) -> str:
        subscriber = _Subscriber(
            id=uuid4().hex,
            channel=channel,
            callback=callback,
            backlog=deque(maxlen=self._max_queue_size),
        )
        subscriber.start()
        self._subscribers[subscriber.id] = subscriber
        return subscriber.id

    async def unsubscribe(self, subscription_id: str) -> bool:
        subscriber = self._subscribers.pop(subscription_id, None)
        if subscriber is None:
            return False
        await subscriber.stop()
        return True

    async def close(self) -> None:
        self._closed = True
        subscribers, self._subscribers = list(self._subscribers.values()), {}
        for subscriber in subscribers:
            await subscriber.stop()

    def events(self, channel: str | None = None) -> list[RelayEvent]:
        """Return the published history, optionally for one channel."""
        return [event for ch, event in self.published if channel in (None, ch)]

    @property
    def subscription_count(self) -> int:
        return len(self._subscribers)


@dataclass(eq=False)
class _Subscriber:
    """One callback draining its own bounded backlog in a background task."""

    id: str
    channel: str
    callback: RelayCallback
    backlog: deque[RelayEvent]
    wakeup: asyncio.Event = field(default_factory=asyncio.Event)
    task: asyncio.Task[None] | None = None
    active: bool = True

    def start(self) -> None:
        self.task = asyncio.create_task(self._drain())

    def push(self, event: RelayEvent) -> None:
        if self.active:
            self.backlog.append(event)
            self.wakeup.set()

    async def stop(self) -> None:
        self.active = False
        if self.task is None:
            return
        self.task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self.task
        self.task = None

    async def _drain(self) -> None:
        while self.active:
            await self.wakeup.wait()
            self.wakeup.clear()
            while self.active and self.backlog:
                event = self.backlog.popleft()
                try:
                    await self.callback(event)
                except Exception:
                    logger.exception(
                        "Realtime callback failed on %s",
                        self.channel,
                        extra={"subscription_id": self.id, "event_id": event.id},
                    )
