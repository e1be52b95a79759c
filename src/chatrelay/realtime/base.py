"""Relay events and the realtime backend interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Coroutine
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4


@dataclass
class RelayEvent:
    """A named event fanned out to front-end subscribers.

    ``name`` is the Pusher event name (``message``, ``reaction``,
    ``reaction_removed``) and ``data`` the JSON payload sent with it.
    """

    name: str
    data: dict[str, Any] = field(default_factory=dict)
    id: str = field(default_factory=lambda: uuid4().hex)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "data": self.data,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> RelayEvent:
        return cls(
            name=raw["name"],
            data=raw.get("data", {}),
            id=raw["id"],
            timestamp=datetime.fromisoformat(raw["timestamp"]),
        )


RelayCallback = Callable[[RelayEvent], Coroutine[Any, Any, None]]


class RealtimeBackend(ABC):
    """Pub/sub transport between the relay and its front-end subscribers.

    The relay itself only publishes.  Hosted services such as Pusher accept
    subscriptions from browsers, not from the server, so ``subscribe`` and
    ``unsubscribe`` are optional and only the in-process backend has them.
    """

    @abstractmethod
    async def publish(self, channel: str, event: RelayEvent) -> None:
        """Publish *event* on *channel*.

        Raises:
            RelayError: If the backend could not accept the event.
        """
        ...

    async def subscribe(self, channel: str, callback: RelayCallback) -> str:
        """Call *callback* for every event published on *channel*.

        Returns:
            An id to pass to :meth:`unsubscribe`.
        """
        raise NotImplementedError(f"{type(self).__name__} does not support subscriptions")

    async def unsubscribe(self, subscription_id: str) -> bool:
        """Stop a subscription; False if the id is unknown."""
        raise NotImplementedError(f"{type(self).__name__} does not support subscriptions")

    async def close(self) -> None:  # noqa: B027
        """Release connections. Backends without resources keep the default."""
