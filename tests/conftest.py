"""Shared test fixtures and helpers."""

from __future__ import annotations

from typing import Any

import pytest

from chatrelay.emoji.directory import EmojiDirectoryCache
from chatrelay.providers.slack.mock import MockSlackProvider
from chatrelay.realtime.memory import InMemoryRealtime


class FakeClock:
    """Manually advanced clock for cache and signature tests."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def slack() -> MockSlackProvider:
    return MockSlackProvider()


@pytest.fixture
def backend() -> InMemoryRealtime:
    return InMemoryRealtime()


@pytest.fixture
def directory(slack: MockSlackProvider, clock: FakeClock) -> EmojiDirectoryCache:
    return EmojiDirectoryCache(slack, clock=clock)


def make_message_payload(
    text: str = "hello",
    channel: str = "C1",
    ts: str = "100.1",
    **event_fields: Any,
) -> dict[str, Any]:
    """Build a Slack ``event_callback`` payload carrying a message event."""
    event: dict[str, Any] = {
        "type": "message",
        "channel": channel,
        "user": "U123",
        "text": text,
        "ts": ts,
    }
    event.update(event_fields)
    return {"type": "event_callback", "event_id": "Ev1", "event": event}


def make_reaction_payload(
    reaction: str = "thumbsup",
    channel: str = "C1",
    ts: str = "100.1",
    event_type: str = "reaction_added",
    user: str = "U123",
) -> dict[str, Any]:
    """Build a Slack ``event_callback`` payload carrying a reaction event."""
    return {
        "type": "event_callback",
        "event_id": "Ev2",
        "event": {
            "type": event_type,
            "user": user,
            "reaction": reaction,
            "item": {"type": "message", "channel": channel, "ts": ts},
            "event_ts": "200.2",
        },
    }
