"""Mock Slack provider for testing."""

from __future__ import annotations

from typing import Any
from uuid import uuid4

from chatrelay.models.delivery import ProviderResult
from chatrelay.providers.slack.base import SlackProvider

# Error codes SlackWebProvider reports for failures below the Slack API
# (alongside every "http_<status>").
TRANSPORT_ERRORS = frozenset({"timeout", "invalid_response"})


class MockSlackProvider(SlackProvider):
    """Records calls and mimics Slack's reaction bookkeeping.

    Reactions are tracked per ``(channel, timestamp, name)`` so that adding
    twice answers ``already_reacted`` and removing an absent reaction
    answers ``no_reaction``, like the real API.  Any method can be forced to
    fail by putting an error code in :attr:`errors`; codes in
    :data:`TRANSPORT_ERRORS` and `http_<status>` fail as transport errors,
    anything else as a Slack rejection.
    """

    def __init__(self, emoji: dict[str, str] | None = None) -> None:
        self.calls: list[dict[str, Any]] = []
        self.reactions: set[tuple[str, str, str]] = set()
        self.emoji: dict[str, str] = dict(emoji or {})
        self.errors: dict[str, str] = {}

    def _fail(self, method: str) -> ProviderResult | None:
        error = self.errors.get(method)
        if error is None:
            return None
        rejected = error not in TRANSPORT_ERRORS and not error.startswith("http_")
        return ProviderResult(
            success=False,
            error=error,
            metadata={"method": method, "rejected": rejected},
        )

    async def post_message(
        self,
        channel: str,
        text: str,
        thread_ts: str | None = None,
    ) -> ProviderResult:
        self.calls.append(
            {"method": "chat.postMessage", "channel": channel, "text": text, "thread_ts": thread_ts}
        )
        if failed := self._fail("chat.postMessage"):
            return failed
        ts = f"{len(self.calls)}.{uuid4().int % 1_000_000:06d}"
        return ProviderResult(
            success=True,
            provider_message_id=ts,
            metadata={"method": "chat.postMessage", "thread_ts": thread_ts or ts},
        )

    async def add_reaction(self, channel: str, timestamp: str, name: str) -> ProviderResult:
        self.calls.append(
            {"method": "reactions.add", "channel": channel, "timestamp": timestamp, "name": name}
        )
        if failed := self._fail("reactions.add"):
            return failed
        key = (channel, timestamp, name)
        if key in self.reactions:
            return ProviderResult(
                success=False,
                error="already_reacted",
                metadata={"method": "reactions.add", "rejected": True},
            )
        self.reactions.add(key)
        return ProviderResult(success=True, metadata={"method": "reactions.add"})

    async def remove_reaction(self, channel: str, timestamp: str, name: str) -> ProviderResult:
        self.calls.append(
            {"method": "reactions.remove", "channel": channel, "timestamp": timestamp, "name": name}
        )
        if failed := self._fail("reactions.remove"):
            return failed
        key = (channel, timestamp, name)
        if key not in self.reactions:
            return ProviderResult(
                success=False,
                error="no_reaction",
                metadata={"method": "reactions.remove", "rejected": True},
            )
        self.reactions.discard(key)
        return ProviderResult(success=True, metadata={"method": "reactions.remove"})

    async def list_emoji(self) -> ProviderResult:
        self.calls.append({"method": "emoji.list"})
        if failed := self._fail("emoji.list"):
            return failed
        return ProviderResult(
            success=True,
            metadata={"method": "emoji.list", "emoji": dict(self.emoji)},
        )

    def calls_to(self, method: str) -> list[dict[str, Any]]:
        """Return the recorded calls to one Web API method."""
        return [call for call in self.calls if call["method"] == method]
