"""Tests for the relay publisher."""

from __future__ import annotations

import pytest

from chatrelay.core.errors import RelayError
from chatrelay.core.publisher import DEFAULT_CHANNEL, DEFAULT_DISPLAY_NAME, RelayPublisher
from chatrelay.emoji.directory import EmojiDirectoryCache
from chatrelay.models.delivery import ToggleResult
from chatrelay.models.enums import ReactionDirection, ReactionOutcome
from chatrelay.models.event import MessageEvent, ReactionEvent
from chatrelay.providers.slack.mock import MockSlackProvider
from chatrelay.realtime.base import RealtimeBackend, RelayEvent
from chatrelay.realtime.memory import InMemoryRealtime


class _BrokenBackend(RealtimeBackend):
    async def publish(self, channel: str, event: RelayEvent) -> None:
        raise ConnectionError("socket closed")


class _RejectingBackend(RealtimeBackend):
    async def publish(self, channel: str, event: RelayEvent) -> None:
        raise RelayError("pusher rejected 'message': http_413")


@pytest.fixture
def publisher(backend: InMemoryRealtime, directory: EmojiDirectoryCache) -> RelayPublisher:
    return RelayPublisher(backend, directory)


class TestPublishMessage:
    async def test_message_payload(
        self, backend: InMemoryRealtime, publisher: RelayPublisher
    ) -> None:
        await publisher.publish_message(MessageEvent(text="hello", thread_ts="100.1", ts="100.1"))

        [event] = backend.events(DEFAULT_CHANNEL)
        assert event.name == "message"
        assert event.data == {
            "text": "hello",
            "user": DEFAULT_DISPLAY_NAME,
            "isUser": False,
            "thread_ts": "100.1",
            "ts": "100.1",
        }

    async def test_reply_keeps_parent_thread(
        self, backend: InMemoryRealtime, publisher: RelayPublisher
    ) -> None:
        await publisher.publish_message(
            MessageEvent(text="reply", thread_ts="100.1", ts="100.9")
        )

        [event] = backend.events()
        assert event.data["thread_ts"] == "100.1"
        assert event.data["ts"] == "100.9"

    async def test_shortcodes_substituted(
        self, backend: InMemoryRealtime, publisher: RelayPublisher
    ) -> None:
        await publisher.publish_message(MessageEvent(text="nice :thumbsup:", thread_ts="1.0"))

        [event] = backend.events()
        assert event.data["text"] == "nice 👍"
        assert "custom_emoji" not in event.data

    async def test_custom_emoji_attached(
        self,
        slack: MockSlackProvider,
        backend: InMemoryRealtime,
        publisher: RelayPublisher,
    ) -> None:
        slack.emoji = {"partyparrot": "https://x/p.gif", "shipit": "alias:rocket"}
        await publisher.publish_message(
            MessageEvent(text=":partyparrot: :shipit:", thread_ts="1.0")
        )

        [event] = backend.events()
        assert event.data["text"] == ":partyparrot: 🚀"
        assert event.data["custom_emoji"] == {"partyparrot": "https://x/p.gif"}

    async def test_without_directory(self, backend: InMemoryRealtime) -> None:
        publisher = RelayPublisher(backend, channel="room", display_name="Bot")
        await publisher.publish_message(MessageEvent(text=":fire:", thread_ts="1.0"))

        [event] = backend.events("room")
        assert event.data["text"] == "🔥"
        assert event.data["user"] == "Bot"


class TestPublishReaction:
    async def test_reaction_added(
        self, backend: InMemoryRealtime, publisher: RelayPublisher
    ) -> None:
        await publisher.publish_reaction(
            ReactionEvent(thread_ts="100.1", emoji="thumbsup", direction=ReactionDirection.ADD)
        )

        [event] = backend.events()
        assert event.name == "reaction"
        assert event.data == {"emoji": "👍", "count": 1, "thread_ts": "100.1"}

    async def test_reaction_removed(
        self, backend: InMemoryRealtime, publisher: RelayPublisher
    ) -> None:
        await publisher.publish_reaction(
            ReactionEvent(thread_ts="100.1", emoji="heart_2", direction=ReactionDirection.REMOVE)
        )

        [event] = backend.events()
        assert event.name == "reaction_removed"
        assert event.data == {"emoji": "❤️", "thread_ts": "100.1"}

    async def test_unknown_emoji_passes_through(
        self, backend: InMemoryRealtime, publisher: RelayPublisher
    ) -> None:
        await publisher.publish_reaction(
            ReactionEvent(thread_ts="1.0", emoji="partyparrot", direction=ReactionDirection.ADD)
        )
        assert backend.events()[0].data["emoji"] == "partyparrot"


class TestPublishToggle:
    @pytest.mark.parametrize(
        ("status", "expected"),
        [
            (ReactionOutcome.ADDED, ["reaction"]),
            (ReactionOutcome.REMOVED, ["reaction_removed"]),
            (ReactionOutcome.ALREADY_REMOVED, []),
        ],
    )
    async def test_toggle_outcomes(
        self,
        backend: InMemoryRealtime,
        publisher: RelayPublisher,
        status: ReactionOutcome,
        expected: list[str],
    ) -> None:
        result = ToggleResult(status=status, emoji_name="thumbsup", emoji="👍")
        await publisher.publish_toggle("100.1", result)
        assert [event.name for event in backend.events()] == expected


class TestPublishFailures:
    async def test_backend_exception_wrapped(self) -> None:
        publisher = RelayPublisher(_BrokenBackend())
        with pytest.raises(RelayError, match="socket closed"):
            await publisher.publish("room", "message", {"text": "x"})

    async def test_relay_error_propagates(self) -> None:
        publisher = RelayPublisher(_RejectingBackend())
        with pytest.raises(RelayError, match="http_413"):
            await publisher.publish_message(MessageEvent(text="x", thread_ts="1.0"))
