"""Tests for realtime backends."""

from __future__ import annotations

import asyncio
import logging

import pytest

from chatrelay import InMemoryRealtime, RealtimeBackend, RelayEvent, RelayPublisher


class _PublishOnly(RealtimeBackend):
    async def publish(self, channel: str, event: RelayEvent) -> None:
        return None


async def _settle() -> None:
    await asyncio.sleep(0.01)


class TestRelayEvent:
    def test_dict_round_trip(self) -> None:
        event = RelayEvent(name="reaction", data={"emoji": "👍", "thread_ts": "1.0"})
        restored = RelayEvent.from_dict(event.to_dict())
        assert restored == event

    def test_serialized_timestamp_is_iso(self) -> None:
        event = RelayEvent(name="message")
        assert event.to_dict()["timestamp"] == event.timestamp.isoformat()
        assert event.id
        assert event.data == {}


class TestRealtimeBackend:
    async def test_subscriptions_optional(self) -> None:
        backend = _PublishOnly()

        async def on_event(event: RelayEvent) -> None:
            pass

        with pytest.raises(NotImplementedError, match="_PublishOnly"):
            await backend.subscribe("ch", on_event)
        with pytest.raises(NotImplementedError):
            await backend.unsubscribe("sub")
        await backend.close()


class TestInMemoryRealtime:
    async def test_front_end_receives_published_events(self) -> None:
        backend = InMemoryRealtime()
        seen: list[str] = []

        async def on_event(event: RelayEvent) -> None:
            seen.append(f"{event.name}:{event.data.get('emoji', '')}")

        await backend.subscribe("pushrefresh-chat", on_event)
        publisher = RelayPublisher(backend)
        await publisher.publish("pushrefresh-chat", "reaction", {"emoji": "🎉"})
        await publisher.publish("pushrefresh-chat", "reaction_removed", {"emoji": "🎉"})
        await _settle()

        assert seen == ["reaction:🎉", "reaction_removed:🎉"]
        await backend.close()

    async def test_channels_are_isolated(self) -> None:
        backend = InMemoryRealtime()
        room_a: list[RelayEvent] = []
        room_b: list[RelayEvent] = []

        async def on_a(event: RelayEvent) -> None:
            room_a.append(event)

        async def on_b(event: RelayEvent) -> None:
            room_b.append(event)

        await backend.subscribe("a", on_a)
        await backend.subscribe("b", on_b)
        await backend.publish("a", RelayEvent(name="message"))
        await _settle()

        assert len(room_a) == 1
        assert room_b == []
        assert [e.name for e in backend.events("a")] == ["message"]
        assert backend.events("b") == []
        await backend.close()

    async def test_unsubscribed_callback_not_called(self) -> None:
        backend = InMemoryRealtime()
        calls = 0

        async def on_event(event: RelayEvent) -> None:
            nonlocal calls
            calls += 1

        sub_id = await backend.subscribe("ch", on_event)
        assert backend.subscription_count == 1
        assert await backend.unsubscribe(sub_id) is True
        assert await backend.unsubscribe(sub_id) is False

        await backend.publish("ch", RelayEvent(name="message"))
        await _settle()

        assert calls == 0
        assert backend.subscription_count == 0
        assert len(backend.published) == 1
        await backend.close()

    async def test_slow_subscriber_drops_oldest(self) -> None:
        backend = InMemoryRealtime(max_queue_size=2)
        delivered: list[int] = []
        release = asyncio.Event()

        async def on_event(event: RelayEvent) -> None:
            await release.wait()
            delivered.append(event.data["seq"])

        await backend.subscribe("ch", on_event)
        for seq in range(3):
            await backend.publish("ch", RelayEvent(name="message", data={"seq": seq}))
        release.set()
        await asyncio.sleep(0.05)

        assert delivered == [1, 2]
        assert [e.data["seq"] for e in backend.events()] == [1, 2]
        await backend.close()

    async def test_failing_callback_is_logged_and_survives(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        backend = InMemoryRealtime()
        delivered: list[str] = []

        async def on_event(event: RelayEvent) -> None:
            if event.name == "message":
                raise RuntimeError("render failed")
            delivered.append(event.name)

        await backend.subscribe("ch", on_event)
        with caplog.at_level(logging.ERROR, logger="chatrelay.realtime"):
            await backend.publish("ch", RelayEvent(name="message"))
            await _settle()
            await backend.publish("ch", RelayEvent(name="reaction"))
            await _settle()

        assert delivered == ["reaction"]
        assert "Realtime callback failed" in caplog.text
        await backend.close()

    async def test_publish_after_close_is_ignored(self) -> None:
        backend = InMemoryRealtime()

        async def on_event(event: RelayEvent) -> None:
            pass

        await backend.subscribe("ch", on_event)
        await backend.close()

        await backend.publish("ch", RelayEvent(name="message"))
        assert backend.subscription_count == 0
        assert backend.events() == []
