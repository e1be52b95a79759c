"""Run the relay pipeline locally without Slack or Pusher credentials.

Demonstrates the relay wired with the mock Slack provider and the in-memory
realtime backend. Shows:
- Slack webhook payloads turned into ``message`` / ``reaction`` events
- Front-end reaction commands toggling a reaction on and off
- Custom workspace emoji attached to relayed messages

Run with:
    uv run python examples/local_relay.py
"""

from __future__ import annotations

import asyncio

from chatrelay import (
    InboundWebhookHandler,
    InMemoryRealtime,
    MockSlackProvider,
    OutboundCommandHandler,
    ReactionToggleController,
    RelayEvent,
    RelayPublisher,
)
from chatrelay.emoji import EmojiDirectoryCache

CHANNEL_ID = "C0LOCAL"


async def main() -> None:
    slack = MockSlackProvider(emoji={"partyparrot": "https://example.com/partyparrot.gif"})
    backend = InMemoryRealtime()
    publisher = RelayPublisher(backend, EmojiDirectoryCache(slack))

    inbound = InboundWebhookHandler(publisher, CHANNEL_ID)
    outbound = OutboundCommandHandler(
        slack,
        ReactionToggleController(slack, CHANNEL_ID),
        publisher,
        CHANNEL_ID,
    )

    # --- Subscribe like a front end would ---
    async def on_event(event: RelayEvent) -> None:
        print(f"  [{publisher.channel}] {event.name}: {event.data}")

    sub_id = await backend.subscribe(publisher.channel, on_event)

    print("Slack -> front end:")
    await inbound.handle(
        {
            "type": "event_callback",
            "event": {
                "type": "message",
                "channel": CHANNEL_ID,
                "user": "U1",
                "text": "shipped :rocket: :partyparrot:",
                "ts": "1700000000.000100",
            },
        }
    )
    await inbound.handle(
        {
            "type": "event_callback",
            "event": {
                "type": "reaction_added",
                "user": "U2",
                "reaction": "thumbsup",
                "item": {"type": "message", "channel": CHANNEL_ID, "ts": "1700000000.000100"},
            },
        }
    )
    await asyncio.sleep(0.01)

    print("\nFront end -> Slack:")
    command = {"type": "reaction", "emoji": "🎉", "thread_ts": "1700000000.000100"}
    for _ in range(2):
        response = await outbound.handle(command)
        print(f"  {response.status} {response.body}")
    response = await outbound.handle({"message": "hello from the web", "thread_ts": None})
    print(f"  {response.status} {response.body}")
    await asyncio.sleep(0.01)

    print("\nSlack calls:")
    for call in slack.calls:
        print(f"  {call}")

    await backend.unsubscribe(sub_id)
    await backend.close()


if __name__ == "__main__":
    asyncio.run(main())
