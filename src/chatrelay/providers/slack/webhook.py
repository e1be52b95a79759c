"""Slack Events API parsing helpers."""

from __future__ import annotations

from typing import Any

from chatrelay.models.enums import ReactionDirection
from chatrelay.models.event import MessageEvent, ReactionEvent

# Message subtypes that are edits, deletions or membership notices rather
# than new conversational messages.
IGNORED_MESSAGE_SUBTYPES = frozenset(
    {
        "bot_message",
        "channel_join",
        "channel_leave",
        "message_changed",
        "message_deleted",
        "message_replied",
    }
)

_REACTION_DIRECTIONS = {
    "reaction_added": ReactionDirection.ADD,
    "reaction_removed": ReactionDirection.REMOVE,
}


def is_url_verification(payload: dict[str, Any]) -> bool:
    """Return True for the Events API ``url_verification`` handshake."""
    return payload.get("type") == "url_verification"


def parse_slack_webhook(
    payload: dict[str, Any],
    channel_id: str,
    *,
    bot_user_id: str | None = None,
) -> MessageEvent | ReactionEvent | None:
    """Convert a Slack ``event_callback`` payload into a relay event.

    Only events that belong to *channel_id* are returned:

    * ``message`` events without ``bot_id`` and without an ignored subtype;
    * ``reaction_added`` / ``reaction_removed`` on a message item, except
      reactions made by *bot_user_id* (those originate from the relay).

    Everything else yields ``None``.
    """
    event = payload.get("event")
    if not isinstance(event, dict):
        return None
    event_type = event.get("type")

    if event_type == "message":
        if event.get("bot_id") or event.get("subtype") in IGNORED_MESSAGE_SUBTYPES:
            return None
        if event.get("channel") != channel_id:
            return None
        ts = str(event.get("ts", ""))
        return MessageEvent(
            text=event.get("text", ""),
            thread_ts=str(event.get("thread_ts") or ts),
            ts=ts,
            is_user=False,
            user=event.get("user"),
        )

    direction = _REACTION_DIRECTIONS.get(event_type or "")
    if direction is None:
        return None
    item = event.get("item") or {}
    if item.get("type", "message") != "message" or item.get("channel") != channel_id:
        return None
    if bot_user_id and event.get("user") == bot_user_id:
        return None
    reaction = event.get("reaction")
    if not reaction:
        return None
    return ReactionEvent(
        thread_ts=str(item.get("ts", "")),
        emoji=reaction,
        direction=direction,
        user=event.get("user"),
    )
