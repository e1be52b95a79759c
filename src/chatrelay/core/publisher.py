"""Republish normalized chat activity on the realtime channel."""

from __future__ import annotations

import logging
from typing import Any

from chatrelay.core.errors import RelayError
from chatrelay.emoji.directory import EmojiDirectoryCache
from chatrelay.emoji.normalizer import EmojiNormalizer
from chatrelay.models.delivery import ToggleResult
from chatrelay.models.enums import ReactionDirection, ReactionOutcome, RelayEventName
from chatrelay.models.event import MessageEvent, ReactionEvent
from chatrelay.realtime.base import RealtimeBackend, RelayEvent

logger = logging.getLogger("chatrelay.relay")

DEFAULT_CHANNEL = "pushrefresh-chat"
DEFAULT_DISPLAY_NAME = "Rossi - Push Refresh"


class RelayPublisher:
    """Publish ``message``, ``reaction`` and ``reaction_removed`` events.

    Emoji reach subscribers in display (Unicode) form: reaction names go
    through the normalizer, and ``:name:`` shortcodes in message text are
    substituted using the custom emoji directory, then the builtin table.
    """

    def __init__(
        self,
        backend: RealtimeBackend,
        directory: EmojiDirectoryCache | None = None,
        *,
        channel: str = DEFAULT_CHANNEL,
        display_name: str = DEFAULT_DISPLAY_NAME,
        normalizer: EmojiNormalizer | None = None,
    ) -> None:
        self._backend = backend
        self._directory = directory
        self._channel = channel
        self._display_name = display_name
        self._normalizer = normalizer or EmojiNormalizer()

    @property
    def channel(self) -> str:
        return self._channel

    async def publish(self, channel: str, event_name: str, payload: dict[str, Any]) -> None:
        """Publish one event and wait for the backend to accept it.

        Raises:
            RelayError: If the backend failed to publish.
        """
        event = RelayEvent(name=str(event_name), data=payload)
        try:
            await self._backend.publish(channel, event)
        except RelayError:
            raise
        except Exception as exc:
            raise RelayError(f"failed to publish {event_name!r} to {channel}: {exc}") from exc
        logger.debug("Relayed %s on %s", event_name, channel, extra={"event_id": event.id})

    async def publish_message(self, message: MessageEvent) -> None:
        directory = await self._directory.get() if self._directory is not None else None
        text, custom = self._normalizer.replace_shortcodes(message.text, directory)
        payload: dict[str, Any] = {
            "text": text,
            "user": self._display_name if not message.is_user else (message.user or ""),
            "isUser": message.is_user,
            "thread_ts": message.thread_ts,
            "ts": message.ts or message.thread_ts,
        }
        if custom:
            payload["custom_emoji"] = custom
        await self.publish(self._channel, RelayEventName.MESSAGE, payload)

    async def publish_reaction(self, reaction: ReactionEvent) -> None:
        emoji = self._normalizer.to_display(reaction.emoji)
        if reaction.direction is ReactionDirection.ADD:
            await self.publish(
                self._channel,
                RelayEventName.REACTION,
                {"emoji": emoji, "count": 1, "thread_ts": reaction.thread_ts},
            )
        else:
            await self.publish(
                self._channel,
                RelayEventName.REACTION_REMOVED,
                {"emoji": emoji, "thread_ts": reaction.thread_ts},
            )

    async def publish_toggle(self, thread_ts: str, result: ToggleResult) -> None:
        """Publish the net effect of a front-end reaction command."""
        if result.status is ReactionOutcome.ADDED:
            direction = ReactionDirection.ADD
        elif result.status is ReactionOutcome.REMOVED:
            direction = ReactionDirection.REMOVE
        else:
            return
        await self.publish_reaction(
            ReactionEvent(thread_ts=thread_ts, emoji=result.emoji_name, direction=direction)
        )
