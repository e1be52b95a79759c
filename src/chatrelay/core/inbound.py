"""Slack Events API webhook handling."""

from __future__ import annotations

import logging
from typing import Any

from chatrelay.core.publisher import RelayPublisher
from chatrelay.models.event import MessageEvent
from chatrelay.providers.slack.webhook import is_url_verification, parse_slack_webhook

logger = logging.getLogger("chatrelay.inbound")

ACK: dict[str, Any] = {"ok": True}


class InboundWebhookHandler:
    """Relay Slack channel activity to subscribers.

    Slack only needs a timely acknowledgement, so every relay failure is
    logged and swallowed: :meth:`handle` always answers ``{"ok": true}``
    (or the ``challenge`` during URL verification).
    """

    def __init__(
        self,
        publisher: RelayPublisher,
        channel_id: str | None,
        *,
        bot_user_id: str | None = None,
    ) -> None:
        self._publisher = publisher
        self._channel_id = channel_id
        self._bot_user_id = bot_user_id

    async def handle(self, payload: dict[str, Any]) -> dict[str, Any]:
        if is_url_verification(payload):
            return {"challenge": payload.get("challenge")}

        if not self._channel_id:
            logger.warning("SLACK_CHANNEL_ID is not configured; ignoring Slack event")
            return dict(ACK)

        try:
            event = parse_slack_webhook(
                payload,
                self._channel_id,
                bot_user_id=self._bot_user_id,
            )
            if event is None:
                logger.debug("Ignoring Slack event %s", (payload.get("event") or {}).get("type"))
            elif isinstance(event, MessageEvent):
                await self._publisher.publish_message(event)
            else:
                await self._publisher.publish_reaction(event)
        except Exception:
            logger.exception(
                "Failed to relay Slack event",
                extra={"event_id": payload.get("event_id")},
            )
        return dict(ACK)
