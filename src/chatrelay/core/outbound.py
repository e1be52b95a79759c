"""Front-end command handling: post messages and toggle reactions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ValidationError, field_validator

from chatrelay.core.errors import (
    ConfigurationError,
    RelayError,
    TransportError,
    error_from_result,
)
from chatrelay.core.publisher import RelayPublisher
from chatrelay.core.reactions import ReactionToggleController
from chatrelay.models.enums import CommandType, ReactionDirection
from chatrelay.providers.slack.base import SlackProvider

logger = logging.getLogger("chatrelay.outbound")

_DIRECTIONS = {
    CommandType.REACTION: ReactionDirection.ADD,
    CommandType.REMOVE_REACTION: ReactionDirection.REMOVE,
}


class PostMessageCommand(BaseModel):
    """``{"message": ..., "thread_ts": ...}`` from the front end."""

    message: str
    thread_ts: str | None = None

    @field_validator("message")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("message must not be empty")
        return v


class ReactionCommand(BaseModel):
    """``{"type": "reaction" | "remove_reaction", "emoji": ..., "thread_ts": ...}``."""

    type: CommandType
    emoji: str
    thread_ts: str

    @field_validator("emoji", "thread_ts")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v


@dataclass
class CommandResponse:
    """HTTP status and JSON body answered to the front end."""

    status: int
    body: dict[str, Any] = field(default_factory=dict)


class OutboundCommandHandler:
    """Forward front-end commands to Slack and report the outcome.

    The front end waits for the answer, so every failure is surfaced:

    * transport failures and Slack rejections of ``chat.postMessage`` -> 500;
    * reaction rejections -> 200 with ``success: false`` (recoverable);
    * reaction transport failures -> 500;
    * missing channel configuration -> 500 before any Slack call;
    * malformed commands -> 400.
    """

    def __init__(
        self,
        provider: SlackProvider,
        controller: ReactionToggleController,
        publisher: RelayPublisher | None,
        channel_id: str | None,
    ) -> None:
        self._provider = provider
        self._controller = controller
        self._publisher = publisher
        self._channel_id = channel_id

    async def handle(self, body: Any) -> CommandResponse:
        if not isinstance(body, dict):
            return CommandResponse(400, {"error": "request body must be a JSON object"})
        try:
            if body.get("type") in _DIRECTIONS:
                return await self._handle_reaction(ReactionCommand.model_validate(body))
            if "message" in body:
                return await self._handle_message(PostMessageCommand.model_validate(body))
        except ValidationError as exc:
            return CommandResponse(400, {"error": _describe(exc)})
        except ConfigurationError as exc:
            logger.error("Rejecting command: %s", exc)
            return CommandResponse(500, {"error": str(exc)})
        return CommandResponse(400, {"error": "unknown command"})

    async def _handle_message(self, command: PostMessageCommand) -> CommandResponse:
        channel = self._require_channel()
        result = await self._provider.post_message(channel, command.message, command.thread_ts)
        if not result.success:
            error = error_from_result(result, "chat.postMessage")
            logger.error("Posting message failed: %s", error)
            return CommandResponse(500, {"error": str(error)})
        ts = result.provider_message_id
        return CommandResponse(
            200,
            {
                "success": True,
                "ts": ts,
                "thread_ts": command.thread_ts or result.metadata.get("thread_ts") or ts,
            },
        )

    async def _handle_reaction(self, command: ReactionCommand) -> CommandResponse:
        self._require_channel()
        result = await self._controller.apply(
            command.thread_ts,
            command.emoji,
            _DIRECTIONS[command.type],
        )
        if not result.success and not result.rejected:
            error = TransportError(result.error or "unknown_error")
            logger.error("Reaction %s failed in transport: %s", result.emoji_name, error)
            return CommandResponse(500, {"error": str(error)})
        if not result.success:
            return CommandResponse(
                200,
                {"success": False, "error": result.error, "emoji": result.emoji_name},
            )

        if self._publisher is not None:
            try:
                await self._publisher.publish_toggle(command.thread_ts, result)
            except RelayError as exc:
                logger.error("Relaying reaction %s failed: %s", result.emoji_name, exc)
                return CommandResponse(500, {"error": str(exc), "action": result.status})

        return CommandResponse(200, {"success": True, "action": result.status})

    def _require_channel(self) -> str:
        if not self._channel_id:
            raise ConfigurationError("SLACK_CHANNEL_ID is not configured")
        return self._channel_id


def _describe(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first.get('msg', 'invalid value')}" if location else str(first["msg"])
