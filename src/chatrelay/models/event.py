"""Normalized relay events."""

from __future__ import annotations

from pydantic import BaseModel, Field

from chatrelay.models.enums import ReactionDirection


class MessageEvent(BaseModel):
    """A chat message on its way to subscribers."""

    text: str
    thread_ts: str
    ts: str = ""
    is_user: bool = False
    user: str | None = None


class ReactionEvent(BaseModel):
    """A reaction delta on a single message."""

    thread_ts: str = Field(..., description="Slack timestamp of the reacted message")
    emoji: str
    direction: ReactionDirection
    user: str | None = None
