"""Provider and reaction result models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from chatrelay.models.enums import ReactionOutcome


class ProviderResult(BaseModel):
    """Result from a Slack Web API call."""

    success: bool
    provider_message_id: str | None = None
    error: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class ToggleResult(BaseModel):
    """Outcome of a reaction command.

    Attributes:
        status: Net toggle outcome, ``None`` when the command failed.
        emoji_name: Slack short name the command resolved to.
        emoji: Display (Unicode) form of the same emoji.
        error: Slack error code or transport error text on failure.
        rejected: True when Slack answered the failing call with an error
            code, False when the call never got a Slack answer.
    """

    status: ReactionOutcome | None = None
    emoji_name: str
    emoji: str
    error: str | None = None
    rejected: bool = False

    @property
    def success(self) -> bool:
        return self.error is None
