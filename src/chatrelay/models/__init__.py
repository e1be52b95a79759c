"""Data models for chatrelay."""

from chatrelay.models.delivery import ProviderResult, ToggleResult
from chatrelay.models.enums import (
    CommandType,
    NormalizeTarget,
    ReactionDirection,
    ReactionOutcome,
    ReactionState,
    RelayEventName,
)
from chatrelay.models.event import MessageEvent, ReactionEvent

__all__ = [
    "CommandType",
    "MessageEvent",
    "NormalizeTarget",
    "ProviderResult",
    "ReactionDirection",
    "ReactionEvent",
    "ReactionOutcome",
    "ReactionState",
    "RelayEventName",
    "ToggleResult",
]
