"""All string enums for chatrelay."""

from __future__ import annotations

from enum import StrEnum, unique


@unique
class NormalizeTarget(StrEnum):
    """Which side of the relay an emoji token is being prepared for."""

    API = "api"
    DISPLAY = "display"


@unique
class ReactionDirection(StrEnum):
    ADD = "add"
    REMOVE = "remove"


@unique
class ReactionState(StrEnum):
    """Remote state of one (message, emoji) pair as observed through Slack."""

    UNSET = "unset"
    SET = "set"


@unique
class ReactionOutcome(StrEnum):
    """Net effect of a reaction command after reconciling with remote state."""

    ADDED = "added"
    REMOVED = "removed"
    ALREADY_REMOVED = "alreadyRemoved"


@unique
class RelayEventName(StrEnum):
    MESSAGE = "message"
    REACTION = "reaction"
    REACTION_REMOVED = "reaction_removed"


@unique
class CommandType(StrEnum):
    REACTION = "reaction"
    REMOVE_REACTION = "remove_reaction"
