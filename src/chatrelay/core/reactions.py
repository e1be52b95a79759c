"""Click-to-toggle reactions reconciled against Slack's own state."""

from __future__ import annotations

import logging

from chatrelay.core.errors import ConfigurationError
from chatrelay.emoji.normalizer import EmojiNormalizer
from chatrelay.models.delivery import ProviderResult, ToggleResult
from chatrelay.models.enums import ReactionDirection, ReactionOutcome, ReactionState
from chatrelay.providers.slack.base import SlackProvider

logger = logging.getLogger("chatrelay.reactions")

ALREADY_REACTED = "already_reacted"
NO_REACTION = "no_reaction"

# A rejection that reveals the remote state of the (message, emoji) pair.
_REJECTION_STATE: dict[tuple[ReactionDirection, str], ReactionState] = {
    (ReactionDirection.ADD, ALREADY_REACTED): ReactionState.SET,
    (ReactionDirection.REMOVE, NO_REACTION): ReactionState.UNSET,
}

_SUCCESS_OUTCOME = {
    ReactionDirection.ADD: ReactionOutcome.ADDED,
    ReactionDirection.REMOVE: ReactionOutcome.REMOVED,
}


class ReactionToggleController:
    """Apply reaction commands as a two-state machine per (message, emoji).

    No local state is kept; Slack's answer tells which state the pair was
    in.  Transitions:

    * ``add`` from ``Unset``: ``reactions.add`` succeeds -> ``added``.
    * ``add`` from ``Set``: ``reactions.add`` answers ``already_reacted``;
      the command toggles with one ``reactions.remove`` -> ``removed``.
    * ``remove`` from ``Set``: ``reactions.remove`` succeeds -> ``removed``.
    * ``remove`` from ``Unset``: ``reactions.remove`` answers
      ``no_reaction`` -> ``alreadyRemoved``.

    Any other failure is returned as an error result carrying the error code,
    the resolved short name and whether Slack itself rejected the call.  Nothing is retried except the single
    toggle call above.
    """

    def __init__(
        self,
        provider: SlackProvider,
        channel_id: str | None,
        *,
        normalizer: EmojiNormalizer | None = None,
    ) -> None:
        self._provider = provider
        self._channel_id = channel_id
        self._normalizer = normalizer or EmojiNormalizer()

    async def apply(
        self,
        thread_ts: str,
        emoji: str,
        direction: ReactionDirection | str,
    ) -> ToggleResult:
        """Add or remove *emoji* on the message *thread_ts*.

        Raises:
            ConfigurationError: If no Slack channel is configured.
        """
        if not self._channel_id:
            raise ConfigurationError("SLACK_CHANNEL_ID is not configured")

        direction = ReactionDirection(direction)
        name = self._normalizer.to_api(emoji)
        display = self._normalizer.to_display(name)

        result = await self._call(direction, thread_ts, name)
        if result.success:
            return self._settled(_SUCCESS_OUTCOME[direction], name, display)

        state = _REJECTION_STATE.get((direction, result.error or ""))
        if state is ReactionState.UNSET:
            return self._settled(ReactionOutcome.ALREADY_REMOVED, name, display)
        if state is ReactionState.SET:
            return await self._toggle_off(thread_ts, name, display)

        return self._failed(direction, result, name, display)

    async def _toggle_off(self, thread_ts: str, name: str, display: str) -> ToggleResult:
        logger.debug("Reaction %s already set on %s, toggling off", name, thread_ts)
        result = await self._call(ReactionDirection.REMOVE, thread_ts, name)
        if result.success:
            return self._settled(ReactionOutcome.REMOVED, name, display)
        if result.error == NO_REACTION:
            # Removed by someone else between the two calls.
            return self._settled(ReactionOutcome.ALREADY_REMOVED, name, display)
        return self._failed(ReactionDirection.REMOVE, result, name, display)

    async def _call(
        self,
        direction: ReactionDirection,
        thread_ts: str,
        name: str,
    ) -> ProviderResult:
        assert self._channel_id is not None
        if direction is ReactionDirection.ADD:
            return await self._provider.add_reaction(self._channel_id, thread_ts, name)
        return await self._provider.remove_reaction(self._channel_id, thread_ts, name)

    @staticmethod
    def _settled(outcome: ReactionOutcome, name: str, display: str) -> ToggleResult:
        return ToggleResult(status=outcome, emoji_name=name, emoji=display)

    @staticmethod
    def _failed(
        direction: ReactionDirection,
        result: ProviderResult,
        name: str,
        display: str,
    ) -> ToggleResult:
        error = result.error or "unknown_error"
        logger.warning(
            "Reaction %s of %s failed: %s",
            direction.value,
            name,
            error,
            extra={"emoji_name": name, "error": error},
        )
        return ToggleResult(
            emoji_name=name,
            emoji=display,
            error=error,
            rejected=bool(result.metadata.get("rejected")),
        )
