"""Abstract base class for Slack providers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from chatrelay.models.delivery import ProviderResult


class SlackProvider(ABC):
    """Slack Web API client used by the relay.

    Implementations never raise for remote failures: every call returns a
    :class:`ProviderResult`.  Slack-level rejections (``ok: false``) carry
    the Slack error code in ``error`` and ``metadata["rejected"] = True``.
    """

    @property
    def name(self) -> str:
        """Provider name."""
        return self.__class__.__name__

    @abstractmethod
    async def post_message(
        self,
        channel: str,
        text: str,
        thread_ts: str | None = None,
    ) -> ProviderResult:
        """Post a message with ``chat.postMessage``.

        Args:
            channel: Slack channel ID.
            text: Message text (Slack mrkdwn).
            thread_ts: Parent message timestamp when replying in a thread.

        Returns:
            Result whose ``provider_message_id`` is the new message ``ts``.
        """
        ...

    @abstractmethod
    async def add_reaction(self, channel: str, timestamp: str, name: str) -> ProviderResult:
        """Add a reaction with ``reactions.add``."""
        ...

    @abstractmethod
    async def remove_reaction(self, channel: str, timestamp: str, name: str) -> ProviderResult:
        """Remove a reaction with ``reactions.remove``."""
        ...

    @abstractmethod
    async def list_emoji(self) -> ProviderResult:
        """Fetch the workspace custom emoji with ``emoji.list``.

        Returns:
            Result whose ``metadata["emoji"]`` maps custom emoji names to an
            image URL or an ``alias:<name>`` marker.
        """
        ...

    def verify_signature(
        self,
        payload: bytes,
        signature: str,
        timestamp: str,
    ) -> bool:
        """Verify that a webhook request was sent by Slack.

        Args:
            payload: Raw request body bytes.
            signature: Value of the ``X-Slack-Signature`` header.
            timestamp: Value of the ``X-Slack-Request-Timestamp`` header.

        Returns:
            True if the signature matches the configured signing secret.

        Raises:
            NotImplementedError: If the provider does not support signature
                verification.
        """
        raise NotImplementedError(f"{self.name} does not support webhook signature verification")

    async def close(self) -> None:  # noqa: B027
        """Release resources. Override in subclasses that hold connections."""
