"""Exception hierarchy for chatrelay."""

from __future__ import annotations

from chatrelay.models.delivery import ProviderResult


class ChatRelayError(Exception):
    """Base exception for all chatrelay errors."""


class ConfigurationError(ChatRelayError):
    """A required configuration value is missing or invalid."""


class TransportError(ChatRelayError):
    """A remote API was unreachable or answered with a malformed response."""


class RemoteRejection(ChatRelayError):
    """Slack answered with a structured error code.

    Attributes:
        code: The Slack error code (e.g. ``"already_reacted"``).
        method: The Web API method that was rejected.
    """

    def __init__(self, code: str, *, method: str = "") -> None:
        super().__init__(f"{method or 'slack'} rejected: {code}")
        self.code = code
        self.method = method


class RelayError(ChatRelayError):
    """Publishing an event to the realtime channel failed."""


def error_from_result(result: ProviderResult, method: str = "") -> ChatRelayError:
    """Map a failed provider result onto the error taxonomy.

    Slack-level rejections (``ok: false``) become :class:`RemoteRejection`;
    everything else (timeouts, HTTP status errors, connection failures)
    becomes :class:`TransportError`.
    """
    code = result.error or "unknown_error"
    if result.metadata.get("rejected"):
        return RemoteRejection(code, method=method)
    return TransportError(code)
