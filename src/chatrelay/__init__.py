"""chatrelay - relay Slack channel activity to a realtime web front end."""

from chatrelay._version import __version__
from chatrelay.config import RelaySettings
from chatrelay.core.errors import (
    ChatRelayError,
    ConfigurationError,
    RelayError,
    RemoteRejection,
    TransportError,
)
from chatrelay.core.inbound import InboundWebhookHandler
from chatrelay.core.outbound import CommandResponse, OutboundCommandHandler
from chatrelay.core.publisher import RelayPublisher
from chatrelay.core.reactions import ReactionToggleController
from chatrelay.emoji import (
    CacheEntry,
    EmojiDirectoryCache,
    EmojiNormalizer,
    EmojiTable,
    clean_name,
    normalize,
)
from chatrelay.models import (
    MessageEvent,
    NormalizeTarget,
    ProviderResult,
    ReactionDirection,
    ReactionEvent,
    ReactionOutcome,
    ToggleResult,
)
from chatrelay.providers.slack import (
    MockSlackProvider,
    SlackConfig,
    SlackProvider,
    SlackWebProvider,
    parse_slack_webhook,
)
from chatrelay.realtime import (
    InMemoryRealtime,
    PusherConfig,
    PusherRealtime,
    RealtimeBackend,
    RelayEvent,
)

__all__ = [
    "CacheEntry",
    "ChatRelayError",
    "CommandResponse",
    "ConfigurationError",
    "EmojiDirectoryCache",
    "EmojiNormalizer",
    "EmojiTable",
    "InMemoryRealtime",
    "InboundWebhookHandler",
    "MessageEvent",
    "MockSlackProvider",
    "NormalizeTarget",
    "OutboundCommandHandler",
    "ProviderResult",
    "PusherConfig",
    "PusherRealtime",
    "ReactionDirection",
    "ReactionEvent",
    "ReactionOutcome",
    "ReactionToggleController",
    "RealtimeBackend",
    "RelayError",
    "RelayEvent",
    "RelayPublisher",
    "RelaySettings",
    "RemoteRejection",
    "SlackConfig",
    "SlackProvider",
    "SlackWebProvider",
    "ToggleResult",
    "TransportError",
    "__version__",
    "clean_name",
    "normalize",
    "parse_slack_webhook",
]
