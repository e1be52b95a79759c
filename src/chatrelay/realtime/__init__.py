"""Realtime backends that fan relay events out to the front end."""

from chatrelay.realtime.base import RealtimeBackend, RelayCallback, RelayEvent
from chatrelay.realtime.config import PusherConfig
from chatrelay.realtime.memory import InMemoryRealtime
from chatrelay.realtime.pusher import PusherRealtime

__all__ = [
    "InMemoryRealtime",
    "PusherConfig",
    "PusherRealtime",
    "RealtimeBackend",
    "RelayCallback",
    "RelayEvent",
]
