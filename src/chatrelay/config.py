"""Relay settings loaded from the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from chatrelay.core.errors import ConfigurationError
from chatrelay.core.publisher import DEFAULT_CHANNEL, DEFAULT_DISPLAY_NAME
from chatrelay.emoji.directory import DEFAULT_TTL
from chatrelay.providers.slack.config import SlackConfig
from chatrelay.realtime.config import PusherConfig

_PUSHER_VARS = ("PUSHER_APP_ID", "PUSHER_KEY", "PUSHER_SECRET")


class RelaySettings(BaseModel):
    """Everything the relay needs at request time.

    ``channel_id`` may be missing at load time; requests that need it are
    answered with a configuration error instead.  Without Pusher credentials
    events are published to an in-process backend (local development).
    """

    slack: SlackConfig
    pusher: PusherConfig | None = None
    channel_id: str | None = None
    bot_user_id: str | None = None
    pusher_channel: str = DEFAULT_CHANNEL
    bot_display_name: str = DEFAULT_DISPLAY_NAME
    emoji_cache_ttl: float = Field(default=DEFAULT_TTL, gt=0)
    allowed_origin: str | None = None
    host: str = "0.0.0.0"  # noqa: S104  # nosec B104
    port: int = Field(default=3000, ge=1, le=65535)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> RelaySettings:
        """Build settings from environment variables.

        Raises:
            ConfigurationError: If ``SLACK_BOT_TOKEN`` is missing, Pusher
                credentials are only partially set, or a value is invalid.
        """
        env = os.environ if environ is None else environ

        token = env.get("SLACK_BOT_TOKEN", "")
        if not token:
            raise ConfigurationError("SLACK_BOT_TOKEN is not set")

        present = [name for name in _PUSHER_VARS if env.get(name)]
        if present and len(present) != len(_PUSHER_VARS):
            missing = sorted(set(_PUSHER_VARS) - set(present))
            raise ConfigurationError(f"incomplete Pusher configuration, missing {missing}")

        values: dict[str, Any] = {
            "slack": {
                "bot_token": token,
                "signing_secret": env.get("SLACK_SIGNING_SECRET") or None,
            },
            "channel_id": env.get("SLACK_CHANNEL_ID") or None,
            "bot_user_id": env.get("SLACK_BOT_USER_ID") or None,
            "allowed_origin": env.get("CHATRELAY_ALLOWED_ORIGIN") or None,
        }
        if present:
            values["pusher"] = {
                "app_id": env["PUSHER_APP_ID"],
                "key": env["PUSHER_KEY"],
                "secret": env["PUSHER_SECRET"],
                "cluster": env.get("PUSHER_CLUSTER") or "mt1",
            }
        optional = {
            "CHATRELAY_PUSHER_CHANNEL": "pusher_channel",
            "CHATRELAY_DISPLAY_NAME": "bot_display_name",
            "CHATRELAY_EMOJI_CACHE_TTL": "emoji_cache_ttl",
            "CHATRELAY_HOST": "host",
            "CHATRELAY_PORT": "port",
        }
        for var, field_name in optional.items():
            if env.get(var):
                values[field_name] = env[var]

        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            raise ConfigurationError(str(exc)) from exc
