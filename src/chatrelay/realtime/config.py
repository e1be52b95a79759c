"""Pusher Channels configuration."""

from __future__ import annotations

from pydantic import BaseModel, SecretStr


class PusherConfig(BaseModel):
    """Pusher Channels HTTP API configuration."""

    app_id: str
    key: str
    secret: SecretStr
    cluster: str = "mt1"
    timeout: float = 30.0

    @property
    def base_url(self) -> str:
        return f"https://api-{self.cluster}.pusher.com"

    @property
    def events_path(self) -> str:
        return f"/apps/{self.app_id}/events"
