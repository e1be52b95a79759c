"""Slack Web API provider configuration."""

from __future__ import annotations

from pydantic import BaseModel, SecretStr


class SlackConfig(BaseModel):
    """Slack Web API provider configuration."""

    bot_token: SecretStr
    signing_secret: SecretStr | None = None
    timeout: float = 30.0
    api_url: str = "https://slack.com/api"

    def method_url(self, method: str) -> str:
        return f"{self.api_url.rstrip('/')}/{method}"
