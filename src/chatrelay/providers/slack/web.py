"""Slack provider backed by the Slack Web API."""

from __future__ import annotations

import hashlib
import hmac
import logging
import time
from collections.abc import Callable
from typing import Any

import httpx

from chatrelay.models.delivery import ProviderResult
from chatrelay.providers.slack.base import SlackProvider
from chatrelay.providers.slack.config import SlackConfig

logger = logging.getLogger("chatrelay.providers.slack")

# Slack rejects replayed requests older than five minutes.
SIGNATURE_MAX_AGE = 60 * 5


class SlackWebProvider(SlackProvider):
    """Call the Slack Web API over HTTPS with a bot token."""

    def __init__(
        self,
        config: SlackConfig,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._config = config
        self._clock = clock
        self._client: httpx.AsyncClient = httpx.AsyncClient(timeout=config.timeout)

    async def post_message(
        self,
        channel: str,
        text: str,
        thread_ts: str | None = None,
    ) -> ProviderResult:
        if not text:
            return ProviderResult(success=False, error="empty_message")
        payload: dict[str, Any] = {"channel": channel, "text": text}
        if thread_ts:
            payload["thread_ts"] = thread_ts
        result = await self._api_call("chat.postMessage", payload)
        if result.success:
            result.metadata.setdefault("thread_ts", thread_ts or result.provider_message_id)
        return result

    async def add_reaction(self, channel: str, timestamp: str, name: str) -> ProviderResult:
        return await self._api_call(
            "reactions.add",
            {"channel": channel, "timestamp": timestamp, "name": name},
        )

    async def remove_reaction(self, channel: str, timestamp: str, name: str) -> ProviderResult:
        return await self._api_call(
            "reactions.remove",
            {"channel": channel, "timestamp": timestamp, "name": name},
        )

    async def list_emoji(self) -> ProviderResult:
        return await self._api_call("emoji.list", None)

    async def _api_call(self, method: str, payload: dict[str, Any] | None) -> ProviderResult:
        url = self._config.method_url(method)
        headers = {
            "Authorization": f"Bearer {self._config.bot_token.get_secret_value()}",
        }
        try:
            if payload is None:
                resp = await self._client.get(url, headers=headers)
            else:
                resp = await self._client.post(url, json=payload, headers=headers)
            resp.raise_for_status()
            data: dict[str, Any] = resp.json()
        except httpx.TimeoutException:
            return ProviderResult(success=False, error="timeout", metadata={"method": method})
        except httpx.HTTPStatusError as exc:
            return self._parse_error(method, exc)
        except httpx.HTTPError as exc:
            return ProviderResult(success=False, error=str(exc), metadata={"method": method})
        except ValueError:
            return ProviderResult(
                success=False,
                error="invalid_response",
                metadata={"method": method},
            )

        if not data.get("ok", False):
            error = data.get("error", "unknown_error")
            logger.debug("Slack %s rejected: %s", method, error)
            return ProviderResult(
                success=False,
                error=error,
                metadata={"method": method, "rejected": True},
            )
        return self._parse_response(method, data)

    @staticmethod
    def _parse_response(method: str, data: dict[str, Any]) -> ProviderResult:
        metadata: dict[str, Any] = {"method": method}
        if "emoji" in data:
            metadata["emoji"] = dict(data["emoji"])
        if "channel" in data:
            metadata["channel"] = data["channel"]
        message = data.get("message") or {}
        if message.get("thread_ts"):
            metadata["thread_ts"] = message["thread_ts"]
        return ProviderResult(
            success=True,
            provider_message_id=data.get("ts"),
            metadata=metadata,
        )

    @staticmethod
    def _parse_error(method: str, exc: httpx.HTTPStatusError) -> ProviderResult:
        """Map an HTTP status error, keeping Slack's ``Retry-After`` hint."""
        metadata: dict[str, Any] = {"method": method}
        retry_after = exc.response.headers.get("Retry-After")
        if retry_after is not None:
            metadata["retry_after"] = retry_after
        return ProviderResult(
            success=False,
            error=f"http_{exc.response.status_code}",
            metadata=metadata,
        )

    def verify_signature(
        self,
        payload: bytes,
        signature: str,
        timestamp: str,
    ) -> bool:
        """Verify a Slack request signature (``v0`` HMAC-SHA256).

        Slack signs ``v0:<timestamp>:<body>`` with the app signing secret
        and sends ``v0=<hex_digest>`` in ``X-Slack-Signature``.  Requests
        whose timestamp is more than five minutes away from now are
        rejected as replays.

        Raises:
            ValueError: If ``signing_secret`` was not provided in config.
        """
        if not self._config.signing_secret:
            raise ValueError(
                "signing_secret must be provided in SlackConfig for signature verification"
            )

        try:
            sent_at = int(timestamp)
        except (TypeError, ValueError):
            return False
        if abs(self._clock() - sent_at) > SIGNATURE_MAX_AGE:
            return False

        prefix = "v0="
        if not signature.startswith(prefix):
            return False

        basestring = b"v0:" + timestamp.encode() + b":" + payload
        expected = hmac.new(
            self._config.signing_secret.get_secret_value().encode(),
            basestring,
            hashlib.sha256,
        ).hexdigest()

        return hmac.compare_digest(expected, signature[len(prefix) :])

    async def close(self) -> None:
        await self._client.aclose()
