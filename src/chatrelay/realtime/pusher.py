"""Pusher Channels backend publishing through the Pusher HTTP API."""

from __future__ import annotations

import hashlib
import hmac
import json
import logging
import time
from collections.abc import Callable
from typing import Any

import httpx

from chatrelay.core.errors import RelayError
from chatrelay.realtime.base import RealtimeBackend, RelayEvent
from chatrelay.realtime.config import PusherConfig

logger = logging.getLogger("chatrelay.realtime.pusher")

# Pusher rejects event payloads larger than 10KB.
MAX_DATA_BYTES = 10 * 1024


class PusherRealtime(RealtimeBackend):
    """Trigger events on Pusher channels.

    Requests are signed as described in the Pusher HTTP API reference:
    ``auth_signature`` is the HMAC-SHA256 of ``"POST\\n<path>\\n<query>"``
    where the query holds ``auth_key``, ``auth_timestamp``,
    ``auth_version`` and the MD5 of the body, sorted by key.
    """

    def __init__(
        self,
        config: PusherConfig,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._config = config
        self._clock = clock
        self._client: httpx.AsyncClient = httpx.AsyncClient(timeout=config.timeout)

    async def publish(self, channel: str, event: RelayEvent) -> None:
        data = json.dumps(event.data, ensure_ascii=False)
        if len(data.encode()) > MAX_DATA_BYTES:
            raise RelayError(f"event {event.name!r} exceeds the Pusher payload limit")

        body = json.dumps({"name": event.name, "channels": [channel], "data": data})
        url = self._config.base_url + self._config.events_path
        try:
            resp = await self._client.post(
                url,
                content=body,
                params=self.sign(body),
                headers={"Content-Type": "application/json"},
            )
            resp.raise_for_status()
        except httpx.TimeoutException as exc:
            raise RelayError(f"timeout publishing {event.name!r} to {channel}") from exc
        except httpx.HTTPStatusError as exc:
            raise RelayError(
                f"pusher rejected {event.name!r}: http_{exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise RelayError(f"failed to publish {event.name!r}: {exc}") from exc

        logger.debug("Published %s to %s", event.name, channel, extra={"event_id": event.id})

    def sign(self, body: str, method: str = "POST") -> dict[str, Any]:
        """Return the signed query parameters for a request body."""
        params: dict[str, Any] = {
            "auth_key": self._config.key,
            "auth_timestamp": str(int(self._clock())),
            "auth_version": "1.0",
            "body_md5": hashlib.md5(body.encode()).hexdigest(),  # noqa: S324
        }
        query = "&".join(f"{key}={params[key]}" for key in sorted(params))
        to_sign = "\n".join([method, self._config.events_path, query])
        params["auth_signature"] = hmac.new(
            self._config.secret.get_secret_value().encode(),
            to_sign.encode(),
            hashlib.sha256,
        ).hexdigest()
        return params

    async def close(self) -> None:
        await self._client.aclose()
