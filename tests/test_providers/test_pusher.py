"""Tests for the Pusher Channels backend."""

from __future__ import annotations

import hashlib
import hmac
import json
from typing import Any

import httpx
import pytest
from pydantic import SecretStr

from chatrelay.core.errors import RelayError
from chatrelay.realtime import PusherConfig, PusherRealtime, RelayEvent
from tests.conftest import FakeClock


def _config(**overrides: Any) -> PusherConfig:
    defaults: dict[str, Any] = {
        "app_id": "3",
        "key": "278d425bdf160c739803",
        "secret": SecretStr("7ad3773142a6692b25b8"),
        "cluster": "eu",
    }
    defaults.update(overrides)
    return PusherConfig(**defaults)


class _MockTransport(httpx.AsyncBaseTransport):
    def __init__(self, status: int = 200) -> None:
        self._status = status
        self.requests: list[httpx.Request] = []

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self._status, json={}, request=request)


class _TimeoutTransport(httpx.AsyncBaseTransport):
    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out")


class _ConnectErrorTransport(httpx.AsyncBaseTransport):
    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused")


def _backend(transport: httpx.AsyncBaseTransport, clock: FakeClock) -> PusherRealtime:
    backend = PusherRealtime(_config(), clock=clock)
    backend._client = httpx.AsyncClient(transport=transport)
    return backend


class TestPusherSigning:
    def test_sign(self, clock: FakeClock) -> None:
        backend = PusherRealtime(_config(), clock=clock)
        body = '{"name":"message"}'

        params = backend.sign(body)

        assert params["auth_key"] == "278d425bdf160c739803"
        assert params["auth_timestamp"] == str(int(clock()))
        assert params["auth_version"] == "1.0"
        assert params["body_md5"] == hashlib.md5(body.encode()).hexdigest()  # noqa: S324

        query = (
            f"auth_key={params['auth_key']}&auth_timestamp={params['auth_timestamp']}"
            f"&auth_version=1.0&body_md5={params['body_md5']}"
        )
        expected = hmac.new(
            b"7ad3773142a6692b25b8",
            f"POST\n/apps/3/events\n{query}".encode(),
            hashlib.sha256,
        ).hexdigest()
        assert params["auth_signature"] == expected

    def test_signature_depends_on_body(self, clock: FakeClock) -> None:
        backend = PusherRealtime(_config(), clock=clock)
        assert backend.sign("a")["auth_signature"] != backend.sign("b")["auth_signature"]


class TestPusherPublish:
    async def test_publish(self, clock: FakeClock) -> None:
        transport = _MockTransport()
        backend = _backend(transport, clock)

        event = RelayEvent(name="reaction", data={"emoji": "👍", "count": 1, "thread_ts": "1.0"})
        await backend.publish("pushrefresh-chat", event)

        req = transport.requests[0]
        assert req.method == "POST"
        assert req.url.host == "api-eu.pusher.com"
        assert req.url.path == "/apps/3/events"
        assert req.url.params["auth_version"] == "1.0"
        assert "auth_signature" in req.url.params

        body = json.loads(req.content)
        assert body["name"] == "reaction"
        assert body["channels"] == ["pushrefresh-chat"]
        assert json.loads(body["data"]) == {"emoji": "👍", "count": 1, "thread_ts": "1.0"}
        assert req.url.params["body_md5"] == hashlib.md5(req.content).hexdigest()  # noqa: S324

    async def test_oversized_payload(self, clock: FakeClock) -> None:
        transport = _MockTransport()
        backend = _backend(transport, clock)

        event = RelayEvent(name="message", data={"text": "x" * 11_000})
        with pytest.raises(RelayError, match="payload limit"):
            await backend.publish("ch", event)
        assert transport.requests == []

    async def test_http_error(self, clock: FakeClock) -> None:
        backend = _backend(_MockTransport(status=401), clock)
        with pytest.raises(RelayError, match="http_401"):
            await backend.publish("ch", RelayEvent(name="message"))

    async def test_timeout(self, clock: FakeClock) -> None:
        backend = _backend(_TimeoutTransport(), clock)
        with pytest.raises(RelayError, match="timeout"):
            await backend.publish("ch", RelayEvent(name="message"))

    async def test_connection_error(self, clock: FakeClock) -> None:
        backend = _backend(_ConnectErrorTransport(), clock)
        with pytest.raises(RelayError, match="connection refused"):
            await backend.publish("ch", RelayEvent(name="message"))
        await backend.close()
