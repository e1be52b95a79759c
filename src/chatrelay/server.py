"""aiohttp application exposing the Slack webhook and the front-end API."""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from aiohttp import web

from chatrelay.config import RelaySettings
from chatrelay.core.errors import ConfigurationError
from chatrelay.core.inbound import InboundWebhookHandler
from chatrelay.core.outbound import OutboundCommandHandler
from chatrelay.core.publisher import RelayPublisher
from chatrelay.core.reactions import ReactionToggleController
from chatrelay.emoji.directory import EmojiDirectoryCache
from chatrelay.providers.slack.base import SlackProvider
from chatrelay.providers.slack.web import SlackWebProvider
from chatrelay.realtime.base import RealtimeBackend
from chatrelay.realtime.memory import InMemoryRealtime
from chatrelay.realtime.pusher import PusherRealtime

logger = logging.getLogger("chatrelay.server")

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


@dataclass
class Relay:
    """The wired components behind one application."""

    settings: RelaySettings
    provider: SlackProvider
    backend: RealtimeBackend
    directory: EmojiDirectoryCache
    publisher: RelayPublisher
    inbound: InboundWebhookHandler
    outbound: OutboundCommandHandler

    async def close(self) -> None:
        await self.provider.close()
        await self.backend.close()


RELAY_KEY = web.AppKey("relay", Relay)
SLACK_RETRY_TIMEOUT = "http_timeout"


def build_relay(
    settings: RelaySettings,
    *,
    provider: SlackProvider | None = None,
    backend: RealtimeBackend | None = None,
) -> Relay:
    """Wire providers, cache, publisher and handlers from *settings*."""
    if provider is None:
        provider = SlackWebProvider(settings.slack)
    if backend is None:
        if settings.pusher is not None:
            backend = PusherRealtime(settings.pusher)
        else:
            logger.warning("No Pusher credentials configured; using in-memory realtime backend")
            backend = InMemoryRealtime()

    directory = EmojiDirectoryCache(provider, ttl=settings.emoji_cache_ttl)
    publisher = RelayPublisher(
        backend,
        directory,
        channel=settings.pusher_channel,
        display_name=settings.bot_display_name,
    )
    controller = ReactionToggleController(provider, settings.channel_id)
    return Relay(
        settings=settings,
        provider=provider,
        backend=backend,
        directory=directory,
        publisher=publisher,
        inbound=InboundWebhookHandler(
            publisher,
            settings.channel_id,
            bot_user_id=settings.bot_user_id,
        ),
        outbound=OutboundCommandHandler(provider, controller, publisher, settings.channel_id),
    )


def _cors_headers(request: web.Request, allowed_origin: str | None) -> dict[str, str]:
    origin = allowed_origin or request.headers.get("Origin") or "*"
    return {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Methods": "POST, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type",
        "Vary": "Origin",
    }


def _json_route(handler: Handler) -> Handler:
    """Answer CORS preflights, reject other methods than POST, add CORS headers."""

    async def _route(request: web.Request) -> web.StreamResponse:
        relay = request.app[RELAY_KEY]
        headers = _cors_headers(request, relay.settings.allowed_origin)
        if request.method == "OPTIONS":
            return web.Response(status=200, headers=headers)
        if request.method != "POST":
            return web.json_response(
                {"error": "method not allowed"},
                status=405,
                headers={**headers, "Allow": "POST, OPTIONS"},
            )
        response = await handler(request)
        response.headers.update(headers)
        return response

    return _route


async def _read_json(request: web.Request, raw: bytes | None = None) -> Any:
    body = raw if raw is not None else await request.read()
    return json.loads(body or b"null")


async def handle_events(request: web.Request) -> web.StreamResponse:
    """Slack Events API endpoint."""
    relay = request.app[RELAY_KEY]
    raw = await request.read()

    if relay.settings.slack.signing_secret is not None:
        valid = relay.provider.verify_signature(
            raw,
            request.headers.get("X-Slack-Signature", ""),
            request.headers.get("X-Slack-Request-Timestamp", ""),
        )
        if not valid:
            logger.warning("Rejected Slack request with an invalid signature")
            return web.json_response({"error": "invalid signature"}, status=401)

    try:
        payload = await _read_json(request, raw)
    except ValueError:
        return web.json_response({"error": "invalid JSON"}, status=400)
    if not isinstance(payload, dict):
        return web.json_response({"error": "invalid payload"}, status=400)

    # Only timeout retries are dropped; other reasons mean the first attempt failed.
    retry = request.headers.get("X-Slack-Retry-Num")
    reason = request.headers.get("X-Slack-Retry-Reason")
    if (
        retry is not None
        and reason == SLACK_RETRY_TIMEOUT
        and payload.get("type") != "url_verification"
    ):
        logger.info("Acknowledging Slack retry %s (%s) without relaying", retry, reason)
        return web.json_response({"ok": True})
    if retry is not None:
        logger.info("Relaying Slack retry %s (%s)", retry, reason or "unknown")

    return web.json_response(await relay.inbound.handle(payload))


async def handle_chat(request: web.Request) -> web.StreamResponse:
    """Front-end command endpoint."""
    relay = request.app[RELAY_KEY]
    try:
        body = await _read_json(request)
    except ValueError:
        return web.json_response({"error": "invalid JSON"}, status=400)
    result = await relay.outbound.handle(body)
    return web.json_response(result.body, status=result.status)


def create_app(
    settings: RelaySettings,
    *,
    provider: SlackProvider | None = None,
    backend: RealtimeBackend | None = None,
) -> web.Application:
    """Create the aiohttp application serving ``/api/events`` and ``/api/chat``."""
    app = web.Application()
    app[RELAY_KEY] = build_relay(settings, provider=provider, backend=backend)
    app.router.add_route("*", "/api/events", _json_route(handle_events))
    app.router.add_route("*", "/api/chat", _json_route(handle_chat))

    async def _close(app: web.Application) -> None:
        await app[RELAY_KEY].close()

    app.on_cleanup.append(_close)
    return app


def main() -> None:
    """Console entry point: serve the relay until interrupted."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        settings = RelaySettings.from_env()
    except ConfigurationError as exc:
        raise SystemExit(f"chatrelay: {exc}") from exc
    web.run_app(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
