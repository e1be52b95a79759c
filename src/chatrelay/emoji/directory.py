"""Time-cached snapshot of the workspace custom emoji directory."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from chatrelay.providers.slack.base import SlackProvider

logger = logging.getLogger("chatrelay.emoji")

DEFAULT_TTL = 60.0 * 60

_EMPTY: Mapping[str, str] = MappingProxyType({})


@dataclass(frozen=True)
class CacheEntry:
    """One directory snapshot and the clock reading it was fetched at."""

    directory: Mapping[str, str]
    fetched_at: float


class EmojiDirectoryCache:
    """Lazily fetches and caches Slack's ``emoji.list`` result.

    A snapshot younger than *ttl* seconds is served without I/O.  Otherwise
    one ``emoji.list`` call is made; on failure the previous snapshot (or an
    empty mapping) is served and the error is only logged.

    **Concurrency note:** the entry is replaced as a whole, never mutated,
    so readers always see a complete snapshot.  Callers racing on an expired
    entry may each fetch; the last successful fetch wins.
    """

    def __init__(
        self,
        provider: SlackProvider,
        *,
        ttl: float = DEFAULT_TTL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._provider = provider
        self._ttl = ttl
        self._clock = clock
        self._entry: CacheEntry | None = None

    @property
    def entry(self) -> CacheEntry | None:
        return self._entry

    def is_fresh(self) -> bool:
        entry = self._entry
        return entry is not None and self._clock() - entry.fetched_at < self._ttl

    async def get(self) -> Mapping[str, str]:
        """Return the directory, refreshing it first if stale. Never raises."""
        if self.is_fresh():
            assert self._entry is not None
            return self._entry.directory
        return await self.refresh()

    async def refresh(self) -> Mapping[str, str]:
        """Fetch the directory now, falling back to the last good snapshot."""
        try:
            result = await self._provider.list_emoji()
        except Exception:
            logger.exception("emoji.list raised; serving cached emoji directory")
            return self._fallback()

        if not result.success:
            logger.warning(
                "emoji.list failed: %s; serving cached emoji directory",
                result.error,
                extra={"error": result.error},
            )
            return self._fallback()

        directory = MappingProxyType(dict(result.metadata.get("emoji", {})))
        self._entry = CacheEntry(directory=directory, fetched_at=self._clock())
        logger.debug("Fetched %d custom emoji", len(directory))
        return directory

    def invalidate(self) -> None:
        """Drop the cached snapshot so the next ``get`` fetches."""
        self._entry = None

    def _fallback(self) -> Mapping[str, str]:
        entry = self._entry
        return entry.directory if entry is not None else _EMPTY
