"""
Read-through snapshot cache for item and vault lists.

Entries live in memory only and expire after a TTL. An expired entry reads
as absent but stays in place until the next set() overwrites it. The cache
never refreshes itself: callers show whatever get() returns, then re-fetch
from op and set() the result.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_TTL = 5 * 60.0

ITEMS = "items"
VAULTS = "vaults"


@dataclass(frozen=True)
class CacheEntry:
    snapshot: Any
    captured_at: float


class SnapshotCache:
    """Key → snapshot store with a capture timestamp per entry."""

    def __init__(self, ttl: float = DEFAULT_TTL, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> Any | None:
        """Return the snapshot if it is at most `ttl` seconds old, else None."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.captured_at > self.ttl:
            logger.debug("Cache entry %r is stale", key)
            return None
        return entry.snapshot

    def set(self, key: str, snapshot: Any) -> None:
        self._entries[key] = CacheEntry(snapshot=snapshot, captured_at=self._clock())

    def age(self, key: str) -> float | None:
        """Seconds since the entry was captured, stale or not."""
        entry = self._entries.get(key)
        return None if entry is None else self._clock() - entry.captured_at

    def invalidate(self) -> None:
        self._entries.clear()
