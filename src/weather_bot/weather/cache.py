"""In-memory snapshot cache with a freshness window and a periodic sweep."""

import asyncio
import logging
import time
from typing import Callable, Optional

from cachetools import TTLCache

from weather_bot.config import (
    CACHE_DURATION_SECONDS, CACHE_MAX_ENTRIES, CACHE_SWEEP_INTERVAL_SECONDS
)
from weather_bot.weather.models import WeatherSnapshot

logger = logging.getLogger(__name__)


def cache_key(location: str, units: str) -> str:
    """Build the cache key for a lookup; location is case-insensitive."""
    return f"{location.lower()}_{units}"


class SnapshotCache:
    """Key -> snapshot mapping owned by the running application.

    Backed by a TTLCache whose ttl is the freshness window: an entry is a
    hit only while its age is below the window. Reads and writes never
    await, so on a single asyncio loop no two coroutines interleave inside
    a cache operation. Sharing an instance between threads requires a lock
    around get/set/sweep.
    """

    def __init__(
        self,
        freshness_seconds: float = CACHE_DURATION_SECONDS,
        sweep_interval_seconds: float = CACHE_SWEEP_INTERVAL_SECONDS,
        maxsize: int = CACHE_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic
    ):
        """Initialize the cache.

        Args:
            freshness_seconds: Maximum age of an entry served as a hit
            sweep_interval_seconds: Period of the background sweep
            maxsize: Entry limit; least recently used entries go first
            clock: Monotonic time source, injectable for tests
        """
        self.freshness_seconds = freshness_seconds
        self.sweep_interval_seconds = sweep_interval_seconds
        self._entries: TTLCache = TTLCache(maxsize=maxsize, ttl=freshness_seconds, timer=clock)
        self._sweeper: Optional[asyncio.Task] = None

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> Optional[WeatherSnapshot]:
        """Return the snapshot for key if it is still fresh, else None."""
        return self._entries.get(key)

    def set(self, key: str, snapshot: WeatherSnapshot) -> None:
        """Store a snapshot, replacing any previous entry for key."""
        self._entries[key] = snapshot

    def clear(self) -> None:
        self._entries.clear()

    def sweep(self) -> int:
        """Remove every entry older than the freshness window.

        Returns:
            Number of entries removed
        """
        expired = self._entries.expire()
        if expired:
            logger.info(f"Cache sweep removed {len(expired)} expired entries, {len(self._entries)} remaining")
        return len(expired)

    async def _sweep_forever(self) -> None:
        while True:
            await asyncio.sleep(self.sweep_interval_seconds)
            try:
                self.sweep()
            except Exception as e:
                logger.error(f"Cache sweep failed: {e}")

    def start_sweeper(self) -> None:
        """Start the background sweep task on the running loop."""
        if self._sweeper is not None and not self._sweeper.done():
            return
        self._sweeper = asyncio.create_task(self._sweep_forever())
        logger.info(f"Cache sweeper started (interval: {self.sweep_interval_seconds}s, freshness: {self.freshness_seconds}s)")

    async def stop_sweeper(self) -> None:
        """Cancel the background sweep task and wait for it to finish."""
        if self._sweeper is None:
            return
        self._sweeper.cancel()
        try:
            await self._sweeper
        except asyncio.CancelledError:
            pass
        self._sweeper = None
        logger.info("Cache sweeper stopped")

    @property
    def sweeper_running(self) -> bool:
        return self._sweeper is not None and not self._sweeper.done()
