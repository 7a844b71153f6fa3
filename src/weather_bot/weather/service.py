"""Weather service: cached current-weather lookups and daily forecasts."""

import logging
from typing import Optional, Union

from weather_bot.config import DEFAULT_UNITS
from weather_bot.weather.cache import SnapshotCache, cache_key
from weather_bot.weather.client import OpenWeatherClient
from weather_bot.weather.forecast import aggregate
from weather_bot.weather.models import ForecastResult, NotFound, WeatherSnapshot
from weather_bot.weather.normalizer import normalize

logger = logging.getLogger(__name__)


class WeatherService:
    """Serves weather lookups from the snapshot cache, falling back to upstream."""

    def __init__(
        self,
        client: Optional[OpenWeatherClient] = None,
        cache: Optional[SnapshotCache] = None
    ):
        """Initialize the weather service.

        Args:
            client: Upstream client (creates default if None)
            cache: Snapshot cache owned by the caller (creates default if None)
        """
        self.client = client or OpenWeatherClient()
        self.cache = cache if cache is not None else SnapshotCache()

    async def fetch(self, location: str, units: str = DEFAULT_UNITS) -> Union[WeatherSnapshot, NotFound]:
        """Get current weather, from cache when a fresh entry exists.

        A cache hit costs no upstream request. On a miss one request is made
        and the normalized snapshot replaces any stale entry.

        Args:
            location: Validated location text
            units: 'metric' or 'imperial'

        Returns:
            WeatherSnapshot, or NotFound if upstream does not know the location

        Raises:
            ServiceError: If upstream rejects or fails the request
            TransportError: If upstream times out or is unreachable
        """
        key = cache_key(location, units)

        cached = self.cache.get(key)
        if cached is not None:
            logger.debug(f"Using cached data for: {location}")
            return cached

        logger.info(f"Fetching weather for: {location} ({units})")
        payload = await self.client.get_current_weather(location, units)
        if payload is None:
            return NotFound(location=location)

        snapshot = normalize(payload, units)
        self.cache.set(key, snapshot)

        logger.info(f"Weather data fetched for: {snapshot.name} ({snapshot.country})")
        return snapshot

    async def forecast(self, location: str, units: str = DEFAULT_UNITS) -> Union[ForecastResult, NotFound]:
        """Get the daily forecast for a location; never cached.

        Args:
            location: Validated location text
            units: 'metric' or 'imperial'

        Returns:
            ForecastResult, or NotFound if upstream does not know the location

        Raises:
            ServiceError: If upstream rejects or fails the request
            TransportError: If upstream times out or is unreachable
        """
        logger.info(f"Fetching forecast for: {location} ({units})")
        payload = await self.client.get_forecast(location, units)
        if payload is None:
            return NotFound(location=location)

        return aggregate(payload)

    async def aclose(self):
        """Close the weather client."""
        if self.client:
            try:
                await self.client.aclose()
            except Exception as e:
                logger.error(f"Error closing weather client: {e}")

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
