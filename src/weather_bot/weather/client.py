"""HTTP client for the OpenWeatherMap API."""

import logging
from typing import Any, Dict, Optional

import httpx

from weather_bot.config import (
    WEATHER_API_BASE_URL, OPENWEATHER_API_KEY, USER_AGENT,
    REQUEST_TIMEOUT_SECONDS, DEFAULT_LANG, FORECAST_SLOT_COUNT
)
from weather_bot.weather.errors import (
    ServiceError, ServiceErrorCategory,
    TransportError, TransportErrorCategory
)

logger = logging.getLogger(__name__)


class OpenWeatherClient:
    """Async client for the OpenWeatherMap current weather and forecast endpoints.

    Each call makes exactly one request; retrying is left to the caller.
    """

    def __init__(
        self,
        api_key: str = OPENWEATHER_API_KEY,
        base_url: str = WEATHER_API_BASE_URL,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        lang: str = DEFAULT_LANG,
        user_agent: str = USER_AGENT,
        client: Optional[httpx.AsyncClient] = None
    ):
        """Initialize the weather client.

        Args:
            api_key: OpenWeatherMap API key, sent as 'appid'
            base_url: Base URL of the data API
            timeout: Request timeout in seconds
            lang: Language of condition descriptions
            user_agent: User-Agent header for API requests
            client: Optional preconfigured httpx client
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.lang = lang
        self.client = client or httpx.AsyncClient(
            headers={"User-Agent": user_agent},
            timeout=timeout
        )

    async def get_current_weather(self, location: str, units: str) -> Optional[Dict[str, Any]]:
        """Fetch current weather for a location.

        Args:
            location: Free-text location, e.g. "Bangkok" or "London,GB"
            units: 'metric' or 'imperial'

        Returns:
            Raw payload, or None if the location is unknown upstream

        Raises:
            ServiceError: If upstream rejects or fails the request
            TransportError: If upstream times out or is unreachable
        """
        return await self._get("weather", {"q": location, "units": units})

    async def get_forecast(
        self,
        location: str,
        units: str,
        count: int = FORECAST_SLOT_COUNT
    ) -> Optional[Dict[str, Any]]:
        """Fetch the 3-hourly forecast for a location.

        Args:
            location: Free-text location
            units: 'metric' or 'imperial'
            count: Maximum number of forecast slots

        Returns:
            Raw payload, or None if the location is unknown upstream

        Raises:
            ServiceError: If upstream rejects or fails the request
            TransportError: If upstream times out or is unreachable
        """
        return await self._get("forecast", {"q": location, "units": units, "cnt": count})

    async def _get(self, endpoint: str, params: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        url = f"{self.base_url}/{endpoint}"
        params = {**params, "lang": self.lang}

        logger.debug(f"Making API request to: {url} with params {params} (appid: [HIDDEN])")

        try:
            response = await self.client.get(url, params={**params, "appid": self.api_key})
        except httpx.TimeoutException as e:
            logger.error(f"Request to {url} timed out: {type(e).__name__}")
            raise TransportError(TransportErrorCategory.TIMEOUT, "Request timeout. Please try again.")
        except httpx.RequestError as e:
            logger.error(f"Request error to {url}: {type(e).__name__}")
            raise TransportError(
                TransportErrorCategory.UNREACHABLE,
                "Unable to connect to weather service. Please check your internet connection."
            )

        if response.status_code == 404:
            logger.warning(f"Location not found upstream: {params['q']}")
            return None

        if not response.is_success:
            self._raise_for_status(response)

        try:
            data = response.json()
        except ValueError:
            data = None

        if not isinstance(data, dict) or not data:
            logger.error(f"Empty or non-JSON response from {url} (status {response.status_code})")
            raise ServiceError(
                ServiceErrorCategory.UPSTREAM_ERROR,
                "Weather service returned an unreadable response.",
                status_code=response.status_code
            )

        return data

    def _raise_for_status(self, response: httpx.Response) -> None:
        """Classify a non-2xx, non-404 response and raise ServiceError."""
        status = response.status_code
        message = _error_message(response)
        logger.error(f"API Error {status}: {message}")

        if status == 401:
            raise ServiceError(
                ServiceErrorCategory.INVALID_CREDENTIALS,
                "Invalid API key. Please check your OpenWeatherMap API configuration.",
                status_code=status
            )
        if status == 429:
            raise ServiceError(
                ServiceErrorCategory.RATE_LIMITED,
                "API rate limit exceeded. Please try again later.",
                status_code=status
            )
        raise ServiceError(
            ServiceErrorCategory.UPSTREAM_ERROR,
            f"Weather service error: {message}",
            status_code=status
        )

    async def aclose(self):
        """Close the async HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()


def _error_message(response: httpx.Response) -> str:
    """Upstream error text, e.g. {"cod": 401, "message": "Invalid API key"}."""
    try:
        body = response.json()
    except ValueError:
        return "Unknown API error"
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return "Unknown API error"
