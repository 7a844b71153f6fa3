"""Error taxonomy for weather lookups."""

from enum import Enum
from typing import Optional


class WeatherBotError(Exception):
    """Base class for errors raised by the weather core."""
    pass


class LocationValidationError(WeatherBotError):
    """Raised when location text is rejected before any upstream call."""
    pass


class ServiceErrorCategory(str, Enum):
    """Why a reachable upstream refused or failed a request."""
    INVALID_CREDENTIALS = "invalid_credentials"
    RATE_LIMITED = "rate_limited"
    UPSTREAM_ERROR = "upstream_error"


class TransportErrorCategory(str, Enum):
    """Why the upstream could not be reached."""
    TIMEOUT = "timeout"
    UNREACHABLE = "unreachable"


class ServiceError(WeatherBotError):
    """Raised when the upstream answers with an unusable status."""

    def __init__(
        self,
        category: ServiceErrorCategory,
        message: str,
        status_code: Optional[int] = None
    ):
        """Initialize the error.

        Args:
            category: Cause category shown to the user
            message: Human-readable cause
            status_code: Upstream HTTP status, if any
        """
        super().__init__(message)
        self.category = category
        self.status_code = status_code


class TransportError(WeatherBotError):
    """Raised when the upstream times out or cannot be connected to."""

    def __init__(self, category: TransportErrorCategory, message: str):
        super().__init__(message)
        self.category = category
