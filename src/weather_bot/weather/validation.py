"""Validation of user-supplied location text."""

import re

from weather_bot.config import MAX_LOCATION_LENGTH
from weather_bot.weather.errors import LocationValidationError

# Latin letters, Thai script, digits, whitespace and - ' .
ALLOWED_LOCATION = re.compile(r"[A-Za-z\u0E00-\u0E7F0-9\s\-'.]+")


def validate(location_text: object) -> str:
    """
    Check location text before any upstream request is made.

    Args:
        location_text: Raw text supplied by the user

    Returns:
        The location with surrounding whitespace stripped

    Raises:
        LocationValidationError: If the text is empty, too long or has
            characters outside the allowed set
    """
    if not isinstance(location_text, str) or not location_text:
        raise LocationValidationError("Please provide a valid city name.")

    if len(location_text) > MAX_LOCATION_LENGTH:
        raise LocationValidationError(f"City name is too long (maximum {MAX_LOCATION_LENGTH} characters).")

    stripped = location_text.strip()
    if not stripped:
        raise LocationValidationError("City name cannot be empty.")

    if not ALLOWED_LOCATION.fullmatch(stripped):
        raise LocationValidationError(
            "City name contains invalid characters. "
            "Please use only letters, numbers, spaces, and basic punctuation."
        )

    return stripped
