"""Configuration settings for the weather bot service."""

import os
from typing import Final
from dotenv import load_dotenv

load_dotenv()

# Upstream API configuration
WEATHER_API_BASE_URL: str = os.getenv("WEATHER_API_BASE_URL", "https://api.openweathermap.org/data/2.5")
OPENWEATHER_API_KEY: str = os.getenv("OPENWEATHER_API_KEY", "")
USER_AGENT: str = os.getenv("USER_AGENT", "WeatherBot/1.0")
REQUEST_TIMEOUT_SECONDS: float = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "10"))

# Units and language
DEFAULT_UNITS: str = os.getenv("DEFAULT_UNITS", "metric")
DEFAULT_LANG: str = os.getenv("DEFAULT_LANG", "en")
SUPPORTED_UNITS: Final[tuple[str, ...]] = ("metric", "imperial")
SUPPORTED_LANGUAGES: Final[tuple[str, ...]] = ("en", "th")

# Snapshot cache
CACHE_DURATION_SECONDS: float = float(os.getenv("CACHE_DURATION_SECONDS", "300"))  # 5 minutes
CACHE_SWEEP_INTERVAL_SECONDS: float = float(os.getenv("CACHE_SWEEP_INTERVAL_SECONDS", "3600"))  # hourly
CACHE_MAX_ENTRIES: int = int(os.getenv("CACHE_MAX_ENTRIES", "1024"))

# Input and forecast limits
MAX_LOCATION_LENGTH: Final[int] = 100
FORECAST_SLOT_COUNT: Final[int] = 40  # ~5 days of 3-hour slots
FORECAST_DAYS: Final[int] = 5

# Server configuration
HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = int(os.getenv("PORT", "8000"))
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
