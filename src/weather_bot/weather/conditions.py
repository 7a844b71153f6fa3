"""Condition categories and the lookup tables used to present them."""

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from weather_bot.weather.normalizer import round_half_away


class Condition(str, Enum):
    """Known upstream condition keywords."""
    CLEAR = "Clear"
    CLOUDS = "Clouds"
    RAIN = "Rain"
    DRIZZLE = "Drizzle"
    THUNDERSTORM = "Thunderstorm"
    SNOW = "Snow"
    MIST = "Mist"
    FOG = "Fog"
    HAZE = "Haze"
    DUST = "Dust"
    SAND = "Sand"
    ASH = "Ash"
    SQUALL = "Squall"
    TORNADO = "Tornado"
    UNKNOWN = "Unknown"

    @classmethod
    def from_keyword(cls, keyword: Optional[str]) -> "Condition":
        """Map an upstream keyword to a category, UNKNOWN if unrecognised."""
        try:
            return cls(keyword)
        except ValueError:
            return cls.UNKNOWN


CONDITION_COLORS: Dict[Condition, str] = {
    Condition.CLEAR: "#FFD700",
    Condition.CLOUDS: "#87CEEB",
    Condition.RAIN: "#4682B4",
    Condition.DRIZZLE: "#87CEFA",
    Condition.THUNDERSTORM: "#800080",
    Condition.SNOW: "#F0F8FF",
    Condition.MIST: "#D3D3D3",
    Condition.FOG: "#A9A9A9",
    Condition.HAZE: "#DDA0DD",
    Condition.DUST: "#D2B48C",
    Condition.SAND: "#F4A460",
    Condition.ASH: "#696969",
    Condition.SQUALL: "#2F4F4F",
    Condition.TORNADO: "#8B0000",
    Condition.UNKNOWN: "#5865F2",
}

CONDITION_EMOJIS: Dict[Condition, str] = {
    Condition.CLEAR: "☀️",
    Condition.CLOUDS: "☁️",
    Condition.RAIN: "🌧️",
    Condition.DRIZZLE: "🌦️",
    Condition.THUNDERSTORM: "⛈️",
    Condition.SNOW: "❄️",
    Condition.MIST: "🌫️",
    Condition.FOG: "🌫️",
    Condition.HAZE: "🌫️",
    Condition.DUST: "💨",
    Condition.SAND: "💨",
    Condition.ASH: "🌋",
    Condition.SQUALL: "💨",
    Condition.TORNADO: "🌪️",
    Condition.UNKNOWN: "🌤️",
}


def condition_color(keyword: Optional[str]) -> str:
    return CONDITION_COLORS[Condition.from_keyword(keyword)]


def condition_emoji(keyword: Optional[str]) -> str:
    return CONDITION_EMOJIS[Condition.from_keyword(keyword)]


class WindDirection(BaseModel):
    """Compass reading for a wind direction."""
    short: str = Field(..., description="Compass point, e.g. NNE")
    symbol: str = Field(..., description="Arrow emoji")
    description: str = Field(..., description="Compass point spelled out")
    degrees: float = Field(..., description="Direction in degrees")


# 16 points, 22.5 degrees each, clockwise from north
COMPASS_POINTS: List[Tuple[str, str, str]] = [
    ("N", "⬆️", "North"),
    ("NNE", "↗️", "North-Northeast"),
    ("NE", "↗️", "Northeast"),
    ("ENE", "↗️", "East-Northeast"),
    ("E", "➡️", "East"),
    ("ESE", "↘️", "East-Southeast"),
    ("SE", "↘️", "Southeast"),
    ("SSE", "↘️", "South-Southeast"),
    ("S", "⬇️", "South"),
    ("SSW", "↙️", "South-Southwest"),
    ("SW", "↙️", "Southwest"),
    ("WSW", "↙️", "West-Southwest"),
    ("W", "⬅️", "West"),
    ("WNW", "↖️", "West-Northwest"),
    ("NW", "↖️", "Northwest"),
    ("NNW", "↖️", "North-Northwest"),
]


def wind_direction(degrees: float) -> WindDirection:
    """Convert a wind direction in degrees to a 16-point compass reading.

    Args:
        degrees: Direction the wind blows from; values outside 0-360 wrap

    Returns:
        Compass point with arrow symbol and description
    """
    index = round_half_away(degrees / 22.5) % 16
    short, symbol, description = COMPASS_POINTS[index]
    return WindDirection(short=short, symbol=symbol, description=description, degrees=degrees)


class Level(BaseModel):
    """A graded level with its display colour and emoji."""
    level: str
    color: str
    emoji: str


UV_LEVELS: List[Tuple[float, Level]] = [
    (2, Level(level="Low", color="#00E400", emoji="🟢")),
    (5, Level(level="Moderate", color="#FFFF00", emoji="🟡")),
    (7, Level(level="High", color="#FF7E00", emoji="🟠")),
    (10, Level(level="Very High", color="#FF0000", emoji="🔴")),
    (float("inf"), Level(level="Extreme", color="#8F3F97", emoji="🟣")),
]

AQI_LEVELS: List[Tuple[float, Level]] = [
    (50, Level(level="Good", color="#00E400", emoji="🟢")),
    (100, Level(level="Moderate", color="#FFFF00", emoji="🟡")),
    (150, Level(level="Unhealthy for Sensitive Groups", color="#FF7E00", emoji="🟠")),
    (200, Level(level="Unhealthy", color="#FF0000", emoji="🔴")),
    (300, Level(level="Very Unhealthy", color="#8F3F97", emoji="🟣")),
    (float("inf"), Level(level="Hazardous", color="#7E0023", emoji="🔴")),
]


def _grade(value: float, table: List[Tuple[float, Level]]) -> Level:
    for upper_bound, level in table:
        if value <= upper_bound:
            return level
    return table[-1][1]


def uv_level(uv_index: float) -> Level:
    """Grade a UV index (<=2 Low ... >10 Extreme)."""
    return _grade(uv_index, UV_LEVELS)


def aqi_info(aqi: Optional[float]) -> Optional[Level]:
    """Grade an air quality index; None when no reading is available."""
    if not aqi:
        return None
    return _grade(aqi, AQI_LEVELS)


def format_local_time(timestamp: int, offset_seconds: int, with_date: bool = False) -> str:
    """Format a unix timestamp at a location's UTC offset.

    Args:
        timestamp: Unix seconds
        offset_seconds: Location offset from UTC
        with_date: Include the date ('YYYY-MM-DD HH:MM:SS') instead of 'HH:MM'

    Returns:
        Formatted local time
    """
    local = datetime.fromtimestamp(timestamp, tz=timezone.utc) + timedelta(seconds=offset_seconds)
    if with_date:
        return local.strftime("%Y-%m-%d %H:%M:%S")
    return local.strftime("%H:%M")
