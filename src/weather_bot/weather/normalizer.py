"""Conversion of raw OpenWeatherMap current-weather payloads into snapshots."""

import logging
import math
from typing import Any, Dict, Optional

from weather_bot.weather.models import Coordinates, UnitLabels, WeatherSnapshot

logger = logging.getLogger(__name__)

IMPERIAL = "imperial"


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3, -2.5 -> -3).

    All displayed rounding in the package goes through here, not round().
    """
    if value >= 0:
        return int(math.floor(value + 0.5))
    return -int(math.floor(-value + 0.5))


def unit_labels(units: str) -> UnitLabels:
    """Derive display labels from the requested unit system.

    Args:
        units: Requested unit system; anything but 'imperial' is metric

    Returns:
        Temperature and speed labels
    """
    if units == IMPERIAL:
        return UnitLabels(temp="°F", speed="mph")
    return UnitLabels(temp="°C", speed="m/s")


def _block(payload: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = payload.get(key)
    return value if isinstance(value, dict) else {}


def _number(block: Dict[str, Any], key: str, default: float = 0) -> float:
    value = block.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return value


def _optional_number(payload: Dict[str, Any], key: str) -> Optional[float]:
    value = payload.get(key)
    # A UV index of 0 is reported the same as a missing one
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not value:
        return None
    return value


def normalize(payload: Dict[str, Any], units: str) -> WeatherSnapshot:
    """Convert a raw current-weather payload into a WeatherSnapshot.

    Absent optional blocks (wind, visibility, clouds, uvi) resolve to 0 or
    None instead of failing. Temperatures are rounded with round_half_away().

    Args:
        payload: JSON body of GET /weather
        units: Unit system the request was made with

    Returns:
        Normalized snapshot
    """
    main = _block(payload, "main")
    sys_block = _block(payload, "sys")
    wind = _block(payload, "wind")
    clouds = _block(payload, "clouds")
    coord = _block(payload, "coord")

    conditions = payload.get("weather") or [{}]
    condition = conditions[0] if isinstance(conditions[0], dict) else {}

    visibility_m = _number(payload, "visibility")

    snapshot = WeatherSnapshot(
        name=payload.get("name") or "",
        country=sys_block.get("country") or "",
        temperature=round_half_away(_number(main, "temp")),
        feels_like=round_half_away(_number(main, "feels_like")),
        temp_min=round_half_away(_number(main, "temp_min")),
        temp_max=round_half_away(_number(main, "temp_max")),
        humidity=round_half_away(_number(main, "humidity")),
        pressure=round_half_away(_number(main, "pressure")),
        wind_speed=_number(wind, "speed"),
        wind_direction=_number(wind, "deg"),
        visibility=visibility_m / 1000 if visibility_m else 0,
        cloudiness=round_half_away(_number(clouds, "all")),
        uv_index=_optional_number(payload, "uvi"),
        sunrise=int(_number(sys_block, "sunrise")),
        sunset=int(_number(sys_block, "sunset")),
        timezone=int(_number(payload, "timezone")),
        coordinates=Coordinates(lat=_number(coord, "lat"), lon=_number(coord, "lon")),
        condition=condition.get("main") or "Unknown",
        description=condition.get("description") or "",
        icon=condition.get("icon") or "",
        units=unit_labels(units),
    )

    logger.debug(f"Normalized weather for {snapshot.name} ({snapshot.country}): {snapshot.temperature}{snapshot.units.temp}")
    return snapshot
