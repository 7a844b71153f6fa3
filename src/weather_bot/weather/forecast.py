"""Aggregation of 3-hourly forecast slots into daily buckets."""

import logging
from collections import Counter, defaultdict
from datetime import date, datetime, timezone
from typing import Any, Dict, List

from weather_bot.config import FORECAST_DAYS
from weather_bot.weather.models import DailyForecast, ForecastResult
from weather_bot.weather.normalizer import round_half_away

logger = logging.getLogger(__name__)


def _slot_date(slot: Dict[str, Any]) -> date:
    """Calendar date of a slot's own timestamp, read as UTC."""
    return datetime.fromtimestamp(slot["dt"], tz=timezone.utc).date()


def _slot_condition(slot: Dict[str, Any]) -> Dict[str, Any]:
    conditions = slot.get("weather") or [{}]
    return conditions[0] if isinstance(conditions[0], dict) else {}


def _dominant_condition(slots: List[Dict[str, Any]]) -> str:
    """Most frequent condition keyword; on a tie the first one seen wins."""
    keywords = [_slot_condition(slot).get("main") or "Unknown" for slot in slots]
    counts = Counter(keywords)
    # max() keeps the first maximal element and Counter preserves insertion order
    return max(counts, key=counts.get)


def _is_usable_slot(slot: Any) -> bool:
    """A slot needs a timestamp and a numeric temperature to be aggregated."""
    if not isinstance(slot, dict) or "dt" not in slot:
        return False
    main = slot.get("main")
    temp = main.get("temp") if isinstance(main, dict) else None
    return isinstance(temp, (int, float)) and not isinstance(temp, bool)


def _group_by_date(slots: List[Dict[str, Any]]) -> Dict[date, List[Dict[str, Any]]]:
    """Group slots by date, each group in chronological order."""
    daily_slots = defaultdict(list)

    for slot in sorted(slots, key=lambda s: s["dt"]):
        daily_slots[_slot_date(slot)].append(slot)

    return dict(daily_slots)


def _build_daily_forecast(day: date, slots: List[Dict[str, Any]]) -> DailyForecast:
    temps = [slot["main"]["temp"] for slot in slots]
    first = _slot_condition(slots[0])

    return DailyForecast(
        date=day,
        temp_min=round_half_away(min(temps)),
        temp_max=round_half_away(max(temps)),
        condition=_dominant_condition(slots),
        icon=first.get("icon") or "",
        description=first.get("description") or "",
    )


def aggregate(payload: Dict[str, Any], max_days: int = FORECAST_DAYS) -> ForecastResult:
    """Aggregate a raw GET /forecast payload into at most max_days daily buckets.

    Slots are grouped by the UTC calendar date of their 'dt' timestamp. For
    each of the first max_days dates the bucket carries min/max temperature,
    the dominant condition, and icon/description of the day's first slot.

    Args:
        payload: JSON body of GET /forecast
        max_days: Maximum number of daily buckets

    Returns:
        ForecastResult with buckets in ascending date order
    """
    city = payload.get("city") or {}
    raw_slots = payload.get("list") or []
    slots = [slot for slot in raw_slots if _is_usable_slot(slot)]
    if len(slots) < len(raw_slots):
        logger.warning(f"Skipped {len(raw_slots) - len(slots)} forecast slots without a timestamp or temperature")

    logger.info(f"Aggregating {len(slots)} forecast slots")

    daily_slots = _group_by_date(slots)
    daily = [
        _build_daily_forecast(day, daily_slots[day])
        for day in sorted(daily_slots)[:max_days]
    ]

    logger.info(f"Aggregated forecast into {len(daily)} days")
    return ForecastResult(
        location=city.get("name") or "",
        country=city.get("country") or "",
        daily=daily,
    )
