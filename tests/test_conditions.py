import pytest

from weather_bot.weather.conditions import (
    CONDITION_COLORS, CONDITION_EMOJIS, Condition,
    aqi_info, condition_color, condition_emoji, format_local_time,
    uv_level, wind_direction
)


@pytest.mark.parametrize("degrees, expected", [
    (0, "N"),
    (90, "E"),
    (180, "S"),
    (270, "W"),
    (360, "N"),
    (22.5, "NNE"),
    (230, "SW"),
    (348, "NNW"),
    (349, "N"),
])
def test_wind_direction_compass_points(degrees, expected):
    assert wind_direction(degrees).short == expected


def test_wind_direction_keeps_degrees_and_description():
    direction = wind_direction(45)

    assert direction.degrees == 45
    assert direction.description == "Northeast"
    assert direction.symbol == "↗️"


def test_condition_tables_are_exhaustive():
    assert set(CONDITION_COLORS) == set(Condition)
    assert set(CONDITION_EMOJIS) == set(Condition)


def test_unrecognised_condition_falls_back_to_unknown():
    assert Condition.from_keyword("Volcano") is Condition.UNKNOWN
    assert Condition.from_keyword(None) is Condition.UNKNOWN
    assert condition_color("Volcano") == "#5865F2"
    assert condition_emoji("Volcano") == "🌤️"


def test_known_condition_lookup():
    assert Condition.from_keyword("Rain") is Condition.RAIN
    assert condition_color("Clear") == "#FFD700"
    assert condition_emoji("Thunderstorm") == "⛈️"


@pytest.mark.parametrize("uv, expected", [
    (1, "Low"),
    (2, "Low"),
    (5, "Moderate"),
    (6.5, "High"),
    (10, "Very High"),
    (11, "Extreme"),
])
def test_uv_level(uv, expected):
    assert uv_level(uv).level == expected


def test_aqi_info():
    assert aqi_info(None) is None
    assert aqi_info(0) is None
    assert aqi_info(42).level == "Good"
    assert aqi_info(120).level == "Unhealthy for Sensitive Groups"
    assert aqi_info(500).level == "Hazardous"


def test_format_local_time_applies_offset():
    # 2024-06-10 06:00:00 UTC in Bangkok (+7h)
    assert format_local_time(1717999200, 25200) == "13:00"
    assert format_local_time(1717999200, 25200, with_date=True) == "2024-06-10 13:00:00"
