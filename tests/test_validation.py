import pytest

from weather_bot.weather.errors import LocationValidationError
from weather_bot.weather.validation import validate


@pytest.mark.parametrize("text", [
    "Bangkok",
    "New York",
    "กรุงเทพ",
    "เชียงใหม่",
    "St. John's",
    "Saint-Etienne",
    "District 9",
])
def test_accepts_allowed_text(text):
    assert validate(text) == text


def test_strips_surrounding_whitespace():
    assert validate("  London  ") == "London"


@pytest.mark.parametrize("text", ["", "   ", "\t\n"])
def test_rejects_empty_or_whitespace(text):
    with pytest.raises(LocationValidationError):
        validate(text)


def test_rejects_non_string():
    with pytest.raises(LocationValidationError):
        validate(None)


def test_rejects_too_long():
    with pytest.raises(LocationValidationError, match="too long"):
        validate("a" * 101)


def test_accepts_maximum_length():
    assert validate("a" * 100) == "a" * 100


@pytest.mark.parametrize("text", ["London; DROP", "Paris<script>", "東京", "Zürich", "a/b"])
def test_rejects_disallowed_characters(text):
    with pytest.raises(LocationValidationError, match="invalid characters"):
        validate(text)
