import copy

import pytest

BASE_URL = "https://owm.test/data/2.5"

CURRENT_PAYLOAD = {
    "coord": {"lon": 100.5167, "lat": 13.75},
    "weather": [{"id": 501, "main": "Rain", "description": "moderate rain", "icon": "10d"}],
    "base": "stations",
    "main": {
        "temp": 31.5,
        "feels_like": 38.44,
        "temp_min": 30.49,
        "temp_max": 32.5,
        "pressure": 1008,
        "humidity": 70,
    },
    "visibility": 8000,
    "wind": {"speed": 4.12, "deg": 230},
    "clouds": {"all": 75},
    "dt": 1718000000,
    "sys": {"country": "TH", "sunrise": 1717972800, "sunset": 1718018400},
    "timezone": 25200,
    "id": 1609350,
    "name": "Bangkok",
    "cod": 200,
}


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def forecast_slot(dt: int, temp: float, main: str, icon: str = "01d", description: str = "clear sky") -> dict:
    return {
        "dt": dt,
        "main": {"temp": temp, "feels_like": temp, "humidity": 60},
        "weather": [{"main": main, "description": description, "icon": icon}],
    }


@pytest.fixture
def current_payload() -> dict:
    return copy.deepcopy(CURRENT_PAYLOAD)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
