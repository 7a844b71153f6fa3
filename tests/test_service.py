import httpx
import pytest
import respx
from httpx import Response

from conftest import BASE_URL, FakeClock, forecast_slot
from weather_bot.weather.cache import SnapshotCache
from weather_bot.weather.client import OpenWeatherClient
from weather_bot.weather.errors import (
    ServiceError, ServiceErrorCategory,
    TransportError, TransportErrorCategory
)
from weather_bot.weather.models import ForecastResult, NotFound, WeatherSnapshot
from weather_bot.weather.service import WeatherService


def make_service(clock=None) -> WeatherService:
    client = OpenWeatherClient(api_key="test-key", base_url=BASE_URL)
    cache = SnapshotCache(freshness_seconds=300, clock=clock or FakeClock())
    return WeatherService(client=client, cache=cache)


@pytest.mark.asyncio
async def test_second_fetch_within_window_is_served_from_cache(current_payload):
    with respx.mock(base_url=BASE_URL) as mock:
        route = mock.get("/weather").mock(return_value=Response(200, json=current_payload))

        async with make_service() as service:
            first = await service.fetch("Bangkok", "metric")
            second = await service.fetch("Bangkok", "metric")

    assert isinstance(first, WeatherSnapshot)
    assert second == first
    assert route.call_count == 1


@pytest.mark.asyncio
async def test_cache_key_ignores_location_case(current_payload):
    with respx.mock(base_url=BASE_URL) as mock:
        route = mock.get("/weather").mock(return_value=Response(200, json=current_payload))

        async with make_service() as service:
            await service.fetch("Bangkok", "metric")
            await service.fetch("BANGKOK", "metric")

    assert route.call_count == 1


@pytest.mark.asyncio
async def test_units_are_cached_separately(current_payload):
    with respx.mock(base_url=BASE_URL) as mock:
        route = mock.get("/weather").mock(return_value=Response(200, json=current_payload))

        async with make_service() as service:
            metric = await service.fetch("Bangkok", "metric")
            imperial = await service.fetch("Bangkok", "imperial")

    assert route.call_count == 2
    assert metric.units.temp == "°C"
    assert imperial.units.temp == "°F"


@pytest.mark.asyncio
async def test_expired_entry_is_fetched_again(current_payload):
    clock = FakeClock()
    with respx.mock(base_url=BASE_URL) as mock:
        route = mock.get("/weather").mock(return_value=Response(200, json=current_payload))

        async with make_service(clock) as service:
            await service.fetch("Bangkok", "metric")
            clock.advance(301)
            await service.fetch("Bangkok", "metric")

    assert route.call_count == 2


@pytest.mark.asyncio
async def test_request_parameters(current_payload):
    with respx.mock(base_url=BASE_URL) as mock:
        route = mock.get("/weather").mock(return_value=Response(200, json=current_payload))

        async with make_service() as service:
            await service.fetch("Bangkok", "imperial")

    params = route.calls.last.request.url.params
    assert params["q"] == "Bangkok"
    assert params["units"] == "imperial"
    assert params["lang"] == "en"
    assert params["appid"] == "test-key"


@pytest.mark.asyncio
async def test_not_found_is_returned_not_raised():
    with respx.mock(base_url=BASE_URL) as mock:
        mock.get("/weather").mock(return_value=Response(404, json={"cod": "404", "message": "city not found"}))

        async with make_service() as service:
            result = await service.fetch("Nowhereville", "metric")
            cached = len(service.cache)

    assert isinstance(result, NotFound)
    assert result.location == "Nowhereville"
    assert cached == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("status, category", [
    (401, ServiceErrorCategory.INVALID_CREDENTIALS),
    (429, ServiceErrorCategory.RATE_LIMITED),
    (500, ServiceErrorCategory.UPSTREAM_ERROR),
    (503, ServiceErrorCategory.UPSTREAM_ERROR),
    (400, ServiceErrorCategory.UPSTREAM_ERROR),
])
async def test_error_statuses_are_classified(status, category):
    with respx.mock(base_url=BASE_URL) as mock:
        mock.get("/weather").mock(return_value=Response(status, json={"cod": status, "message": "nope"}))

        async with make_service() as service:
            with pytest.raises(ServiceError) as exc_info:
                await service.fetch("Bangkok", "metric")

    assert exc_info.value.category is category
    assert exc_info.value.status_code == status


@pytest.mark.asyncio
async def test_upstream_error_carries_upstream_message():
    with respx.mock(base_url=BASE_URL) as mock:
        mock.get("/weather").mock(return_value=Response(502, json={"cod": 502, "message": "bad gateway"}))

        async with make_service() as service:
            with pytest.raises(ServiceError, match="bad gateway"):
                await service.fetch("Bangkok", "metric")


@pytest.mark.asyncio
async def test_empty_success_body_is_an_upstream_error():
    with respx.mock(base_url=BASE_URL) as mock:
        mock.get("/weather").mock(return_value=Response(200, content=b""))

        async with make_service() as service:
            with pytest.raises(ServiceError) as exc_info:
                await service.fetch("Bangkok", "metric")

    assert exc_info.value.category is ServiceErrorCategory.UPSTREAM_ERROR


@pytest.mark.asyncio
@pytest.mark.parametrize("exception, category", [
    (httpx.ReadTimeout, TransportErrorCategory.TIMEOUT),
    (httpx.ConnectTimeout, TransportErrorCategory.TIMEOUT),
    (httpx.ConnectError, TransportErrorCategory.UNREACHABLE),
])
async def test_transport_failures_are_classified(exception, category):
    with respx.mock(base_url=BASE_URL) as mock:
        mock.get("/weather").mock(side_effect=exception)

        async with make_service() as service:
            with pytest.raises(TransportError) as exc_info:
                await service.fetch("Bangkok", "metric")

    assert exc_info.value.category is category


@pytest.mark.asyncio
async def test_failed_fetch_does_not_retry():
    with respx.mock(base_url=BASE_URL) as mock:
        route = mock.get("/weather").mock(return_value=Response(500, json={"message": "oops"}))

        async with make_service() as service:
            with pytest.raises(ServiceError):
                await service.fetch("Bangkok", "metric")

    assert route.call_count == 1


@pytest.mark.asyncio
async def test_forecast_is_aggregated_and_not_cached():
    slots = [forecast_slot(1717977600 + step * 10800, 25 + step, "Clear") for step in range(16)]
    payload = {"city": {"name": "Bangkok", "country": "TH"}, "list": slots}

    with respx.mock(base_url=BASE_URL) as mock:
        route = mock.get("/forecast").mock(return_value=Response(200, json=payload))

        async with make_service() as service:
            first = await service.forecast("Bangkok", "metric")
            await service.forecast("Bangkok", "metric")

    assert isinstance(first, ForecastResult)
    assert len(first.daily) == 2
    assert route.call_count == 2
    assert route.calls.last.request.url.params["cnt"] == "40"


@pytest.mark.asyncio
async def test_forecast_not_found():
    with respx.mock(base_url=BASE_URL) as mock:
        mock.get("/forecast").mock(return_value=Response(404, json={"cod": "404", "message": "city not found"}))

        async with make_service() as service:
            result = await service.forecast("Nowhereville", "metric")

    assert isinstance(result, NotFound)


@pytest.mark.asyncio
async def test_request_timeout_is_ten_seconds():
    client = OpenWeatherClient(api_key="k")

    assert client.client.timeout.read == 10
    assert client.client.timeout.connect == 10
    await client.aclose()
