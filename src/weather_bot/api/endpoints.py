"""API endpoints for the weather bot commands."""

import logging
import platform
import sys
import time

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from weather_bot.cards import (
    button_error_card, failure_card, forecast_card, forecast_error_card,
    forecast_unavailable_card, format_uptime, help_card, invalid_input_card,
    not_found_card, parse_interaction, refresh_error_card, refresh_failed_card,
    weather_card
)
from weather_bot.config import DEFAULT_UNITS
from weather_bot.weather.errors import (
    LocationValidationError, ServiceError, ServiceErrorCategory,
    TransportError, TransportErrorCategory
)
from weather_bot.weather.models import (
    Card, ErrorReply, ForecastReply, NotFound, WeatherReply
)
from weather_bot.weather.normalizer import unit_labels
from weather_bot.weather.service import WeatherService
from weather_bot.weather.validation import validate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/weather", tags=["weather"])
bot_router = APIRouter(tags=["bot"])
interaction_router = APIRouter(prefix="/interactions", tags=["interactions"])

FAILURE_STATUS = {
    ServiceErrorCategory.INVALID_CREDENTIALS: 502,
    ServiceErrorCategory.RATE_LIMITED: 503,
    ServiceErrorCategory.UPSTREAM_ERROR: 502,
    TransportErrorCategory.TIMEOUT: 504,
    TransportErrorCategory.UNREACHABLE: 503,
}

UNITS_PATTERN = "^(metric|imperial)$"


def get_weather_service(request: Request) -> WeatherService:
    """Dependency returning the service created in the app lifespan."""
    return request.app.state.weather_service


def _error_response(status_code: int, error: str, detail: str, card: Card) -> JSONResponse:
    headers = {"Retry-After": "60"} if error == ServiceErrorCategory.RATE_LIMITED.value else None
    body = ErrorReply(error=error, detail=detail, card=card)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"), headers=headers)


def _failure_response(error: ServiceError | TransportError) -> JSONResponse:
    return _error_response(FAILURE_STATUS[error.category], error.category.value, str(error), failure_card(error))


@router.get("", response_model=WeatherReply, responses={400: {"model": ErrorReply}, 404: {"model": ErrorReply}})
async def get_weather(
    city: str = Query(..., description="City name in Thai or English"),
    units: str = Query(DEFAULT_UNITS, pattern=UNITS_PATTERN, description="Unit system: metric or imperial"),
    service: WeatherService = Depends(get_weather_service)
):
    """Get current weather for a city.

    Args:
        city: City name, e.g. 'Bangkok' or 'กรุงเทพ'
        units: Unit system
        service: Weather service

    Returns:
        Snapshot and its card, or an error card
    """
    try:
        location = validate(city)
    except LocationValidationError as e:
        logger.warning(f"Invalid city input: {city!r}: {e}")
        return _error_response(400, "invalid_input", str(e), invalid_input_card(str(e)))

    try:
        result = await service.fetch(location, units)
    except (ServiceError, TransportError) as e:
        logger.error(f"Error in weather command for {location}: {e}")
        return _failure_response(e)

    if isinstance(result, NotFound):
        logger.warning(f"No weather data found for: {location}")
        return _error_response(404, "not_found", f"City not found: {location}", not_found_card(location))

    logger.info(f"Weather data sent for: {result.name} ({result.country})")
    return WeatherReply(snapshot=result, card=weather_card(result))


@router.get("/forecast", response_model=ForecastReply, responses={400: {"model": ErrorReply}, 404: {"model": ErrorReply}})
async def get_forecast(
    city: str = Query(..., description="City name in Thai or English"),
    units: str = Query(DEFAULT_UNITS, pattern=UNITS_PATTERN, description="Unit system: metric or imperial"),
    service: WeatherService = Depends(get_weather_service)
):
    """Get a daily forecast (up to 5 days) for a city."""
    try:
        location = validate(city)
    except LocationValidationError as e:
        logger.warning(f"Invalid city input: {city!r}: {e}")
        return _error_response(400, "invalid_input", str(e), invalid_input_card(str(e)))

    try:
        result = await service.forecast(location, units)
    except (ServiceError, TransportError) as e:
        logger.error(f"Error getting forecast for {location}: {e}")
        return _failure_response(e)

    if isinstance(result, NotFound):
        logger.warning(f"No forecast data found for: {location}")
        return _error_response(404, "not_found", f"City not found: {location}", not_found_card(location))

    return ForecastReply(forecast=result, card=forecast_card(result, unit_labels(units).temp))


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint.

    Returns:
        Health status response
    """
    return {"status": "healthy", "service": "weather-bot"}


@bot_router.get("/help", response_model=Card)
async def get_help() -> Card:
    """Command overview."""
    return help_card()


@bot_router.get("/status")
async def get_status(request: Request, service: WeatherService = Depends(get_weather_service)) -> dict:
    """Bot status: uptime, cache usage and runtime information."""
    uptime = time.monotonic() - request.app.state.started_at
    return {
        "uptime": format_uptime(uptime),
        "cached_locations": len(service.cache),
        "cache_sweeper_running": service.cache.sweeper_running,
        "python": sys.version.split()[0],
        "platform": f"{platform.system()} {platform.release()}",
    }


@interaction_router.get("/{custom_id}", responses={400: {"model": ErrorReply}, 404: {"model": ErrorReply}})
async def handle_interaction(
    custom_id: str,
    units: str = Query(DEFAULT_UNITS, pattern=UNITS_PATTERN, description="Unit system: metric or imperial"),
    service: WeatherService = Depends(get_weather_service)
):
    """Answer a card button press ('refresh_weather_<city>' or 'forecast_<city>').

    Args:
        custom_id: Button id carried by the weather card
        units: Unit system
        service: Weather service

    Returns:
        Weather or forecast reply, or an error card
    """
    parsed = parse_interaction(custom_id)
    if parsed is None:
        logger.warning(f"Unknown button interaction: {custom_id!r}")
        return _error_response(400, "invalid_interaction", f"Unknown interaction: {custom_id}", button_error_card())

    action, city = parsed
    try:
        location = validate(city)
    except LocationValidationError as e:
        logger.warning(f"Error handling button interaction {custom_id!r}: {e}")
        return _error_response(400, "invalid_interaction", str(e), button_error_card())

    if action == "refresh":
        try:
            result = await service.fetch(location, units)
        except (ServiceError, TransportError) as e:
            logger.error(f"Error refreshing weather for {location}: {e}")
            return _error_response(FAILURE_STATUS[e.category], e.category.value, str(e), refresh_error_card())

        if isinstance(result, NotFound):
            return _error_response(404, "not_found", f"City not found: {location}", refresh_failed_card(location))

        logger.info(f"Weather refreshed for: {location}")
        return WeatherReply(snapshot=result, card=weather_card(result))

    try:
        forecast = await service.forecast(location, units)
    except (ServiceError, TransportError) as e:
        logger.error(f"Error getting forecast for {location}: {e}")
        return _error_response(FAILURE_STATUS[e.category], e.category.value, str(e), forecast_error_card())

    if isinstance(forecast, NotFound):
        return _error_response(404, "not_found", f"City not found: {location}", forecast_unavailable_card(location))

    return ForecastReply(forecast=forecast, card=forecast_card(forecast, unit_labels(units).temp))
