"""Main FastAPI application for the weather bot service."""

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from weather_bot.api.endpoints import bot_router, interaction_router, router as weather_router
from weather_bot.config import (
    HOST, PORT, DEBUG, OPENWEATHER_API_KEY,
    CACHE_DURATION_SECONDS, CACHE_SWEEP_INTERVAL_SECONDS
)
from weather_bot.logging_config import configure_logging
from weather_bot.weather.cache import SnapshotCache
from weather_bot.weather.service import WeatherService

# Configure logging
configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Own the snapshot cache and upstream client for the life of the process."""
    if not OPENWEATHER_API_KEY:
        logger.warning("OPENWEATHER_API_KEY is not set; upstream requests will be rejected")

    cache = SnapshotCache(
        freshness_seconds=CACHE_DURATION_SECONDS,
        sweep_interval_seconds=CACHE_SWEEP_INTERVAL_SECONDS
    )
    service = WeatherService(cache=cache)
    app.state.weather_service = service
    app.state.started_at = time.monotonic()

    cache.start_sweeper()
    logger.info("Starting Weather Bot Service")
    try:
        yield
    finally:
        logger.info("Shutting down Weather Bot Service")
        await cache.stop_sweeper()
        await service.aclose()


def create_app(service: Optional[WeatherService] = None) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        service: Prebuilt weather service; skips the lifespan wiring when given

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="Weather Bot Service",
        description="Weather bot commands backed by OpenWeatherMap, with an in-memory lookup cache",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=None if service is not None else lifespan
    )

    if service is not None:
        app.state.weather_service = service
        app.state.started_at = time.monotonic()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(weather_router)
    app.include_router(bot_router)
    app.include_router(interaction_router)

    @app.get("/api", tags=["root"])
    async def api_info() -> dict:
        """API information endpoint.

        Returns:
            Basic service information
        """
        return {
            "message": "Weather Bot Service",
            "docs": "/docs",
            "weather": "/weather?city=<city>&units=metric",
            "forecast": "/weather/forecast?city=<city>",
            "help": "/help",
            "status": "/status",
            "interactions": "/interactions/<custom_id>",
            "health": "/weather/health"
        }

    return app


# Create app instance for uvicorn
app = create_app()


def main() -> None:
    """Main entry point for the application."""
    logger.info(f"Starting server on {HOST}:{PORT}")
    uvicorn.run(
        app,
        host=HOST,
        port=PORT,
        log_level="info" if not DEBUG else "debug"
    )


if __name__ == "__main__":
    main()
