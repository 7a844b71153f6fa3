"""Data models for the weather bot service."""

import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class UnitLabels(BaseModel):
    """Display labels derived from the requested unit system."""
    temp: str = Field(..., description="Temperature label, e.g. °C")
    speed: str = Field(..., description="Wind speed label, e.g. m/s")


class Coordinates(BaseModel):
    """Location coordinates."""
    lat: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    lon: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")


class WeatherSnapshot(BaseModel):
    """Normalized point-in-time weather for one location."""
    name: str = Field(..., description="Location name as reported upstream")
    country: str = Field("", description="ISO country code")
    temperature: int = Field(..., description="Current temperature")
    feels_like: int = Field(..., description="Apparent temperature")
    temp_min: int = Field(..., description="Minimum observed temperature")
    temp_max: int = Field(..., description="Maximum observed temperature")
    humidity: int = Field(0, description="Relative humidity in percent")
    pressure: int = Field(0, description="Atmospheric pressure in hPa")
    wind_speed: float = Field(0, description="Wind speed in the requested units")
    wind_direction: float = Field(0, description="Wind direction in degrees")
    visibility: float = Field(0, description="Visibility in km, 0 when unknown")
    cloudiness: int = Field(0, description="Cloud cover in percent")
    uv_index: Optional[float] = Field(None, description="UV index if reported")
    sunrise: int = Field(0, description="Sunrise as unix seconds")
    sunset: int = Field(0, description="Sunset as unix seconds")
    timezone: int = Field(0, description="UTC offset in seconds")
    coordinates: Coordinates = Field(..., description="Location coordinates")
    condition: str = Field(..., description="Condition keyword, e.g. Rain")
    description: str = Field("", description="Human readable condition")
    icon: str = Field("", description="Upstream icon identifier")
    units: UnitLabels = Field(..., description="Unit labels")


class NotFound(BaseModel):
    """Upstream confirmed that no such location exists."""
    location: str = Field(..., description="Location text that was looked up")


class DailyForecast(BaseModel):
    """One day of an aggregated forecast."""
    date: datetime.date = Field(..., description="Calendar date of the bucket")
    temp_min: int = Field(..., description="Lowest slot temperature")
    temp_max: int = Field(..., description="Highest slot temperature")
    condition: str = Field(..., description="Most frequent condition keyword")
    icon: str = Field("", description="Icon of the day's first slot")
    description: str = Field("", description="Description of the day's first slot")


class ForecastResult(BaseModel):
    """Aggregated multi-day forecast."""
    location: str = Field(..., description="Location name")
    country: str = Field("", description="ISO country code")
    daily: List[DailyForecast] = Field(..., description="Daily buckets, ascending by date")


class CardField(BaseModel):
    """A titled block of text in a card."""
    name: str
    value: str
    inline: bool = False


class CardButton(BaseModel):
    """An interactive button; either a callback id or a link."""
    label: str
    style: str = Field(..., description="primary, secondary or link")
    emoji: Optional[str] = None
    custom_id: Optional[str] = None
    url: Optional[str] = None


class Card(BaseModel):
    """Platform-neutral rich message payload."""
    title: str
    description: Optional[str] = None
    color: str = Field(..., description="Hex colour, e.g. #FFD700")
    thumbnail: Optional[str] = None
    fields: List[CardField] = Field(default_factory=list)
    buttons: List[CardButton] = Field(default_factory=list)
    footer: Optional[str] = None
    timestamp: Optional[str] = Field(None, description="ISO timestamp of the reply")


class WeatherReply(BaseModel):
    """Response of the weather command."""
    snapshot: WeatherSnapshot
    card: Card


class ForecastReply(BaseModel):
    """Response of the forecast command."""
    forecast: ForecastResult
    card: Card


class ErrorReply(BaseModel):
    """Error response carrying a card with guidance."""
    error: str = Field(..., description="Error category")
    detail: str = Field(..., description="Error message")
    card: Card
