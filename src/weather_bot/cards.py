"""Rich message cards for weather, forecast, help and error replies."""

from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple, Union

from weather_bot.weather.conditions import (
    condition_color, condition_emoji, format_local_time, uv_level, wind_direction
)
from weather_bot.weather.errors import (
    ServiceError, ServiceErrorCategory,
    TransportError, TransportErrorCategory
)
from weather_bot.weather.models import (
    Card, CardButton, CardField, ForecastResult, WeatherSnapshot
)

ICON_URL = "https://openweathermap.org/img/wn/{icon}@4x.png"
MAP_URL = "https://openweathermap.org/weathermap?lat={lat:.2f}&lon={lon:.2f}&zoom=10"
NO_DESCRIPTION = "No description available"

REFRESH_PREFIX = "refresh_weather_"
FORECAST_PREFIX = "forecast_"

ERROR_STYLES: Dict[str, tuple] = {
    "error": ("#FF6B6B", "❌"),
    "warning": ("#FFB347", "⚠️"),
    "info": ("#87CEEB", "ℹ️"),
}


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def capitalize_first(text: object) -> str:
    """Capitalize the first letter, falling back to a placeholder for blank text."""
    if not isinstance(text, str) or not text.strip():
        return NO_DESCRIPTION
    trimmed = text.strip()
    return trimmed[0].upper() + trimmed[1:]


def weather_card(snapshot: WeatherSnapshot) -> Card:
    """Build the current-weather card with refresh, forecast and map buttons."""
    temp_unit = snapshot.units.temp
    speed_unit = snapshot.units.speed
    wind = wind_direction(snapshot.wind_direction)

    fields: List[CardField] = [
        CardField(
            name="🌡️ Temperature",
            value=(
                f"**{snapshot.temperature}{temp_unit}**\n"
                f"Feels like {snapshot.feels_like}{temp_unit}\n"
                f"Min: {snapshot.temp_min}{temp_unit} • Max: {snapshot.temp_max}{temp_unit}"
            ),
            inline=True,
        ),
        CardField(
            name="💧 Humidity & Pressure",
            value=f"**{snapshot.humidity}%** humidity\n**{snapshot.pressure} hPa** pressure",
            inline=True,
        ),
        CardField(
            name=f"{wind.symbol} Wind",
            value=f"**{snapshot.wind_speed} {speed_unit}**\n{wind.short} ({snapshot.wind_direction:g}°)",
            inline=True,
        ),
    ]

    if snapshot.visibility > 0:
        fields.append(CardField(name="👁️ Visibility", value=f"**{snapshot.visibility:g} km**", inline=True))

    if snapshot.cloudiness:
        fields.append(CardField(name="☁️ Cloudiness", value=f"**{snapshot.cloudiness}%**", inline=True))

    lat, lon = snapshot.coordinates.lat, snapshot.coordinates.lon
    additional = [f"📍 **Coordinates:** {lat:.2f}, {lon:.2f}"]
    if snapshot.uv_index:
        additional.append(f"☀️ **UV Index:** {snapshot.uv_index:g} ({uv_level(snapshot.uv_index).level})")
    fields.append(CardField(name="📊 Additional Info", value="\n".join(additional)))

    if snapshot.sunrise and snapshot.sunset:
        sunrise = format_local_time(snapshot.sunrise, snapshot.timezone)
        sunset = format_local_time(snapshot.sunset, snapshot.timezone)
        fields.append(CardField(name="🌅 Sun Times (Local)", value=f"**Sunrise:** {sunrise} • **Sunset:** {sunset}"))

    return Card(
        title=f"{condition_emoji(snapshot.condition)} Weather in {snapshot.name}, {snapshot.country}",
        description=f"**{capitalize_first(snapshot.description)}**",
        color=condition_color(snapshot.condition),
        thumbnail=ICON_URL.format(icon=snapshot.icon) if snapshot.icon else None,
        fields=fields,
        buttons=[
            CardButton(label="Refresh", style="primary", emoji="🔄", custom_id=f"{REFRESH_PREFIX}{snapshot.name}"),
            CardButton(label="Forecast", style="secondary", emoji="📊", custom_id=f"{FORECAST_PREFIX}{snapshot.name}"),
            CardButton(label="Map View", style="link", emoji="🗺️", url=MAP_URL.format(lat=lat, lon=lon)),
        ],
        footer="Data from OpenWeatherMap • Updated every 5 minutes",
        timestamp=_now(),
    )


def _day_label(index: int, day) -> str:
    if index == 0:
        return "Today"
    if index == 1:
        return "Tomorrow"
    return day.strftime("%A")


def forecast_card(result: ForecastResult, temp_unit: str = "°C") -> Card:
    """Build the multi-day forecast card, one inline field per day."""
    fields = []
    for index, day in enumerate(result.daily):
        date_label = f"{day.date.strftime('%b')} {day.date.day}"
        fields.append(CardField(
            name=f"{condition_emoji(day.condition)} {_day_label(index, day.date)} ({date_label})",
            value=f"**{day.temp_max}{temp_unit}** / {day.temp_min}{temp_unit}\n{capitalize_first(day.description)}",
            inline=True,
        ))

    return Card(
        title=f"📅 {len(result.daily)}-Day Weather Forecast for {result.location}, {result.country}",
        description=f"Daily weather predictions for the next {len(result.daily)} days",
        color="#87CEEB",
        fields=fields,
        footer="Weather Bot • Forecast Data",
        timestamp=_now(),
    )


def error_card(title: str, message: str, kind: str = "error") -> Card:
    """Build a plain error, warning or info card."""
    color, emoji = ERROR_STYLES.get(kind, ERROR_STYLES["error"])
    return Card(
        title=f"{emoji} {title}",
        description=message,
        color=color,
        footer="Weather Bot",
        timestamp=_now(),
    )


def invalid_input_card(message: str) -> Card:
    card = error_card("Invalid Input", message)
    card.fields.append(CardField(
        name="💡 Examples:",
        value="• `/weather Bangkok`\n• `/weather กรุงเทพ`\n• `/weather Phitsanulok`\n• `/weather พิษณุโลก`",
    ))
    return card


def not_found_card(location: str) -> Card:
    card = error_card("City Not Found", f"Sorry, I couldn't find weather data for **{location}**.")
    card.fields.extend([
        CardField(
            name="💡 Tips:",
            value=(
                "• Check spelling\n• Try both Thai and English names\n"
                "• Use major cities or provinces\n"
                "• Examples: `Bangkok`, `กรุงเทพ`, `Chiang Mai`, `เชียงใหม่`"
            ),
        ),
        CardField(
            name="🌍 Supported formats:",
            value=(
                "• City names: `Bangkok`, `กรุงเทพมหานคร`\n"
                "• Provinces: `Phitsanulok`, `พิษณุโลก`\n"
                "• Districts: `Chatuchak`, `จตุจักร`"
            ),
        ),
    ])
    card.footer = "Weather Bot • Powered by OpenWeatherMap"
    return card


FAILURE_GUIDANCE = {
    ServiceErrorCategory.INVALID_CREDENTIALS: (
        "Configuration Error",
        "• The bot's OpenWeatherMap API key was rejected\n• Ask the bot operator to check the key",
    ),
    ServiceErrorCategory.RATE_LIMITED: (
        "Too Many Requests",
        "• The weather provider's request limit was reached\n• Wait a minute and try again",
    ),
    ServiceErrorCategory.UPSTREAM_ERROR: (
        "Service Error",
        "• Wait a moment and try again\n• Try a different city name or spelling",
    ),
    TransportErrorCategory.TIMEOUT: (
        "Request Timeout",
        "• The weather service is responding slowly\n• Try again in a few moments",
    ),
    TransportErrorCategory.UNREACHABLE: (
        "Service Unavailable",
        "• The weather service could not be reached\n• Try again later",
    ),
}


def failure_card(error: Union[ServiceError, TransportError]) -> Card:
    """Build an error card with guidance matching the failure category."""
    title, guidance = FAILURE_GUIDANCE[error.category]
    card = error_card(title, str(error), kind="warning")
    card.fields.append(CardField(name="🔧 What you can do:", value=guidance))
    card.footer = "Weather Bot • Service Status"
    return card


def parse_interaction(custom_id: str) -> Optional[Tuple[str, str]]:
    """Split a button id into (action, city); None when the id is not recognised."""
    for action, prefix in (("refresh", REFRESH_PREFIX), ("forecast", FORECAST_PREFIX)):
        if custom_id.startswith(prefix) and custom_id[len(prefix):].strip():
            return action, custom_id[len(prefix):]
    return None


def refresh_failed_card(city: str) -> Card:
    return error_card("Refresh Failed", f"Unable to refresh weather data for {city}. The city might not be found.")


def refresh_error_card() -> Card:
    return error_card("Refresh Error", "Unable to refresh weather data. Please try again later.")


def forecast_unavailable_card(city: str) -> Card:
    return error_card("Forecast Not Available", f"Unable to get forecast data for {city}.")


def forecast_error_card() -> Card:
    return error_card("Forecast Error", "Unable to get forecast data. Please try again later.")


def button_error_card() -> Card:
    return error_card("Button Error", "Sorry, there was an error processing your request. Please try again.")


def help_card() -> Card:
    """Build the command overview card."""
    return Card(
        title="🤖 Weather Bot Help",
        description="Your friendly weather companion! Get weather information for any city worldwide.",
        color="#5865F2",
        fields=[
            CardField(
                name="🌤️ Basic Commands",
                value="• `/weather <city>` - Get current weather\n"
                      "• `/weather/forecast <city>` - Get a 5-day forecast\n"
                      "• `/help` - Show this help menu\n• `/status` - Show bot status",
            ),
            CardField(
                name="🌍 Supported Cities",
                value="• **English**: London, New York, Tokyo\n"
                      "• **Thai**: กรุงเทพ, เชียงใหม่, พิษณุโลก\n• **Mixed**: Bangkok, Phitsanulok",
            ),
            CardField(
                name="🌡️ Temperature Units",
                value="• **Celsius (°C)** - Default\n• **Fahrenheit (°F)** - Add `units=imperial`",
            ),
            CardField(
                name="💡 Pro Tips",
                value="• Use major city names for better results\n"
                      "• Check spelling if city not found\n• Data updates every 5 minutes",
            ),
        ],
        footer="Weather Bot",
        timestamp=_now(),
    )


def format_uptime(seconds: float) -> str:
    """Format an uptime as '1d 2h 3m 4s', skipping zero parts ('0s' when empty)."""
    total = int(seconds)
    days, remainder = divmod(total, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, secs = divmod(remainder, 60)

    parts = [f"{value}{suffix}" for value, suffix in ((days, "d"), (hours, "h"), (minutes, "m"), (secs, "s")) if value > 0]
    return " ".join(parts) or "0s"
