"""Pure helpers that turn weather state into what the screen shows."""

from datetime import datetime
from typing import Dict, List, Optional

from city_weather.weather.models import (
    FetchError, FetchState, FetchStatus, ScreenView, WeatherCard, WeatherRecord
)

TEMPERATURE_UNITS: Dict[str, str] = {"metric": "°C", "imperial": "°F", "standard": "K"}
SPEED_UNITS: Dict[str, str] = {"metric": "m/s", "imperial": "mph", "standard": "m/s"}

HTTP_STATUS_MESSAGES: Dict[int, str] = {
    401: "Invalid API key",
    404: "City not found",
    429: "Too many requests, try again later",
}


def format_clock(moment: datetime) -> str:
    """Format a time of day as 'hh:mm AM'."""
    return moment.strftime("%I:%M %p")


def weather_cards(record: WeatherRecord, unit_system: str = "metric") -> List[WeatherCard]:
    """Build the fixed, ordered set of labeled cards for a record.

    Args:
        record: Weather record to display
        unit_system: Unit system the record was fetched with

    Returns:
        Cards in display order
    """
    temp_unit = TEMPERATURE_UNITS.get(unit_system, TEMPERATURE_UNITS["metric"])
    speed_unit = SPEED_UNITS.get(unit_system, SPEED_UNITS["metric"])
    condition = record.primary_condition

    return [
        WeatherCard(title="City", value=record.location_name),
        WeatherCard(title="Temperature", value=f"{record.temperature.current} {temp_unit}"),
        WeatherCard(title="Feels Like", value=f"{record.temperature.feels_like} {temp_unit}"),
        WeatherCard(title="Weather", value=condition.description, icon_url=condition.icon_url),
        WeatherCard(title="Wind Speed", value=f"{record.wind.speed_mps} {speed_unit}"),
        WeatherCard(title="Humidity", value=f"{record.temperature.humidity_pct}%"),
        WeatherCard(title="Pressure", value=f"{record.temperature.pressure_hpa} hPa"),
        WeatherCard(title="Sunrise", value=format_clock(record.sunrise_at)),
        WeatherCard(title="Sunset", value=format_clock(record.sunset_at)),
    ]


def describe_error(error: FetchError) -> str:
    """User-facing message naming what went wrong."""
    if error.kind == "validation":
        return "Please enter a city name"
    if error.kind == "transport":
        return "Network unavailable"
    if error.kind == "decode":
        return "Unexpected response from weather service"
    if error.kind == "http_status" and error.status is not None:
        if error.status in HTTP_STATUS_MESSAGES:
            return HTTP_STATUS_MESSAGES[error.status]
        if error.status >= 500:
            return "Weather service unavailable"
    return f"Could not fetch weather: {error.message}"


def screen_view(state: FetchState, unit_system: str = "metric") -> ScreenView:
    """Bundle a controller state into what the page renders."""
    cards = weather_cards(state.record, unit_system) if state.record else []
    message: Optional[str] = None
    if state.status == FetchStatus.FAILED and state.error:
        message = describe_error(state.error)

    return ScreenView(
        status=state.status,
        city=state.city,
        unit_system=unit_system,
        cards=cards,
        message=message,
        error=state.error,
    )
