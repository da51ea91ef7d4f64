"""HTTP client for the OpenWeatherMap current weather API."""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from city_weather.config import UNIT_SYSTEMS, WeatherSettings
from city_weather.weather.errors import (
    CityValidationError, DecodeError, HttpStatusError, TransportError
)
from city_weather.weather.models import WeatherRecord

logger = logging.getLogger(__name__)


def validate_city_name(city_name: Optional[str]) -> str:
    """Normalize a user-entered city name.

    Args:
        city_name: City name as typed by the user

    Returns:
        City name without surrounding whitespace

    Raises:
        CityValidationError: If nothing is left after trimming or the name is not valid text
    """
    city = (city_name or "").strip()
    if not city:
        raise CityValidationError("City name must not be empty")
    try:
        city.encode("utf-8")
    except UnicodeEncodeError as e:
        raise CityValidationError("City name contains invalid characters") from e
    return city


def validate_unit_system(unit_system: str) -> str:
    units = (unit_system or "").strip().lower()
    if units not in UNIT_SYSTEMS:
        raise CityValidationError(
            f"Unknown unit system '{unit_system}', expected one of {', '.join(UNIT_SYSTEMS)}"
        )
    return units


def _provider_message(response: httpx.Response) -> Optional[str]:
    """Extract the provider's error message from an error body, if there is one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return None


class OpenWeatherClient:
    """Async client for fetching current weather by city name."""

    def __init__(self, settings: WeatherSettings, http_client: Optional[httpx.AsyncClient] = None):
        """Initialize the weather client.

        Args:
            settings: Provider settings (API key, endpoint, units, timeout)
            http_client: Optional preconfigured httpx client. The caller keeps
                ownership of an injected client; otherwise one is created here.
                Requests always use settings.timeout_seconds.
        """
        self.settings = settings
        self._owns_client = http_client is None
        self.client = http_client or httpx.AsyncClient(timeout=settings.timeout_seconds)

    async def fetch(self, city_name: str, unit_system: Optional[str] = None) -> WeatherRecord:
        """Fetch the current weather for a city.

        Exactly one request is made per call; nothing is retried or cached.

        Args:
            city_name: City name, surrounding whitespace is ignored
            unit_system: metric, imperial or standard (defaults to the settings)

        Returns:
            Parsed WeatherRecord

        Raises:
            CityValidationError: If the city or unit system is invalid (no request is sent)
            HttpStatusError: If the provider answers with a non-2xx status
            TransportError: If the provider cannot be reached
            DecodeError: If a 2xx body is not a valid current weather document
        """
        city = validate_city_name(city_name)
        units = validate_unit_system(self.settings.unit_system if unit_system is None else unit_system)

        params = {"q": city, "units": units, "appid": self.settings.api_key}
        logger.info(f"Fetching current weather for city='{city}', units={units}")

        try:
            response = await self.client.get(
                self.settings.base_url, params=params, timeout=self.settings.timeout_seconds
            )
            response.raise_for_status()

        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            message = _provider_message(e.response)
            logger.error(f"HTTP error from OpenWeatherMap API for '{city}': {status} - {message}")
            raise HttpStatusError(status, message) from e
        except httpx.RequestError as e:
            logger.error(f"Request error to OpenWeatherMap API for '{city}': {type(e).__name__}: {e}")
            raise TransportError(f"Could not reach weather provider: {type(e).__name__}") from e

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Non-JSON response body for '{city}': {response.text[:200]}")
            raise DecodeError("Response body is not valid JSON") from e

        try:
            record = WeatherRecord.model_validate(data)
        except ValidationError as e:
            logger.error(f"Invalid API response format for '{city}': {e}")
            raise DecodeError(f"Invalid API response format: {e.error_count()} field error(s)") from e

        logger.info(
            f"Successfully fetched weather for {record.location_name}, {record.sun.country_code}: "
            f"{record.temperature.current} ({units}), {record.primary_condition.description}"
        )
        return record

    async def aclose(self):
        """Close the async HTTP client if this instance created it."""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()


async def fetch_weather(
    city_name: str,
    unit_system: str,
    api_key: str,
    *,
    http_client: Optional[httpx.AsyncClient] = None
) -> WeatherRecord:
    """One-shot fetch with explicit unit system and API key.

    Raises the same WeatherError subclasses as OpenWeatherClient.fetch, and
    CityValidationError for a blank API key.
    """
    if not (api_key or "").strip():
        raise CityValidationError("API key must not be empty")
    settings = WeatherSettings(api_key=api_key.strip())
    async with OpenWeatherClient(settings, http_client=http_client) as client:
        return await client.fetch(city_name, unit_system)
