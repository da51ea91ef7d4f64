"""Configuration settings for the city weather service."""

import os
from typing import Final, Literal

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

load_dotenv()

# Provider configuration
OPENWEATHER_API_BASE_URL: Final[str] = "https://api.openweathermap.org/data/2.5/weather"
ICON_URL_TEMPLATE: Final[str] = "https://openweathermap.org/img/wn/{icon_id}@2x.png"
UNIT_SYSTEMS: Final[tuple] = ("metric", "imperial", "standard")
DEFAULT_UNIT_SYSTEM: Final[str] = "metric"
DEFAULT_TIMEOUT_SECONDS: Final[float] = 10.0

# Server configuration
HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = int(os.getenv("PORT", "8000"))
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper()

UnitSystem = Literal["metric", "imperial", "standard"]


class ConfigurationError(ValueError):
    """Raised when required settings are missing or invalid."""
    pass


class WeatherSettings(BaseModel):
    """Provider settings built once at startup and passed to the client."""
    model_config = ConfigDict(frozen=True)

    api_key: str = Field(..., min_length=1, repr=False, description="OpenWeatherMap API key")
    base_url: str = Field(OPENWEATHER_API_BASE_URL, description="Current weather endpoint")
    unit_system: UnitSystem = Field(DEFAULT_UNIT_SYSTEM, description="Provider unit system")
    timeout_seconds: float = Field(DEFAULT_TIMEOUT_SECONDS, gt=0, description="HTTP timeout")

    @classmethod
    def from_env(cls) -> "WeatherSettings":
        """Build settings from environment variables (and a .env file).

        Returns:
            WeatherSettings populated from OPENWEATHER_* variables

        Raises:
            ConfigurationError: If the API key is missing or a value is invalid
        """
        api_key = os.getenv("OPENWEATHER_API_KEY", "").strip()
        if not api_key:
            raise ConfigurationError("OPENWEATHER_API_KEY is not set")

        unit_system = os.getenv("OPENWEATHER_UNITS", DEFAULT_UNIT_SYSTEM).strip().lower()
        if unit_system not in UNIT_SYSTEMS:
            raise ConfigurationError(
                f"OPENWEATHER_UNITS must be one of {', '.join(UNIT_SYSTEMS)}, got '{unit_system}'"
            )

        try:
            timeout_seconds = float(os.getenv("OPENWEATHER_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS)))
        except ValueError as e:
            raise ConfigurationError(f"OPENWEATHER_TIMEOUT_SECONDS must be a number: {e}")
        if timeout_seconds <= 0:
            raise ConfigurationError("OPENWEATHER_TIMEOUT_SECONDS must be positive")

        return cls(
            api_key=api_key,
            base_url=os.getenv("OPENWEATHER_BASE_URL", OPENWEATHER_API_BASE_URL),
            unit_system=unit_system,
            timeout_seconds=timeout_seconds,
        )
