"""Data models for the city weather service."""

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from city_weather.config import ICON_URL_TEMPLATE
from city_weather.weather.errors import HttpStatusError, WeatherError


class ProviderModel(BaseModel):
    """Immutable model populated from provider field names (aliases)."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Coordinates(ProviderModel):
    """Location coordinates."""
    longitude: float = Field(..., alias="lon", ge=-180, le=180, description="Longitude in decimal degrees")
    latitude: float = Field(..., alias="lat", ge=-90, le=90, description="Latitude in decimal degrees")


class Condition(ProviderModel):
    """Weather condition text and icon."""
    description: str = Field(..., description="Condition text, e.g. 'clear sky'")
    icon_id: str = Field(..., alias="icon", min_length=1, description="Provider icon id, e.g. '01d'")

    @property
    def icon_url(self) -> str:
        """URL of the 2x condition glyph for this icon id."""
        return ICON_URL_TEMPLATE.format(icon_id=self.icon_id)


class Temperature(ProviderModel):
    """Temperature block, in the units of the requested unit system."""
    current: float = Field(..., alias="temp")
    feels_like: float = Field(..., alias="feels_like")
    min: float = Field(..., alias="temp_min")
    max: float = Field(..., alias="temp_max")
    pressure_hpa: int = Field(..., alias="pressure", description="Atmospheric pressure in hPa")
    humidity_pct: int = Field(..., alias="humidity", ge=0, le=100, description="Relative humidity in percent")


class Wind(ProviderModel):
    """Wind block."""
    speed_mps: float = Field(..., alias="speed", ge=0)
    direction_deg: int = Field(..., alias="deg")


class Sun(ProviderModel):
    """Country and sun times."""
    country_code: str = Field(..., alias="country")
    sunrise_epoch_s: int = Field(..., alias="sunrise", description="Sunrise, UNIX seconds (UTC)")
    sunset_epoch_s: int = Field(..., alias="sunset", description="Sunset, UNIX seconds (UTC)")


class WeatherRecord(ProviderModel):
    """Fully parsed snapshot of one successful current-weather fetch."""
    location_name: str = Field(..., alias="name")
    coordinates: Coordinates = Field(..., alias="coord")
    conditions: Tuple[Condition, ...] = Field(..., alias="weather", min_length=1)
    temperature: Temperature = Field(..., alias="main")
    wind: Wind
    sun: Sun = Field(..., alias="sys")
    timezone_offset_s: int = Field(0, alias="timezone", description="Shift from UTC in seconds")

    @property
    def primary_condition(self) -> Condition:
        return self.conditions[0]

    @property
    def icon_url(self) -> str:
        return self.primary_condition.icon_url

    def local_time(self, epoch_s: int) -> datetime:
        """Convert a UNIX timestamp to an aware datetime at the location's offset."""
        tz = timezone(timedelta(seconds=self.timezone_offset_s))
        return datetime.fromtimestamp(epoch_s, tz=tz)

    @property
    def sunrise_at(self) -> datetime:
        return self.local_time(self.sun.sunrise_epoch_s)

    @property
    def sunset_at(self) -> datetime:
        return self.local_time(self.sun.sunset_epoch_s)

    def to_provider_dict(self) -> Dict[str, Any]:
        """Serialize back to the provider's JSON shape."""
        return self.model_dump(mode="json", by_alias=True)


class FetchStatus(str, Enum):
    """Lifecycle of the controller's state slot."""
    EMPTY = "empty"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


class FetchError(BaseModel):
    """Serializable description of a failed fetch."""
    model_config = ConfigDict(frozen=True)

    kind: str = Field(..., description="Error kind: validation, transport, http_status or decode")
    message: str = Field(..., description="Error message")
    status: Optional[int] = Field(None, description="HTTP status for http_status errors")

    @classmethod
    def from_exception(cls, error: WeatherError) -> "FetchError":
        status = error.status if isinstance(error, HttpStatusError) else None
        return cls(kind=error.kind, message=str(error), status=status)


class FetchState(BaseModel):
    """Observable value published by the fetch controller."""
    model_config = ConfigDict(frozen=True)

    status: FetchStatus = Field(FetchStatus.EMPTY, description="Current status")
    record: Optional[WeatherRecord] = Field(None, description="Last successfully fetched record")
    error: Optional[FetchError] = Field(None, description="Error of the latest request, if it failed")
    city: Optional[str] = Field(None, description="City of the latest request")
    request_id: int = Field(0, ge=0, description="Sequence number of the latest request")


class WeatherCard(BaseModel):
    """One labeled field on the weather screen."""
    title: str
    value: str
    icon_url: Optional[str] = None


class CityRequest(BaseModel):
    """Body of a fetch request from the screen."""
    city: str = Field(..., max_length=200, description="City name as typed by the user")


class ScreenView(BaseModel):
    """Everything the page needs to render the current state."""
    status: FetchStatus
    city: Optional[str] = None
    unit_system: str
    cards: List[WeatherCard] = Field(default_factory=list)
    message: Optional[str] = Field(None, description="User-facing message when the last fetch failed")
    error: Optional[FetchError] = None
