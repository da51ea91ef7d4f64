from __future__ import annotations

import copy
from typing import Any, Callable, Dict, List, Tuple

import httpx
import pytest

from city_weather.config import WeatherSettings

BASE_URL = "https://api.test/data/2.5/weather"

LONDON = {
    "coord": {"lon": -0.1257, "lat": 51.5085},
    "weather": [{"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"}],
    "base": "stations",
    "main": {
        "temp": 15.3,
        "feels_like": 14.62,
        "temp_min": 13.9,
        "temp_max": 16.41,
        "pressure": 1012,
        "humidity": 72,
    },
    "visibility": 10000,
    "wind": {"speed": 3.1, "deg": 240},
    "clouds": {"all": 0},
    "dt": 1700003600,
    "sys": {"type": 2, "id": 2075535, "country": "GB", "sunrise": 1700000000, "sunset": 1700032000},
    "timezone": 0,
    "id": 2643743,
    "name": "London",
    "cod": 200,
}

PARIS = {
    "coord": {"lon": 2.3488, "lat": 48.8534},
    "weather": [
        {"id": 500, "main": "Rain", "description": "light rain", "icon": "10n"},
        {"id": 701, "main": "Mist", "description": "mist", "icon": "50n"},
    ],
    "main": {
        "temp": 9.8,
        "feels_like": 7.25,
        "temp_min": 8.9,
        "temp_max": 10.6,
        "pressure": 1004,
        "humidity": 93,
    },
    "wind": {"speed": 5.14, "deg": 200},
    "sys": {"country": "FR", "sunrise": 1699945200, "sunset": 1699979700},
    "timezone": 3600,
    "name": "Paris",
}


class ProviderStub:
    """Callable handler for httpx.MockTransport that answers per city name."""

    def __init__(self, responses: Dict[str, Tuple[int, Any]] | None = None):
        self.responses = responses or {}
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        city = request.url.params.get("q")
        if city in self.responses:
            status, payload = self.responses[city]
            return httpx.Response(status, json=payload)
        return httpx.Response(404, json={"cod": "404", "message": "city not found"})


@pytest.fixture
def london_payload() -> Dict[str, Any]:
    return copy.deepcopy(LONDON)


@pytest.fixture
def paris_payload() -> Dict[str, Any]:
    return copy.deepcopy(PARIS)


@pytest.fixture
def settings() -> WeatherSettings:
    return WeatherSettings(api_key="test-key", base_url=BASE_URL)


@pytest.fixture
def provider(london_payload, paris_payload) -> ProviderStub:
    return ProviderStub({
        "London": (200, london_payload),
        "Paris": (200, paris_payload),
    })


@pytest.fixture
def make_http_client() -> Callable[[Callable], httpx.AsyncClient]:
    def factory(handler: Callable) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return factory
