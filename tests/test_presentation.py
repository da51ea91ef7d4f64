"""Tests for the screen presentation helpers."""
import pytest

from city_weather.weather.models import FetchError, FetchState, FetchStatus, WeatherRecord
from city_weather.weather.presentation import describe_error, screen_view, weather_cards


@pytest.fixture
def london(london_payload):
    return WeatherRecord.model_validate(london_payload)


def test_cards_follow_fixed_order(london):
    cards = weather_cards(london)

    assert [c.title for c in cards] == [
        "City", "Temperature", "Feels Like", "Weather", "Wind Speed",
        "Humidity", "Pressure", "Sunrise", "Sunset",
    ]


def test_metric_card_values(london):
    values = {c.title: c.value for c in weather_cards(london, "metric")}

    assert values["City"] == "London"
    assert values["Temperature"] == "15.3 °C"
    assert values["Feels Like"] == "14.62 °C"
    assert values["Weather"] == "clear sky"
    assert values["Wind Speed"] == "3.1 m/s"
    assert values["Humidity"] == "72%"
    assert values["Pressure"] == "1012 hPa"
    assert values["Sunrise"] == "10:13 PM"
    assert values["Sunset"] == "07:06 AM"


def test_sun_times_are_formatted_in_location_time(paris_payload):
    record = WeatherRecord.model_validate(paris_payload)

    values = {c.title: c.value for c in weather_cards(record)}

    assert values["Sunrise"] == "08:00 AM"
    assert values["Sunset"] == "05:35 PM"


@pytest.mark.parametrize("unit_system,temperature,wind", [
    ("imperial", "15.3 °F", "3.1 mph"),
    ("standard", "15.3 K", "3.1 m/s"),
])
def test_unit_suffixes(london, unit_system, temperature, wind):
    values = {c.title: c.value for c in weather_cards(london, unit_system)}

    assert values["Temperature"] == temperature
    assert values["Wind Speed"] == wind


def test_only_weather_card_has_icon(london):
    icons = {c.title: c.icon_url for c in weather_cards(london)}

    assert icons.pop("Weather") == "https://openweathermap.org/img/wn/01d@2x.png"
    assert set(icons.values()) == {None}


@pytest.mark.parametrize("error,message", [
    (FetchError(kind="validation", message="City name must not be empty"), "Please enter a city name"),
    (FetchError(kind="transport", message="x"), "Network unavailable"),
    (FetchError(kind="decode", message="x"), "Unexpected response from weather service"),
    (FetchError(kind="http_status", message="x", status=404), "City not found"),
    (FetchError(kind="http_status", message="x", status=401), "Invalid API key"),
    (FetchError(kind="http_status", message="x", status=429), "Too many requests, try again later"),
    (FetchError(kind="http_status", message="x", status=502), "Weather service unavailable"),
    (FetchError(kind="http_status", message="HTTP 418", status=418), "Could not fetch weather: HTTP 418"),
])
def test_describe_error(error, message):
    assert describe_error(error) == message


def test_empty_state_renders_nothing():
    view = screen_view(FetchState())

    assert view.status == FetchStatus.EMPTY
    assert view.cards == []
    assert view.message is None


def test_failed_state_keeps_cards_and_adds_message(london):
    state = FetchState(
        status=FetchStatus.FAILED,
        record=london,
        error=FetchError(kind="http_status", message="HTTP 404: city not found", status=404),
        city="Atlantis",
        request_id=2,
    )

    view = screen_view(state, "metric")

    assert view.message == "City not found"
    assert view.city == "Atlantis"
    assert view.cards[0].value == "London"
    assert view.error.status == 404
