"""API endpoints for the city weather screen."""

import logging

from fastapi import APIRouter, Depends, Request

from city_weather.weather.controller import WeatherFetchController
from city_weather.weather.models import CityRequest, ScreenView
from city_weather.weather.presentation import screen_view

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/weather", tags=["weather"])


def get_controller(request: Request) -> WeatherFetchController:
    """Dependency returning the controller created at startup."""
    return request.app.state.controller


@router.post("/fetch", response_model=ScreenView)
async def fetch_city_weather(
    body: CityRequest,
    controller: WeatherFetchController = Depends(get_controller)
) -> ScreenView:
    """Fetch current weather for a city and return the updated screen.

    Failures are reported inside the returned view (status 'failed' with a
    message); the previously loaded cards are kept.

    Args:
        body: Request body with the city name

    Returns:
        ScreenView for the state after the fetch
    """
    state = await controller.trigger(body.city)
    view = screen_view(state, controller.unit_system)

    if view.message:
        logger.info(f"Fetch for '{body.city}' ended with: {view.message}")
    else:
        logger.info(f"Returning {len(view.cards)} cards for '{state.city}'")
    return view


@router.get("/state", response_model=ScreenView)
async def get_state(controller: WeatherFetchController = Depends(get_controller)) -> ScreenView:
    """Current screen state without triggering a fetch.

    Returns:
        ScreenView for the controller's current state
    """
    return screen_view(controller.state, controller.unit_system)


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint.

    Returns:
        Health status response
    """
    return {"status": "healthy", "service": "city-weather"}


@router.get("/info")
async def get_service_info(controller: WeatherFetchController = Depends(get_controller)) -> dict:
    """Get service information.

    Returns:
        Service information including unit system and data source
    """
    return {
        "service": "City Weather Service",
        "version": "0.1.0",
        "unit_system": controller.unit_system,
        "features": [
            "Current weather by city name",
            "Last good result kept when a fetch fails"
        ],
        "data_source": "OpenWeatherMap current weather API"
    }
