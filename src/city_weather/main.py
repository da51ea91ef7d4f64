"""Main FastAPI application for the city weather screen."""

import logging
import os
import traceback
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from city_weather.api.endpoints import router as weather_router
from city_weather.config import HOST, PORT, DEBUG, WeatherSettings
from city_weather.logging_config import configure_logging
from city_weather.weather.client import OpenWeatherClient
from city_weather.weather.controller import WeatherFetchController

# Configure logging
configure_logging()
logger = logging.getLogger(__name__)

STATIC_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "static")


def create_app(
    settings: Optional[WeatherSettings] = None,
    http_client: Optional[httpx.AsyncClient] = None
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        settings: Provider settings (read from the environment at startup if None)
        http_client: Optional httpx client handed to the weather client

    Returns:
        Configured FastAPI application instance
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan manager."""
        try:
            resolved = settings or WeatherSettings.from_env()
            client = OpenWeatherClient(resolved, http_client=http_client)
            app.state.controller = WeatherFetchController(client, unit_system=resolved.unit_system)
            logger.info(f"Starting City Weather Service (units={resolved.unit_system}, "
                        f"timeout={resolved.timeout_seconds}s)")
        except Exception as e:
            logger.error(f"Startup error: {e}")
            logger.error(traceback.format_exc())
            raise

        try:
            yield
        finally:
            logger.info("Shutting down City Weather Service")
            await app.state.controller.aclose()

    app = FastAPI(
        title="City Weather Service",
        description="Single-screen current weather lookup by city name using OpenWeatherMap",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan
    )

    # Include API routers
    app.include_router(weather_router)

    # Mount static files
    app.mount("/static", StaticFiles(directory=STATIC_PATH), name="static")

    # Serve the web interface
    @app.get("/", tags=["root"])
    async def root():
        """Root endpoint serving the weather screen."""
        return FileResponse(os.path.join(STATIC_PATH, "index.html"))

    @app.get("/api", tags=["root"])
    async def api_info() -> dict:
        """API information endpoint.

        Returns:
            Basic service information
        """
        return {
            "message": "City Weather Service",
            "docs": "/docs",
            "redoc": "/redoc",
            "fetch": "/weather/fetch",
            "state": "/weather/state",
            "health": "/weather/health"
        }

    return app


# Create app instance for uvicorn
app = create_app()


def main() -> None:
    """Main entry point for the application."""
    logger.info(f"Starting server on {HOST}:{PORT}")
    uvicorn.run(
        "city_weather.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
        log_level="info" if not DEBUG else "debug"
    )


if __name__ == "__main__":
    main()
