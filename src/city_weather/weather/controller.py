"""Fetch controller owning the screen's observable weather state."""

import asyncio
import logging
from typing import Callable, List, Optional

from city_weather.config import DEFAULT_UNIT_SYSTEM
from city_weather.weather.client import OpenWeatherClient
from city_weather.weather.errors import WeatherError
from city_weather.weather.models import FetchError, FetchState, FetchStatus, WeatherRecord

logger = logging.getLogger(__name__)

StateObserver = Callable[[FetchState], None]


def _display_city(city_name: Optional[str]) -> Optional[str]:
    """City as shown in state; characters that cannot be encoded become '?'."""
    city = (city_name or "").strip()
    return city.encode("utf-8", "replace").decode("utf-8") or None


class WeatherFetchController:
    """Triggers fetches and republishes their outcome as a FetchState.

    Every trigger takes the next sequence number. A response is applied only
    while its number is still the latest one issued, so when requests overlap
    the most recently started one wins no matter which resolves last.
    """

    def __init__(self, client: OpenWeatherClient, unit_system: str = DEFAULT_UNIT_SYSTEM):
        """Initialize the controller.

        Args:
            client: Weather client used for every fetch
            unit_system: Unit system requested on every fetch
        """
        self.client = client
        self.unit_system = unit_system
        self._state = FetchState()
        self._settled = self._state
        self._sequence = 0
        self._observers: List[StateObserver] = []

    @property
    def state(self) -> FetchState:
        return self._state

    @property
    def record(self) -> Optional[WeatherRecord]:
        """Last successfully fetched WeatherRecord, or None."""
        return self._state.record

    def subscribe(self, observer: StateObserver) -> Callable[[], None]:
        """Register an observer called with every new state.

        Returns:
            Function that removes the observer again
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _publish(self, state: FetchState) -> None:
        self._state = state
        if state.status != FetchStatus.LOADING:
            self._settled = state
        for observer in list(self._observers):
            try:
                observer(state)
            except Exception as e:
                logger.error(f"State observer {observer!r} failed: {e}")

    def _is_current(self, request_id: int) -> bool:
        return request_id == self._sequence

    async def trigger(self, city_name: str) -> FetchState:
        """Fetch weather for a city and publish the outcome.

        On failure the previously loaded record is kept and the error is
        published alongside it. If the fetch is cancelled or raises anything
        else, the last settled state is published again and the exception
        propagates.

        Args:
            city_name: City name as typed by the user

        Returns:
            The controller state after this request was handled
        """
        self._sequence += 1
        request_id = self._sequence
        city = _display_city(city_name)

        self._publish(FetchState(
            status=FetchStatus.LOADING,
            record=self._state.record,
            city=city,
            request_id=request_id,
        ))

        try:
            record = await self.client.fetch(city_name, self.unit_system)
        except WeatherError as e:
            if not self._is_current(request_id):
                logger.info(f"Discarding stale failure for request #{request_id} ('{city}'): {e}")
                return self._state
            logger.warning(f"Fetch #{request_id} for '{city}' failed ({e.kind}): {e}")
            self._publish(FetchState(
                status=FetchStatus.FAILED,
                record=self._state.record,
                error=FetchError.from_exception(e),
                city=city,
                request_id=request_id,
            ))
            return self._state
        except BaseException as e:
            if self._is_current(request_id):
                logger.warning(
                    f"Fetch #{request_id} for '{city}' aborted ({type(e).__name__}), "
                    f"restoring {self._settled.status.value} state"
                )
                self._publish(self._settled)
            raise

        if not self._is_current(request_id):
            logger.info(
                f"Discarding stale response for request #{request_id} ('{city}'), "
                f"latest is #{self._sequence}"
            )
            return self._state

        self._publish(FetchState(
            status=FetchStatus.LOADED,
            record=record,
            city=city,
            request_id=request_id,
        ))
        return self._state

    def launch(self, city_name: str) -> "asyncio.Task[FetchState]":
        """Start a trigger without waiting for it; must be called inside a running loop."""
        return asyncio.get_running_loop().create_task(self.trigger(city_name))

    async def aclose(self):
        """Close the weather client."""
        if self.client:
            try:
                await self.client.aclose()
            except Exception as e:
                logger.error(f"Error closing weather client: {e}")
