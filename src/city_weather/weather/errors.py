"""Error taxonomy for weather fetches.

Every failure the client can report is a ``WeatherError`` subclass with a
stable ``kind`` string, so the controller can publish it as state and the
page can tell the user what went wrong.
"""

from typing import Optional


class WeatherError(Exception):
    """Base class for recoverable weather fetch failures."""
    kind = "unknown"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class CityValidationError(WeatherError):
    """Raised when request input (city, unit system, API key) is rejected before any request."""
    kind = "validation"


class TransportError(WeatherError):
    """Raised when the provider could not be reached (DNS, connect, timeout, reset)."""
    kind = "transport"


class HttpStatusError(WeatherError):
    """Raised when the provider answers with a non-2xx status."""
    kind = "http_status"

    def __init__(self, status: int, message: Optional[str] = None):
        detail = f"HTTP {status}: {message}" if message else f"HTTP {status}"
        super().__init__(detail)
        self.status = status
        self.message = message


class DecodeError(WeatherError):
    """Raised when a 2xx body is not JSON or does not match the expected shape."""
    kind = "decode"
