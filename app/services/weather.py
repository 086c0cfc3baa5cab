"""Server-side proxy to OpenWeatherMap so the API key never reaches the browser."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from app.core.config import Settings


class WeatherNotConfiguredError(Exception):
    """Raised when the weather proxy is called without WEATHER_API_KEY."""

    def __init__(self, message: str = "WEATHER_API_KEY missing") -> None:
        self.message = message
        super().__init__(message)


class WeatherApiError(Exception):
    """Raised when the upstream weather service cannot be reached or returns garbage."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def _get_api_key(settings: Settings) -> str:
    if settings.WEATHER_API_KEY is None:
        raise WeatherNotConfiguredError()
    key = settings.WEATHER_API_KEY.get_secret_value().strip()
    if not key:
        raise WeatherNotConfiguredError()
    return key


async def fetch_current_weather(
    settings: Settings,
    lat: str,
    lon: str,
    lang: str = "en",
) -> Any:
    """Current conditions (metric units) for a coordinate; the upstream JSON is passed through."""
    params = {
        "lat": lat,
        "lon": lon,
        "lang": lang,
        "appid": _get_api_key(settings),
        "units": "metric",
    }
    try:
        async with httpx.AsyncClient(timeout=settings.WEATHER_REQUEST_TIMEOUT_SEC) as client:
            resp = await client.get(settings.WEATHER_API_URL, params=params)
    except httpx.HTTPError as e:
        raise WeatherApiError(f"Weather service unreachable: {type(e).__name__}") from e
    try:
        return resp.json()
    except ValueError as e:
        raise WeatherApiError(
            f"Weather service returned {resp.status_code} with a non-JSON body",
            resp.status_code,
        ) from e
