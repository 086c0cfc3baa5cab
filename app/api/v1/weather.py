"""Weather proxy endpoint used by the site header widget."""

import logging

from fastapi import APIRouter, HTTPException, Request, status

from app.services.weather import WeatherApiError, WeatherNotConfiguredError, fetch_current_weather

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("")
async def get_weather(
    request: Request,
    lat: str | None = None,
    lon: str | None = None,
    lang: str = "en",
):
    """Current conditions for lat/lon, fetched server-side with the configured API key."""
    settings = request.app.state.settings
    if settings.WEATHER_API_KEY is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="WEATHER_API_KEY missing",
        )
    if not lat or not lon:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="lat and lon required")
    try:
        return await fetch_current_weather(settings, lat, lon, lang)
    except WeatherNotConfiguredError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)
    except WeatherApiError as e:
        logger.warning("Weather proxy failed: %s", e.message)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)
