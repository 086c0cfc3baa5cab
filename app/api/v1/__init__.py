"""API routes."""

from fastapi import APIRouter, Depends

from app.api.v1 import articles, auth, categories, health, sections, site_settings, weather
from app.services.open_admin import attach_open_admin_session


def build_router(open_admin: bool = False) -> APIRouter:
    """
    Assemble the API router. With open_admin, every route first attaches the
    default admin's session to sessionless requests (see services.open_admin).
    """
    dependencies = [Depends(attach_open_admin_session)] if open_admin else []

    router = APIRouter(dependencies=dependencies)
    router.include_router(health.router, prefix="/health", tags=["health"])
    router.include_router(auth.router, prefix="/auth", tags=["auth"])
    router.include_router(articles.router, prefix="/articles", tags=["articles"])
    router.include_router(categories.router, prefix="/categories", tags=["categories"])
    router.include_router(sections.router, prefix="/sections", tags=["sections"])
    router.include_router(site_settings.router, prefix="/settings", tags=["settings"])
    router.include_router(weather.router, prefix="/weather", tags=["weather"])
    return router
