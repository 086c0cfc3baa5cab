"""Pydantic request/response schemas."""

from app.schemas.auth import AccountResponse, AccountView, LoginRequest, LogoutResponse
from app.schemas.content import (
    ArticleIn,
    ArticleListResponse,
    ArticleOut,
    CategoriesResponse,
    CategoryOut,
    HomeSectionsResponse,
)
from app.schemas.health import HealthResponse

__all__ = [
    "AccountResponse",
    "AccountView",
    "ArticleIn",
    "ArticleListResponse",
    "ArticleOut",
    "CategoriesResponse",
    "CategoryOut",
    "HealthResponse",
    "HomeSectionsResponse",
    "LoginRequest",
    "LogoutResponse",
]
