"""Pydantic schemas for categories, articles and the home page sections."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ArticleStatus = Literal["draft", "published"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class CategoryOut(_CamelModel):
    id: int
    name: str
    slug: str
    sort_index: int


class CategoriesResponse(BaseModel):
    items: list[CategoryOut]


class ArticleOut(_CamelModel):
    """Article with its category embedded."""

    id: int
    slug: str
    title: str
    summary: str
    body: str
    hero_image_url: str | None = None
    thumbnail_url: str | None = None
    author: str | None = None
    source: str | None = None
    language: str
    status: str
    category_id: int
    category: CategoryOut | None = None
    tags_csv: str | None = None
    published_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ArticleIn(_CamelModel):
    """
    Create/update body. Every field is optional at the schema level; required
    fields and status values are checked by the service so the API answers 400
    with a readable message, the way the admin UI expects.
    """

    title: str | None = None
    slug: str | None = None
    status: str | None = None
    category_id: Any = Field(default=None, description="Numeric category id; falls back to WORLD")
    summary: str | None = None
    body: str | None = None
    hero_image_url: str | None = None
    thumbnail_url: str | None = None
    author: str | None = None
    source: str | None = None
    language: str | None = None
    tags_csv: str | None = None


class ArticleListResponse(BaseModel):
    items: list[ArticleOut]
    total: int
    limit: int
    offset: int


class HomeSectionsResponse(BaseModel):
    """Home page feed: newest story as hero plus the newest six per section."""

    hero: ArticleOut | None = None
    breaking: list[ArticleOut] = Field(default_factory=list)
    finance: list[ArticleOut] = Field(default_factory=list)
    tech: list[ArticleOut] = Field(default_factory=list)
    sports: list[ArticleOut] = Field(default_factory=list)
    entertainment: list[ArticleOut] = Field(default_factory=list)
    business: list[ArticleOut] = Field(default_factory=list)
