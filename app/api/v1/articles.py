"""Article endpoints: public listing and lookup, authenticated create/update/delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_account
from app.core.database import get_db
from app.schemas.auth import AccountView
from app.schemas.content import ArticleIn, ArticleListResponse, ArticleOut
from app.services.articles import (
    ArticleNotFoundError,
    ArticleValidationError,
    SlugConflictError,
    create_article,
    delete_article,
    get_article_by_slug,
    list_articles,
    update_article,
)

router = APIRouter()

CurrentAccount = Annotated[AccountView, Depends(get_current_account)]
DbSession = Annotated[Session, Depends(get_db)]

_ERROR_STATUS = {
    ArticleNotFoundError: status.HTTP_404_NOT_FOUND,
    SlugConflictError: status.HTTP_409_CONFLICT,
    ArticleValidationError: status.HTTP_400_BAD_REQUEST,
}


def _http_error(
    e: ArticleNotFoundError | SlugConflictError | ArticleValidationError,
) -> HTTPException:
    return HTTPException(status_code=_ERROR_STATUS[type(e)], detail=e.message)


@router.get("", response_model=ArticleListResponse)
def get_articles(
    db: DbSession,
    category: str | None = None,
    lang: str | None = None,
    q: str | None = None,
    status_: Annotated[str | None, Query(alias="status")] = None,
    limit: str | None = None,
    offset: str | None = None,
) -> ArticleListResponse:
    """
    List articles (published by default), newest first.

    Filters: category slug, language, free-text q over title/summary/body.
    limit defaults to 20 and is capped at 100.
    """
    items, total, limit_n, offset_n = list_articles(
        db,
        category=category,
        lang=lang,
        q=q,
        status=status_,
        limit=limit,
        offset=offset,
    )
    return ArticleListResponse(
        items=[ArticleOut.model_validate(a) for a in items],
        total=total,
        limit=limit_n,
        offset=offset_n,
    )


@router.post("", response_model=ArticleOut, status_code=status.HTTP_201_CREATED)
def post_article(body: ArticleIn, db: DbSession, _account: CurrentAccount) -> ArticleOut:
    """Create an article. Missing or unknown categoryId files it under WORLD."""
    try:
        article = create_article(db, body.model_dump(exclude_unset=True))
    except (ArticleValidationError, SlugConflictError) as e:
        raise _http_error(e) from e
    return ArticleOut.model_validate(article)


@router.get("/by-slug/{slug}", response_model=ArticleOut)
def get_article_by_slug_route(slug: str, db: DbSession) -> ArticleOut:
    try:
        return ArticleOut.model_validate(get_article_by_slug(db, slug))
    except (ArticleValidationError, ArticleNotFoundError) as e:
        raise _http_error(e) from e


@router.delete("/by-slug/{slug}", response_model=ArticleOut)
def delete_article_by_slug_route(slug: str, db: DbSession, _account: CurrentAccount) -> ArticleOut:
    """Delete by slug and return the deleted article."""
    try:
        article = get_article_by_slug(db, slug)
        deleted = ArticleOut.model_validate(article)
        delete_article(db, article.id)
    except (ArticleValidationError, ArticleNotFoundError) as e:
        raise _http_error(e) from e
    return deleted


@router.api_route("/{article_id}", methods=["PUT", "PATCH"], response_model=ArticleOut)
def put_article(
    article_id: int,
    body: ArticleIn,
    db: DbSession,
    _account: CurrentAccount,
) -> ArticleOut:
    """Update the fields present in the body (PUT and PATCH behave the same)."""
    try:
        article = update_article(db, article_id, body.model_dump(exclude_unset=True))
    except (ArticleValidationError, ArticleNotFoundError, SlugConflictError) as e:
        raise _http_error(e) from e
    return ArticleOut.model_validate(article)


@router.delete("/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_article_route(article_id: int, db: DbSession, _account: CurrentAccount) -> Response:
    try:
        delete_article(db, article_id)
    except ArticleNotFoundError as e:
        raise _http_error(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{slug}", response_model=ArticleOut)
def get_article_legacy(slug: str, db: DbSession) -> ArticleOut:
    """Older clients fetch /articles/{slug}; same as /articles/by-slug/{slug}."""
    return get_article_by_slug_route(slug, db)
