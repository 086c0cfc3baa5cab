"""Article listing, editing and the home page feed."""

import logging
from typing import Any

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import Article, Category
from app.models.article import ARTICLE_STATUSES

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20
MAX_LIMIT = 100

# Category used when an article arrives without a usable categoryId.
FALLBACK_CATEGORY = {"name": "WORLD", "slug": "world", "sort_index": 0}

# Category slugs shown on the home page, in response order.
HOME_SECTIONS = ("breaking", "finance", "tech", "sports", "entertainment", "business")
HOME_SECTION_SIZE = 6

# Fields copied from the request body onto the row (category handled separately).
EDITABLE_FIELDS = (
    "title",
    "slug",
    "status",
    "summary",
    "body",
    "hero_image_url",
    "thumbnail_url",
    "author",
    "source",
    "language",
    "tags_csv",
)

# Columns that cannot be cleared by sending null.
REQUIRED_COLUMNS = frozenset({"title", "slug", "status", "summary", "body", "language"})


class ArticleValidationError(Exception):
    """Raised when an article body is missing required fields or has a bad status."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ArticleNotFoundError(Exception):
    def __init__(self, message: str = "Not found") -> None:
        self.message = message
        super().__init__(message)


class SlugConflictError(Exception):
    def __init__(self, message: str = "Slug already exists") -> None:
        self.message = message
        super().__init__(message)


def clean(value: Any) -> Any:
    """Trimmed string, or None for blanks and the literal strings 'undefined'/'null'."""
    if value is None:
        return None
    if not isinstance(value, str):
        return value
    text = value.strip()
    if not text or text.lower() in ("undefined", "null"):
        return None
    return text


def parse_int(value: Any, default: int) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


def _validate_status(status: str | None) -> None:
    if status is not None and status not in ARTICLE_STATUSES:
        raise ArticleValidationError('status must be "draft" or "published"')


def resolve_category_id(db: Session, raw: Any) -> int:
    """
    Category id from the request, or the WORLD category (created on demand)
    when the value is missing, not numeric, or names no existing category.
    """
    if clean(raw) is not None:
        candidate = parse_int(raw, 0)
        if candidate and db.get(Category, candidate) is not None:
            return candidate

    world = db.query(Category).filter(Category.slug == FALLBACK_CATEGORY["slug"]).first()
    if world is None:
        world = Category(**FALLBACK_CATEGORY)
        db.add(world)
        db.flush()
    return world.id


def list_articles(
    db: Session,
    *,
    category: str | None = None,
    lang: str | None = None,
    q: str | None = None,
    status: str | None = None,
    limit: Any = None,
    offset: Any = None,
) -> tuple[list[Article], int, int, int]:
    """Filtered, paginated listing. Returns (items, total, limit, offset)."""
    limit_n = min(max(parse_int(limit, DEFAULT_LIMIT), 0) or DEFAULT_LIMIT, MAX_LIMIT)
    offset_n = max(parse_int(offset, 0), 0)

    query = db.query(Article).filter(Article.status == (clean(status) or "published"))
    lang = clean(lang)
    if lang:
        query = query.filter(Article.language == lang)
    category = clean(category)
    if category:
        query = query.join(Article.category).filter(Category.slug == category)
    q = clean(q)
    if q:
        pattern = f"%{q}%"
        query = query.filter(
            or_(
                Article.title.ilike(pattern),
                Article.summary.ilike(pattern),
                Article.body.ilike(pattern),
            )
        )

    total = query.count()
    items = (
        query.order_by(Article.published_at.desc(), Article.id.desc())
        .offset(offset_n)
        .limit(limit_n)
        .all()
    )
    return items, total, limit_n, offset_n


def get_article_by_slug(db: Session, slug: str) -> Article:
    slug = clean(slug)
    if not slug:
        raise ArticleValidationError("Invalid slug")
    article = db.query(Article).filter(Article.slug == slug).first()
    if article is None:
        raise ArticleNotFoundError()
    return article


def _commit(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise SlugConflictError() from e


def create_article(db: Session, data: dict[str, Any]) -> Article:
    """Create an article. title, slug and status are required."""
    if not clean(data.get("title")) or not clean(data.get("slug")) or not data.get("status"):
        raise ArticleValidationError("title, slug and status are required")
    _validate_status(data.get("status"))

    article = Article(
        title=data["title"],
        slug=data["slug"],
        status=data["status"],
        category_id=resolve_category_id(db, data.get("category_id")),
        summary=data.get("summary") or "",
        body=data.get("body") or "",
        hero_image_url=data.get("hero_image_url"),
        thumbnail_url=data.get("thumbnail_url"),
        author=data.get("author"),
        source=data.get("source"),
        language=data.get("language") or "en",
        tags_csv=data.get("tags_csv"),
    )
    db.add(article)
    _commit(db)
    db.refresh(article)
    logger.info("Article created id=%s slug=%s", article.id, article.slug)
    return article


def update_article(db: Session, article_id: int, data: dict[str, Any]) -> Article:
    """Apply the provided fields to an article; categoryId, when sent, is resolved as on create."""
    _validate_status(data.get("status"))
    article = db.get(Article, article_id)
    if article is None:
        raise ArticleNotFoundError()

    for field in EDITABLE_FIELDS:
        if field not in data:
            continue
        if data[field] is None and field in REQUIRED_COLUMNS:
            continue
        setattr(article, field, data[field])
    if "category_id" in data:
        article.category_id = resolve_category_id(db, data["category_id"])
    _commit(db)
    db.refresh(article)
    return article


def delete_article(db: Session, article_id: int) -> None:
    article = db.get(Article, article_id)
    if article is None:
        raise ArticleNotFoundError()
    db.delete(article)
    db.commit()


def home_sections(db: Session, lang: str | None = None) -> dict[str, Any]:
    """Newest published article as hero plus the newest few per home section."""
    base = db.query(Article).filter(Article.status == "published")
    lang = clean(lang)
    if lang:
        base = base.filter(Article.language == lang)
    newest_first = (Article.published_at.desc(), Article.id.desc())

    sections: dict[str, Any] = {"hero": base.order_by(*newest_first).first()}
    for slug in HOME_SECTIONS:
        sections[slug] = (
            base.join(Article.category)
            .filter(Category.slug == slug)
            .order_by(*newest_first)
            .limit(HOME_SECTION_SIZE)
            .all()
        )
    return sections
