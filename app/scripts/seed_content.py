"""
Seed default categories, sample articles and the navbar setting. Run from project root:
  python -m app.scripts.seed_content

Categories and articles are only created when their slug is missing (existing
rows are left alone). The navbar setting is overwritten on every run.
"""
import logging
import sys

from app.core.database import session_scope
from app.core.store import EntityStore, StoreError
from app.models import Article, Category
from app.services.site_settings import put_setting

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

CATEGORIES = [
    {"name": "Breaking", "slug": "breaking", "sort_index": 0},
    {"name": "Business", "slug": "business", "sort_index": 1},
    {"name": "Finance", "slug": "finance", "sort_index": 2},
    {"name": "Tech", "slug": "tech", "sort_index": 3},
    {"name": "Sports", "slug": "sports", "sort_index": 4},
    {"name": "Entertainment", "slug": "entertainment", "sort_index": 5},
]

# (article fields, category slug)
SAMPLE_ARTICLES = [
    (
        {
            "slug": "sample-hero-story",
            "title": "Sample Hero Story",
            "summary": "This is a sample hero article used for home page testing.",
            "body": "Longer body text for the hero story.",
            "hero_image_url": "https://picsum.photos/1200/675",
            "thumbnail_url": "https://picsum.photos/400/225",
            "author": "TV Staff",
            "source": "The Timely Voice",
            "language": "en",
            "status": "published",
            "tags_csv": "top,hero",
        },
        "breaking",
    ),
    (
        {
            "slug": "finance-markets-today",
            "title": "Markets Today: Quick Snapshot",
            "summary": "Stocks mixed as investors weigh key earnings.",
            "body": "Market wrap details go here.",
            "thumbnail_url": "https://picsum.photos/400/225?2",
            "author": "Finance Desk",
            "source": "The Timely Voice",
            "language": "en",
            "status": "published",
            "tags_csv": "finance",
        },
        "finance",
    ),
    (
        {
            "slug": "tech-latest-gadgets",
            "title": "Five Gadgets Making Waves",
            "summary": "A roundup of notable gadgets this week.",
            "body": "Gadget details here.",
            "thumbnail_url": "https://picsum.photos/400/225?3",
            "author": "Tech Desk",
            "source": "The Timely Voice",
            "language": "en",
            "status": "published",
            "tags_csv": "tech",
        },
        "tech",
    ),
]

NAVBAR = {
    "siteName": "THE TIMELY VOICE",
    "languages": ["ENGLISH", "हिंदी", "বাংলা", "मराठी", "తెలుగు", "தமிழ்"],
    "nav": [
        {"key": "top", "label": "TOP NEWS", "to": "/articles"},
        {"key": "india", "label": "INDIA", "to": "/articles?section=india"},
        {"key": "world", "label": "WORLD", "to": "/articles?section=world"},
        {"key": "finance", "label": "FINANCE", "to": "/articles?section=finance"},
        {"key": "health", "label": "HEALTH & LIFESTYLE", "to": "/articles?section=health"},
        {"key": "tech", "label": "TECH", "to": "/articles?section=tech"},
        {"key": "entertainment", "label": "ENTERTAINMENT", "to": "/articles?section=entertainment"},
        {"key": "business", "label": "BUSINESS", "to": "/articles?section=business"},
        {"key": "sports", "label": "SPORTS", "to": "/articles?section=sports"},
        {"key": "women", "label": "WOMEN MAGAZINE", "to": "/articles?section=women"},
    ],
    "ctas": [{"label": "GET THE DAILY UPDATES", "kind": "outline", "href": "#"}],
    "liveText": "LIVE",
    "liveTicker": "Weather: Heavy rain alert for Mumbai, Pune",
}


def seed_content(store: EntityStore) -> tuple[int, int]:
    """Create missing categories and sample articles. Returns (categories_created, articles_created)."""
    categories_created = 0
    category_ids: dict[str, int] = {}
    for data in CATEGORIES:
        row = store.find_unique(Category, "slug", data["slug"])
        if row is None:
            row = store.create(Category, data)
            categories_created += 1
        category_ids[data["slug"]] = row.id

    articles_created = 0
    for data, category_slug in SAMPLE_ARTICLES:
        if store.find_unique(Article, "slug", data["slug"]) is None:
            store.create(Article, {**data, "category_id": category_ids[category_slug]})
            articles_created += 1

    put_setting(store.session, "navbar", NAVBAR)
    return categories_created, articles_created


def main() -> int:
    with session_scope() as db:
        try:
            categories_created, articles_created = seed_content(EntityStore(db))
        except StoreError as e:
            logger.exception("Content seed failed: %s", e.message)
            return 1
    logger.info(
        "Seed complete: categories_created=%s articles_created=%s navbar=updated",
        categories_created,
        articles_created,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
