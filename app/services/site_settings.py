"""Key/value site settings stored as JSON text."""

import copy
import json
import logging
from typing import Any

from sqlalchemy.orm import Session

from app.core.store import EntityStore
from app.models import Setting

logger = logging.getLogger(__name__)

# Keys that answer with a default document instead of 404 before the first save.
SETTING_DEFAULTS: dict[str, dict[str, Any]] = {
    "news-split": {
        "mode": "article",  # 'article' | 'custom'
        "articleSlug": "",
        "item": {
            "leftImage": "",
            "rightImage": "",
            "title": "",
            "description": "",
            "byline": "",
            "href": "",
            "publishedAt": "",
        },
    },
}


class SettingNotFoundError(Exception):
    def __init__(self, key: str) -> None:
        self.message = "Not found"
        self.key = key
        super().__init__(f"setting {key!r} not found")


def get_setting(db: Session, key: str) -> Any:
    """
    Stored value for `key`, the key's default if it has one, else SettingNotFoundError.
    A stored value that is not valid JSON reads as an empty object.
    """
    row = EntityStore(db).get(Setting, key)
    if row is None:
        if key in SETTING_DEFAULTS:
            return copy.deepcopy(SETTING_DEFAULTS[key])
        raise SettingNotFoundError(key)
    try:
        return json.loads(row.value or "{}")
    except json.JSONDecodeError:
        logger.warning("Setting %s holds invalid JSON; returning {}", key)
        return {}


def put_setting(db: Session, key: str, value: Any) -> Any:
    """Create or overwrite the setting and return the value as stored."""
    encoded = json.dumps(value)
    EntityStore(db).upsert(
        Setting,
        "key",
        key,
        create={"key": key, "value": encoded},
        update={"value": encoded},
    )
    return value
