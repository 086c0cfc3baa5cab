"""Core app configuration, database sessions and the entity store."""

from app.core.config import get_settings, settings
from app.core.database import get_db, session_scope
from app.core.store import EntityStore, StoreError

__all__ = ["EntityStore", "StoreError", "get_db", "get_settings", "session_scope", "settings"]
