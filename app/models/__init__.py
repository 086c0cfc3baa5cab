"""SQLAlchemy ORM models."""

from app.models.article import Article
from app.models.base import Base
from app.models.category import Category
from app.models.setting import Setting
from app.models.user import User

__all__ = ["Article", "Base", "Category", "Setting", "User"]
