"""ORM model for news articles."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from app.models.base import Base

ARTICLE_STATUSES = ("draft", "published")


class Article(Base):
    """
    One news story. `status` is 'draft' or 'published'; only published
    articles appear in the public listings and the home sections.
    """

    __tablename__ = "articles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    title = Column(String(512), nullable=False)
    summary = Column(Text, nullable=False, default="")
    body = Column(Text, nullable=False, default="")
    hero_image_url = Column(String(2048), nullable=True)
    thumbnail_url = Column(String(2048), nullable=True)
    author = Column(String(255), nullable=True)
    source = Column(String(255), nullable=True)
    language = Column(String(16), nullable=False, default="en", index=True)
    status = Column(String(16), nullable=False, default="draft", index=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    tags_csv = Column(String(1024), nullable=True)
    published_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    category = relationship("Category", lazy="joined")
