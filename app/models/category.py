"""ORM model for article categories (site sections)."""

from sqlalchemy import Column, Integer, String

from app.models.base import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    sort_index = Column(Integer, nullable=False, default=0)
