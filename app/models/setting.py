"""ORM model for key/value site settings (navbar, home page layout, ...)."""

from sqlalchemy import Column, String, Text

from app.models.base import Base


class Setting(Base):
    """Site setting; `value` is a JSON document stored as text."""

    __tablename__ = "settings"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False, default="{}")
