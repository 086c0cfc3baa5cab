"""ORM model for admin accounts."""

from sqlalchemy import Boolean, Column, DateTime, Enum, Integer, String, func

from app.models.base import Base

ROLE_VALUES = ("ADMIN", "EDITOR", "VIEWER")


class User(Base):
    """
    Admin account used by the session login and the startup bootstrapper.

    Older deployments may carry a different shape (username only, a `password`
    column holding the hash, a free-text role); the identity services discover
    the shape at runtime and do not rely on these exact columns.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=True, unique=True, index=True)
    username = Column(String(255), nullable=True, unique=True, index=True)
    name = Column(String(255), nullable=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(Enum(*ROLE_VALUES, name="user_role"), nullable=False, default="VIEWER")
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
