"""Shared test helpers: in-memory SQLite sessions and a TestClient wired to them."""

from typing import Any

import bcrypt
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import Settings
from app.main import create_app
from app.models import Base, User


def make_session_factory(base: type[DeclarativeBase] = Base) -> sessionmaker:
    """Fresh in-memory database with every table of `base` created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_client(session_factory: sessionmaker, **overrides: Any) -> TestClient:
    """TestClient for an app built with Settings(**overrides) and backed by session_factory."""
    return TestClient(create_app(Settings(**overrides), session_factory=session_factory))


def quick_bcrypt(plain: str) -> str:
    """Low-cost bcrypt hash for fixtures (the app itself always uses the full cost)."""
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt(rounds=4)).decode("utf-8")


def add_user(session_factory: sessionmaker, password: str = "changeme", **fields: Any) -> int:
    """Insert a User with a bcrypt credential and return its id."""
    with session_factory() as db:
        user = User(password_hash=quick_bcrypt(password), **fields)
        db.add(user)
        db.commit()
        return user.id
