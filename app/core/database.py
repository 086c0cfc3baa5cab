"""Engine, request-scoped session dependency, and a scoped session for scripts and startup hooks."""

from collections.abc import Generator, Iterator
from contextlib import contextmanager

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import settings

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=settings.DEBUG,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def session_factory_for(database_url: str, echo: bool = False) -> sessionmaker:
    """SessionLocal when `database_url` is the environment's DATABASE_URL, else a factory on a new engine."""
    if database_url == settings.DATABASE_URL:
        return SessionLocal
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=create_engine(database_url, pool_pre_ping=True, echo=echo),
    )


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency that yields a session from the app's factory and closes it when done."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def session_scope(factory: sessionmaker = SessionLocal) -> Iterator[Session]:
    """Open a session outside a request (CLI scripts, lifespan hooks); always closed on exit."""
    db = factory()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
