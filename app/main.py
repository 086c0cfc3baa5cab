"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import sessionmaker
from starlette.middleware.sessions import SessionMiddleware

from app.api.v1 import build_router
from app.core.config import PREVIEW_ORIGIN_REGEX, Settings, get_settings
from app.core.database import session_factory_for
from app.core.store import StoreError
from app.services.bootstrap import run_seed_on_boot

logger = logging.getLogger(__name__)


async def _store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    logger.error("%s %s failed in the store: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


def create_app(
    settings: Settings | None = None,
    session_factory: sessionmaker | None = None,
) -> FastAPI:
    """
    Build the API for the given settings (defaults to the environment).

    Requests and the startup bootstrap share one session factory: the one
    passed in, or one bound to settings.DATABASE_URL.
    """
    settings = settings or get_settings()
    session_factory = session_factory or session_factory_for(settings.DATABASE_URL, settings.DEBUG)
    is_prod = settings.APP_ENV == "prod"

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Runs once, before the server accepts requests.
        run_seed_on_boot(settings, session_factory=session_factory)
        yield

    app = FastAPI(
        title="Timely Voice API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.session_factory = session_factory

    if settings.ADMIN_OPEN:
        logger.warning("ADMIN_OPEN=1: admin authentication is DISABLED (no password).")

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SESSION_SECRET.get_secret_value(),
        session_cookie=settings.SESSION_COOKIE_NAME,
        max_age=settings.SESSION_MAX_AGE_SEC,
        same_site="none" if is_prod else "lax",
        https_only=is_prod,
    )
    # Added last so it wraps the session middleware and answers preflights first.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_origin_regex=PREVIEW_ORIGIN_REGEX,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.add_exception_handler(StoreError, _store_error_handler)

    app.include_router(build_router(open_admin=settings.ADMIN_OPEN), prefix=settings.API_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Timely Voice API"}

    return app


app = create_app()
