"""Session login, logout and current-account endpoints plus the auth dependencies."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.store import EntityStore
from app.models import Base
from app.schemas.auth import AccountResponse, AccountView, LoginRequest, LogoutResponse
from app.services.account_schema import describe_account_model
from app.services.auth_session import (
    InvalidCredentialsError,
    MissingCredentialsError,
    NotAuthenticatedError,
    SessionAuthenticator,
)

router = APIRouter()


def get_authenticator(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
) -> SessionAuthenticator:
    """Dependency: authenticator bound to this request's DB session."""
    return SessionAuthenticator(
        EntityStore(db),
        describe_account_model(Base),
        allow_plaintext=request.app.state.settings.LEGACY_PLAINTEXT_PASSWORDS,
    )


def get_current_account(
    request: Request,
    auth: Annotated[SessionAuthenticator, Depends(get_authenticator)],
) -> AccountView:
    """Dependency: require a live session. Raises 401 if missing or stale."""
    try:
        return AccountView(**auth.who_am_i(request.session))
    except NotAuthenticatedError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=e.message)


@router.post("/login", response_model=AccountResponse)
def login(
    body: LoginRequest,
    request: Request,
    auth: Annotated[SessionAuthenticator, Depends(get_authenticator)],
) -> AccountResponse:
    """
    Log in with an email or username and a password; sets the session cookie.

    Unknown identities and wrong passwords get the same 401 response.
    """
    try:
        user = auth.login(request.session, body.identity, body.password)
    except MissingCredentialsError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=e.message)
    return AccountResponse(user=AccountView(**user))


@router.post("/logout", response_model=LogoutResponse)
def logout(
    request: Request,
    auth: Annotated[SessionAuthenticator, Depends(get_authenticator)],
) -> LogoutResponse:
    """
    Destroy the session. Always succeeds. SessionMiddleware expires the cookie
    (with the configured SameSite and Secure flags) once the session is empty.
    """
    auth.logout(request.session)
    return LogoutResponse(ok=True)


@router.get("/me", response_model=AccountResponse)
def me(
    current: Annotated[AccountView, Depends(get_current_account)],
) -> AccountResponse:
    """Return the account behind the current session."""
    return AccountResponse(user=current)
