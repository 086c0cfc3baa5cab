"""
Open-admin bypass (ADMIN_OPEN=1).

WARNING: this turns authentication off. Every API request that arrives
without a session is logged in as the ADMIN_EMAIL account, so anyone who can
reach the API has admin rights. It exists for locked-down operator hosts
only; keep it off anywhere else.

The bypass lives here and is installed as a router dependency only when the
flag is on. The regular login flow in auth_session does not know about it.
"""

import logging
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.store import EntityStore
from app.models import Base
from app.services.account_schema import describe_account_model
from app.services.auth_session import SESSION_USER_ID, establish_session
from app.services.identity import resolve_account

logger = logging.getLogger(__name__)


def attach_open_admin_session(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
) -> None:
    """Router dependency: give sessionless requests the default admin's session."""
    if request.session.get(SESSION_USER_ID) is not None:
        return
    descriptor = describe_account_model(Base)
    identity = request.app.state.settings.ADMIN_EMAIL
    account = resolve_account(EntityStore(db), descriptor, identity)
    if account is None:
        logger.error("ADMIN_OPEN: no admin account found for %s", identity)
        return
    establish_session(request.session, descriptor, account)
