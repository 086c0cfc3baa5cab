"""
Session login, logout and "who am I" on top of identity resolution and
credential verification.

The session is a plain mutable mapping (Starlette's request.session in the
API). Only two keys are written: `userId` and `role`.
"""

import logging
from collections.abc import MutableMapping
from typing import Any

from app.core.security import verify_password
from app.core.store import EntityStore
from app.services.account_schema import DEFAULT_SESSION_ROLE, SchemaDescriptor
from app.services.identity import resolve_account

logger = logging.getLogger(__name__)

SESSION_USER_ID = "userId"
SESSION_ROLE = "role"


class MissingCredentialsError(Exception):
    """Raised when login is attempted without an identity or a password."""

    def __init__(self, message: str = "Email/username and password are required") -> None:
        self.message = message
        super().__init__(message)


class InvalidCredentialsError(Exception):
    """Raised for any failed login; deliberately does not say which part was wrong."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        self.message = message
        super().__init__(message)


class NotAuthenticatedError(Exception):
    """Raised when the session has no user or the user no longer exists."""

    def __init__(self, message: str = "Not authenticated") -> None:
        self.message = message
        super().__init__(message)


def sanitize_account(descriptor: SchemaDescriptor, account: Any) -> dict[str, Any]:
    """Client-safe view of an account: identity, display name, role, timestamps. Never the credential."""
    return {
        "id": getattr(account, descriptor.pk_field),
        "email": descriptor.attribute(account, descriptor.email_field),
        "username": descriptor.attribute(account, descriptor.username_field),
        "name": descriptor.attribute(account, descriptor.name_field),
        "role": descriptor.role_of(account),
        "created_at": descriptor.attribute(account, descriptor.created_at_field),
        "updated_at": descriptor.attribute(account, descriptor.updated_at_field),
    }


def establish_session(
    session: MutableMapping[str, Any],
    descriptor: SchemaDescriptor,
    account: Any,
) -> None:
    """Mark the session as authenticated for `account` (role defaults to 'admin')."""
    session[SESSION_USER_ID] = getattr(account, descriptor.pk_field)
    session[SESSION_ROLE] = descriptor.role_of(account) or DEFAULT_SESSION_ROLE


class SessionAuthenticator:
    """Login state machine: Anonymous <-> Authenticated(userId, role)."""

    def __init__(
        self,
        store: EntityStore,
        descriptor: SchemaDescriptor | None,
        *,
        allow_plaintext: bool = False,
    ) -> None:
        self.store = store
        self.descriptor = descriptor
        self.allow_plaintext = allow_plaintext

    def login(
        self,
        session: MutableMapping[str, Any],
        identity: str | None,
        password: str | None,
    ) -> dict[str, Any]:
        """
        Verify identity/password and store userId and role in the session.

        Raises MissingCredentialsError when either value is empty or None and
        InvalidCredentialsError for an unknown identity, an account without a
        credential, or a wrong password.
        """
        if not identity or not password:
            raise MissingCredentialsError()
        if self.descriptor is None:
            raise InvalidCredentialsError()

        account = resolve_account(self.store, self.descriptor, identity)
        if account is None:
            raise InvalidCredentialsError()

        stored = self.descriptor.stored_credential(account)
        if not verify_password(password, stored, allow_plaintext=self.allow_plaintext):
            raise InvalidCredentialsError()

        establish_session(session, self.descriptor, account)
        logger.info(
            "Login succeeded for %s id=%s",
            self.descriptor.entity_name,
            session[SESSION_USER_ID],
        )
        return sanitize_account(self.descriptor, account)

    def logout(self, session: MutableMapping[str, Any]) -> dict[str, bool]:
        """Drop everything in the session. Succeeds even when nobody was logged in."""
        session.clear()
        return {"ok": True}

    def who_am_i(self, session: MutableMapping[str, Any]) -> dict[str, Any]:
        """Return the sanitized account for the session's userId; stale or empty sessions raise."""
        user_id = session.get(SESSION_USER_ID)
        if user_id is None or self.descriptor is None:
            raise NotAuthenticatedError()
        account = self.store.get(self.descriptor.model, user_id)
        if account is None:
            raise NotAuthenticatedError()
        return sanitize_account(self.descriptor, account)
