"""Resolve a typed-in login identity (email or username) to an account row."""

import logging
from typing import Any

from app.core.store import EntityStore, StoreError
from app.services.account_schema import SchemaDescriptor

logger = logging.getLogger(__name__)


def local_part(identity: str) -> str:
    """Text before the first '@' ("admin@local" -> "admin"); the identity itself if there is none."""
    return identity.split("@", 1)[0] if "@" in identity else identity


def _lookup_steps(descriptor: SchemaDescriptor, identity: str) -> list[tuple[str, str]]:
    """(field, value) lookups in priority order, skipping fields the schema does not have."""
    has_at = "@" in identity
    # An already-lowercase identity was tried by step 1.
    lowered = identity.lower()
    steps: list[tuple[str | None, str]] = [
        (descriptor.email_field, identity),
        (descriptor.email_field if has_at and lowered != identity else None, lowered),
        (descriptor.username_field, identity),
        (descriptor.username_field if has_at else None, local_part(identity)),
    ]
    return [(field, value) for field, value in steps if field is not None]


def resolve_account(
    store: EntityStore,
    descriptor: SchemaDescriptor | None,
    identity: str,
) -> Any | None:
    """
    Find the account for `identity`, trying in order:

    1. email == identity
    2. email == identity.lower()           (only if identity contains '@' and has uppercase)
    3. username == identity
    4. username == local part of identity  (only if identity contains '@')

    The first hit wins. A failing lookup counts as a miss and the chain continues.
    """
    if descriptor is None or not identity:
        return None
    for field, value in _lookup_steps(descriptor, identity):
        try:
            account = store.find_unique(descriptor.model, field, value)
        except StoreError as e:
            logger.warning("Account lookup by %s failed: %s", field, e.message)
            continue
        if account is not None:
            return account
    return None
