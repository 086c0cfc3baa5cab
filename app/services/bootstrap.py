"""
Adaptive admin bootstrap: write a default admin account into whatever
account model the schema declares.

This is a reset, not a create-only seed: re-running it overwrites the
password, role, display name and activation flags of the existing account.
"""

import enum
import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy.orm import DeclarativeBase, sessionmaker

from app.core.database import SessionLocal, session_scope
from app.core.security import hash_password
from app.core.store import EntityStore, StoreError
from app.models import Base
from app.services.account_schema import SchemaDescriptor, describe_account_model
from app.services.identity import local_part

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_NAME = "Admin"


class BootstrapOutcome(str, enum.Enum):
    CREATED = "created"
    UPDATED = "updated"
    SKIPPED = "skipped"


def _natural_key(descriptor: SchemaDescriptor, identity: str) -> tuple[str, str] | None:
    if descriptor.email_field:
        return descriptor.email_field, identity
    if descriptor.username_field:
        return descriptor.username_field, local_part(identity)
    return None


def build_admin_payloads(
    descriptor: SchemaDescriptor,
    identity: str,
    password_hash: str,
) -> tuple[str, str, dict[str, Any], dict[str, Any]] | None:
    """
    Return (key_field, key_value, create_payload, update_payload), or None when
    the schema has no usable identity or credential field.
    """
    key = _natural_key(descriptor, identity)
    if key is None or descriptor.credential_field is None:
        return None
    key_field, key_value = key

    update: dict[str, Any] = {descriptor.credential_field: password_hash}
    if descriptor.name_field:
        update[descriptor.name_field] = DEFAULT_ADMIN_NAME
    if descriptor.role_field:
        update[descriptor.role_field] = descriptor.admin_role
    for flag in descriptor.activation_fields:
        update[flag] = True

    create = {key_field: key_value, **update}
    if (
        descriptor.username_required
        and descriptor.username_field
        and descriptor.username_field != key_field
    ):
        create[descriptor.username_field] = local_part(identity)
    return key_field, key_value, create, update


def bootstrap_admin(
    store: EntityStore,
    base: type[DeclarativeBase],
    identity: str,
    password: str,
) -> BootstrapOutcome:
    """
    Create or reset the default admin account.

    Returns SKIPPED when no account model (or no identity/credential field)
    exists. StoreError from the upsert propagates to the caller.
    """
    descriptor = describe_account_model(base)
    if descriptor is None:
        return BootstrapOutcome.SKIPPED

    payloads = build_admin_payloads(descriptor, identity, hash_password(password))
    if payloads is None:
        logger.warning(
            "Account model %s has no identity or credential field; bootstrap skipped",
            descriptor.entity_name,
        )
        return BootstrapOutcome.SKIPPED
    key_field, key_value, create, update = payloads

    _, created = store.upsert(descriptor.model, key_field, key_value, create, update)
    outcome = BootstrapOutcome.CREATED if created else BootstrapOutcome.UPDATED
    logger.info("Admin account %s: %s=%s", outcome.value, key_field, key_value)
    return outcome


def run_seed_on_boot(
    settings: "Settings",
    session_factory: sessionmaker = SessionLocal,
    base: type[DeclarativeBase] = Base,
) -> BootstrapOutcome:
    """
    Startup hook: run bootstrap_admin when SEED_ON_BOOT is set.

    Never raises for database errors; startup continues and the failure is logged.
    """
    if not settings.SEED_ON_BOOT:
        logger.info("SEED_ON_BOOT not set; skipping admin bootstrap.")
        return BootstrapOutcome.SKIPPED

    logger.info("SEED_ON_BOOT set; bootstrapping admin account.")
    with session_scope(session_factory) as db:
        try:
            return bootstrap_admin(
                EntityStore(db),
                base,
                settings.ADMIN_EMAIL,
                settings.ADMIN_PASSWORD.get_secret_value(),
            )
        except StoreError as e:
            logger.exception("Admin bootstrap failed: %s", e.message)
            return BootstrapOutcome.SKIPPED
