"""
Discover which mapped model holds admin accounts and which of its attributes
carry identity, credential, role and activation state.

Account tables have changed shape over the life of the site (email vs
username login, `password` vs `password_hash`, free-text vs enumerated
role), so nothing here assumes a fixed set of columns. The result is built
from the declarative registry once per base and cached for the process.
"""

import enum
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import DeclarativeBase, Mapper

logger = logging.getLogger(__name__)

# Entity names that may hold accounts, highest priority first (case-insensitive).
ACCOUNT_ENTITY_CANDIDATES = ("User", "Users", "Account", "Admin")

EMAIL_FIELDS = ("email",)
USERNAME_FIELDS = ("username",)
HASH_FIELDS = ("password_hash", "passwordHash")
PASSWORD_FIELDS = ("password",)
NAME_FIELDS = ("name", "display_name", "displayName", "full_name")
ROLE_FIELDS = ("role",)
ACTIVATION_FIELDS = ("is_active", "active", "enabled", "is_enabled", "isActive")
CREATED_AT_FIELDS = ("created_at", "createdAt")
UPDATED_AT_FIELDS = ("updated_at", "updatedAt")

ADMIN_ROLE = "ADMIN"
# Session role when the account has none.
DEFAULT_SESSION_ROLE = "admin"


@dataclass(frozen=True)
class SchemaDescriptor:
    """Physical attribute names of the account model; None where the schema has no such field."""

    entity_name: str
    model: type
    pk_field: str
    email_field: str | None = None
    username_field: str | None = None
    username_required: bool = False
    hash_field: str | None = None
    password_field: str | None = None
    name_field: str | None = None
    role_field: str | None = None
    role_values: tuple[str, ...] | None = None
    admin_role: str | None = None
    activation_fields: tuple[str, ...] = ()
    created_at_field: str | None = None
    updated_at_field: str | None = None

    @property
    def credential_field(self) -> str | None:
        """Field a new credential is written to: the dedicated hash field wins."""
        return self.hash_field or self.password_field

    def stored_credential(self, account: Any) -> str | None:
        """Credential held by an account row: dedicated hash field first, generic field second."""
        for field in (self.hash_field, self.password_field):
            if field is None:
                continue
            value = getattr(account, field, None)
            if isinstance(value, str) and value:
                return value
        return None

    def role_of(self, account: Any) -> str | None:
        if self.role_field is None:
            return None
        value = getattr(account, self.role_field, None)
        if isinstance(value, enum.Enum):
            value = value.value
        return str(value) if value else None

    def attribute(self, account: Any, field: str | None) -> Any:
        return getattr(account, field, None) if field else None


def _first_present(names: set[str], candidates: tuple[str, ...]) -> str | None:
    return next((c for c in candidates if c in names), None)


def _find_account_mapper(base: type[DeclarativeBase]) -> Mapper | None:
    mappers = sorted(base.registry.mappers, key=lambda m: m.class_.__name__)
    for candidate in ACCOUNT_ENTITY_CANDIDATES:
        wanted = candidate.lower()
        for mapper in mappers:
            if mapper.class_.__name__.lower() == wanted:
                return mapper
        for mapper in mappers:
            table_name = getattr(mapper.local_table, "name", "")
            if table_name.lower() == wanted:
                return mapper
    return None


def _enum_values(column_type: Any) -> tuple[str, ...] | None:
    if isinstance(column_type, SAEnum):
        return tuple(column_type.enums)
    return None


def resolve_admin_role(role_values: tuple[str, ...] | None) -> str:
    """
    Role value to grant the bootstrap admin.

    Enumerated roles: the declared spelling of ADMIN if present (case-insensitive),
    else the first declared value. Free-text roles: the literal ADMIN.
    """
    if not role_values:
        return ADMIN_ROLE
    for value in role_values:
        if value.upper() == ADMIN_ROLE:
            return value
    return role_values[0]


@lru_cache
def describe_account_model(base: type[DeclarativeBase]) -> SchemaDescriptor | None:
    """
    Describe the account model registered on `base`, or return None when no
    candidate entity exists (callers treat that as "skip", not as an error).
    """
    mapper = _find_account_mapper(base)
    if mapper is None:
        logger.info(
            "No account entity among %s; identity features disabled",
            ", ".join(ACCOUNT_ENTITY_CANDIDATES),
        )
        return None

    columns = {prop.key: prop.columns[0] for prop in mapper.column_attrs}
    names = set(columns)

    pk_field = mapper.get_property_by_column(mapper.primary_key[0]).key
    username_field = _first_present(names, USERNAME_FIELDS)
    role_field = _first_present(names, ROLE_FIELDS)
    role_values = _enum_values(columns[role_field].type) if role_field else None

    descriptor = SchemaDescriptor(
        entity_name=mapper.class_.__name__,
        model=mapper.class_,
        pk_field=pk_field,
        email_field=_first_present(names, EMAIL_FIELDS),
        username_field=username_field,
        username_required=bool(username_field) and not columns[username_field].nullable,
        hash_field=_first_present(names, HASH_FIELDS),
        password_field=_first_present(names, PASSWORD_FIELDS),
        name_field=_first_present(names, NAME_FIELDS),
        role_field=role_field,
        role_values=role_values,
        admin_role=resolve_admin_role(role_values) if role_field else None,
        activation_fields=tuple(c for c in ACTIVATION_FIELDS if c in names),
        created_at_field=_first_present(names, CREATED_AT_FIELDS),
        updated_at_field=_first_present(names, UPDATED_AT_FIELDS),
    )
    logger.info(
        "Account model %s: email=%s username=%s credential=%s role=%s",
        descriptor.entity_name,
        descriptor.email_field,
        descriptor.username_field,
        descriptor.credential_field,
        descriptor.role_field,
    )
    return descriptor
