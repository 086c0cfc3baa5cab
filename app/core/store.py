"""
Generic entity store over a SQLAlchemy session.

The identity core never queries the ORM directly; it receives an EntityStore
built from the current session so that any mapped model (whatever its field
names) can be looked up, created and updated, and so tests can pass doubles.
"""

from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session


class StoreError(Exception):
    """Raised when a store call fails in the database layer."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class EntityStore:
    """By-field lookup, by-primary-key lookup, create, update and upsert for mapped models."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find_unique(self, model: type, field: str, value: Any) -> Any | None:
        """Return the row whose `field` equals `value`, or None."""
        try:
            return (
                self.session.query(model)
                .filter(getattr(model, field) == value)
                .first()
            )
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError(f"lookup on {model.__name__}.{field} failed") from e

    def get(self, model: type, pk: Any) -> Any | None:
        try:
            return self.session.get(model, pk)
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError(f"primary key lookup on {model.__name__} failed") from e

    def create(self, model: type, data: dict[str, Any]) -> Any:
        row = model(**data)
        try:
            self.session.add(row)
            self.session.commit()
            self.session.refresh(row)
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError(f"create on {model.__name__} failed") from e
        return row

    def update(self, row: Any, data: dict[str, Any]) -> Any:
        for field, value in data.items():
            setattr(row, field, value)
        try:
            self.session.commit()
            self.session.refresh(row)
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError(f"update on {type(row).__name__} failed") from e
        return row

    def upsert(
        self,
        model: type,
        key_field: str,
        key_value: Any,
        create: dict[str, Any],
        update: dict[str, Any],
    ) -> tuple[Any, bool]:
        """
        Create the row keyed by key_field == key_value, or apply `update` to the existing one.

        Returns (row, created).
        """
        existing = self.find_unique(model, key_field, key_value)
        if existing is None:
            return self.create(model, create), True
        return self.update(existing, update), False
