"""Site settings endpoints (navbar, home page split, ...): arbitrary JSON per key."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_account
from app.core.database import get_db
from app.schemas.auth import AccountView
from app.services.site_settings import SettingNotFoundError, get_setting, put_setting

router = APIRouter()


@router.get("/{key}")
def read_setting(key: str, db: Annotated[Session, Depends(get_db)]) -> Any:
    """Stored JSON for `key`; known keys fall back to a default document instead of 404."""
    try:
        return get_setting(db, key)
    except SettingNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.put("/{key}")
def write_setting(
    key: str,
    db: Annotated[Session, Depends(get_db)],
    _account: Annotated[AccountView, Depends(get_current_account)],
    value: Annotated[Any, Body()] = None,
) -> Any:
    """Create or replace the JSON stored under `key` and echo it back."""
    return put_setting(db, key, {} if value is None else value)
