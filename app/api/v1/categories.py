"""Category listing for the site navigation and the article editor."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.models import Category
from app.schemas.content import CategoriesResponse, CategoryOut

router = APIRouter()


@router.get("", response_model=CategoriesResponse)
def list_categories(db: Annotated[Session, Depends(get_db)]) -> CategoriesResponse:
    """All categories ordered by sort index."""
    rows = db.query(Category).order_by(Category.sort_index, Category.id).all()
    return CategoriesResponse(items=[CategoryOut.model_validate(c) for c in rows])
