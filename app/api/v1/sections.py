"""Home page feed endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.content import HomeSectionsResponse
from app.services.articles import home_sections

router = APIRouter()


@router.get("/home", response_model=HomeSectionsResponse)
def get_home(
    db: Annotated[Session, Depends(get_db)],
    lang: str | None = None,
) -> HomeSectionsResponse:
    """Newest published story as hero and the six newest per home section."""
    return HomeSectionsResponse.model_validate(home_sections(db, lang), from_attributes=True)
