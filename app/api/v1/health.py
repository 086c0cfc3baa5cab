"""Health check endpoint with optional database connectivity check."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.core.database import check_db_connected, get_db
from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(request: Request, db: Session = Depends(get_db)) -> HealthResponse:
    """
    Return service health status and database connectivity.
    Reports whether the open-admin bypass is active so it is visible to monitoring.
    """
    settings = request.app.state.settings
    db_status = "connected" if check_db_connected(db) else "disconnected"

    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        database=db_status,
        open_admin=settings.ADMIN_OPEN,
        time=datetime.now(timezone.utc),
    )
