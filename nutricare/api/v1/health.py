"""Liveness endpoint: reports environment, version and database reachability."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from nutricare import __version__
from nutricare.core.config import get_settings
from nutricare.core.database import check_db_connected, get_db
from nutricare.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(db: Annotated[Session, Depends(get_db)]) -> HealthResponse:
    """Used by the hosting platform's health checks; never requires a token."""
    return HealthResponse(
        status="ok",
        version=__version__,
        environment=get_settings().APP_ENV,
        database="connected" if check_db_connected(db) else "disconnected",
    )
