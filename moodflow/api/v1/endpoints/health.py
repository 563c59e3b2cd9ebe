"""
Health check endpoint.
"""
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from moodflow import __version__
from moodflow.core.database import get_session
from moodflow.core.logging_config import log_error
from moodflow.core.time_utils import utc_now
from moodflow.schemas.base import to_utc_iso

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(session: Annotated[Session, Depends(get_session)]):
    """Liveness plus a database connectivity check."""
    db_ok = True
    try:
        session.connection().execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        log_error(exc)
        db_ok = False
    return {
        "status": "ok",
        "database": "ok" if db_ok else "unavailable",
        "version": __version__,
        "time": to_utc_iso(utc_now()),
    }
