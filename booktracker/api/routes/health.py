"""Health check endpoints."""

from datetime import datetime, timezone
from typing import Annotated

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from booktracker.core.db import Database, get_database

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Health"])


@router.get("/health")
async def health_check() -> dict:
    """Liveness check - verifies the service is running."""
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("/db-health")
def db_health_check(
    db: Annotated[Database, Depends(get_database)],
):
    """Readiness check - verifies the database answers queries."""
    try:
        db_time = db.ping()
    except SQLAlchemyError as e:
        logger.error("Database health check failed", error=str(e))
        return JSONResponse(
            status_code=500,
            content={"status": "error", "message": "Database unavailable"},
        )
    return {"status": "ok", "db_time": db_time.isoformat()}
