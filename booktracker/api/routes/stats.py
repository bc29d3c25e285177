"""Reading statistics endpoints."""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError

from booktracker.api.schemas.stats import DashboardStats, GenreStats, MonthlyStats
from booktracker.core.stats import ReadingStats, get_reading_stats

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/stats", tags=["Statistics"])


@router.get("/dashboard", response_model=DashboardStats)
def get_dashboard(
    stats: Annotated[ReadingStats, Depends(get_reading_stats)],
) -> DashboardStats:
    """
    Dashboard summary.

    Counts of all, in-progress and recently finished books, pages read across
    finished books, average days to finish, and the five most common genres
    among finished books.
    """
    try:
        return stats.dashboard()
    except SQLAlchemyError as e:
        logger.error("Failed to compute dashboard statistics", error=str(e))
        raise HTTPException(status_code=500, detail="Failed to fetch statistics")


@router.get("/monthly", response_model=list[MonthlyStats])
def get_monthly(
    stats: Annotated[ReadingStats, Depends(get_reading_stats)],
) -> list[MonthlyStats]:
    """Books and pages finished per month over the last twelve months."""
    try:
        return stats.monthly()
    except SQLAlchemyError as e:
        logger.error("Failed to compute monthly statistics", error=str(e))
        raise HTTPException(status_code=500, detail="Failed to fetch monthly statistics")


@router.get("/genres", response_model=list[GenreStats])
def get_genres(
    stats: Annotated[ReadingStats, Depends(get_reading_stats)],
) -> list[GenreStats]:
    """How many books carry each genre."""
    try:
        return stats.genres()
    except SQLAlchemyError as e:
        logger.error("Failed to compute genre statistics", error=str(e))
        raise HTTPException(status_code=500, detail="Failed to fetch genre statistics")
