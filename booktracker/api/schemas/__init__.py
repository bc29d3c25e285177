"""API schemas."""

from booktracker.api.schemas.books import (
    Book,
    BookCreate,
    BookLookupResult,
    BookSearchResponse,
    BookSource,
    BookUpdate,
)
from booktracker.api.schemas.stats import DashboardStats, GenreCount, GenreStats, MonthlyStats

__all__ = [
    "Book",
    "BookCreate",
    "BookLookupResult",
    "BookSearchResponse",
    "BookSource",
    "BookUpdate",
    "DashboardStats",
    "GenreCount",
    "GenreStats",
    "MonthlyStats",
]
