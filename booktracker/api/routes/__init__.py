"""API routes."""

from booktracker.api.routes.health import router as health_router
from booktracker.api.routes.books import router as books_router
from booktracker.api.routes.stats import router as stats_router

__all__ = ["health_router", "books_router", "stats_router"]
