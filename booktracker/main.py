"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from prometheus_fastapi_instrumentator import Instrumentator

from booktracker.api.routes import books_router, health_router, stats_router
from booktracker.config import Settings, get_settings
from booktracker.core.books.google_books import GoogleBooksClient
from booktracker.core.db import Database
from booktracker.core.migrations import run_migrations
from booktracker.utils.logging import setup_logging

# Static files directory
STATIC_DIR = Path(__file__).parent / "static"

VERSION = "1.0.0"

logger = structlog.get_logger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    """Flatten validation errors into one client-facing sentence."""
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path"))
        message = error.get("msg", "Invalid value").removeprefix("Value error, ")
        messages.append(f"{field}: {message}" if field else message)
    return "; ".join(messages) or "Invalid request"


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report invalid requests as 400 rather than FastAPI's default 422."""
    return JSONResponse(status_code=400, content={"detail": _validation_message(exc)})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application around the given (or environment) settings."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler for startup and shutdown."""
        setup_logging(debug=settings.debug)

        db = Database(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        google_books = GoogleBooksClient(
            api_key=settings.google_books_api_key,
            timeout=settings.google_books_timeout,
            base_url=settings.google_books_base_url,
        )
        try:
            if settings.run_migrations:
                run_migrations(db)
            app.state.db = db
            app.state.google_books = google_books
            logger.info("Book Tracker started", environment=settings.environment)
            yield
        finally:
            await google_books.close()
            db.dispose()

    app = FastAPI(
        title=settings.app_name,
        description="Personal book tracking API with Google Books lookup",
        version=VERSION,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[origin.strip() for origin in settings.cors_origin.split(",")],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Prometheus metrics
    if settings.metrics_enabled:
        Instrumentator().instrument(app).expose(app, endpoint="/metrics")

    # Include routers
    app.include_router(health_router)
    app.include_router(books_router)
    app.include_router(stats_router)

    # Mount static files
    if STATIC_DIR.exists():
        app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    @app.get("/", include_in_schema=False)
    async def root():
        """Serve the web UI."""
        return FileResponse(STATIC_DIR / "index.html")

    @app.get("/api")
    async def api_info():
        """API information endpoint."""
        return {
            "service": settings.app_name,
            "version": VERSION,
            "environment": settings.environment,
            "docs": "/docs",
            "openapi": "/openapi.json",
            "health": "/api/health",
            "books": "/api/books",
            "stats": "/api/stats/dashboard",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "booktracker.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=settings.workers,
    )
