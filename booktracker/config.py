"""Application configuration using Pydantic settings."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Book Tracker"
    environment: Literal["development", "production", "test"] = "development"
    debug: bool = False

    # Database
    database_url: str = "postgresql+psycopg2://localhost:5432/booktracker"
    database_pool_size: int = 5
    database_max_overflow: int = 10
    run_migrations: bool = True

    # CORS
    cors_origin: str = "*"

    # Google Books
    google_books_api_key: Optional[str] = None
    google_books_base_url: str = "https://www.googleapis.com/books/v1"
    google_books_timeout: float = 10.0

    # Metrics
    metrics_enabled: bool = True

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    workers: int = 1


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
