"""Pooled relational store and the ``books`` table definition."""

from datetime import datetime
from typing import Any

import structlog
from fastapi import Request
from sqlalchemy import (
    JSON,
    Column,
    Date,
    DateTime,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    create_engine,
    func,
    select,
)
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool
from sqlalchemy.sql import Executable

logger = structlog.get_logger(__name__)

metadata = MetaData()

books = Table(
    "books",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String(500), nullable=False),
    Column("author", String(500)),
    Column("pages", Integer),
    # text[] on PostgreSQL, JSON elsewhere
    Column("genres", JSON().with_variant(ARRAY(Text), "postgresql"), nullable=False),
    Column("isbn", String(20)),
    Column("cover_url", Text),
    Column("source", String(50), nullable=False, server_default="manual"),
    Column("start_date", Date),
    Column("end_date", Date),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Index("idx_books_created_at", "created_at"),
)


class Database:
    """Connection pool over the relational store."""

    def __init__(
        self,
        url: str,
        pool_size: int = 5,
        max_overflow: int = 10,
        echo: bool = False,
    ) -> None:
        self._engine = self._create_engine(url, pool_size, max_overflow, echo)
        logger.info("Database engine created", dialect=self._engine.dialect.name)

    @staticmethod
    def _create_engine(url: str, pool_size: int, max_overflow: int, echo: bool) -> Engine:
        parsed = make_url(url)
        if parsed.get_backend_name() == "sqlite":
            # In-memory databases live on a single connection shared across threads.
            kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
            if parsed.database in (None, "", ":memory:"):
                kwargs["poolclass"] = StaticPool
            return create_engine(parsed, echo=echo, **kwargs)

        return create_engine(
            parsed,
            echo=echo,
            pool_size=pool_size,
            max_overflow=max_overflow,
        )

    @property
    def engine(self) -> Engine:
        return self._engine

    def execute(self, statement: Executable) -> list[dict[str, Any]]:
        """
        Execute one parameterized statement in its own transaction.

        Returns:
            Result rows as dicts, or an empty list for statements without rows
        """
        with self._engine.begin() as conn:
            result = conn.execute(statement)
            if not result.returns_rows:
                return []
            return [dict(row) for row in result.mappings()]

    def ping(self) -> datetime:
        """Return the store's current timestamp."""
        with self._engine.connect() as conn:
            return conn.execute(select(func.current_timestamp())).scalar_one()

    def dispose(self) -> None:
        """Release all pooled connections."""
        self._engine.dispose()
        logger.info("Database engine disposed")


def get_database(request: Request) -> Database:
    """Get the database owned by the running application."""
    return request.app.state.db
