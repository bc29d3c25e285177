"""Versioned schema migrations tracked in ``schema_migrations``."""

from dataclasses import dataclass
from typing import Callable

import structlog
from sqlalchemy import Column, DateTime, Integer, MetaData, String, Table, func, insert, select
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from booktracker.core.db import Database, books

logger = structlog.get_logger(__name__)

_tracking_metadata = MetaData()

schema_migrations = Table(
    "schema_migrations",
    _tracking_metadata,
    Column("version", Integer, primary_key=True, autoincrement=False),
    Column("name", String(200), nullable=False),
    Column("applied_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
)


class MigrationError(RuntimeError):
    """Raised when a migration cannot be applied."""


@dataclass(frozen=True)
class Migration:
    """A single schema change."""
    version: int
    name: str
    apply: Callable[[Connection], None]


def _create_books_table(conn: Connection) -> None:
    # checkfirst adopts databases bootstrapped before migrations were tracked
    books.create(conn, checkfirst=True)


MIGRATIONS: list[Migration] = [
    Migration(1, "create_books_table", _create_books_table),
]


def applied_versions(db: Database) -> set[int]:
    """Return the set of migration versions already recorded."""
    with db.engine.connect() as conn:
        return set(conn.execute(select(schema_migrations.c.version)).scalars())


def run_migrations(db: Database, migrations: list[Migration] | None = None) -> list[int]:
    """
    Apply every migration not yet recorded, in version order.

    Each migration runs in its own transaction together with its tracking row,
    so a failure leaves earlier migrations applied and later ones pending.

    Args:
        db: Target database
        migrations: Override the migration list (defaults to ``MIGRATIONS``)

    Returns:
        Versions applied by this call

    Raises:
        MigrationError: If the tracking table or any migration fails
    """
    pending = sorted(migrations if migrations is not None else MIGRATIONS, key=lambda m: m.version)

    try:
        schema_migrations.create(db.engine, checkfirst=True)
        done = applied_versions(db)
    except SQLAlchemyError as e:
        logger.error("Migration tracking unavailable", error=str(e))
        raise MigrationError(f"Failed to read migration state: {e}") from e

    applied: list[int] = []
    for migration in pending:
        if migration.version in done:
            continue
        try:
            with db.engine.begin() as conn:
                migration.apply(conn)
                conn.execute(
                    insert(schema_migrations).values(version=migration.version, name=migration.name)
                )
        except SQLAlchemyError as e:
            logger.error(
                "Migration failed",
                version=migration.version,
                name=migration.name,
                error=str(e),
            )
            raise MigrationError(f"Migration {migration.version} ({migration.name}) failed: {e}") from e

        logger.info("Migration applied", version=migration.version, name=migration.name)
        applied.append(migration.version)

    if not applied:
        logger.info("Database schema up to date", version=max(done, default=0))
    return applied
