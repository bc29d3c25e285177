#!/usr/bin/env python3
"""Apply pending database migrations."""

import argparse
import sys

from booktracker.config import get_settings
from booktracker.core.db import Database
from booktracker.core.migrations import MIGRATIONS, MigrationError, applied_versions, run_migrations
from booktracker.utils.logging import setup_logging


def main():
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Apply Book Tracker database migrations")
    parser.add_argument(
        "--database-url",
        default=settings.database_url,
        help="Database URL (defaults to DATABASE_URL)",
    )
    parser.add_argument(
        "--status",
        action="store_true",
        help="Show which migrations are applied without changing anything",
    )
    args = parser.parse_args()

    setup_logging(debug=settings.debug)
    db = Database(args.database_url)

    try:
        if args.status:
            run_migrations(db, migrations=[])
            done = applied_versions(db)
            for migration in MIGRATIONS:
                mark = "x" if migration.version in done else " "
                print(f"  [{mark}] {migration.version:04d} {migration.name}")
            return

        applied = run_migrations(db)
        if applied:
            print(f"Applied migrations: {', '.join(str(v) for v in applied)}")
        else:
            print("Database schema is up to date")
    except MigrationError as e:
        print(f"Error: {e}")
        sys.exit(1)
    finally:
        db.dispose()


if __name__ == "__main__":
    main()
