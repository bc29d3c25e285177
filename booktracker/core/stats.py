"""Aggregate reading statistics over the ``books`` table."""

import math
from collections import Counter
from datetime import date
from typing import Annotated, Any, Iterable, Optional

from fastapi import Depends
from sqlalchemy import and_, func, select
from sqlalchemy.sql.elements import ColumnElement

from booktracker.api.schemas.stats import DashboardStats, GenreCount, GenreStats, MonthlyStats
from booktracker.core.db import Database, books, get_database

TOP_GENRES_LIMIT = 5
MONTHLY_WINDOW_MONTHS = 12

FINISHED = books.c.end_date.isnot(None)
CURRENTLY_READING = and_(books.c.start_date.isnot(None), books.c.end_date.is_(None))


def month_start(day: date) -> date:
    return day.replace(day=1)


def add_months(day: date, months: int) -> date:
    """Shift a date by whole months, clamping the day to the target month's length."""
    index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    if month == 12:
        last_day = 31
    else:
        last_day = (date(year, month + 1, 1) - date(year, month, 1)).days
    return date(year, month, min(day.day, last_day))


def count_genres(genre_lists: Iterable[Optional[list[str]]]) -> list[tuple[str, int]]:
    """
    Expand each book's genre list and count occurrences.

    Returns (genre, count) pairs by descending count; ties keep the order in
    which the genre was first seen.
    """
    counter: Counter[str] = Counter()
    for genres in genre_lists:
        counter.update(genres or [])
    return counter.most_common()


class ReadingStats:
    """Read-only statistics, computed fresh on every call."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def _scalar(self, expression: ColumnElement, *criteria: ColumnElement) -> int:
        query = select(expression.label("value")).select_from(books)
        if criteria:
            query = query.where(*criteria)
        value = self._db.execute(query)[0]["value"]
        return int(value or 0)

    def _count(self, *criteria: ColumnElement) -> int:
        return self._scalar(func.count(), *criteria)

    def _finished_between(self, start: date, end: date) -> int:
        return self._count(books.c.end_date >= start, books.c.end_date < end)

    def _average_reading_days(self) -> int:
        rows = self._db.execute(
            select(books.c.start_date, books.c.end_date).where(
                books.c.start_date.isnot(None), books.c.end_date.isnot(None)
            )
        )
        if not rows:
            return 0
        total_days = sum((row["end_date"] - row["start_date"]).days for row in rows)
        # Half rounds up, so 10.5 -> 11 and -10.5 -> -10
        return math.floor(total_days / len(rows) + 0.5)

    def _genre_lists(self, *criteria: ColumnElement) -> list[Any]:
        query = select(books.c.genres).order_by(books.c.id)
        if criteria:
            query = query.where(*criteria)
        return [row["genres"] for row in self._db.execute(query)]

    def dashboard(self, today: Optional[date] = None) -> DashboardStats:
        """Headline counts for the dashboard."""
        today = today or date.today()
        this_month = month_start(today)
        this_year = date(today.year, 1, 1)

        top_genres = count_genres(self._genre_lists(FINISHED))[:TOP_GENRES_LIMIT]

        return DashboardStats(
            total_books=self._count(),
            currently_reading=self._count(CURRENTLY_READING),
            finished_this_month=self._finished_between(this_month, add_months(this_month, 1)),
            finished_this_year=self._finished_between(this_year, date(today.year + 1, 1, 1)),
            pages_read=self._scalar(
                func.coalesce(func.sum(books.c.pages), 0), FINISHED, books.c.pages.isnot(None)
            ),
            avg_reading_days=self._average_reading_days(),
            top_genres=[GenreCount(genre=genre, count=count) for genre, count in top_genres],
        )

    def monthly(self, today: Optional[date] = None) -> list[MonthlyStats]:
        """Books and pages finished per month over the trailing year, newest first."""
        today = today or date.today()
        cutoff = add_months(today, -MONTHLY_WINDOW_MONTHS)

        rows = self._db.execute(
            select(books.c.end_date, books.c.pages).where(books.c.end_date >= cutoff)
        )

        buckets: dict[str, list[int]] = {}
        for row in rows:
            bucket = buckets.setdefault(row["end_date"].strftime("%Y-%m"), [0, 0])
            bucket[0] += 1
            bucket[1] += row["pages"] or 0

        return [
            MonthlyStats(month=month, books_finished=finished, pages_read=pages)
            for month, (finished, pages) in sorted(buckets.items(), reverse=True)
        ]

    def genres(self) -> list[GenreStats]:
        """Genre frequency across every book."""
        return [
            GenreStats(genre=genre, book_count=count)
            for genre, count in count_genres(self._genre_lists())
        ]


def get_reading_stats(db: Annotated[Database, Depends(get_database)]) -> ReadingStats:
    return ReadingStats(db)
