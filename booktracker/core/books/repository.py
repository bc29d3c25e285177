"""Book persistence, one statement per operation."""

from typing import Annotated, Any, Optional

from fastapi import Depends
from sqlalchemy import delete, insert, select, update

from booktracker.api.schemas.books import BookCreate, BookUpdate
from booktracker.core.db import Database, books, get_database

# Mutable columns replaced wholesale by update; source is fixed at creation
_UPDATABLE = ("title", "author", "pages", "genres", "isbn", "cover_url", "start_date", "end_date")


class BookRepository:
    """Reads and writes rows of the ``books`` table."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def list_books(self) -> list[dict[str, Any]]:
        """All books, newest first."""
        return self._db.execute(
            select(books).order_by(books.c.created_at.desc(), books.c.id.desc())
        )

    def get_book(self, book_id: int) -> Optional[dict[str, Any]]:
        rows = self._db.execute(select(books).where(books.c.id == book_id))
        return rows[0] if rows else None

    def create_book(self, data: BookCreate) -> dict[str, Any]:
        """Insert a book and return the stored row."""
        values = data.model_dump(include=set(_UPDATABLE))
        values["source"] = data.source.value
        rows = self._db.execute(insert(books).values(**values).returning(books))
        return rows[0]

    def update_book(self, book_id: int, data: BookUpdate) -> Optional[dict[str, Any]]:
        """Replace a book's mutable fields. Returns None if the id is unknown."""
        values = data.model_dump(include=set(_UPDATABLE))
        rows = self._db.execute(
            update(books).where(books.c.id == book_id).values(**values).returning(books)
        )
        return rows[0] if rows else None

    def delete_book(self, book_id: int) -> Optional[dict[str, Any]]:
        """Delete a book. Returns the deleted row, or None if the id is unknown."""
        rows = self._db.execute(delete(books).where(books.c.id == book_id).returning(books))
        return rows[0] if rows else None


def get_book_repository(db: Annotated[Database, Depends(get_database)]) -> BookRepository:
    return BookRepository(db)
