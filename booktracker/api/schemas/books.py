"""Book schemas."""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BookSource(str, Enum):
    """Provenance of a book record."""
    MANUAL = "manual"
    GOOGLE_BOOKS = "google_books"


class BookFields(BaseModel):
    """Mutable book fields shared by create and update requests."""
    title: str = Field(..., max_length=500, description="Book title")
    author: Optional[str] = Field(default=None, max_length=500)
    pages: Optional[int] = Field(default=None, ge=0, description="Page count")
    genres: list[str] = Field(default_factory=list)
    isbn: Optional[str] = Field(default=None, max_length=20)
    cover_url: Optional[str] = None
    start_date: Optional[date] = Field(default=None, description="Date reading started")
    end_date: Optional[date] = Field(default=None, description="Date reading finished")

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Title is required")
        return value

    @field_validator("genres", mode="before")
    @classmethod
    def genres_default(cls, value):
        return [] if value is None else value

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def blank_date_is_none(cls, value):
        # HTML date inputs submit "" when cleared
        if isinstance(value, str) and not value.strip():
            return None
        return value


class BookCreate(BookFields):
    """Request to add a book."""
    source: BookSource = Field(default=BookSource.MANUAL)

    @field_validator("source", mode="before")
    @classmethod
    def source_default(cls, value):
        return BookSource.MANUAL if value in (None, "") else value


class BookUpdate(BookFields):
    """Full replacement of a book's mutable fields."""


class Book(BaseModel):
    """A persisted book."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    author: Optional[str] = None
    pages: Optional[int] = None
    genres: list[str] = Field(default_factory=list)
    isbn: Optional[str] = None
    cover_url: Optional[str] = None
    source: BookSource = BookSource.MANUAL
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    created_at: datetime


class BookLookupResult(BaseModel):
    """A book found through Google Books, ready to copy into a create request."""
    model_config = ConfigDict(populate_by_name=True)

    title: str
    author: Optional[str] = None
    pages: Optional[int] = None
    genres: list[str] = Field(default_factory=list)
    isbn: Optional[str] = None
    cover_url: Optional[str] = None
    source: BookSource = BookSource.GOOGLE_BOOKS

    # Display-only, never persisted
    description: Optional[str] = None
    published_date: Optional[str] = Field(default=None, alias="publishedDate")
    publisher: Optional[str] = None
    google_books_id: Optional[str] = Field(default=None, alias="googleBooksId")


class BookSearchResponse(BaseModel):
    """Google Books search results."""
    query: str
    results: int = Field(description="Number of books returned")
    books: list[BookLookupResult]
