"""Book API endpoints."""

from typing import Annotated, Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError

from booktracker.api.schemas.books import (
    Book,
    BookCreate,
    BookLookupResult,
    BookSearchResponse,
    BookUpdate,
)
from booktracker.core.books.google_books import (
    GoogleBooksClient,
    MetadataLookupError,
    get_google_books_client,
)
from booktracker.core.books.isbn import clean_isbn
from booktracker.core.books.repository import BookRepository, get_book_repository

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/books", tags=["Books"])

BOOK_NOT_FOUND = "Book not found"

DEFAULT_MAX_RESULTS = 10


def _parse_max_results(raw: Optional[str]) -> int:
    """Read the result cap leniently; anything but a positive integer means the default."""
    try:
        value = int(raw) if raw is not None else 0
    except ValueError:
        return DEFAULT_MAX_RESULTS
    return value if value > 0 else DEFAULT_MAX_RESULTS


# --- Google Books lookup ---


@router.get("/search", response_model=BookSearchResponse)
async def search_books(
    client: Annotated[GoogleBooksClient, Depends(get_google_books_client)],
    q: str = Query(default="", description="Search query"),
    max_results: Optional[str] = Query(default=None, alias="maxResults", description="Result cap (default 10, max 40)"),
) -> BookSearchResponse:
    """Search Google Books. Results are not saved."""
    if not q.strip():
        raise HTTPException(status_code=400, detail="Search query is required")

    try:
        results = await client.search(q, max_results=_parse_max_results(max_results))
    except MetadataLookupError:
        raise HTTPException(status_code=500, detail="Failed to search books")

    return BookSearchResponse(query=q, results=len(results), books=results)


@router.get("/isbn/{isbn}", response_model=BookLookupResult)
async def lookup_isbn(
    isbn: str,
    client: Annotated[GoogleBooksClient, Depends(get_google_books_client)],
) -> BookLookupResult:
    """Look up a single book on Google Books by ISBN."""
    cleaned = clean_isbn(isbn)
    if not cleaned:
        raise HTTPException(status_code=400, detail="ISBN is required")

    try:
        book = await client.get_by_isbn(cleaned)
    except MetadataLookupError:
        raise HTTPException(status_code=500, detail="Failed to fetch book")

    if book is None:
        raise HTTPException(status_code=404, detail=BOOK_NOT_FOUND)
    return book


# --- Book management ---


@router.get("", response_model=list[Book])
def list_books(
    repo: Annotated[BookRepository, Depends(get_book_repository)],
) -> list[Book]:
    """List all books, most recently added first."""
    try:
        rows = repo.list_books()
    except SQLAlchemyError as e:
        logger.error("Failed to fetch books", error=str(e))
        raise HTTPException(status_code=500, detail="Failed to fetch books")
    return [Book.model_validate(row) for row in rows]


@router.get("/{book_id}", response_model=Book)
def get_book(
    book_id: int,
    repo: Annotated[BookRepository, Depends(get_book_repository)],
) -> Book:
    """Get one book."""
    try:
        row = repo.get_book(book_id)
    except SQLAlchemyError as e:
        logger.error("Failed to fetch book", book_id=book_id, error=str(e))
        raise HTTPException(status_code=500, detail="Failed to fetch book")

    if row is None:
        raise HTTPException(status_code=404, detail=BOOK_NOT_FOUND)
    return Book.model_validate(row)


@router.post("", response_model=Book, status_code=201)
def create_book(
    request: BookCreate,
    repo: Annotated[BookRepository, Depends(get_book_repository)],
) -> Book:
    """
    Add a book.

    Genres default to an empty list and source to ``manual``.
    """
    try:
        row = repo.create_book(request)
    except SQLAlchemyError as e:
        logger.error("Failed to create book", title=request.title, error=str(e))
        raise HTTPException(status_code=500, detail="Failed to create book")

    logger.info("Book created", book_id=row["id"], source=row["source"])
    return Book.model_validate(row)


@router.put("/{book_id}", response_model=Book)
def update_book(
    book_id: int,
    request: BookUpdate,
    repo: Annotated[BookRepository, Depends(get_book_repository)],
) -> Book:
    """Replace every editable field of a book."""
    try:
        row = repo.update_book(book_id, request)
    except SQLAlchemyError as e:
        logger.error("Failed to update book", book_id=book_id, error=str(e))
        raise HTTPException(status_code=500, detail="Failed to update book")

    if row is None:
        raise HTTPException(status_code=404, detail=BOOK_NOT_FOUND)
    logger.info("Book updated", book_id=book_id)
    return Book.model_validate(row)


@router.delete("/{book_id}", response_model=Book)
def delete_book(
    book_id: int,
    repo: Annotated[BookRepository, Depends(get_book_repository)],
) -> Book:
    """Delete a book and return what was removed."""
    try:
        row = repo.delete_book(book_id)
    except SQLAlchemyError as e:
        logger.error("Failed to delete book", book_id=book_id, error=str(e))
        raise HTTPException(status_code=500, detail="Failed to delete book")

    if row is None:
        raise HTTPException(status_code=404, detail=BOOK_NOT_FOUND)
    logger.info("Book deleted", book_id=book_id)
    return Book.model_validate(row)
