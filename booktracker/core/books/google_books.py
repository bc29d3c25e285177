"""Google Books client using the public volumes API."""

from typing import Any, Optional

import httpx
import structlog
from fastapi import Request

from booktracker.api.schemas.books import BookLookupResult, BookSource

logger = structlog.get_logger(__name__)

GOOGLE_BOOKS_API = "https://www.googleapis.com/books/v1"

# Google Books rejects maxResults above 40
MAX_RESULTS_LIMIT = 40

UNKNOWN_TITLE = "Unknown Title"

# Largest first
_IMAGE_PREFERENCE = ("large", "medium", "thumbnail", "smallThumbnail")


class MetadataLookupError(RuntimeError):
    """Raised when Google Books cannot be reached or returns an error."""


def normalize_volume(item: dict[str, Any]) -> BookLookupResult:
    """Map a Google Books volume resource onto the book shape."""
    volume_info = item.get("volumeInfo") or {}

    # First identifier of each type wins
    identifiers: dict[str, Any] = {}
    for ident in volume_info.get("industryIdentifiers") or []:
        identifiers.setdefault(ident.get("type"), ident.get("identifier"))
    isbn = identifiers.get("ISBN_13") or identifiers.get("ISBN_10") or None

    image_links = volume_info.get("imageLinks") or {}
    cover_url = next((image_links[k] for k in _IMAGE_PREFERENCE if image_links.get(k)), None)

    authors = volume_info.get("authors") or []

    return BookLookupResult(
        title=volume_info.get("title") or UNKNOWN_TITLE,
        author=", ".join(authors) or None,
        pages=volume_info.get("pageCount") or None,
        genres=volume_info.get("categories") or [],
        isbn=isbn,
        cover_url=cover_url,
        source=BookSource.GOOGLE_BOOKS,
        description=volume_info.get("description") or None,
        published_date=volume_info.get("publishedDate") or None,
        publisher=volume_info.get("publisher") or None,
        google_books_id=item.get("id"),
    )


class GoogleBooksClient:
    """Client for looking up book metadata on Google Books."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout: float = 10.0,
        base_url: str = GOOGLE_BOOKS_API,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def _query_volumes(self, params: dict[str, Any]) -> list[dict[str, Any]]:
        if self._api_key:
            params["key"] = self._api_key

        response = await self._client.get(f"{self._base_url}/volumes", params=params)
        response.raise_for_status()
        return response.json().get("items") or []

    async def search(self, query: str, max_results: int = 10) -> list[BookLookupResult]:
        """
        Search Google Books.

        Args:
            query: Free-text search query
            max_results: Result cap, clamped to 40

        Returns:
            Normalized results, empty when nothing matched
        """
        params = {
            "q": query,
            "maxResults": min(max_results, MAX_RESULTS_LIMIT),
            "printType": "books",
        }
        try:
            items = await self._query_volumes(params)
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Google Books search failed", query=query, error=str(e))
            raise MetadataLookupError(f"Failed to search Google Books: {e}") from e

        results = [normalize_volume(item) for item in items]
        logger.info("Google Books search completed", query=query, results=len(results))
        return results

    async def get_by_isbn(self, isbn: str) -> Optional[BookLookupResult]:
        """
        Look up a single book by ISBN-10 or ISBN-13.

        Returns:
            The first matching volume, or None
        """
        try:
            items = await self._query_volumes({"q": f"isbn:{isbn}"})
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Google Books ISBN lookup failed", isbn=isbn, error=str(e))
            raise MetadataLookupError(f"Failed to fetch book by ISBN {isbn}: {e}") from e

        if not items:
            logger.info("No Google Books match for ISBN", isbn=isbn)
            return None
        return normalize_volume(items[0])

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()


def get_google_books_client(request: Request) -> GoogleBooksClient:
    """Get the Google Books client owned by the running application."""
    return request.app.state.google_books
