"""Async HTTP client for the Book Tracker API."""

from typing import Any, Optional

import httpx

from booktracker.api.schemas.books import Book, BookCreate, BookLookupResult, BookSearchResponse, BookUpdate
from booktracker.api.schemas.stats import DashboardStats, GenreStats, MonthlyStats
from booktracker.core.books.isbn import clean_isbn, is_isbn


class BookTrackerClient:
    """
    Typed wrapper around the Book Tracker endpoints.

    Each method is one request/response round trip. Non-2xx responses raise
    ``httpx.HTTPStatusError``.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3000/api",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def __aenter__(self) -> "BookTrackerClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        response = await self._client.request(method, path, **kwargs)
        response.raise_for_status()
        return response.json()

    # --- Books ---

    async def list_books(self) -> list[Book]:
        return [Book.model_validate(b) for b in await self._request("GET", "/books")]

    async def get_book(self, book_id: int) -> Book:
        return Book.model_validate(await self._request("GET", f"/books/{book_id}"))

    async def create_book(self, book: BookCreate) -> Book:
        data = await self._request("POST", "/books", json=book.model_dump(mode="json"))
        return Book.model_validate(data)

    async def update_book(self, book_id: int, book: BookUpdate) -> Book:
        data = await self._request("PUT", f"/books/{book_id}", json=book.model_dump(mode="json"))
        return Book.model_validate(data)

    async def delete_book(self, book_id: int) -> Book:
        return Book.model_validate(await self._request("DELETE", f"/books/{book_id}"))

    async def search_books(self, query: str, max_results: int = 10) -> BookSearchResponse:
        data = await self._request(
            "GET", "/books/search", params={"q": query, "maxResults": max_results}
        )
        return BookSearchResponse.model_validate(data)

    async def lookup_isbn(self, isbn: str) -> BookLookupResult:
        return BookLookupResult.model_validate(
            await self._request("GET", f"/books/isbn/{clean_isbn(isbn)}")
        )

    async def find_books(self, query: str) -> list[BookLookupResult]:
        """
        Look up by ISBN when the query looks like one, otherwise search.

        An unknown ISBN yields an empty list rather than an error.
        """
        if is_isbn(query):
            try:
                return [await self.lookup_isbn(query)]
            except httpx.HTTPStatusError as e:
                if e.response.status_code == 404:
                    return []
                raise
        return (await self.search_books(query)).books

    # --- Statistics ---

    async def get_dashboard(self) -> DashboardStats:
        return DashboardStats.model_validate(await self._request("GET", "/stats/dashboard"))

    async def get_monthly(self) -> list[MonthlyStats]:
        return [MonthlyStats.model_validate(m) for m in await self._request("GET", "/stats/monthly")]

    async def get_genres(self) -> list[GenreStats]:
        return [GenreStats.model_validate(g) for g in await self._request("GET", "/stats/genres")]

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
