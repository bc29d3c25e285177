"""Tests for the typed API client."""

import asyncio

import httpx
import pytest

from booktracker.api.schemas.books import BookCreate, BookUpdate
from booktracker.client import BookTrackerClient


@pytest.fixture
def api(app, client):
    """Typed client talking to the running app in-process."""
    return BookTrackerClient(
        base_url="http://testserver/api",
        transport=httpx.ASGITransport(app=app),
    )


def test_book_lifecycle(api):
    """Test create, read, update, list and delete through the client."""

    async def scenario():
        created = await api.create_book(BookCreate(title="Dune", genres=["Science Fiction"]))
        fetched = await api.get_book(created.id)
        updated = await api.update_book(
            created.id,
            BookUpdate(
                title="Dune",
                genres=["Science Fiction"],
                start_date="2024-01-01",
                end_date="2024-01-11",
            ),
        )
        listed = await api.list_books()
        dashboard = await api.get_dashboard()
        genres = await api.get_genres()
        deleted = await api.delete_book(created.id)
        await api.close()
        return created, fetched, updated, listed, dashboard, genres, deleted

    created, fetched, updated, listed, dashboard, genres, deleted = asyncio.run(scenario())

    assert fetched == created
    assert str(updated.end_date) == "2024-01-11"
    assert [b.id for b in listed] == [created.id]
    assert dashboard.total_books == 1
    assert dashboard.avg_reading_days == 10
    assert [(g.genre, g.book_count) for g in genres] == [("Science Fiction", 1)]
    assert deleted.id == created.id


def test_get_missing_book_raises(api):
    """Test error statuses raise HTTPStatusError."""

    async def scenario():
        try:
            await api.get_book(12345)
        finally:
            await api.close()

    with pytest.raises(httpx.HTTPStatusError) as exc_info:
        asyncio.run(scenario())
    assert exc_info.value.response.status_code == 404


def test_find_books_routes_isbn_queries(api, google_books, sample_volume):
    """Test ISBN-like queries use the ISBN lookup and text queries use search."""
    google_books.items = [sample_volume]

    async def scenario():
        by_isbn = await api.find_books("978-0-553-80457-7")
        by_text = await api.find_books("google story")
        await api.close()
        return by_isbn, by_text

    by_isbn, by_text = asyncio.run(scenario())

    assert [b.isbn for b in by_isbn] == ["9780553804577"]
    assert [b.title for b in by_text] == ["The Google Story"]
    assert [r.url.params["q"] for r in google_books.requests] == ["isbn:9780553804577", "google story"]


def test_find_books_unknown_isbn_is_empty(api, google_books):
    """Test an ISBN with no match yields no results."""

    async def scenario():
        try:
            return await api.find_books("0000000000")
        finally:
            await api.close()

    assert asyncio.run(scenario()) == []
