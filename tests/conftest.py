"""Pytest configuration and fixtures."""

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from booktracker.config import Settings
from booktracker.core.books.google_books import GoogleBooksClient, get_google_books_client
from booktracker.core.db import get_database
from booktracker.main import create_app


class FakeGoogleBooks:
    """Stands in for the Google Books volumes endpoint."""

    def __init__(self) -> None:
        self.items: list[dict] = []
        self.status_code = 200
        self.error: Exception | None = None
        self.requests: list[httpx.Request] = []

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        body = {"kind": "books#volumes", "totalItems": len(self.items)}
        if self.items:
            body["items"] = self.items
        return httpx.Response(self.status_code, json=body)

    @property
    def last_params(self) -> httpx.QueryParams:
        return self.requests[-1].url.params

    def client(self, api_key: str | None = None) -> GoogleBooksClient:
        return GoogleBooksClient(api_key=api_key, transport=httpx.MockTransport(self.handle))


class UnreachableDatabase:
    """Database whose every call fails as if the server were down."""

    def ping(self):
        raise OperationalError("SELECT CURRENT_TIMESTAMP", {}, Exception("connection refused"))

    def execute(self, statement):
        raise OperationalError("statement", {}, Exception("connection refused"))


@pytest.fixture
def settings():
    """Settings for an isolated in-memory store."""
    return Settings(
        _env_file=None,
        environment="test",
        database_url="sqlite://",
        metrics_enabled=False,
    )


@pytest.fixture
def google_books():
    """Fake Google Books backend."""
    return FakeGoogleBooks()


@pytest.fixture
def app(settings, google_books):
    """Application wired to the in-memory store and fake Google Books."""
    application = create_app(settings)
    fake_client = google_books.client()
    application.dependency_overrides[get_google_books_client] = lambda: fake_client
    return application


@pytest.fixture
def client(app):
    """Create a test client for the FastAPI app."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def sample_volume():
    """A Google Books volume resource."""
    return {
        "kind": "books#volume",
        "id": "zyTCAlFPjgYC",
        "volumeInfo": {
            "title": "The Google Story",
            "authors": ["David A. Vise", "Mark Malseed"],
            "publisher": "Random House Digital, Inc.",
            "publishedDate": "2005-11-15",
            "description": "Here is the story behind one of the most remarkable Internet successes.",
            "industryIdentifiers": [
                {"type": "ISBN_10", "identifier": "055380457X"},
                {"type": "ISBN_13", "identifier": "9780553804577"},
            ],
            "pageCount": 207,
            "categories": ["Browsers (Computer programs)"],
            "imageLinks": {
                "smallThumbnail": "http://books.google.com/books?id=zyTCAlFPjgYC&zoom=5",
                "thumbnail": "http://books.google.com/books?id=zyTCAlFPjgYC&zoom=1",
            },
        },
    }


@pytest.fixture
def create_book(client):
    """Create a book through the API and return the response body."""

    def _create(**fields):
        payload = {"title": "Dune", **fields}
        response = client.post("/api/books", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def unreachable_database(app):
    """Route every store access through a failing database."""
    app.dependency_overrides[get_database] = UnreachableDatabase
    yield
    app.dependency_overrides.pop(get_database, None)
