"""Book management module."""

from booktracker.core.books.google_books import GoogleBooksClient, MetadataLookupError
from booktracker.core.books.repository import BookRepository, get_book_repository

__all__ = ["GoogleBooksClient", "MetadataLookupError", "BookRepository", "get_book_repository"]
