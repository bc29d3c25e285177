"""Tests for ISBN helpers."""

import pytest

from booktracker.core.books.isbn import clean_isbn, format_isbn, is_isbn


@pytest.mark.parametrize(
    "value",
    ["9780553804577", "978-0-553-80457-7", "055380457X", "0 553 80457 x", "0441013597"],
)
def test_is_isbn(value):
    assert is_isbn(value)


@pytest.mark.parametrize("value", [None, "", "dune", "12345", "97805538045771", "05538045XX"])
def test_is_not_isbn(value):
    assert not is_isbn(value)


def test_clean_isbn():
    assert clean_isbn("978-0 553-80457-7") == "9780553804577"


def test_format_isbn():
    assert format_isbn("9780553804577") == "978-0-553-80457-7"
    assert format_isbn("055380457X") == "0-553-80457-X"
    assert format_isbn("12345") == "12345"
