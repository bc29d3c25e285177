"""ISBN-10 / ISBN-13 string helpers."""

import re

_SEPARATORS = re.compile(r"[-\s]")
_ISBN13 = re.compile(r"^\d{13}$")
_ISBN10 = re.compile(r"^\d{9}[\dX]$")


def clean_isbn(isbn: str) -> str:
    """Strip hyphens and whitespace."""
    return _SEPARATORS.sub("", isbn)


def is_isbn(value: str | None) -> bool:
    """
    Check whether a string looks like an ISBN.

    Accepts 13 digits, or 9 digits followed by a digit or ``X``, with or
    without hyphens and spaces. Check digits are not verified.
    """
    if not value:
        return False
    cleaned = clean_isbn(value).upper()
    return bool(_ISBN13.match(cleaned) or _ISBN10.match(cleaned))


def format_isbn(isbn: str) -> str:
    """
    Add display hyphens to an ISBN.

    Uses fixed group widths rather than registration-group ranges, so the
    grouping is cosmetic. Strings that are not 10 or 13 characters are
    returned unchanged.
    """
    cleaned = clean_isbn(isbn)
    if len(cleaned) == 13:
        return f"{cleaned[:3]}-{cleaned[3:4]}-{cleaned[4:7]}-{cleaned[7:12]}-{cleaned[12:]}"
    if len(cleaned) == 10:
        return f"{cleaned[:1]}-{cleaned[1:4]}-{cleaned[4:9]}-{cleaned[9:]}"
    return isbn
