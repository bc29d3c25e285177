#!/usr/bin/env python3
"""Exercise a running Book Tracker instance end to end."""

import argparse
import asyncio
import time

from booktracker.api.schemas.books import BookCreate, BookUpdate
from booktracker.client import BookTrackerClient


async def smoke_test(base_url: str, query: str | None) -> None:
    """Create, read, update and delete a book, then print statistics."""
    async with BookTrackerClient(base_url=base_url) as client:
        start = time.perf_counter()

        created = await client.create_book(
            BookCreate(title="Smoke Test Book", author="Book Tracker", pages=120, genres=["Testing"])
        )
        print(f"  Created book {created.id}: {created.title}")

        fetched = await client.get_book(created.id)
        assert fetched.title == created.title

        fields = created.model_dump(include=set(BookUpdate.model_fields))
        fields["start_date"] = "2024-01-01"
        updated = await client.update_book(created.id, BookUpdate(**fields))
        print(f"  Updated book {updated.id}: started {updated.start_date}")

        deleted = await client.delete_book(created.id)
        print(f"  Deleted book {deleted.id}")

        dashboard = await client.get_dashboard()
        print(f"  Dashboard: {dashboard.total_books} books, {dashboard.currently_reading} in progress")

        if query:
            results = await client.find_books(query)
            print(f"  Lookup '{query}': {len(results)} result(s)")
            for book in results[:5]:
                print(f"    - {book.title} ({book.author or 'unknown author'})")

        elapsed = (time.perf_counter() - start) * 1000
        print(f"\nCompleted in {elapsed:.2f}ms")


def main():
    parser = argparse.ArgumentParser(description="Smoke test a Book Tracker deployment")
    parser.add_argument(
        "--url",
        default="http://localhost:3000/api",
        help="Base URL of the Book Tracker API",
    )
    parser.add_argument(
        "--query",
        default=None,
        help="Optional Google Books query or ISBN to look up",
    )
    args = parser.parse_args()

    print("=" * 50)
    print("Book Tracker Smoke Test")
    print("=" * 50)
    print()

    asyncio.run(smoke_test(args.url, args.query))


if __name__ == "__main__":
    main()
