"""Search and ordering rules for catalog views.

Queries never mutate their input; they return new lists. Filtering is
always applied before sorting.
"""

import locale
from collections.abc import Iterable

from .models import SORT_KEYS, Book, SortKey


def _text_key(value: str) -> tuple[str, str]:
    # Raw value breaks ties between strings that collate equal.
    return (locale.strxfrm(value.casefold()), value)


class QueryEngine:
    """Filters and sorts catalog snapshots for display.

    Pure decision logic with no side effects.
    """

    @staticmethod
    def matches(book: Book, needle: str) -> bool:
        """Does a casefolded needle occur in the book's title, author or year?"""
        if needle in book.title.casefold():
            return True
        if book.author and needle in book.author.casefold():
            return True
        if book.year is not None and needle in str(book.year):
            return True
        return False

    @staticmethod
    def filter(books: Iterable[Book], query: str | None) -> list[Book]:
        """Case-insensitive substring search.

        An empty or whitespace-only query matches everything.
        """
        needle = (query or "").strip().casefold()
        if not needle:
            return list(books)
        return [b for b in books if QueryEngine.matches(b, needle)]

    @staticmethod
    def sort(books: Iterable[Book], key: SortKey) -> list[Book]:
        """Stable ascending sort by title, author or year.

        An unknown author compares as the empty string, so it sorts
        before every named author. An absent year compares as 0.

        Raises:
            ValueError: If key is not a supported sort key.
        """
        if key == "title":
            return sorted(books, key=lambda b: _text_key(b.title))
        if key == "author":
            return sorted(books, key=lambda b: _text_key(b.author))
        if key == "year":
            return sorted(books, key=lambda b: b.year if b.year is not None else 0)
        raise ValueError(
            f"Unknown sort key: {key!r}. Expected one of {', '.join(SORT_KEYS)}"
        )

    @staticmethod
    def run(books: Iterable[Book], query: str | None, key: SortKey) -> list[Book]:
        """Filter, then sort. The only query path offered to presentation."""
        return QueryEngine.sort(QueryEngine.filter(books, query), key)
