"""Default catalog used when no valid stored data exists."""

from .models import Book, Catalog

SEED_BOOKS: Catalog = (
    Book(
        id="seed-clean-code",
        title="Clean Code",
        author="Robert C. Martin",
        year=2008,
    ),
    Book(
        id="seed-pragmatic-programmer",
        title="The Pragmatic Programmer",
        author="Andrew Hunt, David Thomas",
        year=1999,
    ),
    Book(
        id="seed-refactoring",
        title="Refactoring",
        author="Martin Fowler",
        year=1999,
    ),
)
