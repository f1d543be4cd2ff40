"""Core domain logic for the Bookshelf catalog.

This package contains zero external dependencies and represents
the pure business logic of the application. All adapters and
external integrations are handled by the adapters package.
"""

from .models import (
    SORT_KEYS,
    Book,
    BookshelfError,
    Catalog,
    DeserializationError,
    Draft,
    PersistenceWriteError,
    SortKey,
    ValidatedDraft,
    ValidationError,
)

__all__ = [
    "SORT_KEYS",
    "Book",
    "BookshelfError",
    "Catalog",
    "DeserializationError",
    "Draft",
    "PersistenceWriteError",
    "SortKey",
    "ValidatedDraft",
    "ValidationError",
]
