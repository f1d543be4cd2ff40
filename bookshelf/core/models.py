"""Domain models for the Bookshelf catalog.

All models in this module use only Python standard library types,
ensuring zero external dependencies in the core domain.
"""

from dataclasses import dataclass
from typing import Literal, TypeAlias

SortKey: TypeAlias = Literal["title", "author", "year"]

SORT_KEYS: tuple[SortKey, ...] = ("title", "author", "year")


class BookshelfError(Exception):
    """Base class for all catalog errors."""


class ValidationError(BookshelfError, ValueError):
    """A draft was rejected. User-correctable; never mutates the catalog."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message

    def __repr__(self) -> str:
        return f"ValidationError(field={self.field!r}, message={self.message!r})"


class DeserializationError(BookshelfError):
    """Stored payload is absent, malformed, or schema-incompatible."""


class PersistenceWriteError(BookshelfError):
    """The durable slot could not be written."""


@dataclass(frozen=True)
class Book:
    """A single catalog record.

    Immutable once created. ``author`` is ``""`` when unknown and
    ``year`` is ``None`` when absent (distinct from year zero).
    """

    id: str
    title: str
    author: str = ""
    year: int | None = None

    def __post_init__(self) -> None:
        """Validate book invariants on creation."""
        if not self.id or not self.id.strip():
            raise ValueError("id must be a non-empty string")
        if not self.title or not self.title.strip():
            raise ValueError("title must be a non-empty string")
        if self.year is not None and (
            isinstance(self.year, bool) or not isinstance(self.year, int)
        ):
            raise ValueError(f"year must be an int or None, got {self.year!r}")

    @property
    def display_author(self) -> str:
        """Author for display; empty means unknown."""
        return self.author or "Unknown"

    @property
    def display_year(self) -> str:
        """Year for display; absent stays blank rather than zero."""
        return "" if self.year is None else str(self.year)


@dataclass(frozen=True)
class Draft:
    """Unvalidated user input prior to becoming a Book.

    ``year`` is whatever the user typed: a string, a number, or nothing.
    """

    title: str | None = None
    author: str | None = None
    year: str | int | float | None = None


@dataclass(frozen=True)
class ValidatedDraft:
    """A draft the Validator accepted, normalized but not yet identified."""

    title: str
    author: str
    year: int | None

    def to_book(self, book_id: str) -> Book:
        """Bind an identifier, producing the final Book."""
        return Book(id=book_id, title=self.title, author=self.author, year=self.year)


Catalog: TypeAlias = tuple[Book, ...]
