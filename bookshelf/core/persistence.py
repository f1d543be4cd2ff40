"""Catalog persistence through a durable key-value slot.

The slot value is a UTF-8 JSON array of objects:

    [{"id": "a1b2", "title": "Dune", "author": "Frank Herbert", "year": 1965}, ...]

``year`` is omitted when absent. There is no version field; any other
shape is treated as corrupt.
"""

import json
import logging
from collections.abc import Sequence
from typing import Any

from .models import Book, Catalog, DeserializationError, PersistenceWriteError
from .ports import CatalogGatewayPort, KeyValueSlotPort

logger = logging.getLogger(__name__)

DEFAULT_SLOT_KEY = "library_books_v1"


def encode_catalog(books: Sequence[Book]) -> str:
    """Serialize books to the slot's JSON array format."""
    records: list[dict[str, Any]] = []
    for book in books:
        record: dict[str, Any] = {
            "id": book.id,
            "title": book.title,
            "author": book.author,
        }
        if book.year is not None:
            record["year"] = book.year
        records.append(record)
    return json.dumps(records, ensure_ascii=False, separators=(",", ":"))


def decode_catalog(payload: str | bytes) -> Catalog:
    """Parse a slot payload back into books.

    Raises:
        DeserializationError: If the payload is not valid JSON, is not an
            array of book objects, or repeats an id.
    """
    try:
        raw = json.loads(payload)
    # ValueError covers JSONDecodeError and UnicodeDecodeError; deeply
    # nested arrays exhaust the decoder's recursion limit.
    except (ValueError, RecursionError, TypeError) as e:
        raise DeserializationError(f"Malformed catalog payload: {e}") from e

    if not isinstance(raw, list):
        raise DeserializationError(
            f"Catalog payload must be a JSON array, got {type(raw).__name__}"
        )

    books: list[Book] = []
    seen_ids: set[str] = set()
    for index, entry in enumerate(raw):
        book = _decode_record(index, entry)
        if book.id in seen_ids:
            raise DeserializationError(f"Duplicate book id {book.id!r} at index {index}")
        seen_ids.add(book.id)
        books.append(book)
    return tuple(books)


def _decode_record(index: int, entry: Any) -> Book:
    if not isinstance(entry, dict):
        raise DeserializationError(f"Entry {index} is not an object")

    for field_name in ("id", "title", "author"):
        if not isinstance(entry.get(field_name), str):
            raise DeserializationError(
                f"Entry {index} field {field_name!r} must be a string"
            )

    year = entry.get("year")
    if year is not None:
        if isinstance(year, bool) or not isinstance(year, (int, float)):
            raise DeserializationError(f"Entry {index} field 'year' must be a number")
        if isinstance(year, float):
            if not year.is_integer():
                raise DeserializationError(
                    f"Entry {index} field 'year' must be a whole number"
                )
            year = int(year)

    try:
        return Book(
            id=entry["id"],
            title=entry["title"],
            author=entry["author"],
            year=year,
        )
    except ValueError as e:
        raise DeserializationError(f"Entry {index} is invalid: {e}") from e


class PersistenceGateway(CatalogGatewayPort):
    """Stores the whole catalog as one JSON value in a key-value slot."""

    def __init__(self, slot: KeyValueSlotPort, key: str = DEFAULT_SLOT_KEY):
        """Initialize the gateway.

        Args:
            slot: KeyValueSlotPort implementation holding the payload.
            key: Name of the slot entry.
        """
        if not key or not key.strip():
            raise ValueError("key must be a non-empty string")
        self.slot = slot
        self.key = key

    async def load(self) -> Catalog:
        """Read and decode the stored catalog.

        Raises:
            DeserializationError: If the slot is empty or its payload
                cannot be decoded.
        """
        try:
            payload = await self.slot.read(self.key)
        except DeserializationError:
            raise
        except Exception as e:
            raise DeserializationError(f"Failed to read slot {self.key!r}: {e}") from e

        if payload is None:
            raise DeserializationError(f"Slot {self.key!r} is empty")

        books = decode_catalog(payload)
        logger.debug(
            f"Loaded {len(books)} books from slot {self.key}",
            extra={"slot_key": self.key, "count": len(books)},
        )
        return books

    async def save(self, catalog: Sequence[Book]) -> None:
        """Encode and write the catalog, replacing the prior value.

        Raises:
            PersistenceWriteError: If the slot cannot be written.
        """
        payload = encode_catalog(catalog)
        try:
            await self.slot.write(self.key, payload)
        except PersistenceWriteError:
            raise
        except Exception as e:
            raise PersistenceWriteError(
                f"Failed to write slot {self.key!r}: {e}"
            ) from e

        logger.debug(
            f"Saved {len(catalog)} books to slot {self.key}",
            extra={"slot_key": self.key, "count": len(catalog)},
        )
