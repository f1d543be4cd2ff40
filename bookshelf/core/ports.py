"""Port interfaces for the Bookshelf catalog.

These abstract base classes define the boundaries between core
domain logic and external adapters. Implementations live in the
adapters/ package.

Port Interface Categories:

1. **Driven Ports** (core calls out to adapters)
   - KeyValueSlotPort: Raw durable key-value storage
   - CatalogGatewayPort: Load and save a whole catalog
   - IdentifierPort: Produce ids for new books
   - ConfirmationPort: Ask the user to approve destructive operations

2. **Driving Ports** (adapters/external systems call into core)
   - CatalogPort: Load, mutate and query the catalog
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from .models import Book, Catalog, Draft, PersistenceWriteError, SortKey


# ============================================================================
# DRIVEN PORTS (Core calls out to adapters)
# ============================================================================


class KeyValueSlotPort(ABC):
    """Port for a durable, named key-value entry.

    Adapters store opaque text values under string keys. They know
    nothing about books; encoding is the gateway's job.
    """

    @abstractmethod
    async def read(self, key: str) -> str | None:
        """Read the value stored under a key.

        Args:
            key: Slot name (e.g. "library_books_v1").

        Returns:
            The stored text, or None if the slot has never been written.

        Raises:
            DeserializationError: If the backend cannot be read.
        """

    @abstractmethod
    async def write(self, key: str, value: str) -> None:
        """Overwrite the value stored under a key.

        Args:
            key: Slot name.
            value: Text to store, replacing any prior value.

        Raises:
            PersistenceWriteError: If the backend cannot be written.
        """


class CatalogGatewayPort(ABC):
    """Port for serializing a whole catalog to durable storage."""

    @abstractmethod
    async def load(self) -> Catalog:
        """Load the persisted catalog.

        Returns:
            Tuple of books in stored order. May be empty.

        Raises:
            DeserializationError: If the payload is absent, malformed,
                or schema-incompatible.
        """

    @abstractmethod
    async def save(self, catalog: Sequence[Book]) -> None:
        """Persist the full catalog, overwriting any prior value.

        Raises:
            PersistenceWriteError: If the write fails.
        """


class IdentifierPort(ABC):
    """Port for generating book identifiers."""

    @abstractmethod
    def new_id(self) -> str:
        """Return a short alphanumeric token.

        Not security-sensitive. Collisions are possible but rare;
        callers check against existing ids.
        """


class ConfirmationPort(ABC):
    """Port for the user's yes/no decision on destructive operations."""

    @abstractmethod
    async def confirm(self, message: str) -> bool:
        """Ask the user to approve an action.

        Args:
            message: Question shown to the user.

        Returns:
            True to proceed, False to abandon the operation.
        """


# ============================================================================
# DRIVING PORTS (Adapters/external systems call into core)
# ============================================================================


class CatalogPort(ABC):
    """Port for the catalog operations consumed by the presentation layer.

    Implementations live in the core (catalog_service.py).

    Attributes:
        last_save_error: The most recent failed write, or None once a
            later write succeeds.
    """

    last_save_error: PersistenceWriteError | None = None

    @abstractmethod
    async def load(self) -> Catalog:
        """Populate the catalog from storage, falling back to the seed set.

        Never raises.
        """

    @abstractmethod
    async def add(self, draft: Draft) -> Book:
        """Validate a draft and prepend the resulting book.

        Raises:
            ValidationError: If the draft is rejected. Catalog unchanged.
        """

    @abstractmethod
    async def remove(self, book_id: str) -> bool:
        """Remove a book by id after confirmation.

        Returns:
            True if a book was removed; False for an unknown id or a
            declined confirmation.
        """

    @abstractmethod
    async def clear(self) -> bool:
        """Remove every book after confirmation.

        Returns:
            True if the catalog was emptied; False if it was already
            empty or the confirmation was declined.
        """

    @abstractmethod
    def list_books(self) -> Catalog:
        """Return a read-only snapshot of the catalog in creation order."""

    @abstractmethod
    def get_book(self, book_id: str) -> Book | None:
        """Look up a book by id, or None if absent."""

    @abstractmethod
    def query(self, text: str = "", sort_key: SortKey = "title") -> list[Book]:
        """Filter then sort the current snapshot for display."""
