"""Catalog service: implements CatalogPort as the sole owner of the catalog.

Every mutation passes through this service. After each state change
commits in memory, the post-mutation hook writes the new snapshot
through the gateway. Write failures are logged and remembered but never
roll back the mutation; the in-memory catalog is authoritative for the
running session.
"""

import logging

from .models import (
    Book,
    Catalog,
    DeserializationError,
    Draft,
    PersistenceWriteError,
    SortKey,
)
from .ports import CatalogGatewayPort, CatalogPort, ConfirmationPort, IdentifierPort
from .query import QueryEngine
from .seed import SEED_BOOKS
from .validator import Validator

logger = logging.getLogger(__name__)


class CatalogService(CatalogPort):
    """Core implementation of CatalogPort.

    Coordinates validation, id generation, confirmation and persistence
    around a single in-memory tuple of books, newest first.
    """

    def __init__(
        self,
        gateway: CatalogGatewayPort,
        identifiers: IdentifierPort,
        confirmation: ConfirmationPort,
        validator: Validator | None = None,
        query_engine: QueryEngine | None = None,
        seed: Catalog = SEED_BOOKS,
        max_id_attempts: int = 5,
    ):
        """Initialize the catalog service.

        Args:
            gateway: CatalogGatewayPort implementation for persistence.
            identifiers: IdentifierPort implementation for new book ids.
            confirmation: ConfirmationPort consulted before remove/clear.
            validator: Validator for drafts (default instance if None).
            query_engine: QueryEngine for views (default instance if None).
            seed: Catalog used when storage holds nothing usable.
            max_id_attempts: Retries allowed when a generated id collides.
        """
        self.gateway = gateway
        self.identifiers = identifiers
        self.confirmation = confirmation
        self.validator = validator or Validator()
        self.query_engine = query_engine or QueryEngine()
        self.seed = tuple(seed)
        self.max_id_attempts = max_id_attempts
        self.last_save_error: PersistenceWriteError | None = None
        self._books: Catalog = ()

    async def load(self) -> Catalog:
        """Populate the catalog from storage, falling back to the seed set.

        Never raises: an absent or corrupt slot silently degrades to the
        seed, as does a stored catalog with no books.
        """
        try:
            books = await self.gateway.load()
        except DeserializationError as e:
            logger.warning(
                f"Stored catalog unavailable, using seed set: {e}",
                extra={"seed_count": len(self.seed)},
            )
            self._books = self.seed
            return self._books

        if not books:
            logger.info("Stored catalog is empty, using seed set")
            self._books = self.seed
        else:
            self._books = tuple(books)
            logger.info(
                f"Loaded {len(self._books)} books",
                extra={"count": len(self._books)},
            )
        return self._books

    async def add(self, draft: Draft) -> Book:
        """Validate a draft and prepend the resulting book.

        Raises:
            ValidationError: If the draft is rejected. Catalog unchanged.
            RuntimeError: If no unused id could be generated.
        """
        accepted = self.validator.validate(draft)
        book = accepted.to_book(self._allocate_id())

        self._books = (book,) + self._books
        logger.info(
            f"Book {book.id} added",
            extra={"book_id": book.id, "title": book.title},
        )

        await self._after_mutation()
        return book

    async def remove(self, book_id: str) -> bool:
        """Remove a book by id after confirmation.

        Unknown ids are a no-op: no prompt, no write.
        """
        book = self.get_book(book_id)
        if book is None:
            logger.debug(f"Book {book_id} not found, nothing to remove")
            return False

        if not await self.confirmation.confirm(
            f'Remove "{book.title}" from your library?'
        ):
            logger.info(f"Removal of book {book_id} declined")
            return False

        self._books = tuple(b for b in self._books if b.id != book_id)
        logger.info(
            f"Book {book_id} removed",
            extra={"book_id": book_id, "title": book.title},
        )

        await self._after_mutation()
        return True

    async def clear(self) -> bool:
        """Remove every book after confirmation.

        An already-empty catalog is a no-op: no prompt, no write.
        """
        count = len(self._books)
        if count == 0:
            logger.debug("Catalog already empty, nothing to clear")
            return False

        if not await self.confirmation.confirm(
            f"Remove all {count} books from your library?"
        ):
            logger.info("Clearing catalog declined")
            return False

        self._books = ()
        logger.info(f"Catalog cleared ({count} books)", extra={"count": count})

        await self._after_mutation()
        return True

    def list_books(self) -> Catalog:
        """Return a read-only snapshot in creation order (newest first)."""
        return self._books

    def get_book(self, book_id: str) -> Book | None:
        """Look up a book by id."""
        return next((b for b in self._books if b.id == book_id), None)

    def query(self, text: str = "", sort_key: SortKey = "title") -> list[Book]:
        """Filter then sort the current snapshot for display.

        Raises:
            ValueError: If sort_key is not supported.
        """
        return self.query_engine.run(self._books, text, sort_key)

    def _allocate_id(self) -> str:
        existing = {b.id for b in self._books}
        for _ in range(self.max_id_attempts):
            candidate = self.identifiers.new_id()
            if candidate and candidate not in existing:
                return candidate
            logger.warning(f"Generated id {candidate!r} collides, retrying")
        raise RuntimeError(
            f"Could not generate an unused book id after {self.max_id_attempts} attempts"
        )

    async def _after_mutation(self) -> None:
        """Write the committed snapshot. Failures never undo the mutation."""
        try:
            await self.gateway.save(self._books)
        except PersistenceWriteError as e:
            self.last_save_error = e
            logger.error(
                f"Failed to save catalog: {e}",
                extra={"count": len(self._books)},
            )
            return
        self.last_save_error = None
