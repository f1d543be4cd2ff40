"""CLI command implementations for the Bookshelf catalog.

This adapter maps CLI commands (list, add, remove, clear) to CatalogPort
operations. It handles CLI-specific formatting and error reporting;
every command returns a plain dictionary ready to print as JSON.
"""

import logging
from typing import Any

from bookshelf.core.models import SORT_KEYS, Book, Draft, ValidationError
from bookshelf.core.ports import CatalogPort

logger = logging.getLogger(__name__)


class CLICommandHandler:
    """Handles CLI commands by delegating to CatalogPort."""

    def __init__(self, catalog: CatalogPort):
        """Initialize the CLI command handler.

        Args:
            catalog: CatalogPort implementation to execute commands.
        """
        self.catalog = catalog

    async def list_books(
        self,
        query: str | None = None,
        sort: str = "title",
        output_format: str = "json",
    ) -> dict[str, Any]:
        """Search and sort the catalog.

        Args:
            query: Case-insensitive text matched against title, author and year.
            sort: Sort key ('title', 'author', 'year'). Default 'title'.
            output_format: Output format ('json', 'text'). Default 'json'.

        Returns:
            Dictionary with status and the matching books.
        """
        if sort not in SORT_KEYS:
            return {
                "status": "error",
                "operation": "list",
                "message": f"Unsupported sort key: {sort}. Use one of {', '.join(SORT_KEYS)}",
            }

        books = self.catalog.query(query or "", sort)  # type: ignore[arg-type]

        if output_format == "json":
            data: Any = [self._book_to_dict(b) for b in books]
        elif output_format == "text":
            data = self._format_books_as_text(books)
        else:
            return {
                "status": "error",
                "operation": "list",
                "message": f"Unsupported format: {output_format}",
            }

        return {
            "status": "success",
            "operation": "list",
            "count": len(books),
            "total": len(self.catalog.list_books()),
            "data": data,
        }

    async def add_book(
        self,
        title: str | None = None,
        author: str | None = None,
        year: str | int | float | None = None,
    ) -> dict[str, Any]:
        """Add a book via CLI.

        Returns:
            Dictionary with the created book, or the validation error
            naming the offending field.
        """
        try:
            book = await self.catalog.add(Draft(title=title, author=author, year=year))
        except ValidationError as e:
            logger.info(f"Rejected draft: {e.field}: {e.message}")
            return {
                "status": "error",
                "operation": "add",
                "field": e.field,
                "message": e.message,
            }

        result: dict[str, Any] = {
            "status": "success",
            "operation": "add",
            "book": self._book_to_dict(book),
            "message": f'Added "{book.title}"',
        }
        return self._with_save_warning(result)

    async def remove_book(self, book_id: str) -> dict[str, Any]:
        """Remove a book via CLI after confirmation.

        An unknown id is reported but is not an error.
        """
        if self.catalog.get_book(book_id) is None:
            return {
                "status": "success",
                "operation": "remove",
                "book_id": book_id,
                "removed": False,
                "message": f"Book {book_id} not found",
            }

        if not await self.catalog.remove(book_id):
            return {
                "status": "cancelled",
                "operation": "remove",
                "book_id": book_id,
                "removed": False,
                "message": "Removal cancelled",
            }

        result: dict[str, Any] = {
            "status": "success",
            "operation": "remove",
            "book_id": book_id,
            "removed": True,
            "message": f"Book {book_id} removed",
        }
        return self._with_save_warning(result)

    async def clear_catalog(self) -> dict[str, Any]:
        """Remove every book via CLI after confirmation."""
        count = len(self.catalog.list_books())
        if count == 0:
            return {
                "status": "success",
                "operation": "clear",
                "cleared": False,
                "message": "Catalog is already empty",
            }

        if not await self.catalog.clear():
            return {
                "status": "cancelled",
                "operation": "clear",
                "cleared": False,
                "message": "Clear cancelled",
            }

        result: dict[str, Any] = {
            "status": "success",
            "operation": "clear",
            "cleared": True,
            "message": f"Removed {count} books",
        }
        return self._with_save_warning(result)

    def _with_save_warning(self, result: dict[str, Any]) -> dict[str, Any]:
        error = self.catalog.last_save_error
        if error is not None:
            result["warning"] = f"Change kept for this session but not saved: {error}"
        return result

    @staticmethod
    def _book_to_dict(book: Book) -> dict[str, Any]:
        return {
            "id": book.id,
            "title": book.title,
            "author": book.author,
            "year": book.year,
        }

    @staticmethod
    def _format_books_as_text(books: list[Book]) -> str:
        """Format books as human-readable lines.

        Args:
            books: Books in display order.

        Returns:
            One line per book, or a placeholder when there are none.
        """
        if not books:
            return "No books found."

        lines = []
        for book in books:
            line = f"[{book.id}] {book.title} by {book.display_author}"
            if book.year is not None:
                line += f" ({book.display_year})"
            lines.append(line)
        return "\n".join(lines)
