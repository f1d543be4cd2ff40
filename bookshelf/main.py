"""Composition root for the Bookshelf catalog.

This module is the ONLY location that imports both core domain logic
and concrete adapter implementations. All wiring of dependencies
happens here, creating a clear entry point for the application.

Module Structure:
- Configuration loading via config module
- Logging and collation setup
- Adapter instantiation
- Core service initialization
- Interactive CLI loop
"""

import asyncio
import json
import locale
import logging
import sys
from typing import Any

from bookshelf.adapters.cli.commands import CLICommandHandler
from bookshelf.adapters.confirmation.auto import AutoConfirmation
from bookshelf.adapters.confirmation.prompt import PromptConfirmation
from bookshelf.adapters.store.json_file import JsonFileKeyValueSlot
from bookshelf.adapters.store.sqlite import SQLiteKeyValueSlot
from bookshelf.config import Settings, load_settings
from bookshelf.core.catalog_service import CatalogService
from bookshelf.core.identifiers import RandomIdentifierGenerator
from bookshelf.core.persistence import PersistenceGateway
from bookshelf.core.ports import ConfirmationPort, KeyValueSlotPort

PROMPT = "bookshelf> "


def _parse_command_line(line: str) -> tuple[str, dict[str, Any]]:
    """Split ``command {json}`` into a command name and its arguments.

    Raises:
        ValueError: If the arguments are not a JSON object.
    """
    parts = line.split(maxsplit=1)
    command = parts[0].lower()
    if len(parts) == 1:
        return command, {}

    try:
        args = json.loads(parts[1])
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON arguments ({e.msg})") from e

    if not isinstance(args, dict):
        raise ValueError("Arguments must be a JSON object")
    return command, args


async def _run_cli_interactive(cli_handler: CLICommandHandler) -> None:
    """Read ``command {json}`` lines until ``exit`` or end of input.

    Each result is printed as indented JSON. Malformed lines are logged
    and skipped; the loop only ends on ``exit`` or EOF.
    """
    logger = logging.getLogger(__name__)
    logger.info("Bookshelf ready. Type 'help' for commands or 'exit' to quit.")

    loop = asyncio.get_running_loop()

    while True:
        try:
            line = await loop.run_in_executor(None, input, PROMPT)
        except EOFError:
            logger.info("End of input, closing bookshelf")
            return
        except KeyboardInterrupt:
            continue

        line = line.strip()
        if not line:
            continue
        if line.lower() == "exit":
            return
        if line.lower() == "help":
            _print_cli_help()
            continue

        try:
            command, args = _parse_command_line(line)
        except ValueError as e:
            logger.error(f"{e}. Use 'help' for command syntax.")
            continue

        try:
            result = await _execute_cli_command(cli_handler, command, args)
        except (ValueError, RuntimeError) as e:
            logger.error(f"Command {command!r} failed: {e}")
            result = {"status": "error", "operation": command, "message": str(e)}

        print(json.dumps(result, indent=2, ensure_ascii=False, default=str))


async def _execute_cli_command(
    cli_handler: CLICommandHandler,
    command: str,
    args: dict[str, Any],
) -> dict[str, Any]:
    """Execute a CLI command.

    Args:
        cli_handler: CLICommandHandler instance.
        command: Command name.
        args: Command arguments.

    Returns:
        Command result dictionary.

    Raises:
        ValueError: If command is not recognized or a required argument is missing.
    """
    if command == "list":
        return await cli_handler.list_books(
            query=args.get("query"),
            sort=args.get("sort", "title"),
            output_format=args.get("format", "json"),
        )

    elif command == "add":
        return await cli_handler.add_book(
            title=args.get("title"),
            author=args.get("author"),
            year=args.get("year"),
        )

    elif command == "remove":
        if "book_id" not in args:
            raise ValueError("Missing required parameter: book_id")
        return await cli_handler.remove_book(book_id=str(args["book_id"]))

    elif command == "clear":
        return await cli_handler.clear_catalog()

    else:
        raise ValueError(f"Unknown command: {command}. Use 'help' for available commands.")


def _print_cli_help() -> None:
    """Print CLI help message."""
    help_text = """
Available Commands (JSON format):

  list
    Search and sort the catalog.
    Optional: query, sort (title, author, year), format (json, text)

    Example: list {"query": "herbert", "sort": "year", "format": "text"}

  add
    Add a book. The newest book comes first in the catalog.
    Required: title
    Optional: author, year

    Example: add {"title": "Dune", "author": "Frank Herbert", "year": 1965}

  remove
    Remove a book (asks for confirmation).
    Required: book_id

    Example: remove {"book_id": "3f2a9c1b7d4e"}

  clear
    Remove every book (asks for confirmation).

    Example: clear

  help
    Show this help message.

  exit
    Exit the CLI.

Note: All commands accept arguments as a single JSON object.
Provide the JSON after the command name on the same line.
    """
    print(help_text)


class JsonLogFormatter(logging.Formatter):
    """Render each record as one JSON object per line.

    Messages are escaped by the JSON encoder, so user-supplied titles
    containing quotes or newlines still produce valid lines.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def configure_logging(log_level: str, log_format: str) -> None:
    """Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Log format (json, text).
    """
    handler = logging.StreamHandler(sys.stdout)
    if log_format == "json":
        handler.setFormatter(JsonLogFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )

    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        handlers=[handler],
    )


def configure_collation() -> str:
    """Sort titles and authors in the user's locale.

    Falls back to code-point order when the environment names a locale
    the host does not provide.

    Returns:
        The collation locale now in effect.
    """
    try:
        return locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        logging.getLogger(__name__).warning(
            f"Locale unavailable ({e}), sorting titles by code point"
        )
        return locale.setlocale(locale.LC_COLLATE, "C")


def build_slot(settings: Settings) -> KeyValueSlotPort:
    """Instantiate the durable slot backend selected by configuration.

    Raises:
        ValueError: If the configured backend is unknown.
    """
    if settings.store_backend == "sqlite":
        return SQLiteKeyValueSlot(db_path=settings.store_sqlite_path)
    if settings.store_backend == "json_file":
        return JsonFileKeyValueSlot(base_dir=settings.store_json_dir)
    raise ValueError(f"Unknown store backend: {settings.store_backend}")


def build_confirmation(settings: Settings) -> ConfirmationPort:
    """Pick the confirmation collaborator for remove/clear."""
    if settings.assume_yes:
        return AutoConfirmation(answer=True)
    return PromptConfirmation()


def build_catalog(
    settings: Settings,
    slot: KeyValueSlotPort,
    confirmation: ConfirmationPort,
) -> CatalogService:
    """Wire the catalog service to its gateway, id generator and confirmation."""
    return CatalogService(
        gateway=PersistenceGateway(slot, key=settings.slot_key),
        identifiers=RandomIdentifierGenerator(length=settings.id_length),
        confirmation=confirmation,
    )


async def bootstrap() -> None:
    """Load configuration, wire adapters, and start the application.

    This is the composition root: the single place where all components
    are instantiated and wired together.

    Steps:
    1. Load configuration from environment
    2. Configure logging and collation
    3. Instantiate adapters with configuration
    4. Initialize and load the catalog service
    5. Run the interactive CLI
    """
    # Step 1: Load configuration
    settings = load_settings()

    # Step 2: Configure logging and collation
    configure_logging(settings.log_level, settings.log_format)
    logger = logging.getLogger(__name__)
    collation = configure_collation()
    logger.info(f"Loading Bookshelf (collation {collation})")

    # Step 3: Instantiate adapters
    slot = build_slot(settings)
    logger.info(f"Slot backend: {settings.store_backend} (key {settings.slot_key})")
    confirmation = build_confirmation(settings)

    # Step 4: Initialize core services
    catalog = build_catalog(settings, slot, confirmation)

    try:
        await catalog.load()

        # Step 5: Interactive CLI
        cli_handler = CLICommandHandler(catalog)
        await _run_cli_interactive(cli_handler)
    finally:
        if hasattr(slot, "close_pool"):
            await slot.close_pool()


def main() -> None:
    """Console entry point.

    Exits 130 when interrupted and 1 when startup or the session fails.
    """
    try:
        asyncio.run(bootstrap())
    except KeyboardInterrupt:
        sys.exit(130)
    except Exception as e:
        logging.getLogger(__name__).critical(f"Bookshelf stopped: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
