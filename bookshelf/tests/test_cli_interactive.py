"""Tests for the interactive command loop."""

import json
from unittest.mock import patch

import pytest

from bookshelf.adapters.cli.commands import CLICommandHandler
from bookshelf.core.models import Book
from bookshelf.main import _execute_cli_command, _parse_command_line, _run_cli_interactive
from bookshelf.tests.fakes import FakeCatalogPort


@pytest.fixture
def catalog() -> FakeCatalogPort:
    return FakeCatalogPort(
        books=(
            Book(id="b1", title="Dune", author="Frank Herbert", year=1965),
            Book(id="b2", title="Beowulf"),
        )
    )


@pytest.fixture
def handler(catalog: FakeCatalogPort) -> CLICommandHandler:
    return CLICommandHandler(catalog)


def _printed_results(mock_print) -> list[dict]:
    """Decode every JSON document printed by the loop."""
    results = []
    for call in mock_print.call_args_list:
        text = call.args[0] if call.args else ""
        if isinstance(text, str) and text.lstrip().startswith("{"):
            results.append(json.loads(text))
    return results


async def _run(handler: CLICommandHandler, lines: list) -> list[dict]:
    with patch("builtins.input", side_effect=lines), patch("builtins.print") as mock_print:
        await _run_cli_interactive(handler)
    return _printed_results(mock_print)


@pytest.mark.asyncio
class TestInteractiveLoop:
    """Line parsing and dispatch."""

    async def test_list_then_exit(self, handler: CLICommandHandler) -> None:
        results = await _run(handler, ['list {"sort": "title"}', "exit"])

        assert len(results) == 1
        assert [b["id"] for b in results[0]["data"]] == ["b2", "b1"]

    async def test_add_and_remove(
        self, handler: CLICommandHandler, catalog: FakeCatalogPort
    ) -> None:
        results = await _run(
            handler,
            [
                'add {"title": "Emma", "author": "Jane Austen", "year": 1815}',
                'remove {"book_id": "b1"}',
                "exit",
            ],
        )

        assert results[0]["book"]["title"] == "Emma"
        assert results[1]["removed"] is True
        assert [b.title for b in catalog.list_books()] == ["Emma", "Beowulf"]

    async def test_clear_without_arguments(
        self, handler: CLICommandHandler, catalog: FakeCatalogPort
    ) -> None:
        results = await _run(handler, ["clear", "exit"])

        assert results[0]["cleared"] is True
        assert catalog.list_books() == ()

    async def test_invalid_json_skipped(self, handler: CLICommandHandler) -> None:
        results = await _run(handler, ["add {title: Emma}", "list", "exit"])

        assert len(results) == 1
        assert results[0]["operation"] == "list"

    async def test_non_object_arguments_skipped(
        self, handler: CLICommandHandler, catalog: FakeCatalogPort
    ) -> None:
        results = await _run(handler, ['add ["Emma"]', "exit"])

        assert results == []
        assert catalog.added_drafts == []

    async def test_unknown_command_reports_error(self, handler: CLICommandHandler) -> None:
        results = await _run(handler, ["shelve", "exit"])

        assert results[0]["status"] == "error"
        assert "Unknown command" in results[0]["message"]

    async def test_blank_lines_ignored_and_eof_exits(self, handler: CLICommandHandler) -> None:
        results = await _run(handler, ["", "   ", EOFError()])

        assert results == []

    async def test_help_prints_usage(self, handler: CLICommandHandler) -> None:
        with patch("builtins.input", side_effect=["help", "exit"]), patch(
            "builtins.print"
        ) as mock_print:
            await _run_cli_interactive(handler)

        assert "Available Commands" in mock_print.call_args_list[0].args[0]


@pytest.mark.asyncio
class TestExecuteCommand:
    """Direct dispatch."""

    async def test_remove_requires_book_id(self, handler: CLICommandHandler) -> None:
        with pytest.raises(ValueError, match="book_id"):
            await _execute_cli_command(handler, "remove", {})

    async def test_numeric_book_id_coerced_to_text(
        self, handler: CLICommandHandler, catalog: FakeCatalogPort
    ) -> None:
        result = await _execute_cli_command(handler, "remove", {"book_id": 42})

        assert result["removed"] is False
        assert catalog.removed_ids == []
        assert result["book_id"] == "42"

    async def test_list_passes_query_and_format(self, handler: CLICommandHandler) -> None:
        result = await _execute_cli_command(
            handler, "list", {"query": "dune", "format": "text"}
        )

        assert result["data"] == "[b1] Dune by Frank Herbert (1965)"


class TestParseCommandLine:
    """Splitting ``command {json}`` lines."""

    def test_command_without_arguments(self) -> None:
        assert _parse_command_line("CLEAR") == ("clear", {})

    def test_arguments_after_any_whitespace(self) -> None:
        assert _parse_command_line('add\t{"title": "Emma"}') == ("add", {"title": "Emma"})

    @pytest.mark.parametrize("line", ["add {title: Emma}", 'add ["Emma"]', "add 42"])
    def test_non_object_arguments_rejected(self, line: str) -> None:
        with pytest.raises(ValueError):
            _parse_command_line(line)
