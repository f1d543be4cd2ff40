"""Tests for confirmation adapters."""

from unittest.mock import patch

import pytest

from bookshelf.adapters.confirmation.auto import AutoConfirmation
from bookshelf.adapters.confirmation.prompt import PromptConfirmation


@pytest.mark.asyncio
class TestPromptConfirmation:
    """Terminal yes/no prompt."""

    @pytest.mark.parametrize("answer", ["y", "Y", "yes", " YES "])
    async def test_yes_confirms(self, answer: str) -> None:
        with patch("builtins.input", return_value=answer):
            assert await PromptConfirmation().confirm("Remove?") is True

    @pytest.mark.parametrize("answer", ["", "n", "no", "maybe", "yess"])
    async def test_anything_else_declines(self, answer: str) -> None:
        with patch("builtins.input", return_value=answer):
            assert await PromptConfirmation().confirm("Remove?") is False

    async def test_eof_declines(self) -> None:
        with patch("builtins.input", side_effect=EOFError()):
            assert await PromptConfirmation().confirm("Remove?") is False

    async def test_prompt_includes_message_and_suffix(self) -> None:
        with patch("builtins.input", return_value="y") as mock_input:
            await PromptConfirmation().confirm('Remove "Dune" from your library?')

        mock_input.assert_called_once_with('Remove "Dune" from your library? [y/N] ')


@pytest.mark.asyncio
class TestAutoConfirmation:
    """Fixed answers."""

    async def test_default_is_yes(self) -> None:
        assert await AutoConfirmation().confirm("Remove?") is True

    async def test_can_always_decline(self) -> None:
        assert await AutoConfirmation(answer=False).confirm("Remove?") is False
