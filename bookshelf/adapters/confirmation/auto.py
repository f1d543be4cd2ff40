"""Confirmation adapter that answers without asking."""

import logging

from bookshelf.core.ports import ConfirmationPort

logger = logging.getLogger(__name__)


class AutoConfirmation(ConfirmationPort):
    """Always returns the same decision."""

    def __init__(self, answer: bool = True):
        self.answer = answer

    async def confirm(self, message: str) -> bool:
        logger.debug(f"Auto-answering {self.answer} to: {message}")
        return self.answer
