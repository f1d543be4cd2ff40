"""Terminal confirmation adapter.

Implements ConfirmationPort by asking a yes/no question on stdin. The
read runs in a worker thread so the event loop is not blocked, but the
calling operation waits for the answer before it continues.
"""

import asyncio
import logging

from bookshelf.core.ports import ConfirmationPort

logger = logging.getLogger(__name__)

YES_ANSWERS = frozenset({"y", "yes"})


class PromptConfirmation(ConfirmationPort):
    """Asks the user and accepts only an explicit yes."""

    def __init__(self, suffix: str = " [y/N] "):
        """Initialize the prompt adapter.

        Args:
            suffix: Text appended to every question.
        """
        self.suffix = suffix

    async def confirm(self, message: str) -> bool:
        """Ask the question; anything but y/yes declines, as does EOF."""
        try:
            answer = await asyncio.to_thread(input, f"{message}{self.suffix}")
        except EOFError:
            logger.info("No answer received, treating as declined")
            return False
        return answer.strip().lower() in YES_ANSWERS
