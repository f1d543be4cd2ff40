"""Fake IdentifierPort implementation for testing."""

from collections.abc import Iterable

from bookshelf.core.ports import IdentifierPort


class FakeIdentifierPort(IdentifierPort):
    """Deterministic ids.

    Hands out the scripted ids first, then ``id-1``, ``id-2``, ...
    """

    def __init__(self, scripted: Iterable[str] = ()):
        self.scripted = list(scripted)
        self.issued: list[str] = []
        self._counter = 0

    def new_id(self) -> str:
        if self.scripted:
            value = self.scripted.pop(0)
        else:
            self._counter += 1
            value = f"id-{self._counter}"
        self.issued.append(value)
        return value
