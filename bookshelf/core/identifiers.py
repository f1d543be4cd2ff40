"""Identifier generation for new books."""

import uuid

from .ports import IdentifierPort


class RandomIdentifierGenerator(IdentifierPort):
    """Short lowercase hex tokens cut from a random UUID."""

    def __init__(self, length: int = 12):
        if not 1 <= length <= 32:
            raise ValueError(f"length must be between 1 and 32, got {length}")
        self.length = length

    def new_id(self) -> str:
        return uuid.uuid4().hex[: self.length]
