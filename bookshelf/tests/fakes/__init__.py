"""Fake/mock implementations of core ports for testing.

These in-memory implementations allow core domain logic to be tested
without external dependencies:

- FakeKeyValueSlot: In-memory key-value storage
- FakeCatalogGateway: In-memory catalog persistence with captured saves
- FakeIdentifierPort: Deterministic id sequence
- FakeConfirmationPort: Scripted yes/no answers
- FakeCatalogPort: Captured catalog operations
"""

from .catalog import FakeCatalogPort
from .confirmation import FakeConfirmationPort
from .gateway import FakeCatalogGateway
from .identifiers import FakeIdentifierPort
from .slot import FakeKeyValueSlot

__all__ = [
    "FakeCatalogGateway",
    "FakeCatalogPort",
    "FakeConfirmationPort",
    "FakeIdentifierPort",
    "FakeKeyValueSlot",
]
