"""Unit tests for domain models and port contracts."""

from dataclasses import FrozenInstanceError

import pytest

from bookshelf.core.identifiers import RandomIdentifierGenerator
from bookshelf.core.models import (
    Book,
    BookshelfError,
    DeserializationError,
    PersistenceWriteError,
    ValidationError,
)
from bookshelf.core.ports import (
    CatalogGatewayPort,
    CatalogPort,
    ConfirmationPort,
    IdentifierPort,
    KeyValueSlotPort,
)
from bookshelf.core.seed import SEED_BOOKS


class TestBook:
    """Book invariants."""

    def test_book_is_immutable(self) -> None:
        book = Book(id="1", title="Dune")
        with pytest.raises(FrozenInstanceError):
            book.title = "Dune Messiah"  # type: ignore[misc]

    @pytest.mark.parametrize("title", ["", "   "])
    def test_blank_title_rejected(self, title: str) -> None:
        with pytest.raises(ValueError, match="title"):
            Book(id="1", title=title)

    def test_blank_id_rejected(self) -> None:
        with pytest.raises(ValueError, match="id"):
            Book(id="", title="Dune")

    @pytest.mark.parametrize("year", [True, 1965.0, "1965"])
    def test_non_int_year_rejected(self, year: object) -> None:
        with pytest.raises(ValueError, match="year"):
            Book(id="1", title="Dune", year=year)  # type: ignore[arg-type]

    def test_absent_year_distinct_from_zero(self) -> None:
        assert Book(id="1", title="T", year=None) != Book(id="1", title="T", year=0)

    def test_display_values(self) -> None:
        book = Book(id="1", title="Beowulf")
        assert book.display_author == "Unknown"
        assert book.display_year == ""
        assert Book(id="2", title="T", author="A", year=0).display_year == "0"


class TestErrors:
    """Error taxonomy."""

    def test_all_errors_share_base(self) -> None:
        for error in (
            ValidationError("title", "Title is required"),
            DeserializationError("bad"),
            PersistenceWriteError("bad"),
        ):
            assert isinstance(error, BookshelfError)

    def test_validation_error_carries_field(self) -> None:
        error = ValidationError("year", "Year must be a whole number")
        assert error.field == "year"
        assert str(error) == "Year must be a whole number"
        assert "year" in repr(error)


class TestPorts:
    """Ports are abstract and cannot be instantiated directly."""

    @pytest.mark.parametrize(
        "port",
        [KeyValueSlotPort, CatalogGatewayPort, IdentifierPort, ConfirmationPort, CatalogPort],
    )
    def test_port_is_abstract(self, port: type) -> None:
        with pytest.raises(TypeError):
            port()

    def test_incomplete_implementation_rejected(self) -> None:
        class HalfSlot(KeyValueSlotPort):
            async def read(self, key: str) -> str | None:
                return None

        with pytest.raises(TypeError):
            HalfSlot()  # type: ignore[abstract]


class TestSeed:
    """Seed set invariants."""

    def test_seed_has_three_distinct_books(self) -> None:
        assert len(SEED_BOOKS) == 3
        assert len({b.id for b in SEED_BOOKS}) == 3


class TestRandomIdentifierGenerator:
    """Random ids."""

    def test_ids_are_short_alphanumeric(self) -> None:
        generator = RandomIdentifierGenerator()
        book_id = generator.new_id()

        assert len(book_id) == 12
        assert book_id.isalnum()

    def test_length_is_configurable(self) -> None:
        assert len(RandomIdentifierGenerator(length=8).new_id()) == 8

    def test_ids_differ(self) -> None:
        generator = RandomIdentifierGenerator()
        assert len({generator.new_id() for _ in range(200)}) == 200

    @pytest.mark.parametrize("length", [0, 33])
    def test_invalid_length_rejected(self, length: int) -> None:
        with pytest.raises(ValueError):
            RandomIdentifierGenerator(length=length)
