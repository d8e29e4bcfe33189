"""Unit tests for the floe-dummy exception hierarchy."""

from __future__ import annotations

import pytest

from floe_dummy.errors import (
    DummyError,
    InvalidConfigError,
    SchemaNotFoundError,
    UnsupportedTypeError,
)

pytestmark = pytest.mark.unit


class TestDummyError:
    """Tests for the base exception."""

    def test_message(self) -> None:
        error = DummyError("Generation failed")

        assert str(error) == "Generation failed"
        assert error.user_message == "Generation failed"

    def test_internal_details_logged_not_exposed(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Internal details go to the log, never into the message."""
        error = DummyError("Generation failed", internal_details="resolver returned 3")

        output = capsys.readouterr().out
        assert "dummy_error" in output
        assert "resolver returned 3" in output
        assert "resolver returned 3" not in str(error)

    @pytest.mark.parametrize(
        "error_class",
        [UnsupportedTypeError, InvalidConfigError, SchemaNotFoundError],
    )
    def test_subclasses(self, error_class: type[Exception]) -> None:
        assert issubclass(error_class, DummyError)


class TestUnsupportedTypeError:
    def test_with_path(self) -> None:
        error = UnsupportedTypeError("Decimal128", path="price")

        assert str(error) == "Unsupported type 'Decimal128' (field 'price')"
        assert error.kind == "Decimal128"
        assert error.path == "price"

    def test_without_path(self) -> None:
        error = UnsupportedTypeError("Buffer")

        assert str(error) == "Unsupported type 'Buffer'"
        assert error.path is None


class TestInvalidConfigError:
    def test_with_field_path(self) -> None:
        error = InvalidConfigError("Invalid generation options", field_path="custom.email")

        assert str(error) == "Invalid generation options (option 'custom.email')"
        assert error.field_path == "custom.email"

    def test_without_field_path(self) -> None:
        assert str(InvalidConfigError("Invalid generation options")) == (
            "Invalid generation options"
        )


class TestSchemaNotFoundError:
    def test_lists_available(self) -> None:
        error = SchemaNotFoundError("Book", available_schemas=["School", "BriefCase"])

        assert str(error) == "Schema 'Book' not found. Available: School, BriefCase"
        assert error.schema_name == "Book"
        assert error.available_schemas == ["School", "BriefCase"]

    def test_none_available(self) -> None:
        error = SchemaNotFoundError("Book", available_schemas=[])

        assert str(error).endswith("Available: none")
