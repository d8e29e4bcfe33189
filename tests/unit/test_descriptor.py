"""Unit tests for path descriptor models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from floe_dummy.schemas import FieldKind, PathDescriptor, Reference, Validator

pytestmark = pytest.mark.unit


class TestPathDescriptor:
    """Tests for PathDescriptor."""

    def test_kind_stored_as_tag(self) -> None:
        """FieldKind members are stored as their plain string tag."""
        descriptor = PathDescriptor(path="name", kind=FieldKind.STRING)

        assert descriptor.kind == "String"
        assert type(descriptor.kind) is str

    def test_unknown_kind_allowed(self) -> None:
        descriptor = PathDescriptor(path="price", kind="Decimal128")

        assert descriptor.kind == "Decimal128"

    def test_defaults(self) -> None:
        descriptor = PathDescriptor(path="name", kind=FieldKind.STRING)

        assert descriptor.required is False
        assert descriptor.validators == ()
        assert descriptor.enum_values == ()
        assert descriptor.min is None
        assert descriptor.max is None
        assert descriptor.is_array is False
        assert descriptor.element is None
        assert descriptor.reference is None
        assert descriptor.is_virtual is False

    def test_is_enum(self) -> None:
        assert PathDescriptor(path="g", kind="String", enum_values=("Male",)).is_enum
        assert not PathDescriptor(path="g", kind="String").is_enum

    def test_name_is_last_segment(self) -> None:
        assert PathDescriptor(path="detail.main_info", kind="String").name == "main_info"
        assert PathDescriptor(path="name", kind="String").name == "name"

    def test_nested_element_map(self) -> None:
        """Array descriptors can hold a nested descriptor map."""
        descriptor = PathDescriptor(
            path="results",
            kind=FieldKind.ARRAY,
            is_array=True,
            element={"score": PathDescriptor(path="score", kind=FieldKind.NUMBER)},
        )

        assert isinstance(descriptor.element, dict)
        assert descriptor.element["score"].kind == "Number"

    def test_frozen(self) -> None:
        descriptor = PathDescriptor(path="name", kind="String")

        with pytest.raises(ValidationError):
            descriptor.path = "other"  # type: ignore[misc]

    def test_extra_fields_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PathDescriptor(path="name", kind="String", colour="red")  # type: ignore[call-arg]


class TestReferenceAndValidator:
    def test_reference_defaults(self) -> None:
        reference = Reference(schema_name="School")

        assert reference.many_valued is False

    def test_reference_requires_name(self) -> None:
        with pytest.raises(ValidationError):
            Reference(schema_name="")

    def test_validator_with_check(self) -> None:
        def check(value: object) -> bool:
            return value is not None

        validator = Validator(type="user defined", check=check, message="must be set")

        assert validator.check is check
        assert validator.message == "must be set"
