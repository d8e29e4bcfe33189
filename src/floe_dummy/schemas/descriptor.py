"""Path descriptor models.

This module defines the normalized, recursive description of a schema
produced by the path extractor and consumed by the value synthesizer:
- FieldKind: Recognized field type tags
- Validator: One declared validation rule
- Reference: Link from a field to another named schema
- PathDescriptor: Normalized metadata for one schema field

All models are immutable (frozen=True).
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FieldKind(str, Enum):
    """Field type tags the synthesizer knows how to generate.

    Values match the tags reported by document schemas. Descriptors keep
    unknown tags verbatim so the synthesizer can reject them.
    """

    STRING = "String"
    NUMBER = "Number"
    DATE = "Date"
    BOOLEAN = "Boolean"
    MIXED = "Mixed"
    OBJECT_ID = "ObjectId"
    ARRAY = "Array"


class Validator(BaseModel):
    """A declared validation rule.

    Attributes:
        type: Rule name ("required", "min", "max", "enum", "user defined", ...)
        value: Rule argument (the bound for min/max, the values for enum)
        check: Optional user supplied predicate
        message: Optional error message declared with the rule
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: str = Field(..., min_length=1, description="Rule name")
    value: Any = Field(default=None, description="Rule argument")
    check: Callable[..., Any] | None = Field(default=None, description="User predicate")
    message: str | None = Field(default=None, description="Declared error message")


class Reference(BaseModel):
    """Link from a field to another named schema.

    Attributes:
        schema_name: Name of the referenced schema
        many_valued: True for to-many virtual relations
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    schema_name: str = Field(..., min_length=1, description="Referenced schema name")
    many_valued: bool = Field(default=False, description="To-many relation")


class PathDescriptor(BaseModel):
    """Normalized metadata for one schema field.

    Attributes:
        path: Dot-addressed field path, unique within one descriptor map
        kind: Type tag, normally a FieldKind value
        required: Whether the schema marks the field as required
        validators: Declared validation rules, in declaration order
        default: Declared default (informational only)
        enum_values: Permitted literal values for enum-constrained fields
        min: Lower numeric bound taken from a "min" validator
        max: Upper numeric bound taken from a "max" validator
        lowercase: Lowercase filter flag for strings
        uppercase: Uppercase filter flag for strings
        trim: Trim filter flag for strings
        is_array: Whether the field holds a list
        element: Element descriptor (scalar) or descriptor map (sub-documents)
        reference: Referenced schema, for ObjectId and virtual fields
        is_virtual: Whether the field is a populated relation, not stored

    Example:
        >>> PathDescriptor(path="gender", kind=FieldKind.STRING, enum_values=("Male", "Female"))
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str = Field(..., description="Dot-addressed field path")
    kind: str = Field(..., description="Type tag")
    required: bool = False
    validators: tuple[Validator, ...] = ()
    default: Any = None
    enum_values: tuple[Any, ...] = ()
    min: float | None = None
    max: float | None = None
    lowercase: bool = False
    uppercase: bool = False
    trim: bool = False
    is_array: bool = False
    element: PathDescriptor | dict[str, PathDescriptor] | None = None
    reference: Reference | None = None
    is_virtual: bool = False

    @field_validator("kind", mode="before")
    @classmethod
    def normalize_kind(cls, value: Any) -> Any:
        """Store FieldKind members as their plain tag."""
        return value.value if isinstance(value, FieldKind) else value

    @property
    def is_enum(self) -> bool:
        """True when the field only accepts one of ``enum_values``."""
        return len(self.enum_values) > 0

    @property
    def name(self) -> str:
        """Last segment of the dot-addressed path."""
        return self.path.rsplit(".", 1)[-1]


PathDescriptor.model_rebuild()

# Mapping of field path to its descriptor
PathDescriptorMap = dict[str, PathDescriptor]
