"""Declarative document schemas.

This module provides a small, mongoose-style schema layer that the path
extractor reads from:
- ObjectId: Marker type for reference fields
- SchemaField: One declared (stored) field
- VirtualField: One populated relation to another schema
- DocumentSchema: Ordered set of fields and virtuals built from a definition

Definitions are plain dictionaries. A field is declared with a shorthand type
(``str``, ``int``, ``datetime``, ``ObjectId``, ...) or an option dictionary
with a ``type`` key. Nested plain dictionaries become dot-addressed paths,
and lists declare array fields.

Example:
    >>> schema = DocumentSchema(
    ...     {
    ...         "name": {"type": str, "required": True, "lowercase": True},
    ...         "gender": {"type": str, "enum": ["Male", "Female"]},
    ...         "results": [{"score": int, "course": int}],
    ...         "detail": {"main_info": str, "none_match": str},
    ...         "parent": {"type": ObjectId, "ref": "Student"},
    ...     },
    ...     name="Student",
    ... )
    >>> schema.paths()
    ['_id', 'name', 'gender', 'results', 'detail.main_info', 'detail.none_match', 'parent']
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from floe_dummy.schemas.descriptor import FieldKind, Validator

# Option keys understood in a field option dictionary
FIELD_OPTIONS: frozenset[str] = frozenset(
    {
        "type",
        "required",
        "default",
        "enum",
        "min",
        "max",
        "lowercase",
        "uppercase",
        "trim",
        "ref",
        "validate",
    }
)

# Options that constrain array elements rather than the array itself
ELEMENT_OPTIONS: frozenset[str] = frozenset(
    {"enum", "min", "max", "lowercase", "uppercase", "trim"}
)


class ObjectId:
    """Marker type declaring a reference (ObjectId) field."""


class Mixed:
    """Marker type declaring a free-form field."""


_TYPE_TAGS: dict[Any, str] = {
    str: FieldKind.STRING.value,
    int: FieldKind.NUMBER.value,
    float: FieldKind.NUMBER.value,
    Decimal: FieldKind.NUMBER.value,
    datetime: FieldKind.DATE.value,
    date: FieldKind.DATE.value,
    bool: FieldKind.BOOLEAN.value,
    dict: FieldKind.MIXED.value,
    object: FieldKind.MIXED.value,
    Any: FieldKind.MIXED.value,
    Mixed: FieldKind.MIXED.value,
    ObjectId: FieldKind.OBJECT_ID.value,
    list: FieldKind.ARRAY.value,
}

_TAGS_BY_LOWER_NAME: dict[str, str] = {kind.value.lower(): kind.value for kind in FieldKind}


def type_tag(declared: Any) -> str:
    """Map a declared type to its tag.

    Unknown string tags and unknown classes are returned verbatim (class
    name for classes) so that the synthesizer can reject them.

    Example:
        >>> type_tag(str), type_tag("objectid"), type_tag("Decimal128")
        ('String', 'ObjectId', 'Decimal128')
    """
    if isinstance(declared, FieldKind):
        return declared.value
    if isinstance(declared, str):
        return _TAGS_BY_LOWER_NAME.get(declared.lower(), declared)
    try:
        tag = _TYPE_TAGS.get(declared)
    except TypeError:  # unhashable declaration
        tag = None
    if tag is not None:
        return tag
    return getattr(declared, "__name__", str(declared))


class SchemaField(BaseModel):
    """One declared field of a DocumentSchema.

    Attributes:
        name: Dot-addressed path of the field
        instance: Type tag (see FieldKind)
        required: Required flag
        validators: Declared validation rules
        default: Declared default value
        enum_values: Permitted values
        lowercase: Lowercase filter flag
        uppercase: Uppercase filter flag
        trim: Trim filter flag
        ref: Referenced schema name, for ObjectId fields
        sub_schema: Element sub-schema, for arrays of sub-documents
        caster: Element field, for arrays of primitives
    """

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    name: str
    instance: str
    required: bool = False
    validators: tuple[Validator, ...] = ()
    default: Any = None
    enum_values: tuple[Any, ...] = ()
    lowercase: bool = False
    uppercase: bool = False
    trim: bool = False
    ref: str | None = None
    sub_schema: DocumentSchema | None = None
    caster: SchemaField | None = None


class VirtualField(BaseModel):
    """A populated relation that is not stored on the document.

    Attributes:
        name: Virtual path name
        ref: Referenced schema name
        local_field: Field on this document matched against the foreign field
        foreign_field: Field on the referenced document
        just_one: True for one-valued relations
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., min_length=1)
    ref: str = Field(..., min_length=1)
    local_field: str = "_id"
    foreign_field: str | None = None
    just_one: bool = False


class DocumentSchema:
    """Ordered set of fields and virtuals describing one document shape.

    Attributes:
        name: Schema name used for references and persistence (optional)
    """

    def __init__(
        self,
        definition: Mapping[str, Any] | None = None,
        *,
        name: str | None = None,
        auto_id: bool = True,
    ) -> None:
        """Build a schema from a definition.

        Args:
            definition: Field definitions keyed by field name.
            name: Schema name.
            auto_id: Add an ``_id`` ObjectId field, as document stores do.
        """
        self.name = name
        self._fields: dict[str, SchemaField] = {}
        self._virtuals: dict[str, VirtualField] = {}
        if auto_id:
            self._fields["_id"] = SchemaField(name="_id", instance=FieldKind.OBJECT_ID.value)
        if definition:
            self.add(definition)

    def __repr__(self) -> str:
        return f"DocumentSchema(name={self.name!r}, paths={len(self._fields)})"

    def add(self, definition: Mapping[str, Any], prefix: str = "") -> None:
        """Add field definitions, nesting them below ``prefix``."""
        for key, spec in definition.items():
            path = f"{prefix}{key}"
            if isinstance(spec, DocumentSchema):
                for sub_path, sub_field in spec._fields.items():
                    full_path = f"{path}.{sub_path}"
                    self._fields[full_path] = sub_field.model_copy(update={"name": full_path})
            elif _is_nested_definition(spec):
                self.add(spec, prefix=f"{path}.")
            else:
                self._fields[path] = build_field(path, spec)

    def paths(self) -> list[str]:
        """Declared field paths, in declaration order."""
        return list(self._fields)

    def path(self, name: str) -> SchemaField | None:
        """Field declared at ``name``, or None."""
        return self._fields.get(name)

    def virtual(
        self,
        name: str,
        *,
        ref: str,
        local_field: str = "_id",
        foreign_field: str | None = None,
        just_one: bool = False,
    ) -> VirtualField:
        """Declare a virtual relation to another schema.

        Example:
            >>> school.virtual("books", ref="Book", foreign_field="theme")
        """
        field = VirtualField(
            name=name,
            ref=ref,
            local_field=local_field,
            foreign_field=foreign_field,
            just_one=just_one,
        )
        self._virtuals[name] = field
        return field

    def virtuals(self) -> list[VirtualField]:
        """Declared virtual relations, in declaration order."""
        return list(self._virtuals.values())


def _is_nested_definition(spec: Any) -> bool:
    """A non-empty mapping without a ``type`` option is a nested object."""
    return isinstance(spec, Mapping) and bool(spec) and "type" not in spec


def build_field(path: str, spec: Any) -> SchemaField:
    """Build a SchemaField from a shorthand type or an option dictionary."""
    if isinstance(spec, Mapping) and "type" in spec:
        options: Mapping[str, Any] = spec
    elif isinstance(spec, Mapping):
        # Empty mapping declares a free-form field
        options = {"type": Mixed}
    else:
        options = {"type": spec}

    unknown = set(options) - FIELD_OPTIONS
    if unknown:
        raise ValueError(f"Unknown option(s) for field '{path}': {', '.join(sorted(unknown))}")

    declared = options["type"]
    kwargs: dict[str, Any] = {}
    tag = FieldKind.ARRAY.value if isinstance(declared, (list, tuple)) else type_tag(declared)
    kwargs["instance"] = tag

    if tag == FieldKind.ARRAY.value:
        # Value constraints describe the elements, not the list
        element_options = {key: options[key] for key in ELEMENT_OPTIONS if key in options}
        options = {key: value for key, value in options.items() if key not in ELEMENT_OPTIONS}
        element = declared[0] if isinstance(declared, (list, tuple)) and declared else Mixed
        if isinstance(element, Mapping) and not element:
            element = Mixed
        if isinstance(element, DocumentSchema):
            kwargs["sub_schema"] = element
        elif _is_nested_definition(element):
            kwargs["sub_schema"] = DocumentSchema(element)
        else:
            element_spec = element if isinstance(element, Mapping) else {"type": element}
            kwargs["caster"] = build_field(path, {**element_options, **element_spec})

    validators: list[Validator] = []
    if options.get("required"):
        validators.append(Validator(type="required"))
    for bound in ("min", "max"):
        if options.get(bound) is not None:
            validators.append(Validator(type=bound, value=options[bound]))
    enum_values = tuple(options.get("enum") or ())
    if enum_values:
        validators.append(Validator(type="enum", value=enum_values))
    if options.get("validate") is not None:
        validators.append(_user_validator(options["validate"]))

    return SchemaField(
        name=path,
        required=bool(options.get("required")),
        validators=tuple(validators),
        default=options.get("default"),
        enum_values=enum_values,
        lowercase=bool(options.get("lowercase")),
        uppercase=bool(options.get("uppercase")),
        trim=bool(options.get("trim")),
        ref=options.get("ref"),
        **kwargs,
    )


def _user_validator(declared: Callable[..., Any] | tuple[Callable[..., Any], str]) -> Validator:
    if isinstance(declared, tuple):
        check, message = declared
        return Validator(type="user defined", check=check, message=message)
    return Validator(type="user defined", check=declared)


SchemaField.model_rebuild()
