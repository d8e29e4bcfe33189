"""Path descriptor extraction from document schemas.

This module walks a schema (declared fields, array element schemas and
virtual relations) and produces a mapping of dot-addressed path to
PathDescriptor. Extraction is a pure function of the schema, the depth
limit and the resolver: it never generates values and never raises for
unknown type tags.
"""

from __future__ import annotations

from decimal import Decimal
from numbers import Real
from typing import TYPE_CHECKING, Any

import structlog

from floe_dummy.document.schema import type_tag
from floe_dummy.schemas.descriptor import FieldKind, PathDescriptor, PathDescriptorMap, Reference

if TYPE_CHECKING:
    from floe_dummy.document.registry import SchemaResolver, SchemaSource
    from floe_dummy.document.schema import SchemaField, VirtualField

logger = structlog.get_logger(__name__)

DEFAULT_MAX_DEPTH = 10


def extract_paths(
    schema: SchemaSource,
    max_depth: int = DEFAULT_MAX_DEPTH,
    resolver: SchemaResolver | None = None,
) -> PathDescriptorMap:
    """Extract path descriptors from a schema.

    Array fields recurse into their element schema at the same depth.
    Many-valued virtual relations are expanded into their target schema only
    while ``max_depth > 1`` and a resolver can find the target; otherwise
    they are described as a single reference.

    Args:
        schema: Schema exposing ``paths()``, ``path(name)`` and ``virtuals()``.
        max_depth: Remaining reference hops.
        resolver: Name to schema resolver used for virtual relations.

    Returns:
        Dictionary structure:
        {
            "name": PathDescriptor(path="name", kind="String", ...),
            "detail.main_info": PathDescriptor(path="detail.main_info", ...),
            "results": PathDescriptor(kind="Array", element={"score": ..., ...}),
        }

    Example:
        >>> descriptors = extract_paths(student_schema, max_depth=2, resolver=registry)
        >>> descriptors["gender"].enum_values
        ('Male', 'Female')
    """
    descriptors: PathDescriptorMap = {}

    for name in schema.paths():
        field = schema.path(name)
        if field is None:
            continue
        descriptors[name] = _describe_field(name, field, max_depth, resolver)

    for virtual in schema.virtuals():
        if virtual.name in descriptors:
            continue
        descriptors[virtual.name] = _describe_virtual(virtual, max_depth, resolver)

    logger.debug(
        "paths_extracted",
        schema=getattr(schema, "name", None),
        paths=len(descriptors),
        max_depth=max_depth,
    )
    return descriptors


class PathExtractor:
    """Extractor bound to a resolver.

    Example:
        >>> extractor = PathExtractor(resolver=registry)
        >>> descriptors = extractor.extract(school_schema, max_depth=3)
    """

    def __init__(self, resolver: SchemaResolver | None = None) -> None:
        self.resolver = resolver

    def extract(
        self, schema: SchemaSource, max_depth: int = DEFAULT_MAX_DEPTH
    ) -> PathDescriptorMap:
        """Extract path descriptors from ``schema``. See ``extract_paths``."""
        return extract_paths(schema, max_depth=max_depth, resolver=self.resolver)


def _describe_field(
    path: str,
    field: SchemaField,
    max_depth: int,
    resolver: SchemaResolver | None,
) -> PathDescriptor:
    kind = type_tag(field.instance)
    data: dict[str, Any] = {
        "path": path,
        "kind": kind,
        "required": field.required,
        "validators": field.validators,
        "default": field.default,
        "enum_values": field.enum_values,
        "lowercase": field.lowercase,
        "uppercase": field.uppercase,
        "trim": field.trim,
    }

    for validator in field.validators:
        if validator.type in ("min", "max") and _is_number(validator.value):
            data[validator.type] = validator.value

    if kind == FieldKind.ARRAY:
        data["is_array"] = True
        if field.sub_schema is not None:
            data["element"] = extract_paths(field.sub_schema, max_depth, resolver)
        elif field.caster is not None:
            # Primitive elements have no sub-paths
            data["element"] = _describe_field(path, field.caster, max_depth, resolver)
        else:
            data["element"] = PathDescriptor(path=path, kind=FieldKind.MIXED.value)

    if kind == FieldKind.OBJECT_ID and field.ref:
        data["reference"] = Reference(schema_name=field.ref)

    return PathDescriptor(**data)


def _describe_virtual(
    virtual: VirtualField,
    max_depth: int,
    resolver: SchemaResolver | None,
) -> PathDescriptor:
    reference = Reference(schema_name=virtual.ref, many_valued=not virtual.just_one)

    if reference.many_valued and max_depth > 1 and resolver is not None:
        target = resolver.resolve(virtual.ref)
        if target is not None:
            return PathDescriptor(
                path=virtual.name,
                kind=FieldKind.ARRAY.value,
                is_array=True,
                element=extract_paths(target, max_depth - 1, resolver),
                reference=reference,
                is_virtual=True,
            )

    return PathDescriptor(
        path=virtual.name,
        kind=FieldKind.OBJECT_ID.value,
        reference=reference,
        is_virtual=True,
    )


def _is_number(value: Any) -> bool:
    return isinstance(value, (Real, Decimal)) and not isinstance(value, bool)
