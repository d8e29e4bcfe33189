"""Build document schemas from pydantic models.

Lets existing pydantic models (frozen entities, Literal-typed categories,
``ge``/``le`` bounds) drive fixture generation without a second, hand-written
schema definition.

Mapping:
- ``str``/``UUID`` -> String, ``int``/``float``/``Decimal`` -> Number
- ``datetime``/``date`` -> Date, ``bool`` -> Boolean
- ``dict``/``Any`` -> Mixed
- ``Literal[...]`` and ``Enum`` subclasses -> enum-constrained fields
- ``Ge``/``Le`` constraints -> min/max, ``Gt``/``Lt`` -> the nearest integer inside
- nested models -> dot-addressed paths
- ``list[Model]`` -> array of sub-documents, ``list[T]`` -> array of T
- ``Annotated[str, Ref("Name")]`` -> ObjectId reference to ``Name``
"""

from __future__ import annotations

import math
import types
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Annotated, Any, Literal, Union, get_args, get_origin
from uuid import UUID

from pydantic import BaseModel
from pydantic.fields import FieldInfo
from pydantic_core import PydanticUndefined

from floe_dummy.document.schema import DocumentSchema, Mixed, ObjectId

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass(frozen=True)
class Ref:
    """Annotation marker declaring a reference to another schema.

    Example:
        >>> class Book(BaseModel):
        ...     sequel: Annotated[str | None, Ref("School")] = None
    """

    schema_name: str


_SCALARS: dict[Any, Any] = {
    str: str,
    UUID: str,
    int: int,
    float: float,
    Decimal: Decimal,
    datetime: datetime,
    date: date,
    bool: bool,
    dict: Mixed,
    Any: Mixed,
    object: Mixed,
}

_SEQUENCE_ORIGINS: tuple[Any, ...] = (list, tuple, set, frozenset, Sequence)


def schema_from_model(
    model: type[BaseModel],
    *,
    name: str | None = None,
    auto_id: bool = False,
) -> DocumentSchema:
    """Build a DocumentSchema from a pydantic model class.

    Args:
        model: Pydantic model class.
        name: Schema name (default: the model class name).
        auto_id: Add an ``_id`` ObjectId field.

    Returns:
        DocumentSchema with one path per (nested) model field.

    Example:
        >>> class Customer(BaseModel):
        ...     name: str
        ...     region: Literal["north", "south"]
        >>> schema_from_model(Customer).paths()
        ['name', 'region']
    """
    definition = {
        field_name: _field_definition(field.annotation, field)
        for field_name, field in model.model_fields.items()
    }
    return DocumentSchema(definition, name=name or model.__name__, auto_id=auto_id)


def _field_definition(annotation: Any, field: FieldInfo | None) -> Any:
    annotation, metadata = _unwrap(annotation)
    if field is not None:
        metadata = [*field.metadata, *metadata]

    ref = next((m for m in metadata if isinstance(m, Ref)), None)
    if ref is not None:
        spec: dict[str, Any] = {"type": ObjectId, "ref": ref.schema_name}
    else:
        declared = _declared_type(annotation)
        if isinstance(declared, DocumentSchema):
            return declared
        spec = declared if isinstance(declared, dict) else {"type": declared}

    spec.update(_bounds(metadata))
    if field is not None:
        spec["required"] = field.is_required()
        if field.default is not PydanticUndefined and field.default is not None:
            spec["default"] = field.default
    return spec


def _declared_type(annotation: Any) -> Any:
    """Translate one (unwrapped) annotation into a definition type."""
    origin = get_origin(annotation)

    if origin is Literal:
        values = list(get_args(annotation))
        return {"type": _SCALARS.get(type(values[0]), str) if values else str, "enum": values}

    if isinstance(annotation, type) and issubclass(annotation, Enum):
        values = [member.value for member in annotation]
        return {"type": _SCALARS.get(type(values[0]), str) if values else str, "enum": values}

    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return schema_from_model(annotation)

    if origin in _SEQUENCE_ORIGINS:
        args = get_args(annotation)
        element, element_meta = _unwrap(args[0] if args else Any)
        if isinstance(element, type) and issubclass(element, BaseModel):
            return [schema_from_model(element, auto_id=True)]
        element_spec = _field_definition(element, None)
        element_spec.update(_bounds(element_meta))
        return [element_spec]

    if origin in (dict, Mapping):
        return Mixed

    if annotation in _SCALARS:
        return _SCALARS[annotation]

    # Unknown annotations pass through and are rejected at generation time
    return getattr(annotation, "__name__", str(annotation))


def _unwrap(annotation: Any) -> tuple[Any, list[Any]]:
    """Strip Annotated and Optional wrappers, collecting Annotated metadata."""
    metadata: list[Any] = []
    while True:
        origin = get_origin(annotation)
        if origin is Annotated:
            annotation, *extra = get_args(annotation)
            metadata.extend(extra)
        elif origin in (Union, types.UnionType):
            members = [arg for arg in get_args(annotation) if arg is not type(None)]
            if len(members) != 1:
                return Any, metadata
            annotation = members[0]
        else:
            return annotation, metadata


def _bounds(metadata: Iterable[Any]) -> dict[str, Any]:
    """Collect inclusive min/max bounds from annotated-types constraints.

    Numbers are generated as integers, so exclusive bounds become the nearest
    integer strictly inside them: ``gt=0`` -> ``min=1``, ``lt=2.5`` -> ``max=2``.
    """
    bounds: dict[str, Any] = {}
    for item in metadata:
        for attr in ("ge", "gt", "le", "lt"):
            value = getattr(item, attr, None)
            if not isinstance(value, (int, float, Decimal)) or isinstance(value, bool):
                continue
            if attr == "ge":
                bounds["min"] = value
            elif attr == "le":
                bounds["max"] = value
            elif attr == "gt":
                bounds["min"] = math.floor(value) + 1
            else:
                bounds["max"] = math.ceil(value) - 1
    return bounds
