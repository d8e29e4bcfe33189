"""Document schema layer.

This module provides the schema collaborator the generation pipeline reads:
- DocumentSchema: mongoose-style declarative schema
- SchemaRegistry: name to schema resolver
- schema_from_model: build a DocumentSchema from a pydantic model
"""

from __future__ import annotations

from floe_dummy.document.models import Ref, schema_from_model
from floe_dummy.document.registry import SchemaRegistry, SchemaResolver, SchemaSource
from floe_dummy.document.schema import (
    DocumentSchema,
    Mixed,
    ObjectId,
    SchemaField,
    VirtualField,
    type_tag,
)

__all__ = [
    "DocumentSchema",
    "Mixed",
    "ObjectId",
    "Ref",
    "SchemaField",
    "SchemaRegistry",
    "SchemaResolver",
    "SchemaSource",
    "VirtualField",
    "schema_from_model",
    "type_tag",
]
