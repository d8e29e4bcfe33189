"""Name to schema registry.

The registry is the resolver capability used to follow references: the
extractor and the synthesizer only need ``resolve(name)``.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any, Protocol

import structlog
from pydantic import BaseModel

from floe_dummy.document.models import schema_from_model
from floe_dummy.document.schema import DocumentSchema, SchemaField, VirtualField
from floe_dummy.errors import SchemaNotFoundError

logger = structlog.get_logger(__name__)


class SchemaSource(Protocol):
    """Read-only view of a schema, as consumed by the path extractor."""

    name: str | None

    def paths(self) -> list[str]: ...

    def path(self, name: str) -> SchemaField | None: ...

    def virtuals(self) -> list[VirtualField]: ...


class SchemaResolver(Protocol):
    """Resolves a schema name to a schema, or None when unknown."""

    def resolve(self, name: str) -> SchemaSource | None: ...


class SchemaRegistry:
    """In-memory registry of named schemas.

    Accepts DocumentSchema instances, raw definitions, or pydantic model
    classes (converted with ``schema_from_model``).

    Example:
        >>> registry = SchemaRegistry()
        >>> _ = registry.register("Book", {"name": {"type": str, "required": True}})
        >>> registry.resolve("Book").name
        'Book'
    """

    def __init__(self, schemas: Mapping[str, Any] | None = None) -> None:
        self._schemas: dict[str, DocumentSchema] = {}
        for name, schema in (schemas or {}).items():
            self.register(name, schema)

    def register(
        self,
        name: str,
        schema: DocumentSchema | Mapping[str, Any] | type[BaseModel],
    ) -> DocumentSchema:
        """Register ``schema`` under ``name``.

        Returns:
            The registered DocumentSchema.
        """
        if isinstance(schema, DocumentSchema):
            document_schema = schema
        elif isinstance(schema, type) and issubclass(schema, BaseModel):
            document_schema = schema_from_model(schema, name=name)
        else:
            document_schema = DocumentSchema(schema, name=name)

        if document_schema.name is None:
            document_schema.name = name
        self._schemas[name] = document_schema
        logger.debug("schema_registered", schema=name, paths=len(document_schema.paths()))
        return document_schema

    def resolve(self, name: str) -> DocumentSchema | None:
        """Look up ``name``; None when it is not registered."""
        return self._schemas.get(name)

    def get(self, name: str) -> DocumentSchema:
        """Look up ``name``.

        Raises:
            SchemaNotFoundError: If ``name`` is not registered.
        """
        schema = self._schemas.get(name)
        if schema is None:
            raise SchemaNotFoundError(name, available_schemas=self.names())
        return schema

    def names(self) -> list[str]:
        """Registered schema names, in registration order."""
        return list(self._schemas)

    def __contains__(self, name: object) -> bool:
        return name in self._schemas

    def __iter__(self) -> Iterator[str]:
        return iter(self._schemas)

    def __len__(self) -> int:
        return len(self._schemas)
