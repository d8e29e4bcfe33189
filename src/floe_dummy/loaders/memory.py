"""In-memory document store for generated documents.

This module provides the persistence collaborator used by the generator:
- DocumentStore: protocol for anything that saves a document and mints an id
- InMemoryDocumentStore: collections of documents keyed by schema name

Features:
- Id minting (the document's own ``_id`` is kept when present)
- Per-schema collections
- PyArrow export for tabular inspection of generated fixtures
"""

from __future__ import annotations

import copy
import uuid
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol

import pyarrow as pa
import structlog

if TYPE_CHECKING:
    from floe_dummy.document.registry import SchemaSource

logger = structlog.get_logger(__name__)

# Collection used for schemas without a name
DEFAULT_COLLECTION = "documents"


def _random_id() -> str:
    return uuid.uuid4().hex[:24]


class DocumentStore(Protocol):
    """Persistence capability: save a document and return its id."""

    def save(self, document: dict[str, Any], schema: SchemaSource) -> str: ...


class InMemoryDocumentStore:
    """Store generated documents in memory, grouped by schema name.

    Example:
        >>> store = InMemoryDocumentStore()
        >>> generator = DocumentGenerator(registry=registry, store=store)
        >>> generator.generate("Book")
        >>> store.count("Book")
        1
        >>> table = store.to_table("Book")
    """

    def __init__(self, id_factory: Callable[[], str] | None = None) -> None:
        """Initialize an empty store.

        Args:
            id_factory: Mints ids for documents saved without ``_id``
                (default: random 24-hex ids). DocumentGenerator sets it to
                its provider's ``object_id`` so seeded runs mint the same ids.
        """
        self.id_factory = id_factory
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}

    def save(self, document: dict[str, Any], schema: SchemaSource) -> str:
        """Save a copy of ``document`` in the schema's collection.

        Args:
            document: Generated document.
            schema: Schema the document was generated from.

        Returns:
            The document id: its ``_id`` when present, otherwise a new one.
        """
        collection = getattr(schema, "name", None) or DEFAULT_COLLECTION
        mint = self.id_factory or _random_id
        document_id = str(document.get("_id") or mint())

        stored = copy.deepcopy(document)
        stored["_id"] = document_id
        self._collections.setdefault(collection, {})[document_id] = stored

        logger.debug("document_saved", collection=collection, document_id=document_id)
        return document_id

    def get(self, collection: str, document_id: str) -> dict[str, Any] | None:
        """Saved document by id, or None."""
        return self._collections.get(collection, {}).get(document_id)

    def find(self, collection: str) -> list[dict[str, Any]]:
        """All documents saved in ``collection``, in save order."""
        return list(self._collections.get(collection, {}).values())

    def collections(self) -> list[str]:
        """Names of collections holding at least one document."""
        return list(self._collections)

    def count(self, collection: str | None = None) -> int:
        """Number of saved documents, in one collection or overall."""
        if collection is not None:
            return len(self._collections.get(collection, {}))
        return sum(len(documents) for documents in self._collections.values())

    def to_table(self, collection: str) -> pa.Table:
        """Export a collection as a PyArrow table.

        Nested documents become struct columns and arrays become list
        columns, as inferred by PyArrow.

        Returns:
            PyArrow Table with one row per saved document.
        """
        return pa.Table.from_pylist(self.find(collection))

    def clear(self) -> None:
        """Drop every saved document."""
        self._collections = {}
