"""Schema-driven fixture generation for document data models.

This package generates structurally valid, randomized documents from a
declarative schema: typed fields, enums, nested sub-documents, arrays and
cross-document references.

Key Components:
- document: mongoose-style schemas, registry, pydantic model adapter
- extractor: schema -> path descriptor map
- synthesizer: path descriptor map -> nested document
- generators: DocumentGenerator facade (batches, streams, persistence)
- loaders: in-memory document store with PyArrow export
- providers: Faker-backed value provider

Example:
    >>> from floe_dummy import DocumentGenerator, SchemaRegistry
    >>>
    >>> registry = SchemaRegistry({"Book": {"name": {"type": str, "required": True}}})
    >>> generator = DocumentGenerator(registry=registry, seed=42)
    >>> book = generator.generate("Book", ignore=["_id"])
"""

from __future__ import annotations

__version__ = "0.1.0"

from floe_dummy.document import (
    DocumentSchema,
    Mixed,
    ObjectId,
    Ref,
    SchemaRegistry,
    schema_from_model,
)
from floe_dummy.errors import (
    DummyError,
    InvalidConfigError,
    SchemaNotFoundError,
    UnsupportedTypeError,
)
from floe_dummy.extractor import PathExtractor, extract_paths
from floe_dummy.generators import DataGenerator, DocumentGenerator
from floe_dummy.loaders import DocumentStore, InMemoryDocumentStore
from floe_dummy.providers import FakeDataProvider
from floe_dummy.schemas import (
    CustomGenerator,
    CustomGenerators,
    FieldKind,
    GenerationConfig,
    PathDescriptor,
    Reference,
    Validator,
    build_config,
)
from floe_dummy.settings import DummySettings
from floe_dummy.synthesizer import ValueSynthesizer, unflatten

__all__ = [
    "__version__",
    # Schemas
    "DocumentSchema",
    "Mixed",
    "ObjectId",
    "Ref",
    "SchemaRegistry",
    "schema_from_model",
    # Pipeline
    "PathExtractor",
    "extract_paths",
    "ValueSynthesizer",
    "unflatten",
    "DataGenerator",
    "DocumentGenerator",
    "FakeDataProvider",
    # Persistence
    "DocumentStore",
    "InMemoryDocumentStore",
    # Models
    "CustomGenerator",
    "CustomGenerators",
    "FieldKind",
    "GenerationConfig",
    "PathDescriptor",
    "Reference",
    "Validator",
    "build_config",
    "DummySettings",
    # Errors
    "DummyError",
    "InvalidConfigError",
    "SchemaNotFoundError",
    "UnsupportedTypeError",
]
