"""Document generator facade.

This module provides the DocumentGenerator, which runs the full pipeline:
resolve the schema, extract path descriptors, synthesize a document and
optionally save it.

Features:
- Schemas given by name (registry lookup), DocumentSchema, definition
  mapping or pydantic model class
- Deterministic seeding through the Faker-backed provider
- Reference following bounded by ``max_depth``
- Optional persistence through a DocumentStore
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from floe_dummy.document.models import schema_from_model
from floe_dummy.document.registry import SchemaRegistry
from floe_dummy.document.schema import DocumentSchema
from floe_dummy.errors import DummyError
from floe_dummy.extractor import PathExtractor
from floe_dummy.generators.base import DataGenerator
from floe_dummy.loaders.memory import InMemoryDocumentStore
from floe_dummy.observability import generation_span
from floe_dummy.providers import FakeDataProvider
from floe_dummy.schemas.config import GenerationConfig, build_config
from floe_dummy.settings import DummySettings
from floe_dummy.synthesizer import ValueSynthesizer

if TYPE_CHECKING:
    from floe_dummy.loaders.memory import DocumentStore
    from floe_dummy.providers import ValueProvider

SchemaInput = str | DocumentSchema | Mapping[str, Any] | type[BaseModel]


class DocumentGenerator(DataGenerator):
    """Generate documents from declarative schemas.

    Attributes:
        registry: Named schemas, also used to follow references
        store: Persistence for generated documents (optional)
        provider: Source of random values
        settings: Environment-driven defaults

    Example:
        >>> registry = SchemaRegistry({"Student": student_definition})
        >>> generator = DocumentGenerator(registry=registry, seed=42)
        >>> student = generator.generate(
        ...     "Student",
        ...     ignore=["_id", re.compile(r"detail.*_info")],
        ...     force={"parent": "5af8a4f33f56930349d8f45b"},
        ... )
    """

    def __init__(
        self,
        schema: SchemaInput | None = None,
        *,
        registry: SchemaRegistry | None = None,
        store: DocumentStore | None = None,
        provider: ValueProvider | None = None,
        seed: int | None = None,
        settings: DummySettings | None = None,
    ) -> None:
        """Initialize the generator.

        Args:
            schema: Default schema for ``generate_batch``/``generate_stream``.
            registry: Schema registry (default: empty registry).
            store: Document store. Without one nothing is persisted.
            provider: Value provider (default: FakeDataProvider).
            seed: Seed for the default provider (overrides settings.seed).
            settings: Defaults (default: loaded from FLOE_DUMMY_* variables).
        """
        self.settings = settings or DummySettings()
        self.registry = registry if registry is not None else SchemaRegistry()
        self.store = store
        self.provider: ValueProvider = provider or FakeDataProvider(
            seed=seed if seed is not None else self.settings.seed,
            locale=self.settings.locale,
        )
        if isinstance(store, InMemoryDocumentStore) and store.id_factory is None:
            # Minted ids follow the provider seed
            store.id_factory = self.provider.object_id
        self.schema = schema
        self.extractor = PathExtractor(resolver=self.registry)
        self.synthesizer = ValueSynthesizer(self.provider, resolver=self.registry, store=store)

    def generate(
        self,
        schema: SchemaInput | None = None,
        config: GenerationConfig | Mapping[str, Any] | None = None,
        **options: Any,
    ) -> dict[str, Any]:
        """Generate one document.

        Args:
            schema: Schema name, DocumentSchema, definition or pydantic model
                (default: the generator's schema).
            config: Generation policy.
            **options: Option overrides (``ignore``, ``force``, ``custom``,
                ``auto_detect``, ``apply_filter``, ``return_date``,
                ``max_depth``, ``save``, ``max_array_length``).

        Returns:
            The generated, nested document.

        Raises:
            SchemaNotFoundError: If a schema name is not registered.
            InvalidConfigError: If the options are invalid.
            UnsupportedTypeError: If the schema declares an unsupported type.
        """
        document_schema = self._resolve_schema(schema)
        generation_config = self._build_config(config, options)
        schema_name = document_schema.name or "anonymous"

        with generation_span(
            schema_name,
            max_depth=generation_config.max_depth,
            save=generation_config.save and self.store is not None,
        ) as current:
            descriptors = self.extractor.extract(document_schema, generation_config.max_depth)
            current.record_paths(len(descriptors))
            document = self.synthesizer.synthesize(descriptors, generation_config)
            if generation_config.save and self.store is not None:
                self.store.save(document, document_schema)

        return document

    def generate_batch(self, count: int, **kwargs: Any) -> list[dict[str, Any]]:
        """Generate ``count`` documents.

        Args:
            count: Number of documents to generate
            **kwargs: ``schema``, ``config`` and option overrides, as for generate()

        Returns:
            List of generated documents
        """
        schema = kwargs.pop("schema", None)
        config = kwargs.pop("config", None)
        document_schema = self._resolve_schema(schema)
        generation_config = self._build_config(config, kwargs)

        documents = [self.generate(document_schema, generation_config) for _ in range(count)]

        self._log_generation(document_schema.name or "anonymous", count)
        return documents

    def reset(self) -> None:
        """Re-seed the provider so the same sequence of documents is produced again."""
        reset = getattr(self.provider, "reset", None)
        if reset is not None:
            reset()

    def _resolve_schema(self, schema: SchemaInput | None) -> DocumentSchema:
        schema = schema if schema is not None else self.schema
        if schema is None:
            raise DummyError("No schema given and the generator has no default schema")
        if isinstance(schema, str):
            return self.registry.get(schema)
        if isinstance(schema, DocumentSchema):
            return schema
        if isinstance(schema, type) and issubclass(schema, BaseModel):
            return schema_from_model(schema)
        return DocumentSchema(schema)

    def _build_config(
        self,
        config: GenerationConfig | Mapping[str, Any] | None,
        options: Mapping[str, Any],
    ) -> GenerationConfig:
        if isinstance(config, GenerationConfig):
            return build_config(config, **options)
        defaults = {
            "max_depth": self.settings.max_depth,
            "max_array_length": self.settings.max_array_length,
        }
        return build_config({**defaults, **dict(config or {})}, **options)
