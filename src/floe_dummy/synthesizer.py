"""Value synthesis from path descriptors.

This module turns a PathDescriptorMap into a nested document:
- One value per path, chosen by precedence: ignore > force > enum > kind
- String fields: custom category > field-name heuristics > user name
- References: recursive generation bounded by ``max_depth``
- Arrays: 0 to ``max_array_length - 1`` elements
- Reassembly of the flat, dot-addressed buffer into nested dictionaries
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

import structlog

from floe_dummy.errors import UnsupportedTypeError
from floe_dummy.extractor import extract_paths
from floe_dummy.providers import DEFAULT_NUMBER_CEILING, FakeDataProvider
from floe_dummy.schemas.config import GenerationConfig, build_config
from floe_dummy.schemas.descriptor import FieldKind, PathDescriptor, PathDescriptorMap

if TYPE_CHECKING:
    from floe_dummy.document.registry import SchemaResolver
    from floe_dummy.loaders.memory import DocumentStore
    from floe_dummy.providers import ValueProvider

logger = structlog.get_logger(__name__)

# Field-name heuristics, consulted in order; first match wins
FIELD_NAME_HEURISTICS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"e?-?mail", re.IGNORECASE), "email"),
    (re.compile(r"password", re.IGNORECASE), "password"),
    (re.compile(r"phone", re.IGNORECASE), "phone"),
)


class ValueSynthesizer:
    """Synthesize documents from path descriptors.

    Attributes:
        provider: Source of random values
        resolver: Name to schema resolver for following references (optional)
        store: Persistence for referenced documents (optional)

    Example:
        >>> synthesizer = ValueSynthesizer(FakeDataProvider(seed=42), resolver=registry)
        >>> descriptors = extract_paths(student_schema, max_depth=2, resolver=registry)
        >>> student = synthesizer.synthesize(descriptors, build_config(ignore=["_id"]))
    """

    def __init__(
        self,
        provider: ValueProvider | None = None,
        *,
        resolver: SchemaResolver | None = None,
        store: DocumentStore | None = None,
    ) -> None:
        """Initialize the synthesizer.

        Args:
            provider: Value provider (default: unseeded FakeDataProvider).
            resolver: Resolver used to follow ObjectId references.
            store: When set, referenced documents are saved (if the config's
                ``save`` is true) and embedded by id instead of inline.
        """
        self.provider: ValueProvider = provider or FakeDataProvider()
        self.resolver = resolver
        self.store = store
        self._category_generators: dict[str, Callable[[], Any]] = {
            "email": self.provider.email,
            "phone": self.provider.phone_number,
            "address": self.provider.address,
            "password": self.provider.password,
        }
        self._dispatch: dict[str, Callable[[PathDescriptor, GenerationConfig], Any]] = {
            FieldKind.STRING.value: self._generate_string,
            FieldKind.NUMBER.value: self._generate_number,
            FieldKind.DATE.value: self._generate_date,
            FieldKind.BOOLEAN.value: self._generate_boolean,
            FieldKind.MIXED.value: self._generate_mixed,
            FieldKind.OBJECT_ID.value: self._generate_reference,
            FieldKind.ARRAY.value: self._generate_array,
        }

    def synthesize(
        self,
        descriptors: PathDescriptorMap,
        config: GenerationConfig | Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Generate one nested document.

        Args:
            descriptors: Path descriptors, e.g. from ``extract_paths``.
            config: Generation policy (a GenerationConfig or loose options).

        Returns:
            Nested dictionary. Ignored paths are absent; forced paths hold
            their literal values.

        Raises:
            UnsupportedTypeError: If a descriptor kind has no generator.
            InvalidConfigError: If ``config`` is given as invalid options.
        """
        config = build_config(config)
        flat: dict[str, Any] = {}

        for path, descriptor in descriptors.items():
            if config.is_ignored(path):
                continue
            if path in config.force:
                flat[path] = config.force[path]
                continue
            flat[path] = self.generate_value(descriptor, config)

        return unflatten(flat)

    def generate_value(self, descriptor: PathDescriptor, config: GenerationConfig) -> Any:
        """Generate a single value for ``descriptor``, ignoring ignore/force rules."""
        if descriptor.is_enum:
            index = round(self.provider.random() * (len(descriptor.enum_values) - 1))
            return descriptor.enum_values[index]

        generate = self._dispatch.get(descriptor.kind)
        if generate is None:
            raise UnsupportedTypeError(descriptor.kind, path=descriptor.path)
        return generate(descriptor, config)

    def _generate_string(self, descriptor: PathDescriptor, config: GenerationConfig) -> Any:
        value = self._raw_string(descriptor.path, config)
        if not (config.apply_filter and isinstance(value, str)):
            return value
        if descriptor.lowercase:
            value = value.lower()
        if descriptor.uppercase:
            value = value.upper()
        if descriptor.trim:
            value = value.strip()
        return value

    def _raw_string(self, path: str, config: GenerationConfig) -> Any:
        match = config.custom.category_for(path)
        if match is not None:
            category, entry = match
            if entry.generator is not None:
                return entry.generator()
            return self._category_generators[category]()

        if config.auto_detect:
            for pattern, category in FIELD_NAME_HEURISTICS:
                if pattern.search(path):
                    return self._category_generators[category]()

        return self.provider.user_name()

    def _generate_number(self, descriptor: PathDescriptor, config: GenerationConfig) -> int:
        low = math.ceil(descriptor.min) if descriptor.min is not None else 0
        if descriptor.max is not None:
            high = math.floor(descriptor.max)
        elif descriptor.min is not None:
            high = max(low, 0) + DEFAULT_NUMBER_CEILING
        else:
            high = DEFAULT_NUMBER_CEILING
        # Non-negative whenever the declared range admits it
        if low < 0 <= high:
            low = 0
        # The declared max wins over an inverted range
        if high < low:
            low = high
        return self.provider.integer(low, high)

    def _generate_date(self, descriptor: PathDescriptor, config: GenerationConfig) -> Any:
        value = self.provider.recent_datetime()
        return value if config.return_date else value.isoformat()

    def _generate_boolean(self, descriptor: PathDescriptor, config: GenerationConfig) -> bool:
        return self.provider.boolean()

    def _generate_mixed(
        self, descriptor: PathDescriptor, config: GenerationConfig
    ) -> dict[str, Any]:
        return self.provider.payload()

    def _generate_reference(self, descriptor: PathDescriptor, config: GenerationConfig) -> Any:
        reference = descriptor.reference
        if reference is None:
            return self.provider.object_id()

        if descriptor.is_virtual and reference.many_valued:
            # To-many relation that was not expanded at extraction time
            return []

        if config.max_depth <= 0 or self.resolver is None:
            logger.debug(
                "reference_depth_exhausted",
                path=descriptor.path,
                schema=reference.schema_name,
                max_depth=config.max_depth,
            )
            return self.provider.object_id()

        target = self.resolver.resolve(reference.schema_name)
        if target is None:
            logger.debug("reference_unresolved", path=descriptor.path, schema=reference.schema_name)
            return self.provider.object_id()

        child_config = config.scoped(descriptor.path, max_depth=config.max_depth - 1)
        child_descriptors = extract_paths(target, child_config.max_depth, self.resolver)
        document = self.synthesize(child_descriptors, child_config)
        logger.debug(
            "reference_resolved",
            path=descriptor.path,
            schema=reference.schema_name,
            max_depth=child_config.max_depth,
        )

        if self.store is not None and config.save:
            return self.store.save(document, target)
        return document

    def _generate_array(self, descriptor: PathDescriptor, config: GenerationConfig) -> list[Any]:
        element = descriptor.element
        if element is None:
            raise UnsupportedTypeError(
                descriptor.kind,
                path=descriptor.path,
                internal_details="array descriptor has no element descriptor",
            )

        if descriptor.is_virtual:
            if config.max_depth <= 0:
                return []
            child_config = config.scoped(descriptor.path, max_depth=config.max_depth - 1)
        else:
            child_config = config.scoped(descriptor.path)

        values: list[Any] = []
        for _ in range(self.provider.array_length(config.max_array_length)):
            if isinstance(element, PathDescriptor):
                values.append(self.generate_value(element, config))
            else:
                values.append(self.synthesize(element, child_config))
        return values


def unflatten(flat: Mapping[str, Any], separator: str = ".") -> dict[str, Any]:
    """Nest a flat mapping by splitting keys on ``separator``.

    Only keys are split; values (including dictionaries produced by
    recursive synthesis) are inserted as opaque leaves. Dictionaries that
    are values of the input are copied before anything is nested into them.

    Example:
        >>> unflatten({"name": "ann", "detail.none_match": "x"})
        {'name': 'ann', 'detail': {'none_match': 'x'}}
    """
    nested: dict[str, Any] = {}
    owned: set[int] = {id(nested)}

    for key, value in flat.items():
        parts = key.split(separator)
        target = nested
        for part in parts[:-1]:
            child = target.get(part)
            if not isinstance(child, dict) or id(child) not in owned:
                child = dict(child) if isinstance(child, dict) else {}
                owned.add(id(child))
                target[part] = child
            target = child
        target[parts[-1]] = value

    return nested
