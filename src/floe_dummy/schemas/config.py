"""Generation configuration models.

This module defines the caller-supplied generation policy:
- CustomGenerator: Field names routed to one semantic category generator
- CustomGenerators: Per-category overrides (email, phone, address, password)
- GenerationConfig: Immutable options for one synthesis call
- build_config: Normalize loose options into a GenerationConfig

Configs are never mutated. Recursive synthesis derives scoped copies with
``GenerationConfig.scoped``.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from floe_dummy.errors import InvalidConfigError

# Categories in the order they are consulted for a string field
CUSTOM_CATEGORIES: tuple[str, ...] = ("email", "phone", "address", "password")

# camelCase option names accepted by build_config
OPTION_ALIASES: dict[str, str] = {
    "autoDetect": "auto_detect",
    "applyFilter": "apply_filter",
    "returnDate": "return_date",
    "maxDepth": "max_depth",
    "maxArrayLength": "max_array_length",
}

IgnoreEntry = str | re.Pattern[str]


class CustomGenerator(BaseModel):
    """Field names routed to a category generator.

    Attributes:
        fields: Exact field paths handled by this category
        generator: Zero-argument callable producing the value. When None the
            provider's default generator for the category is used.

    Example:
        >>> CustomGenerator(fields=("contact",), generator=lambda: "fixed@example.com")
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    fields: tuple[str, ...] = Field(default=(), description="Field paths for this category")
    generator: Callable[[], Any] | None = Field(default=None, description="Value factory")

    def rescoped(self, prefix: str) -> CustomGenerator:
        """Return a copy whose field names are re-rooted below ``prefix``.

        Bare names (no dot) apply at every nesting level and are kept.
        Names under ``prefix.`` lose the prefix. Everything else is dropped.
        """
        return self.model_copy(update={"fields": _rescope_names(self.fields, prefix)})


def _normalize_custom_entry(value: Any) -> Any:
    """Coerce a category entry into CustomGenerator constructor input."""
    if value is None or isinstance(value, CustomGenerator):
        return value
    if isinstance(value, str):
        return {"fields": (value,)}
    if isinstance(value, (list, tuple)):
        if not all(isinstance(item, str) for item in value):
            raise ValueError("field list must contain only field names")
        return {"fields": tuple(value)}
    if isinstance(value, Mapping):
        unknown = set(value) - {"field", "fields", "generator", "value"}
        if unknown:
            raise ValueError(f"unexpected keys: {', '.join(sorted(unknown))}")
        names = value.get("fields", value.get("field"))
        generator = value.get("generator", value.get("value"))
        if isinstance(names, str):
            names = (names,)
        if not isinstance(names, (list, tuple)) or not all(isinstance(n, str) for n in names):
            raise ValueError("'fields' must be a field name or a list of field names")
        if generator is not None and not callable(generator):
            raise ValueError("'generator' must be callable")
        return {"fields": tuple(names), "generator": generator}
    raise ValueError(
        f"expected a field name, a list of field names or a mapping, got {type(value).__name__}"
    )


class CustomGenerators(BaseModel):
    """Per-category generator overrides for string fields.

    Each category accepts a single field name, a list of field names, or a
    ``{"fields": ..., "generator": ...}`` mapping (``field``/``value`` are
    accepted as synonyms).

    Example:
        >>> CustomGenerators(email={"field": "contact", "value": lambda: "a@b.co"})
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    email: CustomGenerator | None = None
    phone: CustomGenerator | None = None
    address: CustomGenerator | None = None
    password: CustomGenerator | None = None

    @field_validator("email", "phone", "address", "password", mode="before")
    @classmethod
    def normalize_entry(cls, value: Any) -> Any:
        """Accept the loose entry forms."""
        return _normalize_custom_entry(value)

    def category_for(self, path: str) -> tuple[str, CustomGenerator] | None:
        """Find the first category claiming ``path``.

        Returns:
            (category, generator) or None when no category lists the path.
        """
        for category in CUSTOM_CATEGORIES:
            entry: CustomGenerator | None = getattr(self, category)
            if entry is not None and path in entry.fields:
                return category, entry
        return None

    def rescoped(self, prefix: str) -> CustomGenerators:
        """Return a copy with every category re-rooted below ``prefix``."""
        update: dict[str, Any] = {}
        for category in CUSTOM_CATEGORIES:
            entry: CustomGenerator | None = getattr(self, category)
            if entry is not None:
                update[category] = entry.rescoped(prefix)
        return self.model_copy(update=update)


class GenerationConfig(BaseModel):
    """Generation policy for one synthesis call.

    Attributes:
        ignore: Literal paths and compiled patterns. Matching paths are omitted.
        force: Path to literal value. Overrides every other rule for the path.
        custom: Category overrides for string fields
        auto_detect: Guess email/password/phone generators from field names
        apply_filter: Apply declared lowercase/uppercase/trim filters
        return_date: Return dates as datetime (True) or ISO strings (False)
        max_depth: Remaining reference hops allowed
        save: Persist the top-level document when a store is configured
        max_array_length: Exclusive upper bound on generated array lengths

    Example:
        >>> config = GenerationConfig(ignore=("_id", re.compile(r"detail.*_info")), max_depth=2)
        >>> config.is_ignored("detail.main_info")
        True
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    ignore: tuple[IgnoreEntry, ...] = Field(default=(), description="Paths to omit")
    force: dict[str, Any] = Field(default_factory=dict, description="Forced literal values")
    custom: CustomGenerators = Field(
        default_factory=CustomGenerators, description="Category overrides"
    )
    auto_detect: bool = Field(default=True, description="Detect generators from field names")
    apply_filter: bool = Field(default=True, description="Apply string filters")
    return_date: bool = Field(default=False, description="Return datetime objects")
    max_depth: int = Field(default=10, ge=0, description="Reference hops allowed")
    save: bool = Field(default=True, description="Persist generated documents")
    max_array_length: int = Field(default=15, ge=1, description="Exclusive array length bound")

    @field_validator("ignore", mode="before")
    @classmethod
    def normalize_ignore(cls, value: Any) -> Any:
        """Accept a single entry or any iterable of entries."""
        if value is None:
            return ()
        if isinstance(value, (str, re.Pattern)):
            return (value,)
        return tuple(value)

    @field_validator("force", mode="before")
    @classmethod
    def normalize_force(cls, value: Any) -> Any:
        """Treat None as no forced values."""
        return {} if value is None else value

    @field_validator("custom", mode="before")
    @classmethod
    def normalize_custom(cls, value: Any) -> Any:
        """Treat None as no custom generators."""
        return CustomGenerators() if value is None else value

    def is_ignored(self, path: str) -> bool:
        """Check ``path`` against literal entries and patterns."""
        for entry in self.ignore:
            if isinstance(entry, str):
                if entry == path:
                    return True
            elif entry.search(path):
                return True
        return False

    def scoped(self, prefix: str, *, max_depth: int | None = None) -> GenerationConfig:
        """Derive the config for synthesizing the sub-tree rooted at ``prefix``.

        Args:
            prefix: Path of the field being recursed into.
            max_depth: Depth limit for the child (defaults to the current one).

        Returns:
            A new config. ``self`` is left untouched.
        """
        marker = f"{prefix}."
        ignore: list[IgnoreEntry] = []
        for entry in self.ignore:
            if not isinstance(entry, str):
                ignore.append(entry)
            elif entry.startswith(marker):
                ignore.append(entry[len(marker) :])
            elif "." not in entry:
                ignore.append(entry)
        force = {
            path[len(marker) :]: value
            for path, value in self.force.items()
            if path.startswith(marker)
        }
        return self.model_copy(
            update={
                "ignore": tuple(dict.fromkeys(ignore)),
                "force": force,
                "custom": self.custom.rescoped(prefix),
                "max_depth": self.max_depth if max_depth is None else max_depth,
            }
        )


def _rescope_names(names: tuple[str, ...], prefix: str) -> tuple[str, ...]:
    marker = f"{prefix}."
    scoped: list[str] = []
    for name in names:
        if name.startswith(marker):
            scoped.append(name[len(marker) :])
        elif "." not in name:
            scoped.append(name)
    return tuple(dict.fromkeys(scoped))


def build_config(
    options: GenerationConfig | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> GenerationConfig:
    """Build a GenerationConfig from loose options.

    Accepts an existing config, a mapping of options, or nothing, plus
    keyword overrides. camelCase names (``autoDetect``, ``maxDepth``, ...)
    are accepted as aliases of the snake_case fields.

    Args:
        options: Base options.
        **overrides: Options taking precedence over ``options``.

    Returns:
        Validated, immutable GenerationConfig.

    Raises:
        InvalidConfigError: If any option is unknown or malformed.

    Example:
        >>> config = build_config({"ignore": ["_id"], "maxDepth": 2}, save=False)
        >>> config.max_depth
        2
    """
    if isinstance(options, GenerationConfig):
        if not overrides:
            return options
        base: dict[str, Any] = {
            name: getattr(options, name) for name in GenerationConfig.model_fields
        }
    else:
        base = _normalize_keys(options or {})

    data = {**base, **_normalize_keys(overrides)}
    try:
        return GenerationConfig.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field_path = ".".join(str(part) for part in first["loc"]) or None
        raise InvalidConfigError(
            "Invalid generation options",
            field_path=field_path,
            internal_details=str(e),
        ) from e


def _normalize_keys(options: Mapping[str, Any]) -> dict[str, Any]:
    return {OPTION_ALIASES.get(key, key): value for key, value in options.items()}
