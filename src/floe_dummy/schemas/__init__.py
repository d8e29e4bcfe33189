"""Pydantic models for the generation pipeline.

This module provides type-safe models for:
- Path descriptors: normalized per-field schema metadata
- Generation config: caller-supplied generation policy
"""

from __future__ import annotations

from floe_dummy.schemas.config import (
    CustomGenerator,
    CustomGenerators,
    GenerationConfig,
    build_config,
)
from floe_dummy.schemas.descriptor import (
    FieldKind,
    PathDescriptor,
    PathDescriptorMap,
    Reference,
    Validator,
)

__all__ = [
    # Descriptors
    "FieldKind",
    "PathDescriptor",
    "PathDescriptorMap",
    "Reference",
    "Validator",
    # Config
    "CustomGenerator",
    "CustomGenerators",
    "GenerationConfig",
    "build_config",
]
