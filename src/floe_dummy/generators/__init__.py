"""Document generators.

This module provides generators for creating test fixtures:
- DataGenerator: Base interface (batches and streams of documents)
- DocumentGenerator: Schema-driven generator running extract + synthesize

All generators support:
- Deterministic seeding for reproducible tests
- Batch generation for large fixture sets
"""

from __future__ import annotations

from floe_dummy.generators.base import DataGenerator
from floe_dummy.generators.documents import DocumentGenerator

__all__ = [
    "DataGenerator",
    "DocumentGenerator",
]
