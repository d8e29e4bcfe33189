"""Base class for document generators.

A document generator turns a schema into plain ``dict`` documents. Concrete
generators implement ``generate_batch``; streaming in batches and the
``documents_generated`` log event are shared here.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Any

import structlog

logger = structlog.get_logger(__name__)


class DataGenerator(ABC):
    """Abstract base class for document generators.

    Example:
        >>> class FixtureBooks(DataGenerator):
        ...     def generate_batch(self, count: int, **kwargs) -> list[dict[str, Any]]:
        ...         books = [{"_id": f"{i:024x}", "name": f"Book {i}"} for i in range(count)]
        ...         self._log_generation("Book", count)
        ...         return books
        >>> [len(batch) for batch in FixtureBooks().generate_stream(5, batch_size=2)]
        [2, 2, 1]
    """

    @abstractmethod
    def generate_batch(  # pragma: no cover - abstract method
        self, count: int, **kwargs: Any
    ) -> list[dict[str, Any]]:
        """Generate ``count`` documents.

        Args:
            count: Number of documents to generate
            **kwargs: Schema and generation options

        Returns:
            List of generated documents
        """
        ...

    def generate_stream(
        self,
        total: int,
        batch_size: int = 1000,
        **kwargs: Any,
    ) -> Iterator[list[dict[str, Any]]]:
        """Stream documents in batches of at most ``batch_size``.

        Yields:
            Lists of documents from generate_batch
        """
        for start in range(0, total, batch_size):
            yield self.generate_batch(min(batch_size, total - start), **kwargs)

    def _log_generation(self, schema_name: str, count: int) -> None:
        logger.info("documents_generated", schema=schema_name, count=count)
