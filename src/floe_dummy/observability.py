"""Structured logging and generation tracing for floe-dummy.

Every top-level ``DocumentGenerator.generate`` call runs inside one
``floe.dummy.generate`` span. The span carries the schema name, the
reference depth and the number of paths extracted for the document, and
the same fields are logged as ``generation_*`` events.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

import structlog
from opentelemetry import trace
from opentelemetry.trace import Span, SpanKind, Status, StatusCode

logger = structlog.get_logger(__name__)
tracer = trace.get_tracer("floe.dummy")

GENERATE_SPAN = "floe.dummy.generate"


def configure_logging(
    *,
    log_level: str = "INFO",
    json_format: bool = True,
    add_timestamp: bool = True,
) -> None:
    """Configure structlog for floe-dummy.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: Render JSON lines instead of console output.
        add_timestamp: Add an ISO timestamp to each event.

    Example:
        >>> configure_logging(log_level="DEBUG", json_format=False)
    """
    processors: list[Any] = [
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if add_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))
    processors.append(
        structlog.processors.JSONRenderer() if json_format else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(log_level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


@dataclass
class GenerationTrace:
    """Handle on the span of one document generation."""

    span: Span
    paths: int = 0

    def record_paths(self, count: int) -> None:
        """Record how many paths were extracted for the document."""
        self.paths = count
        self.span.set_attribute("floe.dummy.paths", count)


@contextmanager
def generation_span(
    schema_name: str, *, max_depth: int, save: bool
) -> Iterator[GenerationTrace]:
    """Trace and log one document generation.

    Args:
        schema_name: Name of the schema being generated.
        max_depth: Reference depth for this call.
        save: Whether the document is persisted.

    Yields:
        GenerationTrace for recording the extracted path count.

    Example:
        >>> with generation_span("Student", max_depth=2, save=False) as current:
        ...     current.record_paths(len(descriptors))
    """
    fields = {"schema": schema_name, "max_depth": max_depth}
    attributes = {
        "floe.dummy.schema": schema_name,
        "floe.dummy.max_depth": max_depth,
        "floe.dummy.save": save,
    }

    with tracer.start_as_current_span(
        GENERATE_SPAN, kind=SpanKind.INTERNAL, attributes=attributes
    ) as current:
        generation = GenerationTrace(span=current)
        logger.debug("generation_started", **fields)
        try:
            yield generation
        except Exception as exc:
            current.set_status(Status(StatusCode.ERROR, str(exc)))
            current.record_exception(exc)
            logger.error(
                "generation_failed",
                error=str(exc),
                error_type=type(exc).__name__,
                paths=generation.paths,
                **fields,
            )
            raise
        current.set_status(Status(StatusCode.OK))
        logger.debug("generation_completed", paths=generation.paths, saved=save, **fields)
