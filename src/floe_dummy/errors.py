"""Custom exception hierarchy for floe-dummy.

This module defines the exception classes raised by the generation pipeline:
- DummyError: Base exception for all floe-dummy errors
- UnsupportedTypeError: Raised when a field kind has no generation strategy
- InvalidConfigError: Raised when generation options fail validation
- SchemaNotFoundError: Raised when a schema name cannot be resolved

User-facing messages are safe to display. Technical details are logged
internally via structlog and never included in the message itself.
"""

from __future__ import annotations

import structlog

logger = structlog.get_logger(__name__)


class DummyError(Exception):
    """Base exception for floe-dummy.

    Args:
        user_message: Safe message to display to the user.
        internal_details: Optional technical details for logging. This is
            logged internally but never exposed through ``str(error)``.

    Example:
        >>> raise DummyError(
        ...     "Generation failed",
        ...     internal_details="resolver returned a non-schema object for 'Book'",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        """Initialize DummyError with user message and optional internal details.

        Args:
            user_message: Safe message to display to the user.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(user_message)
        self.user_message = user_message

        if internal_details:
            logger.error(
                "dummy_error",
                error_type=self.__class__.__name__,
                user_message=user_message,
                internal_details=internal_details,
            )


class UnsupportedTypeError(DummyError):
    """Raised when a descriptor kind does not match any generation strategy.

    Fatal: synthesis of the offending path and all of its ancestors aborts.

    Attributes:
        kind: The unrecognized type tag.
        path: Dot-addressed path of the offending field (if known).

    Example:
        >>> raise UnsupportedTypeError("Decimal128", path="price")
        # User sees: "Unsupported type 'Decimal128' (field 'price')"
    """

    def __init__(
        self,
        kind: str,
        *,
        path: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        """Initialize UnsupportedTypeError.

        Args:
            kind: The unrecognized type tag.
            path: Dot-addressed path of the offending field (optional).
            internal_details: Technical details for internal logging only.
        """
        user_message = f"Unsupported type '{kind}'"
        if path:
            user_message = f"{user_message} (field '{path}')"

        super().__init__(user_message, internal_details=internal_details)

        self.kind = kind
        self.path = path


class InvalidConfigError(DummyError):
    """Raised when generation options are invalid.

    Raised eagerly, before any value is generated. The most common cause is a
    ``custom`` category entry that is neither a field name, a list of field
    names, nor a ``{fields, generator}`` mapping.

    Attributes:
        field_path: Dot-separated option path that failed (e.g. "custom.email").

    Example:
        >>> raise InvalidConfigError(
        ...     "Invalid generation options",
        ...     field_path="custom.email",
        ...     internal_details="expected str, list[str] or mapping, got int",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        field_path: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        """Initialize InvalidConfigError with option context.

        Args:
            user_message: Safe message to display to the user.
            field_path: Dot-separated option path (optional).
            internal_details: Technical details for internal logging only.
        """
        full_message = f"{user_message} (option '{field_path}')" if field_path else user_message

        super().__init__(full_message, internal_details=internal_details)

        self.field_path = field_path


class SchemaNotFoundError(DummyError):
    """Raised when a schema name is not registered.

    Always includes the list of registered schema names for actionable
    feedback.

    Attributes:
        schema_name: Name of the requested schema.
        available_schemas: Registered schema names.

    Example:
        >>> raise SchemaNotFoundError("Book", available_schemas=["School"])
        # User sees: "Schema 'Book' not found. Available: School"
    """

    def __init__(
        self,
        schema_name: str,
        available_schemas: list[str],
        *,
        internal_details: str | None = None,
    ) -> None:
        """Initialize SchemaNotFoundError with available schema names.

        Args:
            schema_name: Name of the requested schema.
            available_schemas: Registered schema names.
            internal_details: Technical details for internal logging only.
        """
        available_str = ", ".join(available_schemas) if available_schemas else "none"
        user_message = f"Schema '{schema_name}' not found. Available: {available_str}"

        super().__init__(user_message, internal_details=internal_details)

        self.schema_name = schema_name
        self.available_schemas = available_schemas
