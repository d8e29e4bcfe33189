"""Shared pytest fixtures for floe-dummy tests.

This module provides common schemas, a registry of cross-referencing
schemas, and a deterministic value provider.
"""

from __future__ import annotations

import sys
from datetime import datetime
from typing import Any

import pytest
import structlog

from floe_dummy.document import DocumentSchema, ObjectId, SchemaRegistry

GENDER_VALUES = ["Male", "Female"]


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers.

    Args:
        config: pytest configuration.
    """
    config.addinivalue_line("markers", "unit: fast, isolated unit tests")


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Configure structlog to output to stdout for test capture.

    This fixture ensures structlog outputs to stdout so that capsys
    can capture the output in tests.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,  # Important for test isolation
    )


class StubProvider:
    """Deterministic stand-in for FakeDataProvider.

    Every category returns a fixed, recognizable value so tests can tell
    which generator produced a field.
    """

    USER_NAME = "  Some.User  "
    EMAIL = "stub@example.com"
    PHONE = "555-0100"
    ADDRESS = "1 Main Street"
    PASSWORD = "s3cret-Pass"
    NOW = datetime(2025, 1, 1, 12, 30)

    def __init__(self, random_value: float = 0.0, array_length: int = 2) -> None:
        self.random_value = random_value
        self.length = array_length
        self.integer_calls: list[tuple[int, int]] = []
        self.array_bounds: list[int] = []
        self._ids = 0

    def random(self) -> float:
        return self.random_value

    def user_name(self) -> str:
        return self.USER_NAME

    def email(self) -> str:
        return self.EMAIL

    def phone_number(self) -> str:
        return self.PHONE

    def address(self) -> str:
        return self.ADDRESS

    def password(self) -> str:
        return self.PASSWORD

    def integer(self, low: int, high: int) -> int:
        self.integer_calls.append((low, high))
        return high

    def recent_datetime(self) -> datetime:
        return self.NOW

    def boolean(self) -> bool:
        return True

    def payload(self) -> dict[str, Any]:
        return {"en_US": {"username": "stub"}}

    def object_id(self) -> str:
        self._ids += 1
        return f"{self._ids:024x}"

    def array_length(self, upper: int) -> int:
        self.array_bounds.append(upper)
        return min(self.length, upper - 1)


@pytest.fixture
def stub_provider() -> StubProvider:
    """Deterministic provider returning two-element arrays."""
    return StubProvider()


@pytest.fixture
def stub_provider_factory() -> type[StubProvider]:
    """StubProvider class, for tests needing custom random values or lengths."""
    return StubProvider


@pytest.fixture
def student_definition() -> dict[str, Any]:
    """Student schema definition covering every field kind."""
    return {
        "name": {"type": str, "required": True, "lowercase": True, "trim": True},
        "email": {"type": str},
        "birth_date": {"type": datetime},
        "gender": {"type": str, "enum": GENDER_VALUES},
        "data": {"type": object, "default": None},
        "results": [{"score": int, "course": int}],
        "is_student": {"type": bool},
        "parent": {"type": ObjectId},
        "detail": {"main_info": str, "some_info": str, "none_match": str},
        "created_at": {"type": datetime, "default": datetime.now},
    }


@pytest.fixture
def student_schema(student_definition: dict[str, Any]) -> DocumentSchema:
    """Student DocumentSchema."""
    return DocumentSchema(student_definition, name="Student")


@pytest.fixture
def library_registry() -> SchemaRegistry:
    """Schemas referencing each other in a cycle.

    - Book.sequel -> School (ObjectId reference)
    - School.books -> Book (to-many virtual)
    - BriefCase.theme_book -> Book (to-one virtual)
    """
    registry = SchemaRegistry()
    registry.register(
        "Book",
        {
            "name": {"type": str, "required": True},
            "description": {"type": str, "required": True},
            "sequel": {"type": ObjectId, "ref": "School"},
        },
    )
    school = registry.register(
        "School",
        {
            "name": {"type": str, "required": True},
            "description": {"type": str, "required": True},
        },
    )
    school.virtual("books", ref="Book", foreign_field="theme", just_one=False)
    brief_case = registry.register(
        "BriefCase",
        {
            "name": {"type": str, "required": True},
            "description": {"type": str, "required": True},
        },
    )
    brief_case.virtual("theme_book", ref="Book", foreign_field="theme", just_one=True)
    return registry
