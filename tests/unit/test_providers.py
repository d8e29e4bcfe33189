"""Unit tests for FakeDataProvider."""

from __future__ import annotations

import re
from datetime import datetime, timedelta

import pytest

from floe_dummy.providers import FakeDataProvider

pytestmark = pytest.mark.unit


class TestFakeDataProvider:
    """Tests for the Faker-backed provider."""

    def test_same_seed_same_values(self) -> None:
        """Seeded providers produce the same sequence."""
        first = FakeDataProvider(seed=42)
        second = FakeDataProvider(seed=42)

        assert [first.user_name() for _ in range(5)] == [second.user_name() for _ in range(5)]
        assert first.object_id() == second.object_id()
        assert first.integer(0, 100) == second.integer(0, 100)

    def test_reset(self) -> None:
        provider = FakeDataProvider(seed=7)
        values = [provider.email(), provider.random()]

        provider.reset()

        assert [provider.email(), provider.random()] == values

    def test_random_range(self) -> None:
        provider = FakeDataProvider(seed=1)

        assert all(0.0 <= provider.random() < 1.0 for _ in range(100))

    def test_integer_inclusive(self) -> None:
        provider = FakeDataProvider(seed=1)

        values = {provider.integer(3, 5) for _ in range(200)}

        assert values == {3, 4, 5}

    def test_array_length_exclusive(self) -> None:
        provider = FakeDataProvider(seed=1)

        values = {provider.array_length(3) for _ in range(200)}

        assert values == {0, 1, 2}

    def test_object_id(self) -> None:
        object_id = FakeDataProvider(seed=1).object_id()

        assert re.fullmatch(r"[0-9a-f]{24}", object_id)

    def test_recent_datetime(self) -> None:
        value = FakeDataProvider(seed=1).recent_datetime()

        assert isinstance(value, datetime)
        assert datetime.now() - timedelta(days=1, minutes=1) <= value <= datetime.now()

    def test_payload(self) -> None:
        payload = FakeDataProvider(seed=1).payload()

        assert isinstance(payload, dict)
        assert 1 <= len(payload) <= 2
        for profile in payload.values():
            assert "username" in profile

    def test_categories(self) -> None:
        provider = FakeDataProvider(seed=1)

        assert "@" in provider.email()
        assert len(provider.password()) == 14
        assert provider.phone_number()
        assert provider.address()
        assert isinstance(provider.boolean(), bool)

    def test_locale(self) -> None:
        provider = FakeDataProvider(seed=1, locale="de_DE")

        assert provider.fake.locales == ["de_DE"]
