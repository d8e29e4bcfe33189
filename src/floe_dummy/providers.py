"""Fake data provider backed by Faker.

The synthesizer never calls Faker directly. It asks a provider for values by
category, so tests can substitute deterministic stand-ins.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol

from faker import Faker

# Default ceiling for numbers without a declared maximum
DEFAULT_NUMBER_CEILING = 80


class ValueProvider(Protocol):
    """Capability the synthesizer needs from a fake data source."""

    def random(self) -> float: ...

    def user_name(self) -> str: ...

    def email(self) -> str: ...

    def phone_number(self) -> str: ...

    def address(self) -> str: ...

    def password(self) -> str: ...

    def integer(self, low: int, high: int) -> int: ...

    def recent_datetime(self) -> datetime: ...

    def boolean(self) -> bool: ...

    def payload(self) -> dict[str, Any]: ...

    def object_id(self) -> str: ...

    def array_length(self, upper: int) -> int: ...


class FakeDataProvider:
    """Faker-backed value provider.

    Attributes:
        seed: Random seed for reproducibility (None for unseeded)
        fake: Faker instance for data generation

    Example:
        >>> provider = FakeDataProvider(seed=42)
        >>> email = provider.email()
    """

    def __init__(self, seed: int | None = None, locale: str | None = None) -> None:
        """Initialize the provider.

        Args:
            seed: Random seed. Same seed produces identical values across runs.
            locale: Faker locale (default: Faker's default locale).
        """
        self.seed = seed
        # Instance-level seeding keeps other Faker users unaffected
        self.fake = Faker(locale) if locale else Faker()
        if seed is not None:
            self.fake.seed_instance(seed)

    def random(self) -> float:
        """Uniform float in [0, 1)."""
        return self.fake.random.random()

    def user_name(self) -> str:
        return self.fake.user_name()

    def email(self) -> str:
        return self.fake.email()

    def phone_number(self) -> str:
        return self.fake.phone_number()

    def address(self) -> str:
        return self.fake.address()

    def password(self) -> str:
        return self.fake.password(length=14)

    def integer(self, low: int, high: int) -> int:
        """Random integer in [low, high], both inclusive."""
        return self.fake.random_int(min=low, max=high)

    def recent_datetime(self) -> datetime:
        """Datetime within the last day."""
        return self.fake.date_time_between(start_date="-1d", end_date="now")

    def boolean(self) -> bool:
        return self.fake.pybool()

    def payload(self) -> dict[str, Any]:
        """Small free-form object: two profile cards keyed by locale."""
        return {self.fake.locale(): self.fake.simple_profile() for _ in range(2)}

    def object_id(self) -> str:
        """Opaque 24 character hexadecimal identifier."""
        return self.fake.hexify(text="^" * 24)

    def array_length(self, upper: int) -> int:
        """Random length in [0, upper)."""
        return self.fake.random_int(min=0, max=upper - 1)

    def reset(self) -> None:
        """Re-seed the underlying Faker instance."""
        if self.seed is not None:
            self.fake.seed_instance(self.seed)
