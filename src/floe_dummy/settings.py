"""Environment-driven defaults for floe-dummy."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from floe_dummy.observability import configure_logging


class DummySettings(BaseSettings):
    """Process-level defaults for document generation.

    Can be loaded from environment variables with FLOE_DUMMY_ prefix.

    Example:
        >>> # From environment (FLOE_DUMMY_SEED=42, FLOE_DUMMY_MAX_DEPTH=2)
        >>> settings = DummySettings()
        >>>
        >>> # Explicit
        >>> settings = DummySettings(seed=42, locale="de_DE")
    """

    model_config = SettingsConfigDict(
        env_prefix="FLOE_DUMMY_",
        env_file=".env",
        extra="ignore",
    )

    seed: int | None = Field(default=None, description="Faker seed (None for unseeded)")
    locale: str | None = Field(default=None, description="Faker locale")
    max_depth: int = Field(default=10, ge=0, description="Default reference hops")
    max_array_length: int = Field(
        default=15, ge=1, description="Default exclusive array length bound"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level used by configure_logging"
    )
    json_logs: bool = Field(default=True, description="Render logs as JSON")

    def configure_logging(self) -> None:
        """Configure structlog from ``log_level`` and ``json_logs``."""
        configure_logging(log_level=self.log_level, json_format=self.json_logs)
