"""Unit tests for generation configuration models."""

from __future__ import annotations

import re

import pytest
from pydantic import ValidationError

from floe_dummy.errors import InvalidConfigError
from floe_dummy.schemas import CustomGenerator, CustomGenerators, GenerationConfig, build_config

pytestmark = pytest.mark.unit


def fixed_value() -> str:
    return "fixed"


class TestBuildConfig:
    """Tests for build_config normalization."""

    def test_defaults(self) -> None:
        config = build_config()

        assert config.ignore == ()
        assert config.force == {}
        assert config.auto_detect is True
        assert config.apply_filter is True
        assert config.return_date is False
        assert config.max_depth == 10
        assert config.save is True
        assert config.max_array_length == 15

    def test_camel_case_aliases(self) -> None:
        """camelCase names are accepted for snake_case options."""
        config = build_config(
            {"autoDetect": False, "applyFilter": False, "returnDate": True, "maxDepth": 2},
            maxArrayLength=4,
        )

        assert config.auto_detect is False
        assert config.apply_filter is False
        assert config.return_date is True
        assert config.max_depth == 2
        assert config.max_array_length == 4

    def test_overrides_win(self) -> None:
        config = build_config({"max_depth": 5}, max_depth=1)

        assert config.max_depth == 1

    def test_existing_config_returned_as_is(self) -> None:
        config = GenerationConfig(max_depth=3)

        assert build_config(config) is config

    def test_existing_config_with_overrides(self) -> None:
        """Overrides produce a new config; the base config is untouched."""
        config = GenerationConfig(max_depth=3, ignore=("_id",))

        derived = build_config(config, save=False)

        assert derived.save is False
        assert derived.max_depth == 3
        assert derived.ignore == ("_id",)
        assert config.save is True

    def test_single_ignore_entry(self) -> None:
        pattern = re.compile(r"_info$")

        assert build_config(ignore="_id").ignore == ("_id",)
        assert build_config(ignore=pattern).ignore == (pattern,)

    def test_none_values(self) -> None:
        config = build_config(ignore=None, force=None, custom=None)

        assert config.ignore == ()
        assert config.force == {}
        assert config.custom == CustomGenerators()

    @pytest.mark.parametrize(
        ("options", "field_path"),
        [
            ({"max_depth": -1}, "max_depth"),
            ({"max_array_length": 0}, "max_array_length"),
            ({"unknown_option": True}, "unknown_option"),
            ({"custom": {"email": 42}}, "custom.email"),
            ({"custom": {"email": {"field": "contact", "value": "not callable"}}}, "custom.email"),
            ({"custom": {"email": ["a", 1]}}, "custom.email"),
            ({"custom": {"email": {"fields": "a", "extra": 1}}}, "custom.email"),
            ({"custom": {"fax": "number"}}, "custom.fax"),
        ],
    )
    def test_invalid_options(self, options: dict[str, object], field_path: str) -> None:
        """Invalid options raise InvalidConfigError naming the option."""
        with pytest.raises(InvalidConfigError) as exc_info:
            build_config(options)

        assert exc_info.value.field_path == field_path
        assert field_path in str(exc_info.value)

    def test_config_is_frozen(self) -> None:
        config = build_config()

        with pytest.raises(ValidationError):
            config.max_depth = 1  # type: ignore[misc]


class TestCustomGenerators:
    """Tests for custom category entries."""

    def test_entry_forms(self) -> None:
        """Names, name lists and mappings are all accepted."""
        custom = CustomGenerators(
            email="contact",
            phone=["mobile", "fax"],
            address={"fields": ["home"], "generator": fixed_value},
            password={"field": "secret", "value": fixed_value},
        )

        assert custom.email == CustomGenerator(fields=("contact",))
        assert custom.phone is not None
        assert custom.phone.fields == ("mobile", "fax")
        assert custom.address == CustomGenerator(fields=("home",), generator=fixed_value)
        assert custom.password is not None
        assert custom.password.generator is fixed_value

    def test_category_for(self) -> None:
        custom = CustomGenerators(email="contact", phone="contact")

        match = custom.category_for("contact")

        assert match is not None
        assert match[0] == "email"
        assert custom.category_for("other") is None

    def test_rescoped(self) -> None:
        """Prefixed names are re-rooted; bare names are kept; others dropped."""
        custom = CustomGenerators(email=["parent.email", "contact", "other.email"])

        scoped = custom.rescoped("parent")

        assert scoped.email is not None
        assert scoped.email.fields == ("email", "contact")


class TestGenerationConfig:
    """Tests for ignore matching and scoping."""

    def test_is_ignored(self) -> None:
        config = GenerationConfig(ignore=("_id", re.compile(r"detail.*_info")))

        assert config.is_ignored("_id")
        assert config.is_ignored("detail.main_info")
        assert not config.is_ignored("detail.none_match")
        assert not config.is_ignored("parent._id_copy")

    def test_scoped(self) -> None:
        """Scoping re-roots prefixed entries below the prefix."""
        pattern = re.compile(r"_info$")
        config = GenerationConfig(
            ignore=("_id", "sequel.name", "other.name", pattern),
            force={"sequel.description": "forced", "name": "top"},
            custom=CustomGenerators(email=["sequel.contact"]),
            max_depth=4,
        )

        scoped = config.scoped("sequel", max_depth=3)

        assert scoped.ignore == ("_id", "name", pattern)
        assert scoped.force == {"description": "forced"}
        assert scoped.custom.email is not None
        assert scoped.custom.email.fields == ("contact",)
        assert scoped.max_depth == 3
        assert config.max_depth == 4
        assert config.force == {"sequel.description": "forced", "name": "top"}

    def test_scoped_keeps_depth_by_default(self) -> None:
        config = GenerationConfig(max_depth=4, return_date=True)

        scoped = config.scoped("results")

        assert scoped.max_depth == 4
        assert scoped.return_date is True
