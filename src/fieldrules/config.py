"""Session configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from fieldrules.messages.catalog import DEFAULT_LOCALE
from fieldrules.types import ConfigurationError

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class SessionConfig:
    """How a validation session evaluates and reports.

    Attributes:
        fail_fast: Stop at the first failing rule (otherwise collect all)
        locale: Message catalog locale
        hooks_on_query: Run hooks for `valid()` as well as `validate()`
        valid_class: Presentation class handed to hooks for a valid field
        invalid_class: Presentation class handed to hooks for an invalid field
    """

    fail_fast: bool = True
    locale: str = DEFAULT_LOCALE
    hooks_on_query: bool = False
    valid_class: str = "is-valid"
    invalid_class: str = "is-invalid"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SessionConfig:
        """Create config from a dict.

        Accepts snake_case keys as well as the camelCase attribute style
        (`failsOnFirst`, `local: {lang: ...}`, `validClass`, `invalidClass`).
        """
        defaults = cls()

        locale = data.get("locale")
        if locale is None:
            local = data.get("local")
            locale = local.get("lang") if isinstance(local, dict) else None

        fail_fast = data.get("fail_fast", data.get("failsOnFirst", data.get("failsOnfirst")))

        return cls(
            fail_fast=_as_bool("fail_fast", fail_fast, defaults.fail_fast),
            locale=locale or defaults.locale,
            hooks_on_query=_as_bool(
                "hooks_on_query",
                data.get("hooks_on_query", data.get("hooksOnQuery")),
                defaults.hooks_on_query,
            ),
            valid_class=data.get("valid_class", data.get("validClass", defaults.valid_class)),
            invalid_class=data.get(
                "invalid_class", data.get("invalidClass", defaults.invalid_class)
            ),
        )

    @classmethod
    def from_env(cls) -> SessionConfig:
        """Create config from environment variables.

        Reads FIELDRULES_LOCALE and FIELDRULES_FAIL_FAST; anything unset
        keeps its default.
        """
        defaults = cls()
        return cls(
            fail_fast=_as_bool(
                "FIELDRULES_FAIL_FAST",
                os.environ.get("FIELDRULES_FAIL_FAST"),
                defaults.fail_fast,
            ),
            locale=os.environ.get("FIELDRULES_LOCALE") or defaults.locale,
        )

    @classmethod
    def from_yaml(cls, path: Path) -> SessionConfig:
        """Load config from a YAML file."""
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"{path}: expected a mapping of settings")
        return cls.from_dict(data)


def _as_bool(name: str, value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    raise ConfigurationError(f"Setting '{name}' must be a boolean, got {value!r}")
