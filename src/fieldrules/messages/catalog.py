"""Locale-keyed message templates.

Each locale is a YAML file mapping rule names to templates:

    required: "The :field field is required"
    min: "The :field field must be greater than or equal to ':arg0'"

Catalogs are read-only once built. `MessageCatalog.default()` returns the
process-wide catalog loaded from the shipped `locales/` directory.
"""

import logging
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType

import yaml

from fieldrules.types import ConfigurationError

logger = logging.getLogger(__name__)

LOCALES_PATH = Path(__file__).parent / "locales"

DEFAULT_LOCALE = "en"

# Used when neither the rule nor the locale's "default" key has a template
DEFAULT_MESSAGE = "This field is invalid"

DEFAULT_KEY = "default"


class MessageCatalog:
    """Immutable mapping of locale -> rule name -> template."""

    def __init__(self, templates: Mapping[str, Mapping[str, str]]):
        self._templates: Mapping[str, Mapping[str, str]] = MappingProxyType(
            {
                locale: MappingProxyType(dict(messages))
                for locale, messages in templates.items()
            }
        )

    @classmethod
    def from_directory(cls, path: Path) -> "MessageCatalog":
        """Load every `<locale>.yaml` file in a directory.

        Raises:
            ConfigurationError: If the directory is missing or a file is not
                a flat mapping of strings
        """
        if not path.is_dir():
            raise ConfigurationError(f"Locale directory not found: {path}")

        templates: dict[str, dict[str, str]] = {}
        for yaml_file in sorted(path.glob("*.yaml")):
            with open(yaml_file, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            templates[yaml_file.stem] = _check_templates(data, yaml_file)

        logger.debug("Loaded %d locale(s) from %s", len(templates), path)
        return cls(templates)

    @classmethod
    def default(cls) -> "MessageCatalog":
        """Return the shared catalog of shipped locales."""
        return _default_catalog()

    def locales(self) -> list[str]:
        return sorted(self._templates.keys())

    def has_locale(self, locale: str) -> bool:
        return locale in self._templates

    def templates(self, locale: str) -> Mapping[str, str]:
        """All templates for a locale (empty if the locale is unknown)."""
        return self._templates.get(locale, MappingProxyType({}))

    def template(self, locale: str, rule: str) -> str:
        """Look up the template for a rule.

        Falls back to the locale's `default` entry, then to DEFAULT_MESSAGE.
        """
        messages = self.templates(locale)
        if rule in messages:
            return messages[rule]
        return messages.get(DEFAULT_KEY, DEFAULT_MESSAGE)

    def merged(self, locale: str, overrides: Mapping[str, str]) -> "MessageCatalog":
        """Return a new catalog with `overrides` layered over one locale."""
        templates = {name: dict(messages) for name, messages in self._templates.items()}
        templates.setdefault(locale, {}).update(overrides)
        return MessageCatalog(templates)


def _check_templates(data: object, source: Path) -> dict[str, str]:
    if not isinstance(data, dict):
        raise ConfigurationError(f"{source}: expected a mapping of rule names to messages")
    for key, value in data.items():
        if not isinstance(key, str) or not isinstance(value, str):
            raise ConfigurationError(
                f"{source}: entry {key!r} must map a rule name to a message string"
            )
    return data


@lru_cache(maxsize=1)
def _default_catalog() -> MessageCatalog:
    return MessageCatalog.from_directory(LOCALES_PATH)
