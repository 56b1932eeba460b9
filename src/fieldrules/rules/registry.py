"""Rule registry for fieldrules.

Rules are plain predicates `(value, *args) -> bool`. Each one is registered
under a name together with metadata used for documentation and for
argument checking. Adding a rule is a registry insertion:

    RuleRegistry.register(RuleDefinition(
        name="even",
        description="Value is an even integer",
        category=RuleCategory.NUMERIC,
        implementation=lambda value: int(value) % 2 == 0,
    ))
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Sequence

from fieldrules.types import (
    InvalidArgumentError,
    MissingArgumentError,
    UnknownRuleError,
)

Predicate = Callable[..., bool]


class RuleCategory(Enum):
    """Categories for organizing rules in documentation."""

    PRESENCE = "presence"
    STRING = "string"
    NUMERIC = "numeric"
    PATTERN = "pattern"
    DATE = "date"
    FILE = "file"


@dataclass
class RuleDefinition:
    """Complete definition of a validation rule.

    Attributes:
        name: Rule name as used in rule expressions
        description: Human-readable description
        category: Category for documentation organization
        implementation: The predicate
        min_args: Number of arguments the rule cannot run without
        examples: Example rule expressions using this rule
    """

    name: str
    description: str
    category: RuleCategory
    implementation: Predicate
    min_args: int = 0
    examples: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Export for documentation."""
        return {
            "name": self.name,
            "description": self.description,
            "category": self.category.value,
            "minArgs": self.min_args,
            "examples": self.examples,
        }


class RuleRegistry:
    """Process-wide registry of validation rules.

    Registration is idempotent: re-registering a name keeps the first
    definition, so importing rule modules twice is harmless.
    """

    _rules: dict[str, RuleDefinition] = {}

    @classmethod
    def register(cls, rule_def: RuleDefinition) -> None:
        """Register a rule definition.

        Args:
            rule_def: Complete rule definition with implementation
        """
        if rule_def.name in cls._rules:
            return  # Already registered, no-op
        cls._rules[rule_def.name] = rule_def

    @classmethod
    def get(cls, name: str) -> RuleDefinition:
        """Get a rule definition by name.

        Raises:
            UnknownRuleError: If the rule is not registered
        """
        if name not in cls._rules:
            raise UnknownRuleError(name, cls.list_registered())
        return cls._rules[name]

    @classmethod
    def is_registered(cls, name: str) -> bool:
        """Check if a rule is registered."""
        return name in cls._rules

    @classmethod
    def call(cls, name: str, value: Any, *args: str) -> bool:
        """Evaluate a registered rule against a value."""
        return bool(cls.get(name).implementation(value, *args))

    @classmethod
    def list_registered(cls) -> list[str]:
        """List all registered rule names."""
        return sorted(cls._rules.keys())

    @classmethod
    def list_by_category(cls, category: RuleCategory) -> list[RuleDefinition]:
        """List rules in a specific category."""
        return [r for r in cls._rules.values() if r.category == category]

    @classmethod
    def export_documentation(cls) -> dict[str, Any]:
        """Export the registry grouped by category."""
        by_category: dict[str, list[dict[str, Any]]] = {}
        for rule_def in cls._rules.values():
            by_category.setdefault(rule_def.category.value, []).append(
                rule_def.to_dict()
            )
        return {
            "rules": {name: r.to_dict() for name, r in cls._rules.items()},
            "byCategory": by_category,
        }

    @classmethod
    def clear(cls) -> None:
        """Clear all registrations. Primarily for testing."""
        cls._rules.clear()


# =============================================================================
# Argument Helpers
# =============================================================================


def require_args(rule: str, args: Sequence[str | None], count: int = 1) -> None:
    """Raise MissingArgumentError unless the first `count` args are present."""
    if len(args) < count or any(not arg for arg in args[:count]):
        raise MissingArgumentError(rule)


def numeric_arg(rule: str, arg: str | None) -> float:
    """Parse a numeric rule argument.

    Raises:
        MissingArgumentError: If the argument is absent
        InvalidArgumentError: If the argument is not a number
    """
    if arg is None or arg == "":
        raise MissingArgumentError(rule)
    try:
        number = float(arg)
    except ValueError:
        number = math.nan
    if not math.isfinite(number):
        raise InvalidArgumentError(
            rule, f"The {rule} rule argument must be a number, got '{arg}'"
        )
    return number


def integer_arg(rule: str, arg: str | None) -> int:
    """Parse an integer rule argument (e.g. a length)."""
    number = numeric_arg(rule, arg)
    if not number.is_integer():
        raise InvalidArgumentError(
            rule, f"The {rule} rule argument must be an integer, got '{arg}'"
        )
    return int(number)
