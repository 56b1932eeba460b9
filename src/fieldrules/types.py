"""Core types for the fieldrules engine.

This module defines the data shared by every layer:
- RuleInvocation: one parsed `name:args` segment of a rule expression
- ValidationOutcome: the result of one `validate()` call
- SessionState: lifecycle of a validation session
- Configuration errors raised for integrator mistakes
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(ValueError):
    """A rule set, argument or message spec is wrong.

    These signal a developer mistake and are never turned into user-facing
    validation messages.
    """


class MissingArgumentError(ConfigurationError):
    """A rule that needs arguments was declared without them."""

    def __init__(self, rule: str):
        self.rule = rule
        super().__init__(f"Missing required argument: {rule}")


class InvalidArgumentError(ConfigurationError):
    """A rule argument has the wrong shape (e.g. a non-numeric size)."""

    def __init__(self, rule: str, message: str):
        self.rule = rule
        super().__init__(message)


class UnknownRuleError(ConfigurationError):
    """A rule expression names a rule that is not registered."""

    def __init__(self, rule: str, available: list[str] | None = None):
        self.rule = rule
        message = f"Rule '{rule}' is not registered."
        if available:
            message += " Available rules: " + ", ".join(available)
        super().__init__(message)


class MessageSpecError(ConfigurationError):
    """A custom message source is malformed."""


# =============================================================================
# Rule Invocations
# =============================================================================


@dataclass(frozen=True)
class RuleInvocation:
    """A single rule taken from a rule expression.

    Attributes:
        name: Registered rule name (e.g., "min")
        args: Arguments in declaration order, already split and trimmed
    """

    name: str
    args: tuple[str, ...] = ()

    def __str__(self) -> str:
        if not self.args:
            return self.name
        return f"{self.name}:{','.join(self.args)}"


# =============================================================================
# Outcomes
# =============================================================================


class SessionState(Enum):
    """Lifecycle of a validation session."""

    UNVALIDATED = "unvalidated"
    VALIDATING = "validating"
    VALID = "valid"
    INVALID = "invalid"


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of validating one value.

    Attributes:
        valid: True if no rule failed
        errors: Rule name -> resolved message, in evaluation order
    """

    valid: bool
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def messages(self) -> list[str]:
        return list(self.errors.values())

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "errors": dict(self.errors),
        }


EMPTY_OUTCOME = ValidationOutcome(valid=True)


def is_empty(value: Any) -> bool:
    """Check if a value is considered empty by presence rules."""
    if value is None:
        return True
    if isinstance(value, str) and value.strip() == "":
        return True
    if isinstance(value, (list, tuple, dict)) and len(value) == 0:
        return True
    return False
