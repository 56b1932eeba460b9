"""Presence and shape rules.

These inspect the runtime shape of a value and take no arguments:
required, nullable, string, number/numeric, integer/int, boolean.
"""

import math
import re
from typing import Any

from fieldrules.rules.registry import RuleCategory, RuleDefinition, RuleRegistry
from fieldrules.types import is_empty

INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")

BOOLEAN_STRINGS = {"true", "false", "1", "0", "yes", "no", "on", "off"}


def as_number(value: Any) -> float | None:
    """Return the numeric reading of a value, or None if it has none.

    Booleans are not numbers here even though Python treats them as ints.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        try:
            return float(value)
        except OverflowError:
            return None
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, str) and value.strip():
        try:
            number = float(value)
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None


def required(value: Any, *args: str) -> bool:
    return not is_empty(value)


def nullable(value: Any, *args: str) -> bool:
    # Marker rule: the session short-circuits empty values when present.
    return True


def string(value: Any, *args: str) -> bool:
    return isinstance(value, str)


def number(value: Any, *args: str) -> bool:
    return as_number(value) is not None


def integer(value: Any, *args: str) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return value.is_integer()
    if isinstance(value, str):
        return bool(INTEGER_PATTERN.match(value.strip()))
    return False


def boolean(value: Any, *args: str) -> bool:
    if isinstance(value, bool):
        return True
    if isinstance(value, str):
        return value.strip().lower() in BOOLEAN_STRINGS
    return False


def register_presence_rules() -> None:
    for name, implementation, description in [
        ("required", required, "Value must not be empty"),
        ("nullable", nullable, "Empty values skip every other rule"),
        ("string", string, "Value must be a string"),
        ("number", number, "Value must be a number or numeric string"),
        ("numeric", number, "Alias of number"),
        ("integer", integer, "Value must be an integer or integer string"),
        ("int", integer, "Alias of integer"),
        ("boolean", boolean, "Value must be a boolean or yes/no style string"),
    ]:
        RuleRegistry.register(
            RuleDefinition(
                name=name,
                description=description,
                category=RuleCategory.PRESENCE,
                implementation=implementation,
                examples=[name],
            )
        )
