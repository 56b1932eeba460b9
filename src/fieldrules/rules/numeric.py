"""Numeric and bound rules: min, max, between, modulo, size, in.

Bounds compare a *measure* of the value:
- file-like values measure their size in bytes
- numbers and numeric strings measure their numeric value
- other strings and collections measure their length
"""

import math
from typing import Any

from fieldrules.parsing import split_args
from fieldrules.rules.files import is_file_like, parse_size
from fieldrules.rules.presence import as_number
from fieldrules.rules.registry import (
    RuleCategory,
    RuleDefinition,
    RuleRegistry,
    numeric_arg,
    require_args,
)
from fieldrules.types import InvalidArgumentError, is_empty


def measure(value: Any) -> float | None:
    """Return the quantity bounds are compared against, or None."""
    if is_file_like(value):
        return float(value.size)
    number = as_number(value)
    if number is not None:
        return number
    if isinstance(value, (str, list, tuple, dict)):
        return float(len(value))
    return None


def min_(value: Any, *args: str) -> bool:
    bound = numeric_arg("min", args[0] if args else None)
    if is_empty(value):
        return False
    quantity = measure(value)
    return quantity is not None and quantity >= bound


def max_(value: Any, *args: str) -> bool:
    bound = numeric_arg("max", args[0] if args else None)
    if is_empty(value):
        return True
    quantity = measure(value)
    return quantity is not None and quantity <= bound


def between(value: Any, *args: str) -> bool:
    require_args("between", args, 2)
    low = numeric_arg("between", args[0])
    high = numeric_arg("between", args[1])
    if is_empty(value):
        return False
    quantity = measure(value)
    return quantity is not None and low <= quantity <= high


def modulo(value: Any, *args: str) -> bool:
    divisor = numeric_arg("modulo", args[0] if args else None)
    if divisor == 0:
        raise InvalidArgumentError("modulo", "The modulo rule argument must not be zero")
    number = as_number(value)
    if number is None:
        return False
    return math.isclose(math.remainder(number, divisor), 0.0, abs_tol=1e-9)


def size(value: Any, *args: str) -> bool:
    """The limit is a size literal: `3` is 3, `2MB` is 2 * 1024**2.

    Files compare their byte size, everything else its measure.
    """
    limit = parse_size("size", args[0] if args else None)
    if is_empty(value):
        return True
    quantity = measure(value)
    return quantity is not None and quantity <= limit


def in_(value: Any, *args: str) -> bool:
    require_args("in", args)
    candidates: list[str] = []
    for arg in args:
        candidates.extend(split_args(arg))
    if isinstance(value, str):
        return value in candidates
    number = as_number(value)
    if number is None:
        return False
    return any(as_number(candidate) == number for candidate in candidates)


def register_numeric_rules() -> None:
    for name, implementation, min_args, description, examples in [
        ("min", min_, 1, "Value (or its length) is at least n", ["required|min:3"]),
        ("max", max_, 1, "Value (or its length) is at most n", ["max:60"]),
        ("between", between, 2, "Value (or its length) lies within [a, b]", ["between:1,10"]),
        ("modulo", modulo, 1, "Value is a multiple of n", ["number|modulo:5"]),
        ("size", size, 1, "Value, length or file size is at most n", ["size:2MB"]),
        ("in", in_, 1, "Value is one of the listed candidates", ["in:red,green,blue"]),
    ]:
        RuleRegistry.register(
            RuleDefinition(
                name=name,
                description=description,
                category=RuleCategory.NUMERIC,
                implementation=implementation,
                min_args=min_args,
                examples=examples,
            )
        )
