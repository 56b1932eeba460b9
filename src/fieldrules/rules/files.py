"""File rules.

A file-like value is any object exposing an integer `size` attribute in
bytes (upload wrappers, `os.stat_result`-backed objects, test doubles).
Size limits accept a plain byte count or a unit suffix: `512`, `10KB`,
`2MB`, `1GB` (1024-based).
"""

import re
from typing import Any

from fieldrules.rules.registry import (
    RuleCategory,
    RuleDefinition,
    RuleRegistry,
    require_args,
)
from fieldrules.types import InvalidArgumentError

SIZE_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([KMGT]?B?)\s*$", re.IGNORECASE)

SIZE_UNITS = {
    "": 1,
    "B": 1,
    "K": 1024,
    "KB": 1024,
    "M": 1024**2,
    "MB": 1024**2,
    "G": 1024**3,
    "GB": 1024**3,
    "T": 1024**4,
    "TB": 1024**4,
}


def is_file_like(value: Any) -> bool:
    if isinstance(value, (str, bytes, int, float, bool)) or value is None:
        return False
    size = getattr(value, "size", None)
    return isinstance(size, int) and not isinstance(size, bool)


def parse_size(rule: str, literal: str | None) -> float:
    """Convert a size literal such as `2MB` into bytes.

    Raises:
        MissingArgumentError: If no literal is given
        InvalidArgumentError: If the literal is not a size
    """
    require_args(rule, (literal,))
    match = SIZE_PATTERN.match(literal)
    if not match:
        raise InvalidArgumentError(
            rule, f"The {rule} rule argument must be a size like 512, 10KB or 2MB, got '{literal}'"
        )
    amount, unit = match.groups()
    return float(amount) * SIZE_UNITS[unit.upper()]


def file(value: Any, *args: str) -> bool:
    return is_file_like(value)


def max_file_size(value: Any, *args: str) -> bool:
    limit = parse_size("maxFileSize", args[0] if args else None)
    return is_file_like(value) and value.size <= limit


def min_file_size(value: Any, *args: str) -> bool:
    limit = parse_size("minFileSize", args[0] if args else None)
    return is_file_like(value) and value.size >= limit


def register_file_rules() -> None:
    for name, implementation, min_args, description, examples in [
        ("file", file, 0, "Value is a file", ["required|file"]),
        ("maxFileSize", max_file_size, 1, "File is at most the given size", ["file|maxFileSize:2MB"]),
        ("minFileSize", min_file_size, 1, "File is at least the given size", ["file|minFileSize:1KB"]),
    ]:
        RuleRegistry.register(
            RuleDefinition(
                name=name,
                description=description,
                category=RuleCategory.FILE,
                implementation=implementation,
                min_args=min_args,
                examples=examples,
            )
        )
