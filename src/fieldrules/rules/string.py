"""String rules.

Covers length bounds, affix/membership checks, character classes, the
composite password rule and fixed-pattern formats (email, url, phone,
regex). Non-string values fail these rules rather than raising; only a
missing or malformed argument raises.
"""

import re
from typing import Any

from fieldrules.parsing import ARGUMENT_SEPARATOR, split_args
from fieldrules.rules.registry import (
    RuleCategory,
    RuleDefinition,
    RuleRegistry,
    integer_arg,
    require_args,
)
from fieldrules.types import InvalidArgumentError


# =============================================================================
# Patterns
# =============================================================================

EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"
)

URL_PATTERN = re.compile(r'^(ftp|http|https)://[^ "]+$')

# Flexible pattern supporting international formats
PHONE_PATTERN = re.compile(
    r"^[\+]?[(]?[0-9]{1,3}[)]?[-\s\.]?[(]?[0-9]{1,4}[)]?[-\s\.]?[0-9]{1,4}[-\s\.]?[0-9]{1,9}$"
)

PASSWORD_MIN_LENGTH = 8
PASSWORD_SYMBOLS = re.compile(r'[!@#$%^&*(),.?":{}|<>]')

_STARTS_UPPER = re.compile(r"^[A-Z]")
_STARTS_LOWER = re.compile(r"^[a-z]")
_STARTS_LETTER = re.compile(r"^[a-zA-Z]")
_HAS_LETTER = re.compile(r"[a-zA-Z]")


def _candidates(rule: str, args: tuple[str, ...]) -> list[str]:
    """Collect comma-separated candidates from one or more arguments."""
    require_args(rule, args)
    candidates: list[str] = []
    for arg in args:
        candidates.extend(split_args(arg))
    return candidates


def _non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and len(value) > 0


# =============================================================================
# Length
# =============================================================================


def minlength(value: Any, *args: str) -> bool:
    size = integer_arg("minlength", args[0] if args else None)
    if not value:
        return False
    return isinstance(value, str) and len(value) >= size


def maxlength(value: Any, *args: str) -> bool:
    size = integer_arg("maxlength", args[0] if args else None)
    if not value:
        return True
    return isinstance(value, str) and len(value) <= size


def length(value: Any, *args: str) -> bool:
    """Value has exactly `size` characters (or items)."""
    size = integer_arg("length", args[0] if args else None)
    if isinstance(value, bool):
        return False
    if isinstance(value, (str, int, float)):
        return len(str(value)) == size
    if isinstance(value, (list, tuple)):
        return len(value) == size
    return False


# =============================================================================
# Affixes and membership
# =============================================================================


def start_with(value: Any, *args: str) -> bool:
    prefixes = _candidates("startWith", args)
    if not isinstance(value, str):
        return False
    return any(value.startswith(prefix) for prefix in prefixes)


def end_with(value: Any, *args: str) -> bool:
    suffixes = _candidates("endWith", args)
    if not isinstance(value, str):
        return False
    return any(value.endswith(suffix) for suffix in suffixes)


def contains(value: Any, *args: str) -> bool:
    """Value contains every candidate substring."""
    substrings = _candidates("contains", args)
    if not isinstance(value, str):
        return False
    return all(substring in value for substring in substrings)


def excludes(value: Any, *args: str) -> bool:
    _candidates("excludes", args)
    if not isinstance(value, str):
        return False
    return not contains(value, *args)


# =============================================================================
# Character classes
# =============================================================================


def start_with_upper(value: Any, *args: str) -> bool:
    return _non_empty_string(value) and bool(_STARTS_UPPER.match(value))


def start_with_lower(value: Any, *args: str) -> bool:
    return _non_empty_string(value) and bool(_STARTS_LOWER.match(value))


def start_with_letter(value: Any, *args: str) -> bool:
    return _non_empty_string(value) and bool(_STARTS_LETTER.match(value))


def has_letter(value: Any, *args: str) -> bool:
    return _non_empty_string(value) and bool(_HAS_LETTER.search(value))


def upper(value: Any, *args: str) -> bool:
    return _non_empty_string(value) and value == value.upper()


def lower(value: Any, *args: str) -> bool:
    return _non_empty_string(value) and value == value.lower()


def password(value: Any, *args: str) -> bool:
    """At least 8 characters with an uppercase letter, a lowercase letter,
    a digit and a symbol.
    """
    if not isinstance(value, str) or len(value) < PASSWORD_MIN_LENGTH:
        return False
    return (
        bool(re.search(r"[A-Z]", value))
        and bool(re.search(r"[a-z]", value))
        and bool(re.search(r"\d", value))
        and bool(PASSWORD_SYMBOLS.search(value))
    )


# =============================================================================
# Formats
# =============================================================================


def email(value: Any, *args: str) -> bool:
    return isinstance(value, str) and bool(EMAIL_PATTERN.match(value))


def url(value: Any, *args: str) -> bool:
    return isinstance(value, str) and bool(URL_PATTERN.match(value))


def phone(value: Any, *args: str) -> bool:
    return isinstance(value, str) and bool(PHONE_PATTERN.match(value.strip()))


def regex(value: Any, *args: str) -> bool:
    """Value matches a user-supplied pattern.

    The parser splits arguments on commas, so they are joined back here:
    `regex:^\\d{2,4}$` arrives as ("^\\d{2", "4}$"). Whitespace around
    each comma is trimmed by the splitter and cannot be restored, so
    `regex:^a, b$` compiles as `^a,b$`; write `\\s` for a space that
    follows a comma.
    """
    require_args("regex", args)
    source = ARGUMENT_SEPARATOR.join(args)
    try:
        pattern = re.compile(source)
    except re.error as e:
        raise InvalidArgumentError("regex", f"Invalid regex pattern '{source}': {e}") from e
    if value is None or isinstance(value, bool):
        return False
    return bool(pattern.search(str(value)))


def register_string_rules() -> None:
    for name, implementation, min_args, description, examples in [
        ("minlength", minlength, 1, "String has at least n characters", ["minlength:3"]),
        ("maxlength", maxlength, 1, "String has at most n characters", ["maxlength:60"]),
        ("length", length, 1, "Value has exactly n characters", ["length:5"]),
        ("len", length, 1, "Alias of length", ["len:5"]),
        ("startWith", start_with, 1, "String starts with any candidate", ["startWith:Mr,Mrs"]),
        ("endWith", end_with, 1, "String ends with any candidate", ["endWith:.com,.org"]),
        ("contains", contains, 1, "String contains every candidate", ["contains:@"]),
        ("excludes", excludes, 1, "Negation of contains", ["excludes:admin"]),
        ("startWithUpper", start_with_upper, 0, "First character is uppercase", ["startWithUpper"]),
        ("startWithLower", start_with_lower, 0, "First character is lowercase", ["startWithLower"]),
        ("startWithLetter", start_with_letter, 0, "First character is a letter", ["startWithLetter"]),
        ("hasLetter", has_letter, 0, "String contains a letter", ["hasLetter"]),
        ("containsLetter", has_letter, 0, "Alias of hasLetter", ["containsLetter"]),
        ("upper", upper, 0, "String is uppercase", ["upper"]),
        ("lower", lower, 0, "String is lowercase", ["lower"]),
        ("password", password, 0, "String is a strong password", ["required|password"]),
    ]:
        RuleRegistry.register(
            RuleDefinition(
                name=name,
                description=description,
                category=RuleCategory.STRING,
                implementation=implementation,
                min_args=min_args,
                examples=examples,
            )
        )

    for name, implementation, min_args, description, examples in [
        ("email", email, 0, "Valid email address", ["required|email"]),
        ("url", url, 0, "Valid ftp/http/https URL", ["url"]),
        ("phone", phone, 0, "Valid phone number", ["phone"]),
        ("regex", regex, 1, "Matches the given regular expression", ["regex:^[A-Z]{3}$"]),
    ]:
        RuleRegistry.register(
            RuleDefinition(
                name=name,
                description=description,
                category=RuleCategory.PATTERN,
                implementation=implementation,
                min_args=min_args,
                examples=examples,
            )
        )
