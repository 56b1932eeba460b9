"""Built-in validation rules.

Call `register_builtin_rules()` to populate the RuleRegistry. Importing
`fieldrules` does this automatically.

Categories:
- Presence: required, nullable, string, number, integer, boolean
- String: minlength, maxlength, length, startWith, endWith, contains, ...
- Pattern: email, url, phone, regex
- Numeric: min, max, between, modulo, size, in
- Date: date, before, after, time
- File: file, maxFileSize, minFileSize
"""

from fieldrules.rules.files import register_file_rules
from fieldrules.rules.numeric import register_numeric_rules
from fieldrules.rules.presence import register_presence_rules
from fieldrules.rules.registry import (
    Predicate,
    RuleCategory,
    RuleDefinition,
    RuleRegistry,
)
from fieldrules.rules.string import register_string_rules
from fieldrules.rules.temporal import register_temporal_rules


def register_builtin_rules() -> None:
    """Register all built-in rules with the RuleRegistry."""
    register_presence_rules()
    register_string_rules()
    register_numeric_rules()
    register_temporal_rules()
    register_file_rules()


__all__ = [
    "Predicate",
    "RuleCategory",
    "RuleDefinition",
    "RuleRegistry",
    "register_builtin_rules",
]
