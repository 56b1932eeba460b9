"""fieldrules: declarative per-field validation.

A field declares its rules as a compact expression and gets back a
pass/fail state plus one localized message per failed rule:

    from fieldrules import ValidationSession, SessionConfig

    session = ValidationSession(
        "required|min:3|max:60",
        field_name="name",
        config=SessionConfig(fail_fast=False, locale="fr"),
    )
    session.validate("")
    session.get_messages()

Built-in rules are registered on import. Custom rules are added with
`RuleRegistry.register(RuleDefinition(...))`.
"""

from fieldrules.config import SessionConfig
from fieldrules.messages import (
    DEFAULT_LOCALE,
    DEFAULT_MESSAGE,
    CustomMessage,
    CustomMessageSpec,
    MessageCatalog,
    MessageResolver,
    resolve_message,
    substitute,
)
from fieldrules.parsing import format_rules, parse_rules, split_args
from fieldrules.rules import (
    RuleCategory,
    RuleDefinition,
    RuleRegistry,
    register_builtin_rules,
)
from fieldrules.session import SessionHook, ValidationSession
from fieldrules.types import (
    ConfigurationError,
    InvalidArgumentError,
    MessageSpecError,
    MissingArgumentError,
    RuleInvocation,
    SessionState,
    UnknownRuleError,
    ValidationOutcome,
)

register_builtin_rules()

__all__ = [
    # Types
    "RuleInvocation",
    "SessionState",
    "ValidationOutcome",
    # Errors
    "ConfigurationError",
    "InvalidArgumentError",
    "MessageSpecError",
    "MissingArgumentError",
    "UnknownRuleError",
    # Parsing
    "format_rules",
    "parse_rules",
    "split_args",
    # Rules
    "RuleCategory",
    "RuleDefinition",
    "RuleRegistry",
    "register_builtin_rules",
    # Messages
    "DEFAULT_LOCALE",
    "DEFAULT_MESSAGE",
    "CustomMessage",
    "CustomMessageSpec",
    "MessageCatalog",
    "MessageResolver",
    "resolve_message",
    "substitute",
    # Session
    "SessionConfig",
    "SessionHook",
    "ValidationSession",
]
