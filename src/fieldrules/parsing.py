"""Rule expression parsing.

A rule expression is a pipe-delimited list of rules, each optionally
followed by a colon and comma-separated arguments:

    required|min:3|between:1,10

Only the first colon separates the name from its arguments, so argument
values may themselves contain colons.
"""

import logging
from collections.abc import Iterable

from fieldrules.types import RuleInvocation

logger = logging.getLogger(__name__)

RULE_SEPARATOR = "|"
ARGUMENT_MARKER = ":"
ARGUMENT_SEPARATOR = ","


def split_args(raw: str | None) -> list[str]:
    """Split a raw argument string on commas.

    Tokens are trimmed. An empty or missing input yields an empty list.
    """
    if raw is None or raw.strip() == "":
        return []
    return [token.strip() for token in raw.split(ARGUMENT_SEPARATOR)]


def parse_rule(segment: str) -> RuleInvocation:
    """Parse one `name[:args]` segment."""
    name, marker, raw_args = segment.strip().partition(ARGUMENT_MARKER)
    args = split_args(raw_args) if marker else []
    return RuleInvocation(name=name.strip(), args=tuple(args))


def parse_rules(expression: str | None) -> list[RuleInvocation]:
    """Parse a rule expression into invocations, preserving order.

    Empty segments (e.g. from `required||email` or a trailing pipe) are
    dropped. Order matters: it is both the evaluation order and the slot
    numbering used for custom messages.
    """
    if expression is None or expression.strip() == "":
        return []

    invocations = [
        parse_rule(segment)
        for segment in expression.split(RULE_SEPARATOR)
        if segment.strip()
    ]
    logger.debug("Parsed %r into %d rule(s)", expression, len(invocations))
    return invocations


def format_rules(invocations: Iterable[RuleInvocation]) -> str:
    """Render invocations back into a rule expression."""
    return RULE_SEPARATOR.join(str(invocation) for invocation in invocations)
