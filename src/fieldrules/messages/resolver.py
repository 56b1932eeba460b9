"""Message resolution for failed rules.

A failed rule's message comes from, in order:
1. A custom message claiming the rule's slot (used verbatim)
2. The catalog template for (locale, rule), with placeholders substituted

Custom messages are pipe-delimited and line up with the rule list:

    rules:    required|min:30|max:60|email
    messages: Required message | {1,2,3}Invalid email address

The `{1,2,3}` prefix marks a compensation message: it claims rule slots
1, 2 and 3 (0-based) instead of taking the next positional slot.
"""

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass

from fieldrules.messages.catalog import DEFAULT_LOCALE, MessageCatalog
from fieldrules.parsing import RULE_SEPARATOR, split_args
from fieldrules.types import MessageSpecError

logger = logging.getLogger(__name__)

# :field or :argN (not followed by more letters, so ":fields" is left alone)
PLACEHOLDER_PATTERN = re.compile(r":(?:(field)(?![A-Za-z])|arg(\d+))")

COMPENSATION_PATTERN = re.compile(r"^\{([^}]*)\}\s*(.*)$", re.DOTALL)


def substitute(template: str, field_name: str, args: Sequence[str]) -> str:
    """Fill `:field` and `:argN` placeholders.

    An `:argN` beyond the available arguments is left untouched.
    """

    def replace(match: re.Match) -> str:
        if match.group(1):
            return field_name
        index = int(match.group(2))
        if index < len(args):
            return args[index]
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(replace, template)


# =============================================================================
# Custom Messages
# =============================================================================


@dataclass(frozen=True)
class CustomMessage:
    """One entry of a custom message source.

    Attributes:
        text: Message text, or None for "no override"
        slots: Explicit rule slots for a compensation entry; None for a
            positional entry
    """

    text: str | None
    slots: frozenset[int] | None = None

    @property
    def is_compensation(self) -> bool:
        return self.slots is not None

    @classmethod
    def parse(cls, raw: str) -> "CustomMessage":
        raw = raw.strip()
        match = COMPENSATION_PATTERN.match(raw)
        if not match:
            return cls(text=raw or None)

        tokens = split_args(match.group(1))
        if not tokens or not all(token.isdecimal() for token in tokens):
            raise MessageSpecError(
                f"Invalid compensation index set '{{{match.group(1)}}}': "
                "expected comma-separated non-negative integers"
            )
        text = match.group(2).strip()
        return cls(text=text or None, slots=frozenset(int(token) for token in tokens))


class CustomMessageSpec:
    """Custom messages for one field's rule list.

    Compensation entries claim their explicit slots first. Positional
    entries then fill the unclaimed slots in rule order, so a positional
    entry after a compensation entry resumes on the next free slot.
    """

    def __init__(self, entries: Sequence[CustomMessage] = ()):
        self.entries: tuple[CustomMessage, ...] = tuple(entries)
        self._slots: dict[int, str | None] = self._assign()

    @classmethod
    def parse(cls, source: str | Sequence[str] | None) -> "CustomMessageSpec":
        """Parse a pipe-delimited string or a sequence of entries.

        Raises:
            MessageSpecError: If a compensation index set is malformed
        """
        if source is None:
            return cls()
        if isinstance(source, str):
            if source.strip() == "":
                return cls()
            source = source.split(RULE_SEPARATOR)
        return cls([CustomMessage.parse(raw) for raw in source])

    def _assign(self) -> dict[int, str | None]:
        slots: dict[int, str | None] = {}
        for entry in self.entries:
            if entry.slots is None:
                continue
            for slot in sorted(entry.slots):
                slots.setdefault(slot, entry.text)

        claimed = set(slots)
        cursor = 0
        for entry in self.entries:
            if entry.slots is not None:
                continue
            while cursor in claimed:
                cursor += 1
            slots[cursor] = entry.text
            cursor += 1
        return slots

    def __bool__(self) -> bool:
        return bool(self.entries)

    def message_for(self, slot: int) -> str | None:
        """Custom text claiming a rule slot, or None."""
        return self._slots.get(slot)

    def check_slots(self, rule_count: int) -> None:
        """Verify the spec fits a rule list of `rule_count` rules.

        Raises:
            MessageSpecError: If a compensation entry names a missing slot
        """
        for entry in self.entries:
            if entry.slots is None:
                continue
            out_of_range = sorted(slot for slot in entry.slots if slot >= rule_count)
            if out_of_range:
                raise MessageSpecError(
                    f"Compensation message '{entry.text}' targets rule slot(s) "
                    f"{out_of_range} but only {rule_count} rule(s) are declared"
                )

        surplus = [slot for slot in self._slots if slot >= rule_count]
        if surplus:
            logger.warning(
                "Ignoring %d custom message(s) beyond the %d declared rule(s)",
                len(surplus),
                rule_count,
            )


# =============================================================================
# Resolver
# =============================================================================


class MessageResolver:
    """Produces the final message text for a failed rule.

    Usage:
        resolver = MessageResolver(locale="fr")
        resolver.resolve("min", ["3"], "name")
        # "Le champ name doit être supérieur ou égal à '3'"
    """

    def __init__(
        self,
        catalog: MessageCatalog | None = None,
        locale: str = DEFAULT_LOCALE,
    ):
        self.catalog = catalog or MessageCatalog.default()
        if not self.catalog.has_locale(locale):
            logger.warning(
                "Locale '%s' is not available (have: %s); falling back to '%s'",
                locale,
                ", ".join(self.catalog.locales()),
                DEFAULT_LOCALE,
            )
            locale = DEFAULT_LOCALE
        self.locale = locale

    def resolve(
        self,
        rule: str,
        args: Sequence[str],
        field_name: str,
        custom: CustomMessageSpec | None = None,
        slot: int | None = None,
    ) -> str:
        if custom is not None and slot is not None:
            text = custom.message_for(slot)
            if text is not None:
                return text

        template = self.catalog.template(self.locale, rule)
        return substitute(template, field_name, args)


def resolve_message(
    rule: str,
    args: Sequence[str],
    field_name: str,
    locale: str = DEFAULT_LOCALE,
    custom: CustomMessageSpec | None = None,
    slot: int | None = None,
    catalog: MessageCatalog | None = None,
) -> str:
    """One-shot form of MessageResolver.resolve()."""
    return MessageResolver(catalog, locale).resolve(rule, args, field_name, custom, slot)
