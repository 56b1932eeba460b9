"""Field-level validation session.

A session is attached to one field. It parses the field's rule expression
once, then evaluates every `validate()` call from scratch:

    session = ValidationSession("required|min:3", field_name="name")
    session.validate("")        # False
    session.get_errors()        # {"required": "The name field is required"}

Evaluation runs rules in declaration order. With `fail_fast` (the default)
it stops at the first failure; otherwise every rule is evaluated and one
error is recorded per failing rule.
"""

import logging
from collections.abc import Callable, Sequence
from typing import Any

from fieldrules.config import SessionConfig
from fieldrules.messages.catalog import MessageCatalog
from fieldrules.messages.resolver import CustomMessageSpec, MessageResolver
from fieldrules.parsing import format_rules, parse_rules
from fieldrules.rules.registry import RuleRegistry
from fieldrules.types import (
    EMPTY_OUTCOME,
    RuleInvocation,
    SessionState,
    ValidationOutcome,
    is_empty,
)

logger = logging.getLogger(__name__)

# Hook signature: (session, outcome) -> None
SessionHook = Callable[["ValidationSession", ValidationOutcome], None]

NULLABLE_RULE = "nullable"


class ValidationSession:
    """Validates values for a single field.

    Args:
        rules: Rule expression (`required|min:3`) or parsed invocations
        field_name: Display name substituted for `:field` in messages
        messages: Custom message source, pipe-delimited or a sequence
        config: Evaluation policy and locale
        catalog: Message catalog (defaults to the shared shipped catalog)
        hooks: Callables run after each `validate()`, e.g. to toggle
            presentation classes or emit change notifications

    Raises:
        UnknownRuleError: If the expression names an unregistered rule
        MessageSpecError: If the custom messages do not fit the rules
    """

    def __init__(
        self,
        rules: str | Sequence[RuleInvocation] | None = None,
        field_name: str = "",
        messages: str | Sequence[str] | CustomMessageSpec | None = None,
        config: SessionConfig | None = None,
        catalog: MessageCatalog | None = None,
        hooks: Sequence[SessionHook] | None = None,
    ):
        self.field_name = field_name
        self.config = config or SessionConfig()
        self.resolver = MessageResolver(catalog, self.config.locale)
        self.hooks: list[SessionHook] = list(hooks or [])

        self._invocations: tuple[RuleInvocation, ...] = ()
        self._custom = CustomMessageSpec()
        self._outcome = EMPTY_OUTCOME
        self._state = SessionState.UNVALIDATED
        self.set_rules(rules, messages)

    def __repr__(self) -> str:
        return (
            f"ValidationSession(field={self.field_name!r}, "
            f"rules={format_rules(self._invocations)!r}, state={self._state.value})"
        )

    # -------------------------------------------------------------------------
    # Rules
    # -------------------------------------------------------------------------

    def set_rules(
        self,
        rules: str | Sequence[RuleInvocation] | None,
        messages: str | Sequence[str] | CustomMessageSpec | None = None,
    ) -> None:
        """Replace the rule list and custom messages; resets the outcome."""
        if rules is None or isinstance(rules, str):
            invocations = tuple(parse_rules(rules))
        else:
            invocations = tuple(rules)

        for invocation in invocations:
            RuleRegistry.get(invocation.name)

        if isinstance(messages, CustomMessageSpec):
            custom = messages
        else:
            custom = CustomMessageSpec.parse(messages)
        custom.check_slots(len(invocations))

        self._invocations = invocations
        self._custom = custom
        self._outcome = EMPTY_OUTCOME
        self._state = SessionState.UNVALIDATED

    @property
    def rules(self) -> tuple[RuleInvocation, ...]:
        return self._invocations

    def get_rules(self) -> list[str]:
        """Rule names in evaluation order."""
        return [invocation.name for invocation in self._invocations]

    def has_rules(self) -> bool:
        return len(self._invocations) > 0

    @property
    def is_nullable(self) -> bool:
        return any(invocation.name == NULLABLE_RULE for invocation in self._invocations)

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate(self, value: Any) -> bool:
        """Validate a value, replace the stored outcome and run hooks.

        Returns:
            True if no rule failed
        """
        self._state = SessionState.VALIDATING
        try:
            outcome = self._evaluate(value)
        except Exception:
            self._state = SessionState.UNVALIDATED
            raise

        self._outcome = outcome
        self._state = SessionState.VALID if outcome.valid else SessionState.INVALID
        logger.debug(
            "Field %r validated: %s (%d error(s))",
            self.field_name,
            self._state.value,
            len(outcome.errors),
        )
        self._run_hooks(outcome)
        return outcome.valid

    def valid(self, value: Any) -> bool:
        """Check a value without touching the stored outcome.

        Hooks only run when `config.hooks_on_query` is set.
        """
        outcome = self._evaluate(value)
        if self.config.hooks_on_query:
            self._run_hooks(outcome)
        return outcome.valid

    def _evaluate(self, value: Any) -> ValidationOutcome:
        if self.is_nullable and is_empty(value):
            return ValidationOutcome(valid=True)

        errors: dict[str, str] = {}
        for slot, invocation in enumerate(self._invocations):
            rule = RuleRegistry.get(invocation.name)
            if rule.implementation(value, *invocation.args):
                continue

            logger.debug("Rule %s failed for field %r", invocation, self.field_name)
            errors[invocation.name] = self.resolver.resolve(
                invocation.name,
                invocation.args,
                self.field_name,
                custom=self._custom,
                slot=slot,
            )
            if self.config.fail_fast:
                break

        return ValidationOutcome(valid=not errors, errors=errors)

    def _run_hooks(self, outcome: ValidationOutcome) -> None:
        for hook in self.hooks:
            hook(self, outcome)

    # -------------------------------------------------------------------------
    # Results
    # -------------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def outcome(self) -> ValidationOutcome:
        return self._outcome

    def get_errors(self) -> dict[str, str]:
        """Rule name -> message for the most recent `validate()` call."""
        return dict(self._outcome.errors)

    def get_messages(self) -> list[str]:
        """Messages for the most recent `validate()` call, in rule order."""
        return self._outcome.messages

    @property
    def presentation_class(self) -> str | None:
        """The configured valid/invalid class for the current state."""
        if self._state == SessionState.VALID:
            return self.config.valid_class
        if self._state == SessionState.INVALID:
            return self.config.invalid_class
        return None
