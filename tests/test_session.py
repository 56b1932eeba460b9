"""Tests for the field validation session."""

from unittest.mock import Mock

import pytest

from fieldrules import (
    RuleCategory,
    RuleDefinition,
    RuleInvocation,
    RuleRegistry,
    SessionConfig,
    SessionState,
    ValidationSession,
    register_builtin_rules,
)
from fieldrules.messages import CustomMessageSpec, MessageCatalog
from fieldrules.types import (
    InvalidArgumentError,
    MessageSpecError,
    UnknownRuleError,
)

COLLECT_ALL = SessionConfig(fail_fast=False)


@pytest.fixture(autouse=True)
def setup_rules():
    RuleRegistry.clear()
    register_builtin_rules()
    yield
    RuleRegistry.clear()
    register_builtin_rules()


class TestRules:
    def test_get_rules_returns_names(self):
        session = ValidationSession("required|min:30")
        assert session.get_rules() == ["required", "min"]

    def test_no_rules(self):
        session = ValidationSession()
        assert session.get_rules() == []
        assert session.has_rules() is False

    def test_has_rules(self):
        assert ValidationSession("required|min:30").has_rules() is True

    def test_accepts_parsed_invocations(self):
        session = ValidationSession([RuleInvocation("required"), RuleInvocation("max", ("3",))])
        assert session.get_rules() == ["required", "max"]
        assert session.rules[1].args == ("3",)

    def test_unknown_rule_is_configuration_error(self):
        with pytest.raises(UnknownRuleError):
            ValidationSession("required|frobnicate")

    def test_set_rules_reparses_and_resets(self):
        session = ValidationSession("required", field_name="name")
        session.validate("")
        assert session.state == SessionState.INVALID

        session.set_rules("email")
        assert session.get_rules() == ["email"]
        assert session.state == SessionState.UNVALIDATED
        assert session.get_errors() == {}

    def test_compensation_slots_checked_against_rules(self):
        with pytest.raises(MessageSpecError):
            ValidationSession("required|min:3", messages="{1,4}Too many")


class TestValidate:
    def test_valid_value(self):
        session = ValidationSession("required|min:3")
        assert session.validate("test") is True
        assert session.get_errors() == {}
        assert session.state == SessionState.VALID

    def test_invalid_value(self):
        session = ValidationSession("required|min:3")
        assert session.validate("") is False
        assert session.state == SessionState.INVALID

    def test_numeric_string_passes_min(self):
        session = ValidationSession("required|min:3", field_name="name")
        session.validate("4")
        assert session.get_errors() == {}

    def test_fail_fast_keeps_first_error(self):
        session = ValidationSession("required|min:3", field_name="name")
        session.validate("")
        assert session.get_errors() == {"required": "The name field is required"}

    def test_collect_all_errors(self):
        session = ValidationSession("required|min:3", field_name="name", config=COLLECT_ALL)
        session.validate("")
        assert session.get_errors() == {
            "required": "The name field is required",
            "min": "The name field must be greater than or equal to '3'",
        }

    def test_collect_all_keeps_rule_order(self):
        session = ValidationSession("email|required|min:30", config=COLLECT_ALL)
        session.validate("")
        assert list(session.get_errors()) == ["email", "required", "min"]

    def test_fail_fast_stops_evaluating(self):
        spy = Mock(return_value=True)
        RuleRegistry.register(
            RuleDefinition(
                name="spy",
                description="Records calls",
                category=RuleCategory.PRESENCE,
                implementation=spy,
            )
        )
        session = ValidationSession("required|spy")
        session.validate("")
        spy.assert_not_called()

        session.validate("x")
        spy.assert_called_once_with("x")

    def test_outcome_replaced_on_each_call(self):
        session = ValidationSession("required|email", config=COLLECT_ALL)
        session.validate("")
        assert len(session.get_errors()) == 2

        session.validate("not-an-email")
        assert list(session.get_errors()) == ["email"]

        session.validate("user@example.com")
        assert session.get_errors() == {}
        assert session.outcome.valid is True

    def test_no_rules_is_valid(self):
        session = ValidationSession()
        assert session.validate("anything") is True

    def test_errors_empty_before_validate(self):
        session = ValidationSession("required")
        assert session.get_errors() == {}
        assert session.get_messages() == []
        assert session.state == SessionState.UNVALIDATED

    def test_configuration_error_propagates(self):
        session = ValidationSession("length:abc")
        with pytest.raises(InvalidArgumentError):
            session.validate("abc")
        assert session.state == SessionState.UNVALIDATED

    def test_huge_integer_fails_without_raising(self):
        session = ValidationSession("number|min:3", config=COLLECT_ALL)
        assert session.validate(10**400) is False
        assert list(session.get_errors()) == ["number", "min"]
        assert session.state == SessionState.INVALID

    def test_unexpected_error_resets_state(self):
        RuleRegistry.register(
            RuleDefinition(
                name="broken",
                description="Always raises",
                category=RuleCategory.PRESENCE,
                implementation=Mock(side_effect=RuntimeError("boom")),
            )
        )
        session = ValidationSession("broken")
        with pytest.raises(RuntimeError):
            session.validate("x")
        assert session.state == SessionState.UNVALIDATED

    def test_size_unit_limit_on_text(self):
        assert ValidationSession("size:2MB").validate("hello") is True
        with pytest.raises(InvalidArgumentError):
            ValidationSession("size:abc").validate("")

    def test_nullable_skips_rules_for_empty_value(self):
        session = ValidationSession("nullable|email")
        assert session.validate("") is True
        assert session.validate("bad") is False
        assert session.is_nullable

    def test_locale(self):
        session = ValidationSession(
            "required", field_name="nom", config=SessionConfig(locale="fr")
        )
        session.validate(None)
        assert session.get_messages() == ["Le champ nom est obligatoire"]

    def test_custom_catalog(self):
        catalog = MessageCatalog.default().merged("en", {"required": "Fill in :field"})
        session = ValidationSession("required", field_name="city", catalog=catalog)
        session.validate("")
        assert session.get_messages() == ["Fill in city"]

    def test_errors_returned_as_copy(self):
        session = ValidationSession("required")
        session.validate("")
        session.get_errors().clear()
        assert session.get_errors() != {}


class TestMessages:
    def test_custom_messages(self):
        session = ValidationSession(
            "required|min:30",
            messages="Required message | Min message",
            config=COLLECT_ALL,
        )
        session.validate("")
        assert session.get_messages() == ["Required message", "Min message"]

    def test_compensation_messages(self):
        session = ValidationSession(
            "required|min:30|max:60|email",
            messages="Required message | {1,2,3}Invalid email address",
            config=COLLECT_ALL,
        )
        session.validate("")
        assert session.get_messages() == [
            "Required message",
            "Invalid email address",
            "Invalid email address",
        ]
        assert list(session.get_errors()) == ["required", "min", "email"]

    def test_compensation_message_fail_fast(self):
        session = ValidationSession(
            "required|email",
            messages="{0,1}Please provide your email",
        )
        session.validate("")
        assert session.get_messages() == ["Please provide your email"]

    def test_missing_custom_message_falls_back_to_catalog(self):
        session = ValidationSession(
            "required|min:30",
            field_name="bio",
            messages="Required message",
            config=COLLECT_ALL,
        )
        session.validate("")
        assert session.get_messages() == [
            "Required message",
            "The bio field must be greater than or equal to '30'",
        ]

    def test_prebuilt_message_spec(self):
        spec = CustomMessageSpec.parse(["Needed"])
        session = ValidationSession("required", messages=spec)
        session.validate("")
        assert session.get_messages() == ["Needed"]


class TestValidQuery:
    def test_valid_matches_validate(self):
        session = ValidationSession("required|min:3")
        for value in ["test", "", "4", "ab"]:
            assert session.valid(value) is ValidationSession("required|min:3").validate(value)

    def test_valid_does_not_touch_outcome(self):
        session = ValidationSession("required")
        session.validate("")
        assert session.valid("ok") is True
        assert session.state == SessionState.INVALID
        assert "required" in session.get_errors()

    def test_valid_suppresses_hooks_by_default(self):
        hook = Mock()
        session = ValidationSession("required", hooks=[hook])
        session.valid("")
        hook.assert_not_called()

    def test_valid_runs_hooks_when_configured(self):
        hook = Mock()
        session = ValidationSession(
            "required", hooks=[hook], config=SessionConfig(hooks_on_query=True)
        )
        session.valid("")
        hook.assert_called_once()


class TestHooks:
    def test_hooks_receive_session_and_outcome(self):
        hook = Mock()
        session = ValidationSession("required", hooks=[hook])
        session.validate("")

        hook.assert_called_once()
        called_session, outcome = hook.call_args.args
        assert called_session is session
        assert outcome.valid is False
        assert outcome.messages == session.get_messages()

    def test_presentation_class(self):
        classes = []
        session = ValidationSession(
            "required",
            hooks=[lambda s, outcome: classes.append(s.presentation_class)],
            config=SessionConfig(valid_class="ok", invalid_class="ko"),
        )
        assert session.presentation_class is None
        session.validate("")
        session.validate("x")
        assert classes == ["ko", "ok"]

    def test_hook_errors_propagate(self):
        def broken(session, outcome):
            raise RuntimeError("boom")

        session = ValidationSession("required", hooks=[broken])
        with pytest.raises(RuntimeError):
            session.validate("x")
