"""Tests for argument splitting and rule expression parsing."""

import pytest

from fieldrules.parsing import format_rules, parse_rule, parse_rules, split_args
from fieldrules.types import RuleInvocation


class TestSplitArgs:
    """Tests for the comma argument splitter."""

    def test_splits_on_commas(self):
        assert split_args("a,b,c") == ["a", "b", "c"]

    def test_trims_tokens(self):
        assert split_args(" .com , .org ") == [".com", ".org"]

    def test_empty_input(self):
        assert split_args("") == []
        assert split_args("   ") == []
        assert split_args(None) == []

    def test_single_token(self):
        assert split_args("30") == ["30"]

    def test_keeps_empty_tokens_between_commas(self):
        assert split_args("a,,b") == ["a", "", "b"]


class TestParseRules:
    """Tests for the pipe-delimited rule expression parser."""

    def test_names_without_args(self):
        assert parse_rules("required|email") == [
            RuleInvocation("required"),
            RuleInvocation("email"),
        ]

    def test_single_and_multiple_args(self):
        invocations = parse_rules("required|min:3|between:1,10")
        assert invocations[1] == RuleInvocation("min", ("3",))
        assert invocations[2] == RuleInvocation("between", ("1", "10"))

    def test_only_first_colon_separates(self):
        invocation = parse_rule("after:2024-01-01T10:30")
        assert invocation.name == "after"
        assert invocation.args == ("2024-01-01T10:30",)

    def test_whitespace_trimmed(self):
        invocations = parse_rules(" required | min : 3 ")
        assert invocations == [
            RuleInvocation("required"),
            RuleInvocation("min", ("3",)),
        ]

    @pytest.mark.parametrize("expression", ["", "   ", None])
    def test_empty_expression(self, expression):
        assert parse_rules(expression) == []

    @pytest.mark.parametrize(
        "expression,count",
        [
            ("required", 1),
            ("required|min:3", 2),
            ("required||email", 2),
            ("|required|", 1),
            ("required| |email|max:5", 3),
        ],
    )
    def test_count_matches_non_empty_segments(self, expression, count):
        assert len(parse_rules(expression)) == count

    def test_order_preserved(self):
        names = [i.name for i in parse_rules("max:60|required|email|min:3")]
        assert names == ["max", "required", "email", "min"]

    def test_trailing_colon_yields_no_args(self):
        assert parse_rule("min:").args == ()

    def test_invocations_are_immutable(self):
        invocation = parse_rule("min:3")
        with pytest.raises(AttributeError):
            invocation.name = "max"


class TestFormatRules:
    def test_format_round_trip(self):
        expression = "required|min:3|between:1,10"
        assert format_rules(parse_rules(expression)) == expression
