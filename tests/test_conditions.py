"""Tests for condition evaluation."""

import math

import pytest

from promptline.templating.conditions import evaluate_condition, evaluate_operand, is_truthy


class TestIsTruthy:
    """Tests for template truthiness."""

    @pytest.mark.parametrize("value", [None, False, "", 0, 0.0, math.nan])
    def test_falsy_values(self, value: object) -> None:
        assert is_truthy(value) is False

    @pytest.mark.parametrize("value", [True, "x", " ", "0", "false", 1, -1, 0.5, [], {}])
    def test_truthy_values(self, value: object) -> None:
        assert is_truthy(value) is True


class TestEvaluateCondition:
    """Tests for evaluate_condition."""

    def test_simple_variable(self) -> None:
        assert evaluate_condition("flag", {"flag": True})
        assert not evaluate_condition("flag", {"flag": False})
        assert not evaluate_condition("flag", {})

    def test_negation(self) -> None:
        assert evaluate_condition("!flag", {"flag": False})
        assert evaluate_condition("!flag", {})
        assert not evaluate_condition("! flag", {"flag": "yes"})

    def test_and(self) -> None:
        assert evaluate_condition("a && b", {"a": True, "b": 1})
        assert not evaluate_condition("a && b", {"a": True, "b": 0})

    def test_negated_and(self) -> None:
        assert evaluate_condition("!a && b", {"a": False, "b": True})
        assert not evaluate_condition("!a && b", {"a": True, "b": True})

    def test_or(self) -> None:
        assert evaluate_condition("a || b", {"b": "x"})
        assert not evaluate_condition("a || b", {"a": "", "b": None})
        assert evaluate_condition("a || !b", {})

    def test_surrounding_whitespace(self) -> None:
        assert evaluate_condition("   a   &&   b   ", {"a": True, "b": True})

    def test_three_operands_fall_back_to_whole_string_lookup(self) -> None:
        variables = {"a": True, "b": True, "c": True}
        assert not evaluate_condition("a && b && c", variables)
        assert evaluate_condition("a && b && c", {"a && b && c": True})
        assert not evaluate_condition("a || b || c", variables)
        assert evaluate_condition("a || b || c", {"a || b || c": 1})

    def test_mixed_operators_treat_remainder_as_name(self) -> None:
        # Split on && first: the right operand "b || c" is looked up as a name
        assert not evaluate_condition("a && b || c", {"a": True, "b": True, "c": True})
        assert evaluate_condition("a && b || c", {"a": True, "b || c": True})

    def test_operand(self) -> None:
        assert evaluate_operand(" !missing ", {})
        assert not evaluate_operand("present", {"present": 0})
