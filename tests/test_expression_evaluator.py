"""
Tests for expression_evaluator.py
"""

import itertools

import pytest

from expression_evaluator import (
    DivisionByZeroError,
    ErrorKind,
    EvaluationError,
    ExpressionEvaluator,
    TokenKind,
    evaluate,
    scan,
)

LITERALS = ["1", "2.5", "10", "0.1", "123.456", "7", ".5", "3."]


def kind_of(expression):
    with pytest.raises(EvaluationError) as info:
        evaluate(expression)
    return info.value.kind


class TestScenarios:
    """End-to-end inputs and their expected outcome."""

    def test_precedence(self):
        assert evaluate("3 + 4 * 2") == 11.0

    def test_parentheses(self):
        assert evaluate("(1 + 2) * 3") == 9.0

    def test_left_associative_subtraction(self):
        assert evaluate("10 - 2 - 3") == 5.0

    def test_mixed_bracket_families(self):
        assert evaluate("{[(1+2)*3] - 4} / 5") == 1.0

    def test_division_by_zero(self):
        assert kind_of("1 / 0") is ErrorKind.ARITHMETIC

    def test_doubled_operator(self):
        assert kind_of("2 ++ 3") is ErrorKind.MALFORMED_EXPRESSION

    def test_unrecognized_character(self):
        assert kind_of("2 + a") is ErrorKind.UNRECOGNIZED_TOKEN

    def test_number_with_two_dots(self):
        assert kind_of("1.2.3 + 1") is ErrorKind.MALFORMED_NUMBER


class TestScanner:
    def test_token_stream(self):
        tokens = list(scan("12.5*(3 - 1)"))
        assert [t.kind for t in tokens] == [
            TokenKind.NUMBER,
            TokenKind.OPERATOR,
            TokenKind.OPEN,
            TokenKind.NUMBER,
            TokenKind.OPERATOR,
            TokenKind.NUMBER,
            TokenKind.CLOSE,
        ]
        assert [t.position for t in tokens] == [0, 4, 5, 6, 8, 10, 11]
        assert tokens[0].value == 12.5

    def test_operand_run_is_maximal(self):
        tokens = list(scan("10.25"))
        assert len(tokens) == 1
        assert tokens[0].text == "10.25"

    def test_only_ascii_space_is_skipped(self):
        with pytest.raises(EvaluationError) as info:
            list(scan("1\t+ 2"))
        assert info.value.kind is ErrorKind.UNRECOGNIZED_TOKEN
        assert info.value.position == 1

    def test_non_ascii_digit_is_unrecognized(self):
        assert kind_of("١ + 1") is ErrorKind.UNRECOGNIZED_TOKEN

    @pytest.mark.parametrize("text", [".", "..", "1..2", "1.2.3"])
    def test_malformed_numbers(self, text):
        assert kind_of(text) is ErrorKind.MALFORMED_NUMBER

    def test_malformed_number_position(self):
        with pytest.raises(EvaluationError) as info:
            evaluate("4 + 1.2.3")
        assert info.value.position == 4

    def test_scientific_notation_is_not_a_number(self):
        assert kind_of("1e5") is ErrorKind.UNRECOGNIZED_TOKEN


class TestShuntingCore:
    def test_single_number(self):
        assert evaluate("42") == 42.0

    def test_fraction_literals(self):
        assert evaluate(".5 + 3.") == 3.5

    def test_left_associative_division(self):
        assert evaluate("8 / 4 / 2") == 1.0

    def test_nested_same_family(self):
        assert evaluate("((2))") == 2.0
        assert evaluate("2 * ((3 + 4) * (1 + 1))") == 28.0

    def test_precedence_inside_brackets(self):
        assert evaluate("[2 + 3 * 4] * 2") == 28.0

    def test_division_result_is_float(self):
        assert evaluate("7 / 2") == 3.5

    def test_overflow_is_returned_as_infinity(self):
        big = "9" * 200
        assert evaluate(f"{big} * {big}") == float("inf")

    def test_infinity_minus_infinity_is_nan(self):
        big = "9" * 200
        result = evaluate(f"{big} * {big} - {big} * {big}")
        assert result != result

    def test_division_by_zero_variants(self):
        for expression in ("1/0", "1/0.0", "1/(2-2)", "1/[0*5]"):
            assert kind_of(expression) is ErrorKind.ARITHMETIC

    def test_division_by_zero_is_zero_division_error(self):
        with pytest.raises(ZeroDivisionError) as info:
            evaluate("5 / (3 - 3)")
        assert isinstance(info.value, DivisionByZeroError)
        assert info.value.position == 2

    def test_zero_divided_by_number(self):
        assert evaluate("0 / 5") == 0.0

    def test_evaluator_instance_is_reusable(self):
        evaluator = ExpressionEvaluator()
        assert evaluator.evaluate("1 + 1") == 2.0
        with pytest.raises(EvaluationError):
            evaluator.evaluate("1 +")
        assert evaluator.evaluate("2 * 3") == 6.0

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            evaluate("(")


class TestMalformedExpressions:
    @pytest.mark.parametrize(
        "expression",
        [
            "",
            "   ",
            "-1",
            "1 +",
            "* 2",
            "1 2",
            "()",
            "2 ()",
            "(1 + 2",
            "1 + 2)",
            "(1 + 2]",
            "{1 + 2)",
            "[(1 + 2])",
            "(1)(2)",
            "1 + 2 3 -",
        ],
    )
    def test_reports_malformed_expression(self, expression):
        assert kind_of(expression) is ErrorKind.MALFORMED_EXPRESSION

    def test_mismatched_bracket_fails_at_the_close(self):
        with pytest.raises(EvaluationError) as info:
            evaluate("(1 + 2] * 3")
        assert info.value.position == 6

    def test_unclosed_bracket_reports_its_position(self):
        with pytest.raises(EvaluationError) as info:
            evaluate("2 * [1 + 2")
        assert info.value.position == 4


class TestProperties:
    @pytest.mark.parametrize(
        "expression",
        ["3+4*2", "{[(1+2)*3]-4}/5", "10-2-3", "1.5*[2+.5]"],
    )
    def test_whitespace_insensitivity(self, expression):
        spaced = " ".join(token.text for token in scan(expression))
        padded = f"   {expression}   "
        assert evaluate(spaced) == evaluate(expression) == evaluate(padded)

    @pytest.mark.parametrize("open_, close", [("(", ")"), ("[", "]"), ("{", "}")])
    def test_bracket_family_equivalence(self, open_, close):
        expression = f"2 * {open_}3 + {open_}4 - 1{close} * 2{close}"
        assert evaluate(expression) == evaluate("2 * (3 + (4 - 1) * 2)")

    @pytest.mark.parametrize("a,b,c", list(itertools.permutations(LITERALS, 3)))
    def test_left_associativity(self, a, b, c):
        fa, fb, fc = float(a), float(b), float(c)
        assert evaluate(f"{a}/{b}/{c}") == (fa / fb) / fc
        assert evaluate(f"{a}-{b}-{c}") == (fa - fb) - fc

    @pytest.mark.parametrize("a,b,c", list(itertools.permutations(LITERALS, 3)))
    def test_multiplication_binds_tighter(self, a, b, c):
        fa, fb, fc = float(a), float(b), float(c)
        assert evaluate(f"{a}+{b}*{c}") == fa + (fb * fc)
        assert evaluate(f"{a}*{b}+{c}") == (fa * fb) + fc

    @pytest.mark.parametrize("literal", LITERALS + ["0", "000.000", "9" * 30])
    def test_single_number_round_trip(self, literal):
        assert evaluate(literal) == float(literal)

    @pytest.mark.parametrize(
        "expression",
        ["", "+", ")", "(((", ")))", "1..", "..1", "1+*2", "[{(", "1/0/", "x", "ñ", "1 / 0 +"],
    )
    def test_errors_are_always_reported_with_a_kind(self, expression):
        with pytest.raises(EvaluationError) as info:
            evaluate(expression)
        assert isinstance(info.value.kind, ErrorKind)

    def test_deep_nesting(self):
        depth = 5000
        expression = "(" * depth + "1" + ")" * depth
        assert evaluate(expression) == 1.0
