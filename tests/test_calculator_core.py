"""Tests for the calculator arithmetic and entry buffer.

``evaluate`` is checked for precedence, unary signs, parentheses and each error
class; ``CalculatorSession`` is driven with the same values the keypad emits.
"""

from __future__ import annotations

import pytest

from tuic.calculator import (
    CalculatorError,
    CalculatorOverflowError,
    CalculatorSession,
    DivisionByZeroError,
    EmptyExpressionError,
    InvalidExpressionError,
    InvalidNumberError,
    MismatchedParenthesesError,
    evaluate,
    format_plain,
    format_value,
)


@pytest.mark.parametrize(
    "expression,expected",
    [
        ("2+3*4", 14.0),
        ("(2+3)*4", 20.0),
        ("12 - 4 - 3", 5.0),
        ("-3 + 5", 2.0),
        ("2 * -3", -6.0),
        ("10 / 4", 2.5),
        ("+7", 7.0),
        ("0.5 * 0.5", 0.25),
    ],
)
def test_evaluate(expression: str, expected: float) -> None:
    assert evaluate(expression) == pytest.approx(expected)


@pytest.mark.parametrize(
    "expression,error",
    [
        ("", EmptyExpressionError),
        ("   ", EmptyExpressionError),
        ("1 / 0", DivisionByZeroError),
        ("(1 + 2", MismatchedParenthesesError),
        ("1 + 2)", MismatchedParenthesesError),
        ("1..2", InvalidNumberError),
        ("3.", InvalidNumberError),
        ("1 +", InvalidExpressionError),
        ("abc", InvalidExpressionError),
        ("1" + "0" * 400, CalculatorOverflowError),
        ("1" + "0" * 200 + " * 1" + "0" * 200, CalculatorOverflowError),
    ],
)
def test_evaluate_errors(expression: str, error: type[CalculatorError]) -> None:
    with pytest.raises(error) as info:
        evaluate(expression)
    assert isinstance(info.value, ValueError)


def test_division_by_zero_is_also_zero_division() -> None:
    with pytest.raises(ZeroDivisionError):
        evaluate("4 / (2 - 2)")


@pytest.mark.parametrize(
    "value,text",
    [(14.0, "14"), (2.5, "2.5"), (-3.0, "-3"), (0.1 + 0.2, "0.3"), (1 / 3, "0.3333333333"), (1e20, "1e+20")],
)
def test_format_value(value: float, text: str) -> None:
    assert format_value(value) == text


@pytest.mark.parametrize(
    "value,text",
    [
        (1e16, "10000000000000000"),
        (1e-20, "0.00000000000000000001"),
        (2.5, "2.5"),
        (-3.0, "-3"),
        (-0.0, "0"),
        (1 / 3, "0.3333333333333333"),
    ],
)
def test_format_plain_never_uses_an_exponent(value: float, text: str) -> None:
    assert format_plain(value) == text
    assert evaluate(text) == value


def _feed(session: CalculatorSession, *values: str) -> None:
    for value in values:
        assert session.apply(value) is True


def test_session_builds_and_evaluates_expression() -> None:
    session = CalculatorSession()
    assert session.display == "0"

    _feed(session, "1", "2", "+", "3")
    assert session.input == "12 + 3"
    assert session.display == "12 + 3"

    _feed(session, "=")
    assert session.output == "15"
    assert session.input == ""
    assert session.display == "15"
    assert session.history() == ["12 + 3 = 15"]


def test_operator_after_result_continues_from_it() -> None:
    session = CalculatorSession()
    _feed(session, "1", "5", "=", "*", "2", "=")
    assert session.output == "30"
    assert session.history()[-1] == "15 * 2 = 30"


def test_operator_after_large_result_continues_without_exponent() -> None:
    session = CalculatorSession()
    _feed(session, *"99999999*99999999=")
    assert "e" in session.output

    _feed(session, "+", "1", "=")
    assert session.error is None
    assert float(session.output) == pytest.approx(99999999**2 + 1, rel=1e-12)
    expression = session.history()[-1].split(" = ")[0]
    assert "e" not in expression
    assert expression.endswith(" + 1")


def test_decimal_point_rules() -> None:
    session = CalculatorSession()
    _feed(session, ".", ".", "5")
    assert session.input == "0.5"
    _feed(session, "+", ".")
    assert session.input == "0.5 + 0."
    _feed(session, "+")
    assert session.input == "0.5 + 0 + "


def test_operator_replaces_pending_operator() -> None:
    session = CalculatorSession()
    _feed(session, "1", "+", "*")
    assert session.input == "1 * "


def test_leading_minus_and_ignored_operators() -> None:
    session = CalculatorSession()
    _feed(session, "+")
    assert session.input == ""
    _feed(session, "-", "+", "5")
    assert session.input == "-5"
    _feed(session, "+", "2", "=")
    assert session.output == "-3"


def test_error_is_reported_and_cleared_by_next_key() -> None:
    session = CalculatorSession()
    _feed(session, "1", "/", "0", "=")
    assert session.error == "division by zero"
    assert session.input == "1 / 0"
    assert session.output == "0"
    assert session.history() == []

    _feed(session, "backspace")
    assert session.error is None
    assert session.input == "1 / "


def test_clear_entry_backspace_and_clear() -> None:
    session = CalculatorSession()
    _feed(session, "1", "2", "+", "3", "4")
    _feed(session, "CE")
    assert session.input == "12 + "
    _feed(session, "backspace")
    assert session.input == "12"
    _feed(session, "backspace")
    assert session.input == "1"

    _feed(session, "=", "C")
    assert session.input == ""
    assert session.output == "0"
    _feed(session, "+")
    assert session.input == ""


def test_unknown_value_is_rejected() -> None:
    session = CalculatorSession()
    assert session.apply("%") is False
    assert session.evaluate() is None


def test_history_is_bounded() -> None:
    session = CalculatorSession(history_limit=2)
    for digit in ("1", "2", "3"):
        _feed(session, digit, "=")
    assert session.history() == ["2 = 2", "3 = 3"]

    with pytest.raises(ValueError):
        CalculatorSession(history_limit=0)
