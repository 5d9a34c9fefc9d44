"""Deterministic calculator core: expression evaluation and the entry buffer.

The keypad feeds button values (``"7"``, ``"+"``, ``"="``, ``"C"`` ...) into a
``CalculatorSession``; the session keeps the typed expression, evaluates it on
``=`` and remembers recent results.  Evaluation is a small recursive-descent
parser supporting ``+ - * /``, unary signs and parentheses with the usual
precedence.  Nothing here depends on pygame.
"""

from __future__ import annotations

import logging
import math
import operator
from collections import deque
from collections.abc import Callable
from decimal import Decimal

logger = logging.getLogger(__name__)


class CalculatorError(ValueError):
    """Base class for evaluation failures; the message is shown to the user."""


class EmptyExpressionError(CalculatorError):
    def __init__(self) -> None:
        super().__init__("empty expression")


class InvalidExpressionError(CalculatorError):
    pass


class InvalidNumberError(CalculatorError):
    pass


class MismatchedParenthesesError(CalculatorError):
    def __init__(self) -> None:
        super().__init__("mismatched parentheses")


class DivisionByZeroError(CalculatorError, ZeroDivisionError):
    def __init__(self) -> None:
        super().__init__("division by zero")


class CalculatorOverflowError(CalculatorError, OverflowError):
    def __init__(self) -> None:
        super().__init__("arithmetic overflow")


def _divide(a: float, b: float) -> float:
    if b == 0:
        raise DivisionByZeroError()
    return a / b


_BINARY_OPS: dict[str, Callable[[float, float], float]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": _divide,
}

OPERATORS = frozenset(_BINARY_OPS)


def validate_number(value: float) -> float:
    if math.isnan(value):
        raise InvalidNumberError("invalid number format")
    if math.isinf(value):
        raise CalculatorOverflowError()
    return value


class ExpressionParser:
    """Single-use parser state over one expression string."""

    def __init__(self, expression: str) -> None:
        self._text = expression.replace(" ", "")
        self._pos = 0

    def parse(self) -> float:
        if self._text == "":
            raise EmptyExpressionError()
        value = self._expression()
        if self._pos < len(self._text):
            if self._peek() == ")":
                raise MismatchedParenthesesError()
            raise InvalidExpressionError(f"unexpected {self._peek()!r} at position {self._pos}")
        return value

    def _peek(self) -> str:
        return self._text[self._pos] if self._pos < len(self._text) else ""

    def _at_digit(self) -> bool:
        ch = self._peek()
        return ch != "" and ch in "0123456789"

    def _expression(self) -> float:
        left = self._term()
        while self._peek() in ("+", "-"):
            op = self._peek()
            self._pos += 1
            left = validate_number(_BINARY_OPS[op](left, self._term()))
        return left

    def _term(self) -> float:
        left = self._factor()
        while self._peek() in ("*", "/"):
            op = self._peek()
            self._pos += 1
            left = validate_number(_BINARY_OPS[op](left, self._factor()))
        return left

    def _factor(self) -> float:
        ch = self._peek()
        if ch in ("+", "-"):
            self._pos += 1
            value = self._factor()
            return -value if ch == "-" else value
        if ch == "(":
            self._pos += 1
            value = self._expression()
            if self._peek() != ")":
                raise MismatchedParenthesesError()
            self._pos += 1
            return value
        return self._number()

    def _number(self) -> float:
        start = self._pos
        while self._at_digit():
            self._pos += 1
        if self._peek() == ".":
            self._pos += 1
            if not self._at_digit():
                raise InvalidNumberError(f"invalid number format at position {start}")
            while self._at_digit():
                self._pos += 1
        if self._pos == start:
            raise InvalidExpressionError(f"expected number at position {self._pos}")
        return validate_number(float(self._text[start : self._pos]))


def evaluate(expression: str) -> float:
    return ExpressionParser(expression).parse()


def format_value(value: float) -> str:
    if value == int(value) and abs(value) < 1e15:
        return str(int(value))
    text = f"{value:.10g}"
    if "e" not in text and "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_plain(value: float) -> str:
    """Positional form of ``value`` with no exponent, for re-entry as an operand."""
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


class CalculatorSession:
    """Entry buffer + last result, driven by keypad values."""

    def __init__(self, *, history_limit: int = 20) -> None:
        if history_limit < 1:
            raise ValueError("history_limit must be >= 1")
        self._input = ""
        self._output = "0"
        self._error: str | None = None
        self._last_result: float | None = None
        self._history: deque[str] = deque(maxlen=int(history_limit))

    @property
    def input(self) -> str:
        return self._input

    @property
    def output(self) -> str:
        return self._output

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def display(self) -> str:
        return self._input if self._input else self._output

    def history(self) -> list[str]:
        return list(self._history)

    def apply(self, value: str) -> bool:
        """Apply one keypad value. Returns False for values the session does not know."""

        self._error = None
        if len(value) == 1 and value.isdigit():
            self._input += value
        elif value == ".":
            self._append_point()
        elif value in OPERATORS:
            self._append_operator(value)
        elif value == "=":
            self.evaluate()
        elif value == "C":
            self.clear()
        elif value == "CE":
            self.clear_entry()
        elif value == "backspace":
            self.backspace()
        else:
            return False
        return True

    def evaluate(self) -> float | None:
        if self._input == "":
            return None
        expression = self._input.strip()
        try:
            result = evaluate(expression)
        except CalculatorError as exc:
            logger.debug("evaluation of %r failed: %s", expression, exc)
            self._error = str(exc)
            return None
        self._output = format_value(result)
        self._last_result = result
        self._history.append(f"{expression} = {self._output}")
        self._input = ""
        return result

    def clear(self) -> None:
        self._input = ""
        self._output = "0"
        self._error = None
        self._last_result = None

    def clear_entry(self) -> None:
        self._input = self._input.rstrip("0123456789.")

    def backspace(self) -> None:
        if self._input.endswith(" ") and len(self._input) >= 3:
            # Drop a whole " op " token.
            self._input = self._input[:-3]
        else:
            self._input = self._input[:-1]

    def _append_point(self) -> None:
        if "." in self._current_number():
            return
        if self._input == "" or not self._input[-1].isdigit():
            self._input += "0."
        else:
            self._input += "."

    def _append_operator(self, op: str) -> None:
        if self._input == "":
            if self._last_result is not None:
                # Continue from the previous result.
                self._input = format_plain(self._last_result)
            elif op == "-":
                self._input = "-"
                return
            else:
                return
        if self._input == "-":
            return
        if self._input.endswith(" "):
            self._input = self._input[:-3]
        elif self._input.endswith("."):
            self._input = self._input[:-1]
        self._input += f" {op} "

    def _current_number(self) -> str:
        token = ""
        for ch in reversed(self._input):
            if ch.isdigit() or ch == ".":
                token = ch + token
            else:
                break
        return token
