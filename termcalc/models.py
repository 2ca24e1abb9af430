"""Data models for the termcalc expression engine.

Token variants, OperatorKind, ErrorKind and the EvalError family: the typed
structures that flow through tokenizer → evaluator → session.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class OperatorKind(str, Enum):
    """Operator symbols understood by the tokenizer."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    POWER = "^"
    PERCENT = "%"


@dataclass(frozen=True)
class Number:
    value: float


@dataclass(frozen=True)
class Operator:
    kind: OperatorKind


@dataclass(frozen=True)
class LeftParen:
    pass


@dataclass(frozen=True)
class RightParen:
    pass


Token = Union[Number, Operator, LeftParen, RightParen]


class ErrorKind(str, Enum):
    """Ways an expression can fail to evaluate."""

    UNEXPECTED_CHARACTER = "unexpected-character"
    UNBALANCED_PARENTHESES = "unbalanced-parentheses"
    DIVISION_BY_ZERO = "division-by-zero"
    MALFORMED_EXPRESSION = "malformed-expression"


# Short texts shown on the calculator display in place of a result.
_LABELS: dict[ErrorKind, str] = {
    ErrorKind.UNEXPECTED_CHARACTER: "Invalid character",
    ErrorKind.UNBALANCED_PARENTHESES: "Unbalanced parentheses",
    ErrorKind.DIVISION_BY_ZERO: "Division by zero",
    ErrorKind.MALFORMED_EXPRESSION: "Syntax error",
}


class EvalError(Exception):
    """Base class for every tokenizer/evaluator failure."""

    kind: ErrorKind = ErrorKind.MALFORMED_EXPRESSION

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.label)
        self.message = message or self.label

    @property
    def label(self) -> str:
        return _LABELS[self.kind]


class UnexpectedCharacter(EvalError, ValueError):
    kind = ErrorKind.UNEXPECTED_CHARACTER


class UnbalancedParentheses(EvalError, ValueError):
    kind = ErrorKind.UNBALANCED_PARENTHESES


class DivisionByZero(EvalError, ZeroDivisionError):
    kind = ErrorKind.DIVISION_BY_ZERO


class MalformedExpression(EvalError, ValueError):
    kind = ErrorKind.MALFORMED_EXPRESSION
