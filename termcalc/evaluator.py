"""Precedence-climbing evaluator for calculator token sequences.

One parse level per precedence tier, lowest first:

    expression := term (("+" | "-") term)*
    term       := power (("*" | "/") power)*
    power      := postfix ("^" power)?
    postfix    := primary "%"?
    primary    := NUMBER | "(" expression ")"

Percent is context aware. The postfix level hands back an operand flagged as
a percent; the additive level applies it relative to its left operand
(``200 + 10% = 220``), every other consumer treats it as ``value / 100``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence

from termcalc.models import (
    DivisionByZero,
    LeftParen,
    MalformedExpression,
    Number,
    Operator,
    OperatorKind,
    RightParen,
    Token,
    UnbalancedParentheses,
)
from termcalc.tokenizer import tokenize


@dataclass(frozen=True)
class _Operand:
    """A parsed value, remembering whether it was written as ``x%``."""

    value: float
    percent: bool = False

    @property
    def resolved(self) -> float:
        return self.value / 100.0 if self.percent else self.value


# Each "(" costs a handful of stack frames in _Parser
MAX_NESTING = 100


def _check_balance(tokens: Sequence[Token]) -> None:
    depth = 0
    for token in tokens:
        if isinstance(token, LeftParen):
            depth += 1
            if depth > MAX_NESTING:
                raise MalformedExpression(f"Parentheses nested deeper than {MAX_NESTING}")
        elif isinstance(token, RightParen):
            depth -= 1
            if depth < 0:
                raise UnbalancedParentheses("')' without matching '('")
    if depth:
        raise UnbalancedParentheses(f"{depth} unclosed '('")


def _power(base: float, exponent: float) -> float:
    """Float pow with 0^0 = 1 and zero-to-a-negative treated as 1/0."""
    if base == 0.0 and exponent < 0:
        raise DivisionByZero(f"0 ^ {exponent:g} divides by zero")
    try:
        return math.pow(base, exponent)
    except ValueError:
        raise MalformedExpression(f"{base:g} ^ {exponent:g} has no real value") from None
    except OverflowError:
        odd = exponent.is_integer() and int(exponent) % 2 == 1
        return math.copysign(math.inf, base) if odd else math.inf


class _Parser:
    """Single-use recursive descent over an immutable token sequence."""

    def __init__(self, tokens: Sequence[Token]) -> None:
        self.tokens = tokens
        self.pos = 0

    def _peek(self) -> Optional[Token]:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def _peek_operator(self, *kinds: OperatorKind) -> Optional[OperatorKind]:
        token = self._peek()
        if isinstance(token, Operator) and token.kind in kinds:
            return token.kind
        return None

    def parse(self) -> float:
        result = self._expression()
        token = self._peek()
        if token is not None:
            raise MalformedExpression(f"Unexpected {_describe(token)} at token {self.pos}")
        return result.resolved

    def _expression(self) -> _Operand:
        left = self._term()
        while True:
            op = self._peek_operator(OperatorKind.ADD, OperatorKind.SUBTRACT)
            if op is None:
                return left
            self.pos += 1
            base = left.resolved
            right = self._term()
            # "200 + 10%" means "200 plus 10% of 200"
            delta = base * right.value / 100.0 if right.percent else right.value
            left = _Operand(base + delta if op == OperatorKind.ADD else base - delta)

    def _term(self) -> _Operand:
        left = self._power()
        while True:
            op = self._peek_operator(OperatorKind.MULTIPLY, OperatorKind.DIVIDE)
            if op is None:
                return left
            self.pos += 1
            base = left.resolved
            right = self._power().resolved
            if op == OperatorKind.MULTIPLY:
                left = _Operand(base * right)
            elif right == 0.0:
                raise DivisionByZero(f"{base:g} / 0")
            else:
                left = _Operand(base / right)

    def _power(self) -> _Operand:
        base = self._postfix()
        if self._peek_operator(OperatorKind.POWER) is None:
            return base
        self.pos += 1
        # Recursing into _power (not _postfix) makes ^ right-associative
        exponent = self._power()
        return _Operand(_power(base.resolved, exponent.resolved))

    def _postfix(self) -> _Operand:
        operand = self._primary()
        if self._peek_operator(OperatorKind.PERCENT) is None:
            return operand
        self.pos += 1
        if self._peek_operator(OperatorKind.PERCENT) is not None:
            raise MalformedExpression("Chained percent signs")
        return _Operand(operand.value, percent=True)

    def _primary(self) -> _Operand:
        token = self._peek()
        if isinstance(token, Number):
            self.pos += 1
            return _Operand(token.value)
        if isinstance(token, LeftParen):
            self.pos += 1
            inner = self._expression()
            if not isinstance(self._peek(), RightParen):
                raise MalformedExpression(f"Expected ')' at token {self.pos}")
            self.pos += 1
            # A group is a plain value: "(10%)" is 0.1 wherever it appears
            return _Operand(inner.resolved)
        if token is None:
            raise MalformedExpression("Expression ends where an operand is expected")
        raise MalformedExpression(f"Expected an operand, found {_describe(token)} at token {self.pos}")


def _describe(token: Token) -> str:
    if isinstance(token, Number):
        return f"number {token.value:g}"
    if isinstance(token, Operator):
        return f"operator {token.kind.value!r}"
    if isinstance(token, LeftParen):
        return "'('"
    return "')'"


def evaluate(tokens: Sequence[Token]) -> float:
    """Evaluate a token sequence to a float.

    Raises:
        MalformedExpression: empty input, missing operands, chained ``%``,
            adjacent operands, nesting too deep, or no real result.
        UnbalancedParentheses: unmatched ``(`` or ``)``.
        DivisionByZero: any division by zero, including ``x / 0%``.
    """
    if not tokens:
        raise MalformedExpression("Empty expression")
    _check_balance(tokens)
    try:
        result = _Parser(tokens).parse()
    except RecursionError:
        # Long "^" chains recurse too
        raise MalformedExpression("Expression nested too deeply") from None
    if math.isnan(result):
        raise MalformedExpression("Expression has no real value")
    return result


def calculate(expression: str) -> float:
    """Tokenize and evaluate a display string in one step."""
    return evaluate(tokenize(expression))
