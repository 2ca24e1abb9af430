"""Lexer for calculator expressions.

Turns the display string into a tuple of tokens. The unary minus is resolved
here rather than in the parser: a ``-`` in operand position (start of input,
after a binary operator, after ``(``) becomes the sign of the next number.
"""

from __future__ import annotations

import math

from termcalc.models import (
    LeftParen,
    MalformedExpression,
    Number,
    Operator,
    OperatorKind,
    RightParen,
    Token,
    UnexpectedCharacter,
)

_OPERATORS = {kind.value: kind for kind in OperatorKind}
_NUMBER_CHARS = "0123456789."


def _read_number(text: str, start: int) -> tuple[float, int]:
    """Return the number starting at ``start`` and the index after it."""
    end = start
    while end < len(text) and text[end] in _NUMBER_CHARS:
        end += 1
    literal = text[start:end]
    if literal.count(".") > 1 or literal == ".":
        raise MalformedExpression(f"Invalid number: {literal!r}")
    value = float(literal)
    if math.isinf(value):
        raise MalformedExpression(f"Number too large at position {start}")
    return value, end


def tokenize(text: str) -> tuple[Token, ...]:
    """Split ``text`` into tokens in left-to-right order.

    Raises:
        UnexpectedCharacter: for anything outside digits, ``.``, operators,
            parentheses and whitespace.
        MalformedExpression: for numbers with more than one decimal point or
            a unary minus with no number after it.
    """
    tokens: list[Token] = []
    # True wherever the grammar needs an operand next
    expect_operand = True
    i = 0

    while i < len(text):
        ch = text[i]

        if ch.isspace():
            i += 1
            continue

        if ch in _NUMBER_CHARS:
            value, i = _read_number(text, i)
            tokens.append(Number(value))
            expect_operand = False
            continue

        if ch == "-" and expect_operand:
            # Skip the padding the keypad puts around operators: "5 - - 3"
            j = i + 1
            while j < len(text) and text[j].isspace():
                j += 1
            if j >= len(text) or text[j] not in _NUMBER_CHARS:
                raise MalformedExpression(f"Dangling sign at position {i}")
            value, i = _read_number(text, j)
            tokens.append(Number(-value))
            expect_operand = False
            continue

        if ch in _OPERATORS:
            kind = _OPERATORS[ch]
            tokens.append(Operator(kind))
            # Percent is postfix: what follows it is a binary operator
            expect_operand = kind != OperatorKind.PERCENT
        elif ch == "(":
            tokens.append(LeftParen())
            expect_operand = True
        elif ch == ")":
            tokens.append(RightParen())
            expect_operand = False
        else:
            raise UnexpectedCharacter(f"Unexpected character {ch!r} at position {i}")
        i += 1

    return tuple(tokens)
