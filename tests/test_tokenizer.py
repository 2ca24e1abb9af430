"""Tests for the expression tokenizer.

Covers numbers, operators, whitespace, unary minus folding and the two
lexical error kinds.
"""

import pytest

from termcalc.models import (
    ErrorKind,
    LeftParen,
    MalformedExpression,
    Number,
    Operator,
    OperatorKind,
    RightParen,
    UnexpectedCharacter,
)
from termcalc.tokenizer import tokenize

ADD = Operator(OperatorKind.ADD)
SUB = Operator(OperatorKind.SUBTRACT)
MUL = Operator(OperatorKind.MULTIPLY)
PCT = Operator(OperatorKind.PERCENT)


# --- Basic lexing (5 tests) ---

def test_empty_input():
    assert tokenize("") == ()
    assert tokenize("   ") == ()


def test_simple_expression():
    assert tokenize("2 + 3") == (Number(2.0), ADD, Number(3.0))


def test_all_operators_and_parens():
    tokens = tokenize("(1+2)*3/4^5%")
    assert tokens == (
        LeftParen(), Number(1.0), ADD, Number(2.0), RightParen(),
        MUL, Number(3.0), Operator(OperatorKind.DIVIDE), Number(4.0),
        Operator(OperatorKind.POWER), Number(5.0), PCT,
    )


def test_decimal_numbers():
    assert tokenize("3.14 .5 2.") == (Number(3.14), Number(0.5), Number(2.0))


def test_result_is_immutable_tuple():
    tokens = tokenize("1 + 1")
    assert isinstance(tokens, tuple)


# --- Unary minus (5 tests) ---

def test_leading_minus_folds_into_number():
    assert tokenize("-5 + 3") == (Number(-5.0), ADD, Number(3.0))


def test_minus_after_operator_folds():
    assert tokenize("5 - -3") == (Number(5.0), SUB, Number(-3.0))


def test_minus_after_left_paren_folds():
    assert tokenize("(-2)") == (LeftParen(), Number(-2.0), RightParen())


def test_minus_after_percent_is_binary():
    assert tokenize("50% - 1") == (Number(50.0), PCT, SUB, Number(1.0))


def test_minus_after_right_paren_is_binary():
    assert tokenize("(1) - 1") == (LeftParen(), Number(1.0), RightParen(), SUB, Number(1.0))


# --- Errors (4 tests) ---

def test_unexpected_character():
    with pytest.raises(UnexpectedCharacter) as exc:
        tokenize("2 & 3")
    assert exc.value.kind == ErrorKind.UNEXPECTED_CHARACTER
    assert "'&'" in exc.value.message


def test_two_decimal_points():
    with pytest.raises(MalformedExpression):
        tokenize("1.2.3")


def test_lone_decimal_point():
    with pytest.raises(MalformedExpression):
        tokenize("1 + .")


def test_dangling_unary_minus():
    with pytest.raises(MalformedExpression):
        tokenize("5 * -")
