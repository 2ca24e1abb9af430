"""termcalc — interactive terminal calculator.

Keypad-style calculator with a precedence-climbing expression engine:
operator precedence, parentheses, unary sign and context-aware percent
(``200 + 10% = 220``, ``200 * 10% = 20``, ``50% = 0.5``).

Usage:
    python -m termcalc run                      # Interactive calculator
    python -m termcalc eval "200 + 10%"         # One-shot evaluation
    python -m termcalc keys                     # Show key bindings
    python -m termcalc bench "2 ^ 3 ^ 2"        # Time the engine
"""

from termcalc.evaluator import calculate, evaluate
from termcalc.models import EvalError, ErrorKind
from termcalc.tokenizer import tokenize

__all__ = ["calculate", "evaluate", "tokenize", "EvalError", "ErrorKind"]
