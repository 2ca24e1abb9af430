"""Calculator session — display state between the keypad and the engine.

Button presses edit a display string; "=" hands that string to the engine,
times the call and replaces the display with the formatted result (or an
error label). The session never keeps anything the engine computed besides
the display text and the last duration.
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from typing import Optional

from termcalc.evaluator import calculate
from termcalc.models import EvalError

DIGITS = "0123456789"
BINARY_OPERATORS = ("+", "-", "*", "/", "^")

# Keyboard key → button label.  Anything else is ignored.
KEY_BINDINGS: dict[str, str] = {
    **{d: d for d in DIGITS},
    "(": "(",
    ")": ")",
    "+": "+",
    "-": "-",
    "*": "*",
    "/": "/",
    "^": "^",
    "%": "%",
    ".": ".",
    "enter": "=",
    "esc": "C",
}
QUIT_COMMANDS = ("q", "quit", "exit")


def format_result(value: float, precision: int = 8) -> str:
    """Format a result for the display, trimming trailing zeros.

    NaN shows as "Error"; integral values show without decimals.
    """
    if math.isnan(value):
        return "Error"
    if value == 0:
        # Avoid "-0"
        return "0"
    if math.isinf(value) or value.is_integer():
        return f"{value:.0f}"
    text = f"{value:.{precision}f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


@dataclass
class Measurement:
    """Outcome of one timed evaluation."""

    expression: str
    value: Optional[float] = None
    error: Optional[EvalError] = None
    elapsed_s: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def elapsed_us(self) -> int:
        return round(self.elapsed_s * 1e6)


def measure(expression: str) -> Measurement:
    """Evaluate ``expression`` and record the wall-clock time it took.

    Engine errors are captured in the measurement rather than raised.
    """
    start = time.perf_counter()
    try:
        value = calculate(expression)
    except EvalError as e:
        elapsed = time.perf_counter() - start
        return Measurement(expression=expression, error=e, elapsed_s=elapsed)
    elapsed = time.perf_counter() - start
    return Measurement(expression=expression, value=value, elapsed_s=elapsed)


def _split_trailing_number(display: str) -> tuple[str, str]:
    """Split the display into (head, trailing digits-and-dot run)."""
    i = len(display)
    while i > 0 and display[i - 1] in DIGITS + ".":
        i -= 1
    return display[:i], display[i:]


@dataclass
class Calculator:
    """State of one interactive calculator."""

    precision: int = 8
    flash_ms: int = 100
    display: str = "0"
    result_shown: bool = False
    last_duration: Optional[float] = None
    last_measurement: Optional[Measurement] = None
    active_button: Optional[tuple[str, float]] = field(default=None, repr=False)

    # --- keypad -----------------------------------------------------------

    def press(self, label: str) -> None:
        """Apply one keypad button."""
        self.active_button = (label, time.monotonic())

        if label in DIGITS or label in ("(", ")"):
            self._append_operand(label)
        elif label == ".":
            _, number = _split_trailing_number(self.display)
            if "." not in number:
                self.display += "."
        elif label == "C":
            self.clear()
        elif label == "+/-":
            self._toggle_sign()
        elif label == "%":
            if self.display and self.display[-1] in DIGITS + ")":
                self.display += "%"
        elif label in BINARY_OPERATORS:
            self.display = self.display.strip() + f" {label} "
            self.result_shown = False
        elif label == "=":
            self.equals()

    def _append_operand(self, label: str) -> None:
        if self.result_shown:
            self.display = label
            self.result_shown = False
        elif self.display == "0":
            self.display = label
        else:
            self.display += label

    def _toggle_sign(self) -> None:
        if self.result_shown and self.last_measurement and not self.last_measurement.ok:
            return
        head, number = _split_trailing_number(self.display)
        # A "-" is a sign when it starts the display or follows padding/"("
        if head.endswith("-") and (len(head) == 1 or head[-2] in " ("):
            self.display = head[:-1] + number
        elif self.display == "0" or (not number and head[-1:] in (")", "%")):
            return
        else:
            self.display = f"{head}-{number}"

    def clear(self) -> None:
        self.display = "0"
        self.result_shown = False
        self.last_duration = None
        self.last_measurement = None

    def equals(self) -> Measurement:
        """Evaluate the display and show the result or error label."""
        m = measure(self.display)
        self.last_measurement = m
        self.last_duration = m.elapsed_s
        if m.ok:
            self.display = format_result(m.value, self.precision)
        else:
            self.display = m.error.label
        self.result_shown = True
        return m

    def backspace(self) -> None:
        if self.result_shown:
            self.display = "0"
            self.result_shown = False
            return
        text = self.display.rstrip()
        if text != self.display:
            # Trailing padding means the last thing typed was an operator
            text = text[:-1].rstrip()
        else:
            text = text[:-1]
        self.display = text or "0"

    # --- keyboard ---------------------------------------------------------

    def handle_key(self, key: str) -> bool:
        """Dispatch a keyboard key. Returns False for unbound keys."""
        if key == "backspace":
            self.active_button = None
            self.backspace()
            return True
        label = KEY_BINDINGS.get(key)
        if label is None:
            return False
        self.press(label)
        return True

    def feed_line(self, line: str) -> bool:
        """Apply one line of interactive input. Returns False to quit.

        Command words act alone; any other line is typed key by key and
        finished with Enter. Spaces are skipped since operators add their own.
        """
        command = line.strip().lower()
        if command in QUIT_COMMANDS:
            return False
        if command in ("c", "esc"):
            self.handle_key("esc")
        elif command in ("b", "bs", "backspace"):
            self.handle_key("backspace")
        elif command in ("n", "+/-"):
            self.press("+/-")
        else:
            for ch in line:
                if not ch.isspace():
                    self.handle_key(ch)
            self.handle_key("enter")
        return True

    def is_active(self, label: str, now: Optional[float] = None) -> bool:
        """Whether ``label`` should still be drawn highlighted."""
        if not self.active_button:
            return False
        active, pressed_at = self.active_button
        now = time.monotonic() if now is None else now
        return active == label and (now - pressed_at) * 1000 <= self.flash_ms
