"""Rich renderables for termcalc: calculator face, key bindings and bench tables.

The calculator face mirrors the keypad layout: elapsed-time line, display
panel, a 5x5 button grid and a quit hint. Rich tables have no row/column
spans, so a wide or tall button fills each covered cell with its colour and
prints its label in the first one.
"""

from __future__ import annotations

import statistics
from dataclasses import dataclass
from typing import Optional

from rich import box
from rich.align import Align
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from termcalc.session import KEY_BINDINGS, Calculator, Measurement, format_result


@dataclass(frozen=True)
class Theme:
    """Colour theme, as rich colour strings."""

    background: str = "rgb(20,20,30)"
    display_bg: str = "rgb(50,50,60)"
    border: str = "rgb(80,80,90)"
    text: str = "white"
    num_button_fg: str = "white"
    op_button_fg: str = "rgb(20,20,30)"
    num_button_bg: str = "rgb(60,70,80)"
    op_button_bg: str = "rgb(255,159,67)"
    equal_button_bg: str = "rgb(255,99,132)"
    active_button_bg: str = "white"


# (label, column, row, width, height)
BUTTONS: list[tuple[str, int, int, int, int]] = [
    ("C", 0, 0, 1, 1), ("(", 1, 0, 1, 1), (")", 2, 0, 1, 1), ("/", 3, 0, 1, 1), ("%", 4, 0, 1, 1),
    ("7", 0, 1, 1, 1), ("8", 1, 1, 1, 1), ("9", 2, 1, 1, 1), ("*", 3, 1, 1, 1), ("^", 4, 1, 1, 1),
    ("4", 0, 2, 1, 1), ("5", 1, 2, 1, 1), ("6", 2, 2, 1, 1), ("-", 3, 2, 1, 1), ("+/-", 4, 2, 1, 1),
    ("1", 0, 3, 1, 1), ("2", 1, 3, 1, 1), ("3", 2, 3, 1, 1), ("+", 3, 3, 1, 2),
    ("0", 0, 4, 2, 1), (".", 2, 4, 1, 1), ("=", 4, 3, 1, 2),
]
GRID_SIZE = 5

_OPERATOR_LABELS = {"C", "/", "*", "-", "+", "%", "^", "+/-", "(", ")"}


def button_grid() -> list[list[tuple[str, bool]]]:
    """Lay BUTTONS out on the grid as (label, is_first_cell) per cell."""
    grid: list[list[tuple[str, bool]]] = [[("", False)] * GRID_SIZE for _ in range(GRID_SIZE)]
    for label, x, y, w, h in BUTTONS:
        for row in range(y, y + h):
            for col in range(x, x + w):
                grid[row][col] = (label, row == y and col == x)
    return grid


def _button_style(label: str, theme: Theme, active: bool) -> str:
    if active:
        return f"{theme.op_button_fg} on {theme.active_button_bg}"
    if label in _OPERATOR_LABELS:
        return f"{theme.op_button_fg} on {theme.op_button_bg}"
    if label == "=":
        return f"{theme.op_button_fg} on {theme.equal_button_bg}"
    return f"{theme.num_button_fg} on {theme.num_button_bg}"


def elapsed_text(calc: Calculator) -> str:
    if calc.last_duration is None:
        return "Waiting for calculation..."
    return f"Last operation: {round(calc.last_duration * 1e6)} µs"


def render_calculator(
    calc: Calculator,
    theme: Optional[Theme] = None,
    now: Optional[float] = None,
) -> RenderableType:
    """Build the full calculator face for one frame."""
    theme = theme or Theme()

    timing = Text(elapsed_text(calc), style=theme.border, justify="right")
    display = Panel(
        Text(calc.display, justify="right"),
        style=f"{theme.text} on {theme.display_bg}",
        border_style=theme.border,
        box=box.SQUARE,
    )

    keypad = Table.grid(expand=True)
    for _ in range(GRID_SIZE):
        keypad.add_column(ratio=1)
    for row in button_grid():
        cells = []
        for label, first in row:
            style = _button_style(label, theme, calc.is_active(label, now))
            cells.append(Panel(
                Align.center(Text(label if first else "")),
                style=style,
                border_style=theme.background,
                box=box.SQUARE,
            ))
        keypad.add_row(*cells)

    hint = Text(" Press 'q' to quit", style=theme.border)
    return Group(timing, display, keypad, hint)


def render_keys() -> Table:
    """Table of keyboard keys and the buttons they press."""
    table = Table(title="Key Bindings", show_header=True, header_style="bold")
    table.add_column("Key", style="green", min_width=10)
    table.add_column("Button", justify="center")

    for key, label in KEY_BINDINGS.items():
        table.add_row(key, label)
    table.add_row("backspace", "[dim]delete last input[/dim]")
    table.add_row("q", "[dim]quit[/dim]")
    return table


def _fmt_us(seconds: float) -> str:
    """Format a duration in microseconds."""
    return f"{seconds * 1e6:.1f} µs"


def render_bench(expression: str, measurements: list[Measurement], precision: int = 8) -> Table:
    """Summarise repeated timings of one expression."""
    table = Table(title=f"Bench: {expression}", show_header=True, header_style="bold")
    table.add_column("Metric", style="dim", min_width=12)
    table.add_column("Value", justify="right", min_width=12)

    if not measurements:
        table.add_row("Runs", "0")
        return table

    first = measurements[0]
    if first.ok:
        table.add_row("Result", f"[green]{format_result(first.value, precision)}[/green]")
    else:
        table.add_row("Result", f"[red]{first.error.label}[/red]")

    durations = [m.elapsed_s for m in measurements]
    table.add_row("Runs", str(len(durations)))
    table.add_row("Min", _fmt_us(min(durations)))
    table.add_row("Mean", _fmt_us(statistics.fmean(durations)))
    table.add_row("Median", _fmt_us(statistics.median(durations)))
    table.add_row("Max", _fmt_us(max(durations)))
    return table
