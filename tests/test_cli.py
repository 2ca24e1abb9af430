"""Tests for the typer CLI and the rich renderables behind it."""

import pytest
from rich.console import Console
from typer.testing import CliRunner

from termcalc.__main__ import app
from termcalc.render import BUTTONS, GRID_SIZE, button_grid, elapsed_text, render_bench, render_calculator
from termcalc.session import Calculator, measure

runner = CliRunner()


def _render(renderable) -> str:
    console = Console(width=60, record=True, color_system=None)
    console.print(renderable)
    return console.export_text()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("TERMCALC_PRECISION", "TERMCALC_FLASH_MS", "TERMCALC_BENCH_RUNS"):
        monkeypatch.delenv(name, raising=False)


# --- eval command (7 tests) ---

def test_eval_prints_result():
    result = runner.invoke(app, ["eval", "200 + 10%"])
    assert result.exit_code == 0
    assert result.stdout.splitlines()[0] == "220"


def test_eval_precision_option():
    result = runner.invoke(app, ["eval", "1 / 3", "--precision", "2"])
    assert result.exit_code == 0
    assert result.stdout.splitlines()[0] == "0.33"


def test_eval_precision_from_env(monkeypatch):
    monkeypatch.setenv("TERMCALC_PRECISION", "1")
    result = runner.invoke(app, ["eval", "2 / 3"])
    assert result.stdout.splitlines()[0] == "0.7"


def test_eval_leading_negative_after_separator():
    result = runner.invoke(app, ["eval", "--", "-5 + 3"])
    assert result.exit_code == 0
    assert result.stdout.splitlines()[0] == "-2"


def test_eval_error_exits_nonzero():
    result = runner.invoke(app, ["eval", "5 / 0"])
    assert result.exit_code == 1


def test_eval_deep_nesting_exits_nonzero():
    result = runner.invoke(app, ["eval", "(" * 250 + "1" + ")" * 250])
    assert result.exit_code == 1
    assert not isinstance(result.exception, RecursionError)


def test_invalid_setting_exits_2(monkeypatch):
    monkeypatch.setenv("TERMCALC_PRECISION", "lots")
    result = runner.invoke(app, ["eval", "1 + 1"])
    assert result.exit_code == 2


# --- other commands (4 tests) ---

def test_keys_lists_bindings():
    result = runner.invoke(app, ["keys"])
    assert result.exit_code == 0


def test_bench_runs():
    result = runner.invoke(app, ["bench", "2 ^ 10", "--runs", "5"])
    assert result.exit_code == 0


def test_bench_error_exits_nonzero():
    result = runner.invoke(app, ["bench", "(1", "-n", "2"])
    assert result.exit_code == 1


def test_run_quits_on_q():
    result = runner.invoke(app, ["run"], input="2+3\nq\n")
    assert result.exit_code == 0
    assert "5" in result.stdout


# --- rendering (5 tests) ---

def test_grid_covers_every_cell():
    grid = button_grid()
    assert len(grid) == GRID_SIZE
    assert all(label for row in grid for label, _ in row)


def test_spanning_buttons_label_once():
    grid = button_grid()
    firsts = [label for row in grid for label, first in row if first]
    assert sorted(firsts) == sorted(label for label, *_ in BUTTONS)
    assert grid[4][1] == ("0", False)
    assert grid[4][3] == ("+", False)


def test_elapsed_text():
    calc = Calculator()
    assert elapsed_text(calc) == "Waiting for calculation..."
    calc.last_duration = 0.000042
    assert elapsed_text(calc) == "Last operation: 42 µs"


def test_calculator_face_shows_display():
    calc = Calculator()
    calc.feed_line("6*7")
    text = _render(render_calculator(calc))
    assert "42" in text
    assert "Press 'q' to quit" in text
    assert "+/-" in text


def test_bench_table_summary():
    text = _render(render_bench("1 + 1", [measure("1 + 1") for _ in range(3)]))
    assert "Runs" in text
    assert "Mean" in text
    assert "2" in text
