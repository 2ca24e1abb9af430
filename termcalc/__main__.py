"""CLI for the termcalc terminal calculator.

Usage:
    python -m termcalc run                      # Interactive calculator
    python -m termcalc eval "(2 + 3) * 4"       # Evaluate once and print
    python -m termcalc keys                     # Show key bindings
    python -m termcalc bench "200 + 10%" -n 500 # Time repeated evaluations
"""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from termcalc.environment import Settings, load_settings
from termcalc.render import render_bench, render_calculator, render_keys
from termcalc.session import Calculator, format_result, measure

app = typer.Typer(
    name="termcalc",
    help="Interactive terminal calculator",
    no_args_is_help=True,
)
console = Console(stderr=True)
out = Console()


def _settings() -> Settings:
    try:
        return load_settings()
    except ValueError as e:
        console.print(f"[red]Invalid setting:[/red] {e}")
        raise typer.Exit(2)


@app.command("eval")
def cmd_eval(
    expression: str = typer.Argument(help="Expression, e.g. '200 + 10%'"),
    precision: Optional[int] = typer.Option(None, "--precision", "-p", min=0, help="Decimals to keep"),
) -> None:
    """Evaluate one expression and print the result."""
    settings = _settings()
    m = measure(expression)
    if not m.ok:
        console.print(f"[red]{m.error.label}:[/red] {escape(m.error.message)}")
        raise typer.Exit(1)
    digits = settings.precision if precision is None else precision
    out.print(format_result(m.value, digits), highlight=False)
    console.print(f"[dim]{m.elapsed_us} µs[/dim]")


@app.command("run")
def cmd_run(
    precision: Optional[int] = typer.Option(None, "--precision", "-p", min=0, help="Decimals to keep"),
) -> None:
    """Start the interactive calculator.

    Each line is typed into the calculator and finished with Enter.
    Commands: q (quit), c (clear), b (backspace), n (toggle sign).
    """
    settings = _settings()
    calc = Calculator(
        precision=settings.precision if precision is None else precision,
        flash_ms=settings.flash_ms,
    )

    while True:
        out.clear()
        out.print(render_calculator(calc))
        try:
            line = out.input("> ")
        except (EOFError, KeyboardInterrupt):
            break
        if not calc.feed_line(line):
            break


@app.command("keys")
def cmd_keys() -> None:
    """Show keyboard bindings."""
    console.print()
    console.print(render_keys())
    console.print()


@app.command("bench")
def cmd_bench(
    expression: str = typer.Argument(help="Expression to time"),
    runs: Optional[int] = typer.Option(None, "--runs", "-n", min=1, help="Number of evaluations"),
) -> None:
    """Evaluate an expression repeatedly and report timings."""
    settings = _settings()
    count = settings.bench_runs if runs is None else runs
    measurements = [measure(expression) for _ in range(count)]

    console.print()
    console.print(render_bench(expression, measurements, settings.precision))
    console.print()
    if not measurements[0].ok:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
