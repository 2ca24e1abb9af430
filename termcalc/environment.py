"""Environment-derived settings for termcalc.

Every knob has a default and a TERMCALC_* override. CLI options win over
both. Standard library only.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

_PREFIX = "TERMCALC_"


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the CLI and interactive session."""

    precision: int = 8
    flash_ms: int = 100
    bench_runs: int = 1000


def _int_var(env: Mapping[str, str], name: str, default: int, minimum: int = 0) -> int:
    """Read a non-negative integer variable, falling back to ``default``."""
    key = _PREFIX + name
    raw = env.get(key, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ValueError(f"{key} must be >= {minimum}, got {value}")
    return value


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from ``env`` (defaults to os.environ).

    Variables:
        TERMCALC_PRECISION: decimals kept when formatting a result.
        TERMCALC_FLASH_MS: how long a pressed button stays highlighted.
        TERMCALC_BENCH_RUNS: default number of runs for ``bench``.
    """
    env = os.environ if env is None else env
    return Settings(
        precision=_int_var(env, "PRECISION", Settings.precision),
        flash_ms=_int_var(env, "FLASH_MS", Settings.flash_ms),
        bench_runs=_int_var(env, "BENCH_RUNS", Settings.bench_runs, minimum=1),
    )
