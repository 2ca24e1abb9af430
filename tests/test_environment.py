"""Tests for environment-derived settings."""

import pytest

from termcalc.environment import Settings, load_settings


def test_defaults_with_empty_env():
    assert load_settings({}) == Settings(precision=8, flash_ms=100, bench_runs=1000)


def test_overrides():
    env = {"TERMCALC_PRECISION": "3", "TERMCALC_FLASH_MS": "250", "TERMCALC_BENCH_RUNS": "10"}
    assert load_settings(env) == Settings(precision=3, flash_ms=250, bench_runs=10)


def test_blank_value_uses_default():
    assert load_settings({"TERMCALC_PRECISION": "  "}).precision == 8


def test_non_integer_rejected():
    with pytest.raises(ValueError, match="TERMCALC_PRECISION"):
        load_settings({"TERMCALC_PRECISION": "many"})


def test_bench_runs_must_be_positive():
    with pytest.raises(ValueError, match="TERMCALC_BENCH_RUNS"):
        load_settings({"TERMCALC_BENCH_RUNS": "0"})


def test_reads_os_environ(monkeypatch):
    monkeypatch.setenv("TERMCALC_PRECISION", "2")
    assert load_settings().precision == 2
