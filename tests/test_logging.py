from __future__ import annotations

import logging

import pytest

from readiness_gate.core.config import Settings
from readiness_gate.core.logging import configure_logging, level_number


def test_level_number_accepts_names_in_any_case():
    assert level_number("debug") == logging.DEBUG
    assert level_number(" Warning ") == logging.WARNING


@pytest.mark.parametrize("name", ["root", "shutdown", "basicConfig", "verbose"])
def test_level_number_rejects_non_levels(name):
    with pytest.raises(ValueError):
        level_number(name)


def test_configure_logging_falls_back_to_info():
    configure_logging("shutdown")
    assert logging.getLogger().level == logging.INFO


def test_settings_normalises_log_level(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert Settings().LOG_LEVEL == "DEBUG"
