from __future__ import annotations

import logging

import pytest

from config import DEFAULT_RATES_URL, load_settings
from log_config import setup_logging

@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in ("SHIPMENTS_STORE_PATH", "SAMPLE_SHIPMENTS_PATH", "RATES_API_URL", "RATES_TIMEOUT", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)

def test_defaults():
    s = load_settings()
    assert s.store_path == "data/shipments.json"
    assert s.rates_url == DEFAULT_RATES_URL
    assert s.rates_timeout == 10.0
    assert s.log_level == "INFO"

def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SHIPMENTS_STORE_PATH", "/tmp/s.json")
    monkeypatch.setenv("RATES_TIMEOUT", "2.5")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    s = load_settings()
    assert s.store_path == "/tmp/s.json"
    assert s.rates_timeout == 2.5
    assert s.log_level == "DEBUG"

def test_bad_timeout_falls_back(monkeypatch):
    monkeypatch.setenv("RATES_TIMEOUT", "soon")
    assert load_settings().rates_timeout == 10.0

def test_setup_logging_is_idempotent():
    root = logging.getLogger()
    before = len(root.handlers)
    setup_logging("WARNING")
    setup_logging("DEBUG")
    added = [h for h in root.handlers if getattr(h, "_import_insights", False)]
    assert len(added) == 1
    assert len(root.handlers) <= before + 1
    assert root.level == logging.DEBUG
    for h in added:
        root.removeHandler(h)
