from __future__ import annotations
import os
from dataclasses import dataclass
import streamlit as st

DEFAULT_RATES_URL = "https://economia.awesomeapi.com.br/json/last/USD-BRL,EUR-BRL,CNY-BRL"

def get_secret(key: str) -> str | None:
    """Environment first, then .streamlit/secrets.toml."""
    v = os.environ.get(key)
    if v:
        return v
    try:
        return st.secrets.get(key)  # type: ignore[attr-defined]
    except Exception:
        return None

@dataclass(frozen=True)
class Settings:
    store_path: str = "data/shipments.json"
    sample_path: str = "sample_shipments.csv"
    rates_url: str = DEFAULT_RATES_URL
    rates_timeout: float = 10.0
    log_level: str = "INFO"

def load_settings() -> Settings:
    d = Settings()
    timeout = get_secret("RATES_TIMEOUT")
    try:
        rates_timeout = float(timeout) if timeout else d.rates_timeout
    except ValueError:
        rates_timeout = d.rates_timeout
    return Settings(
        store_path=get_secret("SHIPMENTS_STORE_PATH") or d.store_path,
        sample_path=get_secret("SAMPLE_SHIPMENTS_PATH") or d.sample_path,
        rates_url=get_secret("RATES_API_URL") or d.rates_url,
        rates_timeout=rates_timeout,
        log_level=(get_secret("LOG_LEVEL") or d.log_level).upper(),
    )
