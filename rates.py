# rates.py (BRL quotes shown on the overview page)
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Dict

import requests
import streamlit as st

logger = logging.getLogger(__name__)

class RatesUnavailable(RuntimeError):
    pass

@dataclass(frozen=True)
class ExchangeRates:
    date: str
    time: str
    usd_buy: float
    usd_sell: float
    eur_buy: float
    eur_sell: float
    cny: float

def _quote(payload: Dict[str, Any], pair: str) -> Dict[str, Any]:
    q = payload.get(pair)
    if not isinstance(q, dict):
        raise RatesUnavailable(f"Quote {pair} missing from response")
    return q

def parse_rates(payload: Dict[str, Any]) -> ExchangeRates:
    if not isinstance(payload, dict):
        raise RatesUnavailable("Unexpected exchange-rate payload")
    usd, eur, cny = (_quote(payload, p) for p in ("USDBRL", "EURBRL", "CNYBRL"))
    try:
        stamp = str(usd.get("create_date", ""))
        date, _, time = stamp.partition(" ")
        return ExchangeRates(
            date=date,
            time=time,
            usd_buy=float(usd["bid"]),
            usd_sell=float(usd["ask"]),
            eur_buy=float(eur["bid"]),
            eur_sell=float(eur["ask"]),
            cny=float(cny["bid"]),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise RatesUnavailable(f"Malformed quote: {e}") from e

def fetch_rates(url: str, timeout: float = 10.0) -> ExchangeRates:
    try:
        r = requests.get(url, timeout=timeout)
        r.raise_for_status()
        payload = r.json()
    except (requests.RequestException, ValueError) as e:
        logger.warning("Exchange-rate request failed: %s", e)
        raise RatesUnavailable(str(e)) from e
    return parse_rates(payload)

@st.cache_data(ttl=3600, show_spinner=False)
def cached_rates(url: str, timeout: float) -> ExchangeRates:
    return fetch_rates(url, timeout)
