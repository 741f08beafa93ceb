from __future__ import annotations

import pytest
import requests

import rates
from rates import RatesUnavailable, fetch_rates, parse_rates

PAYLOAD = {
    "USDBRL": {"bid": "5.0101", "ask": "5.0121", "create_date": "2024-06-03 14:30:00"},
    "EURBRL": {"bid": "5.4400", "ask": "5.4500", "create_date": "2024-06-03 14:30:00"},
    "CNYBRL": {"bid": "0.6900", "ask": "0.6910", "create_date": "2024-06-03 14:30:00"},
}

class _Response:
    def __init__(self, payload, status=200):
        self._payload = payload
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload

def test_parse_rates():
    r = parse_rates(PAYLOAD)
    assert r.date == "2024-06-03"
    assert r.time == "14:30:00"
    assert r.usd_buy == pytest.approx(5.0101)
    assert r.eur_sell == pytest.approx(5.45)
    assert r.cny == pytest.approx(0.69)

@pytest.mark.parametrize("payload", [
    [],
    {"USDBRL": PAYLOAD["USDBRL"]},
    {**PAYLOAD, "EURBRL": {"bid": "x", "ask": "1"}},
    {**PAYLOAD, "CNYBRL": {"ask": "1"}},
])
def test_malformed_payloads(payload):
    with pytest.raises(RatesUnavailable):
        parse_rates(payload)

def test_fetch_rates(monkeypatch):
    calls = {}

    def fake_get(url, timeout):
        calls["url"], calls["timeout"] = url, timeout
        return _Response(PAYLOAD)

    monkeypatch.setattr(rates.requests, "get", fake_get)
    r = fetch_rates("https://example.test/rates", timeout=3)
    assert calls == {"url": "https://example.test/rates", "timeout": 3}
    assert r.usd_sell == pytest.approx(5.0121)

def test_fetch_rates_http_error(monkeypatch):
    monkeypatch.setattr(rates.requests, "get", lambda url, timeout: _Response({}, status=503))
    with pytest.raises(RatesUnavailable):
        fetch_rates("https://example.test/rates")

def test_fetch_rates_network_error(monkeypatch):
    def boom(url, timeout):
        raise requests.ConnectionError("down")

    monkeypatch.setattr(rates.requests, "get", boom)
    with pytest.raises(RatesUnavailable):
        fetch_rates("https://example.test/rates")

def test_fetch_rates_bad_json(monkeypatch):
    monkeypatch.setattr(rates.requests, "get", lambda url, timeout: _Response(ValueError("no json")))
    with pytest.raises(RatesUnavailable):
        fetch_rates("https://example.test/rates")
