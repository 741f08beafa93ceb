from __future__ import annotations
import unicodedata
from enum import Enum
from typing import Any, List, Tuple

class Terminal(str, Enum):
    TECON = "TECON"
    TECA = "TECA"
    CLIA_EMPORIO = "CLIA Empório"
    INTERMARITIMA = "Intermaritima"
    TPC = "TPC"
    UNKNOWN = "N/A"

# Checked in order: the grouped names first, then the compound one,
# then the broad single tokens.
_RULES: List[Tuple[Tuple[str, ...], Terminal]] = [
    (("tecon",), Terminal.TECON),
    (("teca",), Terminal.TECA),
    (("clia", "emporio"), Terminal.CLIA_EMPORIO),
    (("intermaritima",), Terminal.INTERMARITIMA),
    (("tpc",), Terminal.TPC),
]

TERMINAL_COLORS = {
    Terminal.INTERMARITIMA: "#14b8a6",
    Terminal.TPC: "#38bdf8",
    Terminal.TECON: "#f43f5e",
    Terminal.CLIA_EMPORIO: "#f59e0b",
    Terminal.UNKNOWN: "#6b7280",
    Terminal.TECA: "#a78bfa",
}

def _fold(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text.lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))

def classify_terminal(name: Any) -> Terminal:
    if not isinstance(name, str) or not name.strip():
        return Terminal.UNKNOWN
    folded = _fold(name)
    for tokens, terminal in _RULES:
        if all(t in folded for t in tokens):
            return terminal
    return Terminal.UNKNOWN

def normalize_terminal_name(name: Any) -> str:
    """Canonical terminal label for a free-text warehouse name; 'N/A' when unmatched."""
    return classify_terminal(name).value

def terminal_color(label: str) -> str:
    try:
        return TERMINAL_COLORS[Terminal(label)]
    except ValueError:
        return TERMINAL_COLORS[Terminal.UNKNOWN]
