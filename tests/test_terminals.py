from __future__ import annotations

import pytest

from terminals import TERMINAL_COLORS, Terminal, normalize_terminal_name, terminal_color

@pytest.mark.parametrize("name, label", [
    ("TECON - Wilson Sons", "TECON"),
    ("Tecon Salvador", "TECON"),
    ("TECA - SALVADOR", "TECA"),
    ("CLIA Empório", "CLIA Empório"),
    ("clia emporio", "CLIA Empório"),
    ("Intermarítima", "Intermaritima"),
    ("INTERMARITIMA TERMINAIS", "Intermaritima"),
    ("TPC Salvador", "TPC"),
])
def test_known_terminals(name, label):
    assert normalize_terminal_name(name) == label

def test_grouped_names_win_over_compound():
    # contains both tecon and clia/emporio; tecon is checked first
    assert normalize_terminal_name("TECON CLIA Empório") == "TECON"

def test_clia_alone_is_not_emporio():
    assert normalize_terminal_name("CLIA Santos") == "N/A"

@pytest.mark.parametrize("name", [None, "", "   ", "Porto Seco Anápolis", 42, float("nan")])
def test_unmatched_names_get_sentinel(name):
    assert normalize_terminal_name(name) == Terminal.UNKNOWN.value

def test_normalization_is_deterministic():
    names = ["Tecon", "x", "CLIA EMPÓRIO", None]
    assert [normalize_terminal_name(n) for n in names] == [normalize_terminal_name(n) for n in names]

def test_every_label_has_a_color():
    for t in Terminal:
        assert terminal_color(t.value) == TERMINAL_COLORS[t]
    assert terminal_color("Somewhere") == TERMINAL_COLORS[Terminal.UNKNOWN]
