# filters.py
from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, FrozenSet, List, Optional, Union
import streamlit as st
import pandas as pd

from constants import ALL, MONTH_LABELS

YearChoice = Union[int, str]

@dataclass(frozen=True)
class FilterState:
    cargo_types: FrozenSet[str] = field(default_factory=frozenset)  # empty = every cargo type
    year: YearChoice = ALL
    month: YearChoice = ALL  # 1-12
    analyst: str = ALL
    status: str = ALL
    query: str = ""

    @property
    def is_dated(self) -> bool:
        return self.year != ALL or self.month != ALL

DEFAULT_FILTERS = FilterState()

# ---------- state transitions ----------
def reduce_filters(state: FilterState, action: str, value: Any = None) -> FilterState:
    """Return the state after `action`; the input state is never modified."""
    if action == "toggle_cargo":
        current = set(state.cargo_types)
        current.symmetric_difference_update({value})
        return replace(state, cargo_types=frozenset(current))
    if action == "set_cargo":
        return replace(state, cargo_types=frozenset(value or ()))
    if action == "set_year":
        return replace(state, year=ALL if value in (None, ALL) else int(value))
    if action == "set_month":
        return replace(state, month=ALL if value in (None, ALL) else int(value))
    if action == "set_analyst":
        return replace(state, analyst=value or ALL)
    if action == "set_status":
        return replace(state, status=value or ALL)
    if action == "set_query":
        return replace(state, query=(value or "").strip())
    if action == "reset":
        return DEFAULT_FILTERS
    raise ValueError(f"Unknown filter action: {action!r}")

# ---------- helpers ----------
def title_case(name: Any) -> str:
    """'jOHN  smith' -> 'John Smith'."""
    if not isinstance(name, str):
        return ""
    return " ".join(w[:1].upper() + w[1:].lower() for w in name.split())

def available_years(df: pd.DataFrame, date_field: str) -> List[int]:
    years = pd.to_datetime(df[date_field], errors="coerce").dt.year.dropna()
    return sorted({int(y) for y in years}, reverse=True)

def available_cargo_types(df: pd.DataFrame) -> List[str]:
    vals = df["type_of_cargo"].dropna().astype(str).str.strip()
    return sorted(set(vals[vals != ""]))

def available_analysts(df: pd.DataFrame) -> List[str]:
    names = {title_case(n) for n in df["analyst"].dropna()}
    return sorted(n for n in names if n)

def available_statuses(df: pd.DataFrame) -> List[str]:
    vals = df["status"].dropna().astype(str).str.strip()
    return sorted(set(vals[vals != ""]))

# ---------- public API ----------
def apply_filters(df: pd.DataFrame, f: FilterState, date_field: str) -> pd.DataFrame:
    """
    AND across dimensions, OR within cargo types. Year and month key off `date_field`;
    while either is set, records without a usable date there are dropped.
    """
    mask = pd.Series(True, index=df.index)

    if f.cargo_types:
        mask &= df["type_of_cargo"].isin(list(f.cargo_types))

    if f.is_dated:
        dt = pd.to_datetime(df[date_field], errors="coerce")
        mask &= dt.notna()
        if f.year != ALL:
            mask &= dt.dt.year == int(f.year)
        if f.month != ALL:
            mask &= dt.dt.month == int(f.month)

    if f.analyst != ALL:
        mask &= df["analyst"].map(title_case) == title_case(f.analyst)

    if f.status != ALL:
        mask &= df["status"] == f.status

    q = (f.query or "").strip().lower()
    if q:
        hit = pd.Series(False, index=df.index)
        for col in ("bl_awb", "description"):
            hit |= df[col].fillna("").astype(str).str.lower().str.contains(q, regex=False)
        mask &= hit

    return df[mask.fillna(False).astype(bool)]

def _model_key(date_field: str) -> str:
    return f"filters_model:{date_field}"

def current_filters(date_field: str) -> FilterState:
    return st.session_state.get(_model_key(date_field), DEFAULT_FILTERS)

def dispatch(date_field: str, action: str, value: Any = None) -> FilterState:
    """Apply a transition to the stored sidebar state (used by chart drill-downs)."""
    state = reduce_filters(current_filters(date_field), action, value)
    st.session_state[_model_key(date_field)] = state
    return state

def sidebar_filters(df: pd.DataFrame, date_field: str, date_label: str) -> FilterState:
    st.sidebar.header("Filters")
    model = current_filters(date_field)

    years: List[YearChoice] = [ALL] + available_years(df, date_field)
    months: List[YearChoice] = [ALL] + list(range(1, 13))
    analysts = [ALL] + available_analysts(df)
    statuses = [ALL] + available_statuses(df)

    def _idx(options, value):
        try:
            return options.index(value)
        except ValueError:
            return 0

    cargo_options = available_cargo_types(df)
    cargo_val = st.sidebar.multiselect(
        "Cargo type", cargo_options,
        default=[c for c in sorted(model.cargo_types) if c in cargo_options],
    )
    year_val = st.sidebar.selectbox(f"Year ({date_label})", years, index=_idx(years, model.year))
    month_val = st.sidebar.selectbox(
        f"Month ({date_label})", months, index=_idx(months, model.month),
        format_func=lambda m: m if m == ALL else MONTH_LABELS[int(m) - 1],
    )
    analyst_val = st.sidebar.selectbox("Analyst", analysts, index=_idx(analysts, title_case(model.analyst) or ALL))
    status_val = st.sidebar.selectbox("Status", statuses, index=_idx(statuses, model.status))
    query_val = st.sidebar.text_input("Search BL / description", value=model.query)

    state = DEFAULT_FILTERS
    for action, value in (
        ("set_cargo", cargo_val), ("set_year", year_val), ("set_month", month_val),
        ("set_analyst", analyst_val), ("set_status", status_val), ("set_query", query_val),
    ):
        state = reduce_filters(state, action, value)

    st.sidebar.markdown("---")
    if st.sidebar.button("Remove filters", use_container_width=True):
        state = reduce_filters(state, "reset")
        st.session_state[_model_key(date_field)] = state
        st.toast("Filters reset")
        st.rerun()

    st.session_state[_model_key(date_field)] = state
    return state

def describe(f: FilterState) -> Optional[str]:
    parts: List[str] = []
    if f.cargo_types:
        parts.append("cargo=" + "/".join(sorted(f.cargo_types)))
    if f.year != ALL:
        parts.append(f"year={f.year}")
    if f.month != ALL:
        parts.append(f"month={MONTH_LABELS[int(f.month) - 1]}")
    for name in ("analyst", "status"):
        v = getattr(f, name)
        if v != ALL:
            parts.append(f"{name}={v}")
    if f.query:
        parts.append(f"search='{f.query}'")
    return ", ".join(parts) if parts else None
