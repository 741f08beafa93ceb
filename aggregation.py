# aggregation.py
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union
import pandas as pd

from constants import FISCAL_WINDOW_START, MONTH_LABELS, OTHER_LABEL
from features import container_volume
from parsing import elapsed_days_series

Key = Union[str, Callable[[pd.Series], Any], pd.Series]
# reducer: member records -> (value, secondary value)
Reducer = Callable[[pd.DataFrame], Tuple[float, Optional[float]]]

@dataclass(frozen=True, eq=False)
class Aggregate:
    label: str
    value: float
    members: pd.DataFrame  # contributing records, for drill-down
    secondary_value: Optional[float] = None

    @property
    def record_count(self) -> int:
        return len(self.members)

def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))

# ---------- reducers ----------
def count() -> Reducer:
    def _reduce(g: pd.DataFrame):
        return float(len(g)), None
    return _reduce

def total(field: str) -> Reducer:
    def _reduce(g: pd.DataFrame):
        return float(pd.to_numeric(g[field], errors="coerce").fillna(0).sum()), None
    return _reduce

def unique(field: str) -> Reducer:
    """Distinct non-blank values of `field`; secondary value is the raw record count."""
    def _reduce(g: pd.DataFrame):
        vals = g[field].dropna().astype(str).str.strip()
        return float(vals[vals != ""].nunique()), float(len(g))
    return _reduce

def mean_duration(start: str, end: str) -> Reducer:
    """
    Mean elapsed days over records where both dates are present, rounded to an int.
    An empty bucket reports 0 with a secondary value (number of durations) of 0,
    which charts read as "no data".
    """
    def _reduce(g: pd.DataFrame):
        d = elapsed_days_series(g[start], g[end]).dropna()
        if d.empty:
            return 0.0, 0.0
        return float(round_half_up(float(d.mean()))), float(len(d))
    return _reduce

def volume() -> Reducer:
    def _reduce(g: pd.DataFrame):
        return float(container_volume(g).sum()), None
    return _reduce

# ---------- keys ----------
def _clean(v: Any) -> Optional[str]:
    if v is None:
        return None
    try:
        if pd.isna(v):
            return None
    except (TypeError, ValueError):
        pass
    s = str(v).strip()
    return s or None

def group_keys(df: pd.DataFrame, key: Key) -> pd.Series:
    """Label per record (None where the record has no label)."""
    if isinstance(key, pd.Series):
        raw = key.reindex(df.index)
    elif isinstance(key, str):
        raw = df[key] if key in df.columns else pd.Series(None, index=df.index, dtype=object)
    elif df.empty:
        raw = pd.Series([], index=df.index, dtype=object)
    else:
        raw = df.apply(key, axis=1)
    return pd.Series([_clean(v) for v in raw], index=df.index, dtype=object)

def month_labels(window: str = "calendar") -> List[str]:
    if window == "fiscal":
        return MONTH_LABELS[FISCAL_WINDOW_START - 1:]
    if window == "calendar":
        return list(MONTH_LABELS)
    raise ValueError(f"Unknown month window: {window!r}")

def month_bucket(df: pd.DataFrame, date_field: str, window: str = "calendar") -> pd.Series:
    """Month label of `date_field`; None when the date is missing or outside the window."""
    first = FISCAL_WINDOW_START if window == "fiscal" else 1
    month_labels(window)  # validates window
    months = pd.to_datetime(df[date_field], errors="coerce").dt.month

    def _label(m):
        if pd.isna(m) or int(m) < first:
            return None
        return MONTH_LABELS[int(m) - 1]

    return pd.Series([_label(m) for m in months], index=df.index, dtype=object)

# ---------- grouping ----------
def aggregate(
    df: pd.DataFrame,
    key: Key,
    reducer: Reducer,
    labels: Optional[Sequence[str]] = None,
    other: Optional[str] = OTHER_LABEL,
) -> List[Aggregate]:
    """
    Partition `df` by `key` and reduce each partition.

    Predefined `labels` always come back, in order, even when empty. Records whose
    label is missing or not among `labels` go to the `other` bucket (appended only
    when it has members); pass other=None to leave them out instead. Without
    `labels`, the labels found in the data are returned sorted.
    """
    keys = group_keys(df, key)
    if labels is not None:
        order = list(labels)
        unmatched = ~keys.isin(order)
    else:
        order = sorted(set(keys.dropna()))
        unmatched = keys.isna()

    out: List[Aggregate] = []
    for label in order:
        members = df[(keys == label).to_numpy()]
        value, secondary = reducer(members)
        out.append(Aggregate(label, value, members, secondary))

    if other is not None:
        members = df[unmatched.to_numpy()]
        if not members.empty:
            value, secondary = reducer(members)
            out.append(Aggregate(other, value, members, secondary))
    return out

def by_month(
    df: pd.DataFrame,
    date_field: str,
    reducer: Reducer,
    window: str = "calendar",
) -> List[Aggregate]:
    """One bucket per month of the window, in calendar order; undated records are skipped."""
    return aggregate(df, month_bucket(df, date_field, window), reducer,
                     labels=month_labels(window), other=None)

def stacked_by_month(
    df: pd.DataFrame,
    date_field: str,
    series_key: Key,
    reducer: Reducer,
    window: str = "calendar",
) -> Dict[str, List[Aggregate]]:
    """Monthly buckets split into one series per label of `series_key` (sorted)."""
    months = month_bucket(df, date_field, window)
    dated = df[months.notna().to_numpy()]
    series = group_keys(dated, series_key).fillna(OTHER_LABEL)
    result: Dict[str, List[Aggregate]] = {}
    for label in sorted(set(series)):
        part = dated[(series == label).to_numpy()]
        result[label] = by_month(part, date_field, reducer, window)
    return result

# ---------- output ----------
def to_frame(aggs: Iterable[Aggregate]) -> pd.DataFrame:
    rows = [
        {"label": a.label, "value": a.value, "secondary_value": a.secondary_value,
         "records": a.record_count}
        for a in aggs
    ]
    return pd.DataFrame(rows, columns=["label", "value", "secondary_value", "records"])

def stacked_to_frame(stacked: Dict[str, List[Aggregate]]) -> pd.DataFrame:
    rows = [
        {"month": a.label, "series": series, "value": a.value, "records": a.record_count}
        for series, aggs in stacked.items()
        for a in aggs
    ]
    return pd.DataFrame(rows, columns=["month", "series", "value", "records"])

def find(aggs: Iterable[Aggregate], label: str) -> Optional[Aggregate]:
    for a in aggs:
        if a.label == label:
            return a
    return None
