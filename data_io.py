# data_io.py
from __future__ import annotations
import logging
import re
import uuid
import streamlit as st
import pandas as pd
import numpy as np
from typing import Any, Dict, Iterable, List, Optional, Sequence

from constants import DATE_COLS, HEADER_MAP, NUMERIC_COLS, RECORD_COLS, TEXT_COLS
from parsing import parse_spreadsheet_date, to_number, to_timestamp

logger = logging.getLogger(__name__)

def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, (float, np.floating)):
        if np.isnan(value):
            return None
        # spreadsheets hand back numeric ids (DI, PO) as floats
        if float(value).is_integer():
            return str(int(value))
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    s = str(value).strip()
    return s or None

def normalize_records(df: pd.DataFrame) -> pd.DataFrame:
    """Every record column present; dates tz-naive datetime64 (NaT when unusable)."""
    df = df.copy()
    for col in RECORD_COLS:
        if col not in df.columns:
            df[col] = None
    for col in TEXT_COLS:
        df[col] = df[col].map(_text).astype(object)
    for col in NUMERIC_COLS:
        df[col] = pd.to_numeric(df[col].map(to_number), errors="coerce").astype("float64")
    for col in DATE_COLS:
        s = df[col]
        if not pd.api.types.is_datetime64_any_dtype(s):
            s = pd.to_datetime(s.map(to_timestamp), errors="coerce")
        elif getattr(s.dt, "tz", None) is not None:
            s = s.dt.tz_convert("UTC").dt.tz_localize(None)
        df[col] = s
    return df

def empty_records() -> pd.DataFrame:
    return normalize_records(pd.DataFrame(columns=RECORD_COLS))

# ---------- spreadsheet import ----------
def normalize_header(header: Any) -> str:
    return re.sub(r"\s+", "", str(header if header is not None else "")).lower()

def map_headers(headers: Sequence[Any]) -> Dict[int, str]:
    """Column index -> record field. Each field comes from the first column that maps to it."""
    fields: Dict[int, str] = {}
    taken = set()
    for i, header in enumerate(headers):
        h = normalize_header(header)
        if not h:
            continue
        for token, field in HEADER_MAP:
            if token in h:
                if field is not None and field not in taken:
                    fields[i] = field
                    taken.add(field)
                break
    return fields

def _convert(field: str, value: Any) -> Any:
    if field in DATE_COLS:
        return parse_spreadsheet_date(value)
    if field in NUMERIC_COLS:
        return to_number(value)
    return _text(value)

def rows_to_records(rows: Iterable[Sequence[Any]]) -> pd.DataFrame:
    """
    Header row + value rows -> normalized records.
    Unknown columns are ignored; rows without a BL/AWB are dropped.
    """
    rows = [list(r) for r in rows if r is not None]
    if not rows:
        return empty_records()

    fields = map_headers(rows[0])
    if "bl_awb" not in fields.values():
        logger.warning("No BL/AWB column among headers %s", rows[0])

    records: List[Dict[str, Any]] = []
    dropped = 0
    for row in rows[1:]:
        rec = {field: _convert(field, row[i] if i < len(row) else None) for i, field in fields.items()}
        if not rec.get("bl_awb"):
            dropped += 1
            continue
        records.append(rec)

    if dropped:
        logger.info("Dropped %d row(s) without BL/AWB", dropped)
    return normalize_records(pd.DataFrame(records, columns=RECORD_COLS))

def read_sheet(file) -> List[List[Any]]:
    name = str(getattr(file, "name", file)).lower()
    if name.endswith(".csv"):
        raw = pd.read_csv(file, header=None, dtype=object, keep_default_na=False)
    else:
        raw = pd.read_excel(file, header=None, engine="openpyxl")
    return raw.astype(object).where(raw.notna(), None).values.tolist()

def load_uploaded(file) -> pd.DataFrame:
    return rows_to_records(read_sheet(file))

@st.cache_data
def load_sample(path: str) -> pd.DataFrame:
    df = pd.read_csv(path, dtype=object, low_memory=False)
    return normalize_records(df)

def validate_records(df: pd.DataFrame) -> Optional[str]:
    if df.empty:
        return "No shipments with a BL/AWB number were found."
    missing = [c for c in RECORD_COLS if c not in df.columns]
    return f"Missing required columns: {', '.join(missing)}" if missing else None

# ---------- upsert ----------
def upsert_by_bl(existing: pd.DataFrame, incoming: pd.DataFrame) -> pd.DataFrame:
    """
    Merge `incoming` into `existing` keyed by bl_awb. Non-blank incoming fields win;
    existing records keep their id, new ones get a fresh one.
    """
    existing = normalize_records(existing)
    incoming = normalize_records(incoming)
    existing = existing[existing["bl_awb"].notna()].drop_duplicates("bl_awb", keep="last")
    incoming = incoming[incoming["bl_awb"].notna()].drop_duplicates("bl_awb", keep="last")

    ex = existing.set_index("bl_awb")
    inc = incoming.drop(columns="id").set_index("bl_awb")
    order = list(ex.index) + [b for b in inc.index if b not in ex.index]

    merged = inc.combine_first(ex).reindex(order)
    merged.index.name = "bl_awb"
    merged = merged.reset_index()
    merged["id"] = merged["id"].astype(object)
    new_ids = merged["id"].isna()
    merged.loc[new_ids, "id"] = [uuid.uuid4().hex for _ in range(int(new_ids.sum()))]
    return normalize_records(merged[RECORD_COLS])
