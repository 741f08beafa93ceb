from __future__ import annotations
import math
import re
import datetime as _dt
import numpy as np
import pandas as pd
from typing import Any, Optional

# Spreadsheet serial of 1970-01-01
EXCEL_EPOCH_SERIAL = 25569
_EPOCH = _dt.date(1970, 1, 1)
_DAY = pd.Timedelta(days=1)

def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False

def excel_serial_to_date(serial: float) -> Optional[_dt.date]:
    """Spreadsheet day serial -> calendar date (time of day is dropped)."""
    if isinstance(serial, bool) or not isinstance(serial, (int, float, np.integer, np.floating)):
        return None
    if math.isnan(serial) or math.isinf(serial):
        return None
    try:
        return _EPOCH + _dt.timedelta(days=math.floor(serial - EXCEL_EPOCH_SERIAL))
    except OverflowError:
        return None

def pivot_year(year: int) -> int:
    """Two-digit years above 50 are 19xx, the rest 20xx."""
    if year < 100:
        return 1900 + year if year > 50 else 2000 + year
    return year

_DATE_PARTS = re.compile(r"\s*(\d{1,4})[/.\-](\d{1,2})[/.\-](\d{1,4})(?=$|[\sT])")

def _from_parts(text: str) -> Optional[_dt.date]:
    # a trailing time of day ("05/03/2024 10:30") is ignored
    m = _DATE_PARTS.match(text)
    if m is None:
        return None
    a, b, c = (int(g) for g in m.groups())
    # ISO-style yyyy-mm-dd; everything else is read day first
    if len(m.group(1)) == 4:
        year, month, day = a, b, c
    else:
        day, month, year = a, b, pivot_year(c)
    try:
        return _dt.date(year, month, day)
    except ValueError:
        return None

def parse_spreadsheet_date(value: Any) -> Optional[_dt.date]:
    """
    Turn a spreadsheet cell into a calendar date.
    - numbers are day serials (25569 == 1970-01-01)
    - strings split on / . - are dd/mm/yyyy (two-digit years pivot at 50)
    - anything else goes through pandas' parser
    Returns None for blanks and anything unparseable; never raises.
    """
    if _is_missing(value) or isinstance(value, bool):
        return None
    if isinstance(value, pd.Timestamp):
        return value.date()
    if isinstance(value, _dt.datetime):
        return value.date()
    if isinstance(value, _dt.date):
        return value
    if isinstance(value, (int, float, np.integer, np.floating)):
        return excel_serial_to_date(float(value))
    if isinstance(value, str):
        s = value.strip()
        if re.fullmatch(r"\d+(\.\d+)?", s):
            return excel_serial_to_date(float(s))
        d = _from_parts(s)
        if d is not None:
            return d
    try:
        ts = pd.to_datetime(value, errors="coerce")
    except (TypeError, ValueError, OverflowError):
        return None
    if not isinstance(ts, pd.Timestamp) or pd.isna(ts):
        return None
    return ts.date()

def to_timestamp(value: Any) -> Optional[pd.Timestamp]:
    """Best-effort tz-naive Timestamp, None when missing or unparseable."""
    if _is_missing(value):
        return None
    try:
        ts = pd.to_datetime(value, errors="coerce")
    except (TypeError, ValueError, OverflowError):
        return None
    if not isinstance(ts, pd.Timestamp) or pd.isna(ts):
        return None
    if ts.tzinfo is not None:
        ts = ts.tz_convert("UTC").tz_localize(None)
    return ts

def elapsed_days(start: Any, end: Any) -> Optional[int]:
    """
    Whole days between two dates, rounded up. Order does not matter.
    Calendar days, weekends included.
    """
    s, e = to_timestamp(start), to_timestamp(end)
    if s is None or e is None:
        return None
    return int(math.ceil(abs(e - s) / _DAY))

def elapsed_days_series(start: pd.Series, end: pd.Series) -> pd.Series:
    """Vectorized elapsed_days: NaN where either side is missing."""
    s = pd.to_datetime(start, errors="coerce")
    e = pd.to_datetime(end, errors="coerce")
    return np.ceil((e - s).abs() / _DAY)

def to_number(value: Any) -> Optional[float]:
    """
    Tolerant numeric cell parser.
    Handles "1,234.56", "1.234,56", "R$ 1.234,56", "R$ 1.234.567", "US$ 10", "(12.50)".
    """
    if _is_missing(value) or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, np.integer, np.floating)):
        return float(value)
    s = str(value).strip()
    negative = s.startswith("(") and s.endswith(")")
    if negative:
        s = s[1:-1]
    s = re.sub(r"[^\d,.\-]", "", s)
    if not s:
        return None
    # the right-most separator is the decimal one
    if "," in s and "." in s:
        if s.rfind(",") > s.rfind("."):
            s = s.replace(".", "").replace(",", ".")
        else:
            s = s.replace(",", "")
    elif "," in s:
        head, _, tail = s.rpartition(",")
        s = s.replace(",", "") if len(tail) == 3 and head else s.replace(",", ".")
    elif "." in s:
        # BRL thousands: "1.234.567", "182.500"
        head, _, tail = s.rpartition(".")
        if s.count(".") > 1 or (len(tail) == 3 and head.lstrip("-") not in ("", "0")):
            s = s.replace(".", "")
    try:
        n = float(s)
    except ValueError:
        return None
    return -n if negative else n
