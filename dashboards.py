# dashboards.py
"""Chart data for each dashboard page, as ordered aggregates over already-filtered records."""
from __future__ import annotations
from typing import Dict, List
import pandas as pd

from aggregation import (
    Aggregate, aggregate, by_month, count, mean_duration, stacked_by_month,
    total, unique, volume,
)
from constants import CHANNELS, DURATIONS, INCOTERMS, STATUSES
from features import container_volume
from filters import title_case
from terminals import normalize_terminal_name

# Date field each page filters and buckets on
IN_TRANSIT_DATE = "actual_eta"
PERFORMANCE_DATE = "di_registration_date"

_COLORS = {
    "CIF": "#8b5cf6", "FOB": "#3b82f6", "DAP": "#ec4899",
    "Doc Review": "#f97316", "In Transit": "#3b82f6", "At Port": "#ef4444",
    "OK": "#10b981", "Pending": "#ef4444",
    "Approved": "#10b981", "Not Approved": "#ef4444",
    "Green": "#22c55e", "Yellow": "#eab308", "Red": "#ef4444",
}
FALLBACK_COLOR = "#6b7280"

_TRANSIT_STAGES = {
    "DOCUMENT REVIEW": "Doc Review",
    "IN TRANSIT": "In Transit",
    "AT THE PORT": "At Port",
}

DURATION_TITLES = {
    "clearance": "Clearance time (cargo presence → green channel)",
    "delivery": "Delivery time (green channel → last truck)",
    "operation": "Operation time (cargo presence → last truck)",
    "nf_issue": "NF issue time (green channel → NF issued)",
}

def color_for(label: str) -> str:
    return _COLORS.get(label, FALLBACK_COLOR)

def _sap_po(row: pd.Series) -> str:
    return "OK" if isinstance(row["po_sap"], str) and row["po_sap"].strip() else "Pending"

def _doc_status(row: pd.Series) -> str:
    return "Approved" if row["approved_draft_di"] == "OK" else "Not Approved"

def _transit_stage(row: pd.Series):
    return _TRANSIT_STAGES.get(row["status"])

def _terminal(row: pd.Series) -> str:
    return normalize_terminal_name(row["bonded_warehouse"])

def in_transit_panels(df: pd.DataFrame) -> Dict[str, List[Aggregate]]:
    return {
        "Shipments by Incoterm": aggregate(df, "incoterm", count(), labels=INCOTERMS),
        "Shipment Status": aggregate(df, _transit_stage, count(),
                                     labels=list(_TRANSIT_STAGES.values()), other=None),
        "SAP PO Status": aggregate(df, _sap_po, count(), labels=["OK", "Pending"]),
        "Document Status": aggregate(df, _doc_status, count(), labels=["Approved", "Not Approved"]),
    }

def cargo_volume(df: pd.DataFrame) -> Dict[str, List[Aggregate]]:
    """
    Containers per terminal for Jul-Dec by arrival month. Every terminal with an
    arrival in the window gets a series; only full-container loads add volume and members.
    """
    arrived = stacked_by_month(df, IN_TRANSIT_DATE, _terminal, count(), window="fiscal")
    loaded = df[(container_volume(df) > 0).to_numpy()]
    stacked = stacked_by_month(loaded, IN_TRANSIT_DATE, _terminal, volume(), window="fiscal")
    empty = by_month(loaded.iloc[0:0], IN_TRANSIT_DATE, volume(), window="fiscal")
    return {t: stacked.get(t, empty) for t in arrived}

def performance_panels(df: pd.DataFrame) -> Dict[str, List[Aggregate]]:
    analysts = df["analyst"].map(title_case)
    panels = {
        "DI per Channel": aggregate(df, "parametrization", unique("di"), labels=CHANNELS),
        "DI per Month": by_month(df, PERFORMANCE_DATE, unique("di")),
        "DI per Analyst": aggregate(df, analysts, unique("di")),
        "DI by Status": aggregate(df, "status", unique("di"), labels=STATUSES),
        "Invoice Value per Month": by_month(df, PERFORMANCE_DATE, total("invoice_value")),
    }
    for name, (start, end) in DURATIONS.items():
        panels[DURATION_TITLES[name]] = by_month(df, PERFORMANCE_DATE, mean_duration(start, end))
    return panels
