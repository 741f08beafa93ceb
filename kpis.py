from __future__ import annotations
from typing import Dict, List, Optional
import streamlit as st
import pandas as pd

from aggregation import Aggregate, aggregate, count, round_half_up
from constants import KPI_FORMATS, STATUSES, STATUS_DELIVERED, STATUS_IN_TRANSIT

def compute_kpis(df: pd.DataFrame, today: Optional[pd.Timestamp] = None) -> Dict[str, float]:
    today = (pd.Timestamp.today() if today is None else pd.Timestamp(today)).normalize()
    cutoff = today - pd.Timedelta(days=30)

    eta = pd.to_datetime(df["actual_eta"], errors="coerce")
    recent_value = float(pd.to_numeric(df.loc[eta > cutoff, "invoice_value"], errors="coerce").fillna(0).sum())

    delivered = df["status"] == STATUS_DELIVERED
    last_truck = pd.to_datetime(df["last_truck_delivery"], errors="coerce")
    on_time = delivered & eta.notna() & last_truck.notna() & (last_truck <= eta)
    total_delivered = int(delivered.sum())
    on_time_rate = float(round_half_up(on_time.sum() / total_delivered * 100)) if total_delivered else 0.0

    return dict(
        total_shipments=float(len(df)),
        on_time_rate=on_time_rate,
        in_transit=float((df["status"] == STATUS_IN_TRANSIT).sum()),
        recent_value=recent_value,
    )

def status_counts(df: pd.DataFrame) -> List[Aggregate]:
    """Shipments per status: enumerated statuses first, then unrecognized ones; empty ones dropped."""
    known = aggregate(df, "status", count(), labels=STATUSES, other=None)
    rest = df[~df["status"].isin(STATUSES)]
    extra = aggregate(rest, "status", count(), other=None)
    return [a for a in known + extra if a.value > 0]

def render_kpis(kpis: Dict[str, float]) -> None:
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Total Shipments", KPI_FORMATS["total_shipments"].format(int(kpis["total_shipments"])))
    c2.metric("On-time Delivery %", KPI_FORMATS["on_time_rate"].format(kpis["on_time_rate"]))
    c3.metric("In Transit", KPI_FORMATS["in_transit"].format(int(kpis["in_transit"])))
    c4.metric("Invoice Value, ETA last 30 days", KPI_FORMATS["recent_value"].format(kpis["recent_value"]))
