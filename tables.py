from __future__ import annotations
from typing import List, Optional
import streamlit as st
import pandas as pd

from aggregation import Aggregate, find

DRILL_COLS = [
    "bl_awb", "description", "type_of_cargo", "incoterm", "shipment_type", "status",
    "parametrization", "bonded_warehouse", "analyst", "di", "actual_eta",
    "di_registration_date", "invoice_value",
]

def drilldown(title: str, aggs: List[Aggregate], key: str) -> Optional[Aggregate]:
    """Label picker under a chart; shows the records behind the chosen bucket."""
    labels = [a.label for a in aggs if a.record_count > 0]
    if not labels:
        return None
    choice = st.selectbox(f"Drill into {title}", ["(none)"] + labels, key=key)
    if choice == "(none)":
        return None
    agg = find(aggs, choice)
    if agg is None:
        return None
    shipments_table(f"Shipments for: {title} / {choice}", agg.members, key=f"{key}-dl")
    return agg

def shipments_table(title: str, df: pd.DataFrame, key: str = "shipments") -> None:
    st.markdown(f"**{title}** ({len(df)})")
    cols = [c for c in DRILL_COLS if c in df.columns]
    st.dataframe(df[cols], use_container_width=True, hide_index=True)
    download_filtered(df, key=key)

def download_filtered(df: pd.DataFrame, key: str = "download") -> None:
    csv = df.to_csv(index=False).encode("utf-8")
    st.download_button("Download (CSV)", csv, "shipments.csv", "text/csv", key=key)

def data_dictionary_expander() -> None:
    with st.expander("Data Dictionary"):
        st.markdown(
            '''
- **clearance time** = green channel date − cargo presence date
- **delivery time** = last truck delivery − green channel date
- **operation time** = last truck delivery − cargo presence date
- **NF issue time** = NF issue date − green channel date
- Times are whole calendar days (weekends included), rounded up; monthly figures are the average, rounded
- **DI counts** are distinct declaration numbers; one DI can cover several BLs/containers
- **container volume** = FCL count (1 if blank) for FCL and FCL/LCL shipments, 0 otherwise
- **on-time %** = delivered shipments whose last truck arrived by the actual ETA ÷ delivered shipments
- Warehouse names are grouped into TECON, TECA, CLIA Empório, Intermaritima, TPC; anything else is N/A
'''
        )
