# app.py
from __future__ import annotations
import streamlit as st
import pandas as pd

from config import load_settings
from constants import APP_TITLE
from log_config import setup_logging
from filters import apply_filters, describe, dispatch, sidebar_filters
from kpis import compute_kpis, render_kpis, status_counts
from dashboards import (
    DURATION_TITLES, IN_TRANSIT_DATE, PERFORMANCE_DATE,
    cargo_volume, in_transit_panels, performance_panels,
)
from charts import (
    bar_chart, count_vs_unique_chart, donut_chart, monthly_chart, stacked_volume_chart,
)
from tables import data_dictionary_expander, drilldown, shipments_table
from ui import header, data_source_picker, exchange_rates_panel, footer_description

PAGES = {
    "Overview": (IN_TRANSIT_DATE, "ETA"),
    "Cargos in Transit": (IN_TRANSIT_DATE, "ETA"),
    "Performance": (PERFORMANCE_DATE, "DI registration"),
}

def _status_picked() -> None:
    pick = st.session_state.get("status-filter", "(none)")
    if pick != "(none)":
        dispatch(IN_TRANSIT_DATE, "set_status", pick)
        st.session_state["status-filter"] = "(none)"

def overview_page(df: pd.DataFrame, settings) -> None:
    render_kpis(compute_kpis(df))
    st.divider()
    exchange_rates_panel(settings)

    st.divider()
    st.subheader("Imports by Status")
    counts = status_counts(df)
    if not counts:
        st.info("No shipments under the current filters.")
        return
    st.altair_chart(bar_chart(counts), use_container_width=True)
    st.selectbox("Filter by status", ["(none)"] + [a.label for a in counts],
                 key="status-filter", on_change=_status_picked)

def in_transit_page(df: pd.DataFrame) -> None:
    panels = in_transit_panels(df)
    cols = st.columns(len(panels))
    for col, (title, aggs) in zip(cols, panels.items()):
        with col:
            st.markdown(f"**{title}**")
            if sum(a.value for a in aggs) > 0:
                st.altair_chart(donut_chart(aggs), use_container_width=True)
            else:
                st.caption("No data")
    for i, (title, aggs) in enumerate(panels.items()):
        drilldown(title, aggs, key=f"transit-{i}")

    st.divider()
    st.subheader("Cargo Volume (Jul–Dec, containers by terminal)")
    stacked = cargo_volume(df)
    if not stacked:
        st.info("No full-container shipments arriving Jul–Dec under the current filters.")
        return
    st.altair_chart(stacked_volume_chart(stacked), use_container_width=True)
    terminal = st.selectbox("Drill into terminal", ["(none)"] + list(stacked), key="volume-terminal")
    if terminal != "(none)":
        drilldown(f"Cargo Volume / {terminal}", stacked[terminal], key="volume-month")

def performance_page(df: pd.DataFrame) -> None:
    panels = performance_panels(df)

    l, r = st.columns(2)
    with l:
        st.subheader("DI per Channel")
        st.altair_chart(bar_chart(panels["DI per Channel"], "Unique DI"), use_container_width=True)
    with r:
        st.subheader("DI per Month")
        st.altair_chart(monthly_chart(panels["DI per Month"], "Unique DI"), use_container_width=True)

    l2, r2 = st.columns(2)
    with l2:
        st.subheader("DI per Analyst")
        st.altair_chart(bar_chart(panels["DI per Analyst"], "Unique DI"), use_container_width=True)
    with r2:
        st.subheader("DI vs Records by Status")
        st.altair_chart(count_vs_unique_chart(panels["DI by Status"]), use_container_width=True)

    st.divider()
    st.subheader("Lead Times (average days per DI registration month)")
    titles = list(DURATION_TITLES.values())
    for row in (titles[:2], titles[2:]):
        for col, title in zip(st.columns(2), row):
            with col:
                st.markdown(f"**{title}**")
                st.altair_chart(monthly_chart(panels[title], "Days", empty_as_missing=True),
                                use_container_width=True)

    st.subheader("Invoice Value per Month")
    st.altair_chart(monthly_chart(panels["Invoice Value per Month"], "Invoice value"),
                    use_container_width=True)

    st.divider()
    for i, (title, aggs) in enumerate(panels.items()):
        drilldown(title, aggs, key=f"perf-{i}")

def main() -> None:
    settings = load_settings()
    setup_logging(settings.log_level)
    header(APP_TITLE)

    data = data_source_picker(settings)

    page = st.sidebar.radio("Page", list(PAGES), key="page")
    date_field, date_label = PAGES[page]
    filters = sidebar_filters(data, date_field, date_label)
    df = apply_filters(data, filters, date_field)

    note = describe(filters)
    if note:
        st.caption(f"Filters: {note}")

    st.divider()
    if page == "Overview":
        overview_page(df, settings)
    elif page == "Cargos in Transit":
        in_transit_page(df)
    else:
        performance_page(df)

    st.divider()
    with st.expander("All filtered shipments"):
        shipments_table(page, df, key="all-filtered")
    data_dictionary_expander()
    footer_description()

if __name__ == "__main__":
    main()
