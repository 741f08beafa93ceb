from __future__ import annotations
import logging
import streamlit as st
import pandas as pd

from config import Settings
from data_io import load_sample, load_uploaded, validate_records
from rates import RatesUnavailable, cached_rates
from store import ShipmentStore, StoreError

logger = logging.getLogger(__name__)

def header(app_title: str) -> None:
    st.set_page_config(page_title=app_title, page_icon="📦", layout="wide")
    st.title(app_title)

def _import_upload(store: ShipmentStore) -> None:
    uploaded = st.sidebar.file_uploader("Import spreadsheet", type=["xlsx", "csv"])
    if not uploaded or not st.sidebar.button("Import into store", use_container_width=True):
        return
    incoming = load_uploaded(uploaded)
    if incoming.empty:
        st.sidebar.warning("No rows with a BL/AWB number in that file.")
        return
    try:
        st.session_state["shipments"] = store.upsert(incoming)
    except StoreError as e:
        st.sidebar.error(str(e))
        return
    st.sidebar.success(f"Imported {len(incoming)} shipment(s).")

def data_source_picker(settings: Settings) -> pd.DataFrame:
    st.sidebar.header("Data")
    store = ShipmentStore(settings.store_path)

    # fetched once per session; imports refresh it
    if "shipments" not in st.session_state:
        try:
            st.session_state["shipments"] = store.fetch_all()
        except StoreError as e:
            st.error(str(e))
            st.stop()

    _import_upload(store)

    stored: pd.DataFrame = st.session_state["shipments"]
    use_sample = st.sidebar.checkbox("Use sample data", value=stored.empty)
    if use_sample:
        try:
            df = load_sample(settings.sample_path)
        except FileNotFoundError:
            st.error(f"Sample file not found: {settings.sample_path}")
            st.stop()
    else:
        df = stored

    err = validate_records(df)
    if err:
        st.info(err + " Import a spreadsheet or tick 'Use sample data' to get started.")
        st.stop()

    return df

def exchange_rates_panel(settings: Settings) -> None:
    try:
        r = cached_rates(settings.rates_url, settings.rates_timeout)
    except RatesUnavailable as e:
        st.warning(f"Exchange rates unavailable: {e}")
        return
    c1, c2, c3 = st.columns(3)
    c1.metric("USD → BRL (buy / sell)", f"{r.usd_buy:.4f} / {r.usd_sell:.4f}")
    c2.metric("EUR → BRL (buy / sell)", f"{r.eur_buy:.4f} / {r.eur_sell:.4f}")
    c3.metric("CNY → BRL", f"{r.cny:.4f}")
    st.caption(f"Quotes as of {r.date} {r.time}")

def footer_description() -> None:
    with st.expander("ℹ️ Note: About this app and expected data format", expanded=False):
        st.markdown(
            """
            **Import tracking** across bills of lading: customs status, channels, terminals, lead times and value.
            Import an `.xlsx`/`.csv` export; rows are matched to existing shipments by BL/AWB.

            **Recognized headers** (case and spacing ignored): BL/AWB, PO SAP, Invoice, Description,
            Type of Cargo, Incoterm, Shipment Type, FCL, Parametrization, Bonded Warehouse, Status,
            Analyst, Broker, Shipper, DI, Approved Draft DI, Invoice Value, Actual ETD, Actual ETA,
            Cargo Presence Date, DI Registration Date, Green Channel Date, First/Last Truck Delivery,
            NF Issue Date.

            Dates may be spreadsheet serials or `dd/mm/yyyy`.
            """
        )
