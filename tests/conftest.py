from __future__ import annotations

import pandas as pd
import pytest

from data_io import normalize_records

def make_records(rows):
    return normalize_records(pd.DataFrame(rows))

@pytest.fixture
def records():
    return make_records

@pytest.fixture
def shipments() -> pd.DataFrame:
    return make_records([
        {"id": "1", "bl_awb": "MEDU001", "description": "Battery cells", "type_of_cargo": "Batteries",
         "incoterm": "CIF", "shipment_type": "FCL", "fcl": 2, "parametrization": "Green",
         "bonded_warehouse": "TECON - Wilson Sons", "status": "CARGO DELIVERED", "analyst": "ana souza",
         "di": "D1", "invoice_value": 100.0, "actual_eta": "2024-02-05",
         "cargo_presence_date": "2024-02-06", "di_registration_date": "2024-02-07",
         "green_channel_date": "2024-02-08", "last_truck_delivery": "2024-02-04",
         "nf_issue_date": "2024-02-09", "po_sap": "4500", "approved_draft_di": "OK"},
        {"id": "2", "bl_awb": "MEDU002", "description": "Battery modules", "type_of_cargo": "Batteries",
         "incoterm": "CIF", "shipment_type": "FCL/LCL", "fcl": None, "parametrization": "Green",
         "bonded_warehouse": "Tecon", "status": "IN TRANSIT", "analyst": "ANA SOUZA",
         "di": "D1", "invoice_value": 50.0, "actual_eta": "2024-07-10",
         "cargo_presence_date": "2024-07-11", "di_registration_date": "2024-02-20",
         "green_channel_date": "2024-07-15"},
        {"id": "3", "bl_awb": "COSU003", "description": "Vehicle parts", "type_of_cargo": "Auto Parts",
         "incoterm": "FOB", "shipment_type": "LCL", "fcl": 1, "parametrization": "Red",
         "bonded_warehouse": "CLIA Empório", "status": "AT THE PORT", "analyst": "Bruno Lima",
         "di": "D2", "invoice_value": 30.0, "actual_eta": "2024-08-01",
         "di_registration_date": "2024-03-02"},
        {"id": "4", "bl_awb": "ZIMU004", "description": "Steel", "type_of_cargo": "Structures",
         "incoterm": "EXW", "shipment_type": "FCL", "fcl": 3, "parametrization": None,
         "bonded_warehouse": "Somewhere else", "status": "ON HOLD", "analyst": None,
         "di": None, "invoice_value": None, "actual_eta": "not a date",
         "di_registration_date": None},
    ])
