from __future__ import annotations

from aggregation import find
from constants import MONTH_LABELS, RECORD_COLS, STATUSES
from dashboards import DURATION_TITLES, cargo_volume, color_for, in_transit_panels, performance_panels
from features import container_volume

def _values(aggs):
    return {a.label: a.value for a in aggs}

def test_in_transit_panels(shipments):
    panels = in_transit_panels(shipments)
    assert _values(panels["Shipments by Incoterm"]) == {"CIF": 2, "FOB": 1, "DAP": 0, "Other": 1}
    assert _values(panels["Shipment Status"]) == {"Doc Review": 0, "In Transit": 1, "At Port": 1}
    assert _values(panels["SAP PO Status"]) == {"OK": 1, "Pending": 3}
    assert _values(panels["Document Status"]) == {"Approved": 1, "Not Approved": 3}

def test_cargo_volume_groups_by_normalized_terminal(shipments):
    stacked = cargo_volume(shipments)
    # ZIMU004 has no usable ETA; COSU003 is LCL so its terminal stays at zero
    assert list(stacked) == ["CLIA Empório", "TECON"]
    assert _values(stacked["TECON"]) == {"Jul": 1, "Aug": 0, "Sep": 0, "Oct": 0, "Nov": 0, "Dec": 0}
    assert all(a.value == 0 and a.members.empty for a in stacked["CLIA Empório"])

def test_performance_panels(shipments):
    panels = performance_panels(shipments)
    assert _values(panels["DI per Channel"]) == {"Green": 1, "Yellow": 0, "Red": 1, "Other": 0}
    per_month = panels["DI per Month"]
    assert [a.label for a in per_month] == MONTH_LABELS
    assert find(per_month, "Feb").value == 1
    assert find(per_month, "Feb").secondary_value == 2
    assert find(per_month, "Mar").value == 1
    assert _values(panels["DI per Analyst"]) == {"Ana Souza": 1, "Bruno Lima": 1, "Other": 0}
    assert [a.label for a in panels["DI by Status"]][: len(STATUSES)] == STATUSES

    clearance = panels[DURATION_TITLES["clearance"]]
    # MEDU001: 02-06 -> 02-08; MEDU002 was registered in Feb too: 07-11 -> 07-15
    assert find(clearance, "Feb").value == 3
    assert find(clearance, "Feb").secondary_value == 2
    assert find(clearance, "Mar").secondary_value == 0

def test_color_for_is_total():
    assert color_for("CIF") == "#8b5cf6"
    assert color_for("anything") == "#6b7280"

def test_container_volume(records):
    df = records([
        {"bl_awb": "A", "shipment_type": "FCL", "fcl": 3},
        {"bl_awb": "B", "shipment_type": "fcl/lcl", "fcl": None},
        {"bl_awb": "C", "shipment_type": "LCL", "fcl": 2},
        {"bl_awb": "D", "shipment_type": None, "fcl": 2},
    ])
    assert container_volume(df).tolist() == [3.0, 1.0, 0.0, 0.0]

def test_panels_leave_records_untouched(shipments):
    in_transit_panels(shipments)
    cargo_volume(shipments)
    performance_panels(shipments)
    assert sorted(shipments.columns) == sorted(RECORD_COLS)
