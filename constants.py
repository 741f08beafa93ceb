APP_TITLE = "Import Tracking Insights"

STATUSES = [
    "ORDER PLACED", "SHIPMENT CONFIRMED", "DOCUMENT REVIEW", "IN TRANSIT", "AT THE PORT",
    "DI REGISTERED", "CARGO READY", "CARGO CLEARED", "CARGO DELIVERED", "VAZIAS",
]
STATUS_IN_TRANSIT = "IN TRANSIT"
STATUS_DELIVERED = "CARGO DELIVERED"

INCOTERMS = ["CIF", "FOB", "DAP"]
SHIPMENT_TYPES = ["FCL", "LCL", "FCL/LCL", "AIR", "RO-RO"]
FULL_CONTAINER_TYPES = {"FCL", "FCL/LCL"}
CHANNELS = ["Green", "Yellow", "Red"]

OTHER_LABEL = "Other"
ALL = "All"

MONTH_LABELS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
# second-half window used by the in-transit volume chart
FISCAL_WINDOW_START = 7

DATE_COLS = [
    "actual_etd", "actual_eta", "cargo_presence_date", "di_registration_date",
    "green_channel_date", "first_truck_delivery", "last_truck_delivery", "nf_issue_date",
]
NUMERIC_COLS = ["fcl", "invoice_value"]
TEXT_COLS = [
    "id", "bl_awb", "po_sap", "invoice", "description", "type_of_cargo", "incoterm",
    "shipment_type", "parametrization", "bonded_warehouse", "status", "analyst", "broker",
    "shipper", "approved_draft_di", "di",
]
RECORD_COLS = TEXT_COLS + NUMERIC_COLS + DATE_COLS

# (start, end) date pairs behind each duration metric
DURATIONS = {
    "clearance": ("cargo_presence_date", "green_channel_date"),
    "delivery": ("green_channel_date", "last_truck_delivery"),
    "operation": ("cargo_presence_date", "last_truck_delivery"),
    "nf_issue": ("green_channel_date", "nf_issue_date"),
}

# Header token -> record field. Headers are lower-cased with whitespace removed
# before matching; order matters, the first token contained in a header wins.
# A None field marks columns that would otherwise hit a broader token.
HEADER_MAP = [
    ("statusli", None),
    ("uniquedi", None),
    ("cifdi", None),
    ("senttobroker", None),
    ("invoicecurrency", None),
    ("invoicepayment", None),
    ("approveddraftdi", "approved_draft_di"),
    ("bl/awb", "bl_awb"),
    ("blawb", "bl_awb"),
    ("awb", "bl_awb"),
    ("posap", "po_sap"),
    ("sappo", "po_sap"),
    ("draftdi", None),
    ("diregistration", "di_registration_date"),
    ("registrationdi", "di_registration_date"),
    ("greenchannel", "green_channel_date"),
    ("deliveryauthorized", "green_channel_date"),
    ("cargopresence", "cargo_presence_date"),
    ("firsttruck", "first_truck_delivery"),
    ("lasttruck", "last_truck_delivery"),
    ("nfissue", "nf_issue_date"),
    ("actualetd", "actual_etd"),
    ("actualeta", "actual_eta"),
    ("etd", "actual_etd"),
    ("eta", "actual_eta"),
    ("invoicevalue", "invoice_value"),
    ("invoice", "invoice"),
    ("description", "description"),
    ("typeofcargo", "type_of_cargo"),
    ("cargotype", "type_of_cargo"),
    ("incoterm", "incoterm"),
    ("shipmenttype", "shipment_type"),
    ("parametrization", "parametrization"),
    ("channel", "parametrization"),
    ("bondedwarehouse", "bonded_warehouse"),
    ("warehouse", "bonded_warehouse"),
    ("terminal", "bonded_warehouse"),
    ("analyst", "analyst"),
    ("responsiblebrazil", "analyst"),
    ("broker", "broker"),
    ("shipper", "shipper"),
    ("status", "status"),
    ("fcl", "fcl"),
    ("di", "di"),
    ("bl", "bl_awb"),
]

KPI_FORMATS = {
    "total_shipments": "{:,}",
    "on_time_rate": "{:.0f}%",
    "in_transit": "{:,}",
    "recent_value": "{:,.2f}",
}
