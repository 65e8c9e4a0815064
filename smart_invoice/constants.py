# smart_invoice/constants.py
from collections import namedtuple

# ── Column lookup ─────────────────────────────────────────────────────────────
# Each logical field maps to an ordered list of header synonyms. Specific
# phrases come first, loose fragments last. `exact` restricts the lookup to
# whole-header equality; `exclude` rejects headers containing any fragment.
FieldSpec = namedtuple('FieldSpec', ['synonyms', 'exact', 'exclude'])
FieldSpec.__new__.__defaults__ = (False, ())

NOT_FOUND = -1

# ── Customer Master file ──────────────────────────────────────────────────────
CUSTOMER_FILE_LABEL = "Customer Master"
CUSTOMER_HEADER_KEYWORDS = ("customer", "name", "party")

CUSTOMER_FIELDS = {
    'sap_code':      FieldSpec(['sap code', 'sap', 'code']),
    'customer_name': FieldSpec(['customer name', 'party name', 'name', 'customer', 'party']),
    'gstin':         FieldSpec(['gstin', 'gst']),
    'pan':           FieldSpec(['pan']),
    'email':         FieldSpec(['e-mail address'], exact=True),
    'mobile':        FieldSpec(['mob_num'], exact=True),
}

# Joined with ", " in this order to build the billing address.
ADDRESS_PART_FIELDS = {
    'street':      FieldSpec(['street'], exact=True),
    'street2':     FieldSpec(['street2'], exact=True),
    'street3':     FieldSpec(['street3'], exact=True),
    'street4':     FieldSpec(['street4'], exact=True),
    'postal_code': FieldSpec(['postal code'], exact=True),
    'district':    FieldSpec(['district'], exact=True),
}

SAP_PLACEHOLDER_PREFIX = "SAP"
SAP_PLACEHOLDER_WIDTH = 3

ADDRESS_NOT_PROVIDED = "Address not provided"
GSTIN_NOT_PROVIDED = "GSTIN not provided"
PAN_NOT_PROVIDED = "PAN not provided"

# Substituted when an invoice row finds no customer master record
ADDRESS_NOT_FOUND = "Address not found"
GSTIN_NOT_FOUND = "GSTIN not found"
PAN_NOT_FOUND = "PAN not found"

# ── Invoice / Cases file ──────────────────────────────────────────────────────
INVOICE_FILE_LABEL = "Invoice Data"
PIVOT_SHEET_NAME = "Pivot."
PIVOT_HEADER_KEYWORDS = ("bill", "party", "amount", "quantity", "rent", "freight")
PLANT_COLUMN_INDEX = 0

INVOICE_FIELDS = {
    'zone':          FieldSpec(['zone', 'plant']),
    'customer_name': FieldSpec(['bill to party name', 'customer name']),
    'district':      FieldSpec(['bill to district', 'district', 'location', 'region']),
    'sap_code':      FieldSpec(['sap code', 'sap']),
    'quantity_lifted': FieldSpec(['sum of total qty lifted', 'quantity lifted', 'quantity']),
    'godown_rent': FieldSpec([
        'godown rent @ rs. 100/mt (ist bill)', 'godown rent @ rs. 100/mt',
        'godown rent', 'godown', 'rent',
    ]),
    'loading_charges': FieldSpec(
        ['loading @ rs. 75/mt', 'loading charges', 'loading'], exclude=('unloading',)
    ),
    'unloading_charges': FieldSpec(['unloading @ rs. 75/mt', 'unloading charges', 'unloading']),
    'local_transportation': FieldSpec([
        'local transportation @ rs. 200/mt', 'local transportation', 'local transport',
    ]),
    'freight_balance': FieldSpec([
        'sum of balance to be given as secondary frt. (3rd bill)',
        'sum of balance to be given as secondary frt.',
        'secondary frt.', 'freight balance', 'freight',
    ]),
}

UNKNOWN_DISTRICT = "Unknown District"

NUMERIC_FIELDS = [
    'quantity_lifted', 'godown_rent', 'loading_charges',
    'unloading_charges', 'local_transportation', 'freight_balance',
]

# Per-field fold policy when several pivot rows share one SAP code.
# Descriptive fields keep the first row's value, amounts are summed.
FIELD_POLICY = {
    'customer_name': 'first',
    'district':      'first',
    'zone':          'first',
    'plant':         'first',
    **{c: 'sum' for c in NUMERIC_FIELDS},
}

# ── Documents ─────────────────────────────────────────────────────────────────
DOC_TYPES = ("godown", "main", "freight")
DOC_KINDS = ("invoice", "debit_note")

DOC_TYPE_FILE_NAMES = {
    'godown':  "Godown_Rent",
    'main':    "Main_Services",
    'freight': "Secondary_Freight",
}
DOC_KIND_FILE_PREFIX = {
    'invoice':    "TaxInvoice",
    'debit_note': "DebitNote",
}
DOC_KIND_TITLES = {
    'invoice':    "TAX INVOICE",
    'debit_note': "DEBIT NOTE",
}

# Per-unit rates (Rs./MT) printed in the pivot headers; quantities are
# recovered as amount / rate.
GODOWN_RENT_RATE = 100.0
LOADING_RATE = 75.0
UNLOADING_RATE = 75.0
LOCAL_TRANSPORT_RATE = 200.0

HSN_GODOWN = "997212"
HSN_LOADING = "996519"
HSN_LOCAL_TRANSPORT = "996713"
HSN_FREIGHT = "996511"

GODOWN_DESCRIPTION = "Rental or Leasing services involving own or leased non - residential property"
MAIN_SERVICE_DESCRIPTION = "Clearing & Forwarding Charges"

CGST_RATE = 0.09
SGST_RATE = 0.09
IGST_RATE = 0.18

# ── States / jurisdiction ─────────────────────────────────────────────────────
DEFAULT_STATE = "Uttar Pradesh"

REGIONAL_UP_VARIATIONS = ["East UP", "West UP", "North UP", "South UP", "Central UP"]

# Checked in this order after the regional UP variations.
OTHER_MAIN_STATES = [
    "Madhya Pradesh", "Rajasthan", "Bihar", "Maharashtra", "Gujarat",
    "Chhattisgarh", "Uttarakhand", "Punjab", "Haryana",
]

KNOWN_STATES = sorted({DEFAULT_STATE, *OTHER_MAIN_STATES})
ALL_STATES = "All States"

JUBILANT_COMPANY_NAME = "JUBILANT AGRI AND CONSUMER PRODUCTS LIMITED"

_RAJASTHAN_ADDRESS = [
    "ADD:- Ground Floor, 1233-1235,1243, Kapasan road, Village Singhpur, Tehsil Kapasan, "
    "Chittorgarh, Rajasthan, 312207",
]

# state -> Jubilant billing entity. `inter_state` selects IGST over CGST+SGST.
JUBILANT_LOCATIONS = {
    "Uttar Pradesh": {
        'address': [
            "ADD:- NH-24, JUBILANT AGRI AND CONSUMER PRODUCTS LIMITED UNIT-I,",
            "BHARTIAGRAM, GAJRAULA, Amroha, Uttar Pradesh, 244223",
        ],
        'gstin': "09AADCC4657M1Z7",
        'inter_state': False,
    },
    "Bihar": {
        'address': [
            "ADD:- Word No.61, Khata No.402, Birua Chak, Ranipur Khidki, Patna, Patna, Bihar, 800008",
        ],
        'gstin': "10AADCC4657M1ZO",
        'inter_state': False,
    },
    "Punjab": {
        'address': [
            "ADD:- Ground, Khasra no 730,31,32,33,708,722,723, Vlogis Warehouse, "
            "Zirakpur Patiala Highway, Nabha, Mohali, SAS Nagar, Punjab, 140603",
        ],
        'gstin': "03AADCC4657M1ZJ",
        'inter_state': False,
    },
    "Madhya Pradesh": {
        'address': [
            "ADD:- Ground Floor, 29/3,, Talavali Chanda, Indore, Indore, Madhya Pradesh, 452010",
        ],
        'gstin': "23AADCC4657M1ZH",
        'inter_state': False,
    },
    "Haryana": {
        'address': [
            "ADD:- 3rd, 142, Chimes 142, Sector 44 Road, Sector 44, Gurugram, Gurugram, Haryana, 122003",
        ],
        'gstin': "06AADCC4657M1ZD",
        'inter_state': False,
    },
    "Rajasthan": {
        'address': _RAJASTHAN_ADDRESS,
        'gstin': "08AADCC4657M1Z9",
        'inter_state': False,
    },
    # Billed from the Rajasthan entity
    "Maharashtra":  {'address': _RAJASTHAN_ADDRESS, 'gstin': "08AADCC4657M1Z9", 'inter_state': True},
    "Gujarat":      {'address': _RAJASTHAN_ADDRESS, 'gstin': "08AADCC4657M1Z9", 'inter_state': True},
    "Chhattisgarh": {'address': _RAJASTHAN_ADDRESS, 'gstin': "08AADCC4657M1Z9", 'inter_state': True},
    "Uttarakhand":  {'address': _RAJASTHAN_ADDRESS, 'gstin': "08AADCC4657M1Z9", 'inter_state': True},
}

INTER_STATE_STATES = [s for s, loc in JUBILANT_LOCATIONS.items() if loc['inter_state']]

# ── Summary export ────────────────────────────────────────────────────────────
SUMMARY_SHEET_NAME = "Invoice Summary"
SUMMARY_ROWS = [
    ("Godown Rent Total", 'godown_rent_total'),
    ("Main Bill Amount Total (Loading/Unloading/Local Transportation)", 'main_bill_amount_total'),
    ("Freight Balance Total", 'freight_balance_total'),
    ("Combined Total", 'combined_total'),
]

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
DEFAULT_RENDER_DELAY = 0.05
