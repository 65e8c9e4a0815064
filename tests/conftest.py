import io

import pandas as pd
import pytest

from smart_invoice.models import CustomerData, InvoiceData, MergedInvoiceData

PIVOT_HEADERS = [
    "Plant", "Zone", "SAP Code", "Bill To Party Name", "Bill To District",
    "Sum of Total QTY Lifted", "Godown Rent @ Rs. 100/mt (Ist Bill)",
    "Loading @ Rs. 75/mt", "Unloading @ Rs. 75/mt",
    "Local Transportation @ Rs. 200/mt",
    "Sum of Balance to be given as Secondary Frt. (3rd Bill)",
]

CUSTOMER_HEADERS = [
    "SAP Code", "Customer Name", "Street", "Street2", "Street3", "Street4",
    "Postal Code", "District", "GSTIN", "PAN", "E-mail Address", "Mob_num",
]


def workbook_bytes(sheets):
    """{sheet name: list of rows} -> xlsx bytes."""
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
        for name, rows in sheets.items():
            pd.DataFrame(rows).to_excel(writer, sheet_name=name, header=False, index=False)
    return buffer.getvalue()


@pytest.fixture
def make_workbook():
    return workbook_bytes


@pytest.fixture
def pivot_rows():
    return [
        ["Monthly Cases Report"],
        PIVOT_HEADERS,
        ["P100", "West", "S100", "Acme Traders", "Pune", 10, 5000, 750, 0, 0, 0],
        ["P100", "West", "S100", "Acme Traders", "Pune", 5, 3000, 0, 0, 0, 0],
        ["P200", "East", "S200", "Bharat Agro", "Patna", 20, 2000, 150, 150, 400, 1200],
    ]


@pytest.fixture
def customer_rows():
    return [
        ["Master Data Export"],
        CUSTOMER_HEADERS,
        ["C-01", "Acme Traders", "12 MG Road", None, None, None, 400001, "Pune",
         "27AAACA1234A1Z5", "AAACA1234A", "accounts@acme.example", "9800000001"],
        ["S200", "Bharat Agro", "Station Road", "Ward 4", None, None, 800001, "Patna, Bihar",
         "10AAACB1234B1Z2", "AAACB1234B", None, None],
    ]


def make_invoice(sap_code="S1", customer_name="Acme Traders", godown_rent=0.0, loading=0.0,
                 unloading=0.0, local_transport=0.0, freight=0.0, district="Pune"):
    main = loading + unloading + local_transport
    return InvoiceData(
        sap_code=sap_code,
        customer_name=customer_name,
        customer_name_for_matching=customer_name.lower(),
        district=district,
        quantity_lifted=0.0,
        godown_rent=godown_rent,
        loading_charges=loading,
        unloading_charges=unloading,
        local_transportation=local_transport,
        freight_balance=freight,
        main_bill_amount=main,
        total_value=godown_rent + main + freight,
        zone="",
        plant="",
        row_count=1,
    )


def make_customer(name="Acme Traders", sap_code="C1", address="12 MG Road, Pune"):
    return CustomerData(sap_code=sap_code, customer_name=name, address=address,
                        gstin="27AAACA1234A1Z5", pan="AAACA1234A")


def make_merged(address="Lucknow", **invoice_kwargs):
    invoice = make_invoice(**invoice_kwargs)
    customer = make_customer(name=invoice.customer_name, address=address)
    return MergedInvoiceData.from_invoice(invoice, customer, "name")
