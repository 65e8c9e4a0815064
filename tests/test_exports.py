import io
import zipfile

import pandas as pd
import pytest

from smart_invoice.constants import DOC_KINDS, DOC_TYPES, SUMMARY_SHEET_NAME
from smart_invoice.models import GeneratedDocument, SummaryTotals
from smart_invoice.pdf_gen import build_table_data, create_document_pdf
from smart_invoice.report_gen import generate_documents_zip, generate_summary_excel
from smart_invoice.tax_calculator import compute_document_values
from smart_invoice.utils import format_inr, safe_file_stem

from conftest import make_merged


@pytest.mark.parametrize("address", ["Lucknow", "Pune, Maharashtra"])
@pytest.mark.parametrize("doc_type", DOC_TYPES)
@pytest.mark.parametrize("kind", DOC_KINDS)
def test_pdf_renders(address, doc_type, kind):
    record = make_merged(address=address, godown_rent=5000, loading=750, unloading=150,
                         local_transport=400, freight=1200)
    content = create_document_pdf(record, doc_type, kind)
    assert content.startswith(b"%PDF")


def test_table_shapes():
    record = make_merged(godown_rent=5000, freight=1200)
    godown = build_table_data(compute_document_values(record, "godown", "Bihar"), format_inr)
    freight = build_table_data(compute_document_values(record, "freight", "Gujarat"), format_inr)
    assert all(len(row) == 5 for row in godown)
    assert all(len(row) == 3 for row in freight)
    assert godown[-1][-1] == "5,900.00"
    assert any(row[0] == "IGST @ 18%" for row in freight)


def test_summary_excel_reads_back():
    totals = SummaryTotals(godown_rent_total=10000, main_bill_amount_total=1450,
                           freight_balance_total=1200, combined_total=12650, customer_count=2)
    df = pd.read_excel(generate_summary_excel(totals), sheet_name=SUMMARY_SHEET_NAME)
    assert list(df.columns) == ["Summary Category", "Total Value"]
    assert df["Total Value"].tolist() == [10000, 1450, 1200, 12650]
    assert df["Summary Category"].iloc[-1] == "Combined Total"


def test_documents_zip():
    docs = [GeneratedDocument(id=str(i), customer_name="Acme", sap_code="S1", doc_type="godown",
                              kind="invoice", amount=1.0, file_name=f"doc_{i}.pdf",
                              content=b"%PDF-" + bytes([i]))
            for i in range(3)]
    with zipfile.ZipFile(io.BytesIO(generate_documents_zip(docs).getvalue())) as archive:
        assert archive.namelist() == ["doc_0.pdf", "doc_1.pdf", "doc_2.pdf"]
        assert archive.read("doc_2.pdf") == b"%PDF-\x02"


@pytest.mark.parametrize("amount, text", [
    (0, "0.00"),
    (999.5, "999.50"),
    (1234.5, "1,234.50"),
    (1234567.5, "12,34,567.50"),
    (123456789, "12,34,56,789.00"),
    (-150000, "-1,50,000.00"),
    (None, "0.00"),
    (float("nan"), "nan"),
    (float("inf"), "inf"),
])
def test_format_inr(amount, text):
    assert format_inr(amount) == text


def test_safe_file_stem():
    assert safe_file_stem("M/s. Acme & Sons") == "M_s__Acme___Sons"
    assert safe_file_stem(None) == ""
