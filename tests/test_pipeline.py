import pytest

from smart_invoice.constants import ALL_STATES, PIVOT_SHEET_NAME
from smart_invoice.core_engine import MATCH_NAME, MATCH_NONE
from smart_invoice.errors import SheetNotFoundError, SpreadsheetDecodeError
from smart_invoice.pipeline import (BillingSession, apply_upload, document_file_name,
                                    filter_documents, generate_documents)
from smart_invoice.tax_calculator import compute_document_values

from conftest import PIVOT_HEADERS, make_invoice, make_merged


def stub_renderer(record, doc_type, kind, format_number):
    return f"{record.sap_code}:{doc_type}:{kind}".encode()


@pytest.fixture
def loaded_session(make_workbook, pivot_rows, customer_rows):
    session = BillingSession()
    session = session.with_invoice_data(make_workbook({PIVOT_SHEET_NAME: pivot_rows}))
    return session.with_customer_master(make_workbook({"Sheet1": customer_rows}))


def test_end_to_end_merge(loaded_session):
    assert [c.sap_code for c in loaded_session.customers] == ["C-01", "S200"]
    assert [i.sap_code for i in loaded_session.invoices] == ["S100", "S200"]

    acme, bharat = loaded_session.merged
    assert acme.match_tier == MATCH_NAME
    assert acme.customer.sap_code == "C-01"
    assert acme.godown_rent == 8000
    assert acme.row_count == 2
    assert bharat.customer.address.endswith("Patna, Bihar")
    assert bharat.main_bill_amount == 700


def test_summary_totals(loaded_session):
    totals = loaded_session.summary()
    assert totals.godown_rent_total == 10000
    assert totals.main_bill_amount_total == 1450
    assert totals.freight_balance_total == 1200
    assert totals.combined_total == 12650
    assert totals.customer_count == 2


def test_invoices_without_customers_are_merged_with_sentinels(make_workbook, pivot_rows):
    session = BillingSession().with_invoice_data(make_workbook({PIVOT_SHEET_NAME: pivot_rows}))
    assert len(session.merged) == len(session.invoices) == 2
    assert all(r.match_tier == MATCH_NONE for r in session.merged)


def test_customers_without_invoices_merge_nothing(make_workbook, customer_rows):
    session = BillingSession().with_customer_master(make_workbook({"Sheet1": customer_rows}))
    assert len(session.customers) == 2
    assert session.merged == ()


def test_reload_replaces_dataset(loaded_session, make_workbook, pivot_rows):
    smaller = make_workbook({PIVOT_SHEET_NAME: pivot_rows[:3]})
    session = loaded_session.with_invoice_data(smaller)
    assert [i.sap_code for i in session.invoices] == ["S100"]
    assert len(session.merged) == 1
    assert len(loaded_session.merged) == 2


def test_failed_parse_keeps_previous_session(loaded_session, make_workbook, pivot_rows):
    with pytest.raises(SheetNotFoundError):
        loaded_session.with_invoice_data(make_workbook({"Pivot": pivot_rows}))
    with pytest.raises(SpreadsheetDecodeError):
        loaded_session.with_customer_master(b"not a workbook")
    assert len(loaded_session.merged) == 2


def test_reset(loaded_session):
    assert loaded_session.reset() == BillingSession()


def test_document_file_name():
    record = make_merged(sap_code="S100", godown_rent=10)
    assert document_file_name(record, "godown", "invoice") == \
        "TaxInvoice_Godown_Rent_Acme_Traders_S100.pdf"


def test_generate_documents_cartesian_product():
    merged = [make_merged(sap_code="S1", godown_rent=500, freight=50),
              make_merged(sap_code="S2", loading=75)]
    calls = []
    docs = generate_documents(merged, renderer=stub_renderer,
                              progress=lambda done, total: calls.append((done, total)))
    assert len(docs) == 2 * 3 * 2
    assert len({d.id for d in docs}) == len(docs)
    assert calls[-1] == (12, 12)
    assert [done for done, _ in calls] == list(range(1, 13))

    first = docs[0]
    assert first.id == "S1-godown-invoice"
    assert first.amount == 500
    assert first.content == b"S1:godown:invoice"
    assert first.file_name.startswith("TaxInvoice_")
    assert docs[1].file_name.startswith("DebitNote_")


def test_generate_documents_subset():
    docs = generate_documents([make_merged(sap_code="S1", freight=99)], kinds=("invoice",),
                              doc_types=("freight",), renderer=stub_renderer)
    (doc,) = docs
    assert doc.amount == 99
    assert doc.kind == "invoice"


def test_generate_documents_empty():
    assert generate_documents([], renderer=stub_renderer) == []


def test_filter_documents():
    up = make_merged(sap_code="S1", customer_name="Acme Traders", address="Lucknow")
    mh = make_merged(sap_code="S2", customer_name="Bharat Agro", address="Pune, Maharashtra")
    merged = [up, mh]
    docs = generate_documents(merged, renderer=stub_renderer)

    assert filter_documents(docs, merged) == docs
    by_name = filter_documents(docs, merged, search="bharat")
    assert {d.sap_code for d in by_name} == {"S2"}
    by_state = filter_documents(docs, merged, state="Maharashtra")
    assert {d.sap_code for d in by_state} == {"S2"}
    assert {d.sap_code for d in filter_documents(docs, merged, state="Uttar Pradesh")} == {"S1"}
    assert filter_documents(docs, merged, search="acme", state="Maharashtra") == []
    assert len(filter_documents(docs, merged, state=ALL_STATES)) == len(docs)


def test_make_invoice_helper_matches_merge():
    invoice = make_invoice(sap_code="S9", loading=75, unloading=75)
    assert invoice.main_bill_amount == 150


def test_failed_upload_can_be_retried_with_same_file_id(make_workbook, pivot_rows):
    session = BillingSession()
    file_id = ("pivot.xlsx", 1024)
    with pytest.raises(SheetNotFoundError):
        apply_upload(session, 'with_invoice_data', make_workbook({"Pivot": pivot_rows}),
                     file_id, None)

    good = make_workbook({PIVOT_SHEET_NAME: pivot_rows})
    session, loaded_id = apply_upload(session, 'with_invoice_data', good, file_id, None)
    assert loaded_id == file_id
    assert len(session.invoices) == 2


def test_same_upload_is_not_parsed_twice(loaded_session):
    file_id = ("customers.xlsx", 10)
    session, loaded_id = apply_upload(loaded_session, 'with_customer_master', b"not a workbook",
                                      file_id, file_id)
    assert session is loaded_session
    assert loaded_id == file_id


def test_negative_pivot_amount_reaches_document_with_sign(make_workbook):
    rows = [PIVOT_HEADERS,
            ["P300", "North", "S300", "Credit Co", "Lucknow", 0, 0, 0, 0, 0, "-1000"]]
    session = BillingSession().with_invoice_data(make_workbook({PIVOT_SHEET_NAME: rows}))
    (record,) = session.merged
    values = compute_document_values(record, "freight")
    assert values.total == pytest.approx(-1180)
    assert values.amount_in_words.startswith("Minus One Thousand One Hundred Eighty")
