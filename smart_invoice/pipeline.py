# smart_invoice/pipeline.py
"""
Orchestration: parse -> normalize / aggregate -> merge -> documents.

BillingSession is an immutable snapshot of the three datasets. Loading a
file returns a new session with that dataset and the merge replaced
wholesale; a failed parse raises before anything is replaced, so the
caller's previous session stays valid.
"""
import logging
import time
from dataclasses import dataclass, replace

from .constants import (ALL_STATES, DEFAULT_STATE, DOC_KIND_FILE_PREFIX, DOC_KINDS,
                        DOC_TYPE_FILE_NAMES, DOC_TYPES)
from .core_engine import merge_customer_invoice_data, summarize_totals
from .customer_master import parse_customer_master
from .invoice_aggregator import parse_invoice_data
from .models import GeneratedDocument
from .pdf_gen import create_document_pdf
from .state_classifier import extract_state_from_address
from .tax_calculator import document_subtotal
from .utils import format_inr, safe_file_stem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BillingSession:
    customers: tuple = ()
    invoices: tuple = ()
    merged: tuple = ()

    def _remerge(self, customers, invoices):
        merged = merge_customer_invoice_data(customers, invoices) if invoices else []
        return replace(self, customers=tuple(customers), invoices=tuple(invoices),
                       merged=tuple(merged))

    def with_customers(self, customers):
        return self._remerge(customers, self.invoices)

    def with_invoices(self, invoices):
        return self._remerge(self.customers, invoices)

    def with_customer_master(self, file_obj):
        return self.with_customers(parse_customer_master(file_obj))

    def with_invoice_data(self, file_obj):
        return self.with_invoices(parse_invoice_data(file_obj))

    def reset(self):
        return BillingSession()

    def summary(self):
        return summarize_totals(self.invoices)


def apply_upload(session, loader_name, file_obj, file_id, loaded_id):
    """
    (session, loaded_id) after loading `file_obj` with the named session
    loader, unless `file_id` is the file already loaded. A failed parse
    raises before `file_id` is recorded, so the same file can be retried.
    """
    if file_id == loaded_id:
        return session, loaded_id
    return getattr(session, loader_name)(file_obj), file_id


def document_file_name(record, doc_type, kind):
    return (f"{DOC_KIND_FILE_PREFIX[kind]}_{DOC_TYPE_FILE_NAMES[doc_type]}_"
            f"{safe_file_stem(record.customer.customer_name)}_{record.sap_code}.pdf")


def generate_documents(merged, kinds=DOC_KINDS, doc_types=DOC_TYPES, renderer=create_document_pdf,
                       format_number=format_inr, delay=0.0, progress=None):
    """
    One document per (record x doc_type x kind). Each render only reads its
    own record, so the order carries no meaning beyond presentation.
    `delay` is a pause between items for UI responsiveness.
    """
    total = len(merged) * len(doc_types) * len(kinds)
    documents = []
    for record in merged:
        for doc_type in doc_types:
            for kind in kinds:
                content = renderer(record, doc_type, kind, format_number)
                documents.append(GeneratedDocument(
                    id=f"{record.sap_code}-{doc_type}-{kind}",
                    customer_name=record.customer.customer_name,
                    sap_code=record.sap_code,
                    doc_type=doc_type,
                    kind=kind,
                    amount=document_subtotal(record, doc_type),
                    file_name=document_file_name(record, doc_type, kind),
                    content=content,
                ))
                if progress:
                    progress(len(documents), total)
                if delay:
                    time.sleep(delay)
    logger.info(f"Generated {len(documents)} documents for {len(merged)} customers")
    return documents


def filter_documents(documents, merged, search="", state=ALL_STATES):
    """Customer-name search plus state filter (state taken from the customer address)."""
    state_by_customer = {r.customer.customer_name: extract_state_from_address(r.customer.address)
                         for r in merged}
    needle = search.lower()
    result = []
    for doc in documents:
        if needle not in doc.customer_name.lower():
            continue
        if state != ALL_STATES and state_by_customer.get(doc.customer_name, DEFAULT_STATE) != state:
            continue
        result.append(doc)
    return result
