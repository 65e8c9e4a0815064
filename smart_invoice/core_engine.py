# smart_invoice/core_engine.py
# Reconciliation of aggregated invoice rows against the Customer Master.
# Match passes, first hit wins:
#   1. customer name, trimmed + case-insensitive, exact equality
#   2. SAP code, exact equality (both sides non-empty)
# No fuzzy matching: attaching the wrong legal entity to a bill is worse
# than leaving a row unmatched. Unmatched rows keep a sentinel customer.

import logging

from .constants import ADDRESS_NOT_FOUND, GSTIN_NOT_FOUND, PAN_NOT_FOUND
from .models import CustomerData, MergedInvoiceData, SummaryTotals

logger = logging.getLogger(__name__)

MATCH_NAME = "name"
MATCH_SAP_CODE = "sap_code"
MATCH_NONE = "unmatched"


# --- HELPERS ---
def name_key(name):
    return (name or "").strip().lower()


def build_lookup(customers, key_func):
    """key -> first customer (master order) carrying that key. Empty keys skipped."""
    lookup = {}
    for customer in customers:
        key = key_func(customer)
        if key and key not in lookup:
            lookup[key] = customer
    return lookup


def unmatched_customer(invoice):
    return CustomerData(
        sap_code=invoice.sap_code,
        customer_name=invoice.customer_name,
        address=ADDRESS_NOT_FOUND,
        gstin=GSTIN_NOT_FOUND,
        pan=PAN_NOT_FOUND,
    )


# --- MERGE ---
def merge_customer_invoice_data(customers, invoices):
    """
    Attaches a customer to every invoice row. Output is 1:1 with `invoices`
    and in the same order; neither input is modified.
    """
    name_map = build_lookup(customers, lambda c: name_key(c.customer_name))
    sap_map = build_lookup(customers, lambda c: (c.sap_code or "").strip())

    merged = []
    for invoice in invoices:
        customer = name_map.get(name_key(invoice.customer_name))
        tier = MATCH_NAME
        if customer is None and invoice.sap_code:
            customer = sap_map.get(invoice.sap_code.strip())
            tier = MATCH_SAP_CODE
        if customer is None:
            customer = unmatched_customer(invoice)
            tier = MATCH_NONE
            logger.warning(f"No customer master match for SAP {invoice.sap_code} "
                           f"('{invoice.customer_name}')")
        merged.append(MergedInvoiceData.from_invoice(invoice, customer, tier))

    stats = match_statistics(merged)
    logger.info(f"Merged {len(merged)} invoice rows: {stats[MATCH_NAME]} by name, "
                f"{stats[MATCH_SAP_CODE]} by SAP code, {stats[MATCH_NONE]} unmatched")
    return merged


def match_statistics(merged):
    stats = {MATCH_NAME: 0, MATCH_SAP_CODE: 0, MATCH_NONE: 0}
    for record in merged:
        stats[record.match_tier] = stats.get(record.match_tier, 0) + 1
    return stats


# --- SUMMARY ---
def summarize_totals(records):
    """Totals for the summary export. Works on InvoiceData or MergedInvoiceData."""
    godown = sum(r.godown_rent for r in records)
    main = sum(r.main_bill_amount for r in records)
    freight = sum(r.freight_balance for r in records)
    return SummaryTotals(
        godown_rent_total=godown,
        main_bill_amount_total=main,
        freight_balance_total=freight,
        combined_total=godown + main + freight,
        customer_count=len(records),
    )
