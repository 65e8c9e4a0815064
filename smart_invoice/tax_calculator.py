# smart_invoice/tax_calculator.py
"""
Billing values for one document of one merged record.

Quantities are back-calculated from amounts with the fixed Rs./MT rates;
tax is IGST 18% for inter-state jurisdictions, otherwise CGST 9% + SGST 9%.
No rounding happens here; renderers format to two decimals.
"""
from .constants import (CGST_RATE, DOC_TYPES, GODOWN_DESCRIPTION, GODOWN_RENT_RATE, HSN_FREIGHT,
                        HSN_GODOWN, HSN_LOADING, HSN_LOCAL_TRANSPORT, IGST_RATE, LOADING_RATE,
                        LOCAL_TRANSPORT_RATE, MAIN_SERVICE_DESCRIPTION, SGST_RATE, UNLOADING_RATE)
from .models import DocumentValues, LineItem
from .number_words import convert_number_to_indian_words
from .state_classifier import extract_state_from_address, get_jurisdiction


def rated_line(description, hsn_sac, amount, rate):
    return LineItem(description=description, hsn_sac=hsn_sac, amount=amount,
                    quantity=amount / rate, rate=rate)


def build_line_items(record, doc_type):
    if doc_type == "godown":
        return (rated_line(GODOWN_DESCRIPTION, HSN_GODOWN, record.godown_rent, GODOWN_RENT_RATE),)
    if doc_type == "main":
        return (
            rated_line("Loading Charges", HSN_LOADING, record.loading_charges, LOADING_RATE),
            rated_line("Unloading Charges", HSN_LOADING, record.unloading_charges, UNLOADING_RATE),
            rated_line("Local Transportation", HSN_LOCAL_TRANSPORT,
                       record.local_transportation, LOCAL_TRANSPORT_RATE),
        )
    if doc_type == "freight":
        return (LineItem(description="Secondary Freight", hsn_sac=HSN_FREIGHT,
                         amount=record.freight_balance),)
    raise ValueError(f"Unknown document type {doc_type!r}; expected one of {DOC_TYPES}")


def document_subtotal(record, doc_type):
    if doc_type == "godown":
        return record.godown_rent
    if doc_type == "main":
        return record.loading_charges + record.unloading_charges + record.local_transportation
    if doc_type == "freight":
        return record.freight_balance
    raise ValueError(f"Unknown document type {doc_type!r}; expected one of {DOC_TYPES}")


def split_tax(subtotal, inter_state):
    """(cgst, sgst, igst) for a pre-tax amount."""
    if inter_state:
        return 0.0, 0.0, subtotal * IGST_RATE
    return subtotal * CGST_RATE, subtotal * SGST_RATE, 0.0


def service_description(doc_type, state):
    if doc_type == "godown":
        return f"{GODOWN_DESCRIPTION} for {state}"
    if doc_type == "main":
        return MAIN_SERVICE_DESCRIPTION
    return ""


def compute_document_values(record, doc_type, state=None):
    """
    record: MergedInvoiceData; state defaults to the one classified from the
    customer's address.
    """
    if state is None:
        state = extract_state_from_address(record.customer.address)
    jurisdiction = get_jurisdiction(state)
    inter_state = jurisdiction['inter_state']

    line_items = build_line_items(record, doc_type)
    subtotal = document_subtotal(record, doc_type)
    cgst, sgst, igst = split_tax(subtotal, inter_state)
    total = subtotal + cgst + sgst + igst

    return DocumentValues(
        doc_type=doc_type,
        state=state,
        inter_state=inter_state,
        line_items=line_items,
        subtotal=subtotal,
        cgst=cgst,
        sgst=sgst,
        igst=igst,
        total=total,
        amount_in_words=convert_number_to_indian_words(total),
        service_description=service_description(doc_type, state),
        bill_to_address=tuple(jurisdiction['address']),
        bill_to_gstin=jurisdiction['gstin'],
    )
