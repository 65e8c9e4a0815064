# smart_invoice/invoice_aggregator.py
"""
Pivot sheet -> one InvoiceData per SAP code.

Two phases:
  1. every usable raw row becomes a typed record (rows without a SAP code
     are dropped here, never grouped under a synthetic key);
  2. records are folded per SAP code with FIELD_POLICY ('first' for the
     descriptive fields, 'sum' for amounts) and the derived totals are
     computed once on the folded values.
"""
import logging

import pandas as pd

from .constants import (FIELD_POLICY, INVOICE_FIELDS, INVOICE_FILE_LABEL, NUMERIC_FIELDS,
                        PIVOT_HEADER_KEYWORDS, PIVOT_SHEET_NAME, PLANT_COLUMN_INDEX,
                        UNKNOWN_DISTRICT)
from .data_cleaner import coerce_numeric_or_zero, coerce_trimmed_string
from .data_utils import cell_at, find_header_row, read_sheet_rows, resolve_columns, split_header
from .models import InvoiceData

logger = logging.getLogger(__name__)

RECORD_COLUMNS = ['sap_code', 'customer_name', 'district', 'zone', 'plant'] + NUMERIC_FIELDS


def extract_row_records(headers, data_rows):
    """Phase 1: raw pivot rows -> list of typed dicts (keyed rows only)."""
    cols = resolve_columns(headers, INVOICE_FIELDS, INVOICE_FILE_LABEL)

    records = []
    for index, row in enumerate(data_rows):
        sap_code = coerce_trimmed_string(cell_at(row, cols['sap_code']))
        if not sap_code:
            logger.debug(f"Pivot row {index}: no SAP code, skipped")
            continue

        record = {
            'sap_code':      sap_code,
            'customer_name': coerce_trimmed_string(cell_at(row, cols['customer_name'])),
            'district':      coerce_trimmed_string(cell_at(row, cols['district']), UNKNOWN_DISTRICT),
            'zone':          coerce_trimmed_string(cell_at(row, cols['zone'])),
            'plant':         coerce_trimmed_string(cell_at(row, PLANT_COLUMN_INDEX)),
        }
        for c in NUMERIC_FIELDS:
            record[c] = coerce_numeric_or_zero(cell_at(row, cols[c]))
        records.append(record)
    return records


def fold_records(records):
    """Phase 2: group by SAP code in first-seen order and build InvoiceData."""
    if not records:
        return []

    df = pd.DataFrame(records, columns=RECORD_COLUMNS)
    for c in NUMERIC_FIELDS:
        df[c] = df[c].astype(float)

    grouped = df.groupby('sap_code', sort=False)
    df_grouped = grouped.agg(FIELD_POLICY)
    df_grouped['row_count'] = grouped.size()

    invoices = []
    for sap_code, g in df_grouped.iterrows():
        amounts = {c: float(g[c]) for c in NUMERIC_FIELDS}
        main_bill_amount = (amounts['loading_charges'] + amounts['unloading_charges']
                            + amounts['local_transportation'])
        total_value = amounts['godown_rent'] + main_bill_amount + amounts['freight_balance']
        invoices.append(InvoiceData(
            sap_code=sap_code,
            customer_name=g['customer_name'],
            customer_name_for_matching=g['customer_name'].lower(),
            district=g['district'],
            main_bill_amount=main_bill_amount,
            total_value=total_value,
            zone=g['zone'],
            plant=g['plant'],
            row_count=int(g['row_count']),
            **amounts,
        ))
    return invoices


def aggregate_invoice_rows(headers, data_rows):
    records = extract_row_records(headers, data_rows)
    invoices = fold_records(records)
    logger.info(f"Aggregated {len(records)} rows into {len(invoices)} SAP code groups "
                f"({len(data_rows) - len(records)} rows without SAP code skipped)")
    return invoices


def parse_invoice_data(file_obj):
    """Invoice/Cases workbook ('Pivot.' sheet) -> list of InvoiceData."""
    rows = read_sheet_rows(file_obj, PIVOT_SHEET_NAME, INVOICE_FILE_LABEL)
    header_idx = find_header_row(rows, PIVOT_HEADER_KEYWORDS, INVOICE_FILE_LABEL, PIVOT_SHEET_NAME)
    headers, data_rows = split_header(rows, header_idx)
    return aggregate_invoice_rows(headers, data_rows)
