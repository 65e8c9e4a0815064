# smart_invoice/customer_master.py
import logging

from .constants import (ADDRESS_NOT_PROVIDED, ADDRESS_PART_FIELDS, CUSTOMER_FIELDS,
                        CUSTOMER_FILE_LABEL, CUSTOMER_HEADER_KEYWORDS, GSTIN_NOT_PROVIDED,
                        PAN_NOT_PROVIDED, SAP_PLACEHOLDER_PREFIX, SAP_PLACEHOLDER_WIDTH)
from .data_cleaner import coerce_trimmed_string
from .data_utils import cell_at, find_header_row, read_sheet_rows, resolve_columns, split_header
from .models import CustomerData

logger = logging.getLogger(__name__)


def placeholder_sap_code(index):
    return f"{SAP_PLACEHOLDER_PREFIX}{index:0{SAP_PLACEHOLDER_WIDTH}d}"


def build_address(row, address_cols):
    parts = [coerce_trimmed_string(cell_at(row, idx)) for idx in address_cols.values()]
    return ", ".join(p for p in parts if p) or ADDRESS_NOT_PROVIDED


def normalize_customer_rows(headers, data_rows):
    """
    Builds one CustomerData per distinct customer name.
    Rows without a name are dropped; on a repeated name the later row wins.
    """
    cols = resolve_columns(headers, CUSTOMER_FIELDS, CUSTOMER_FILE_LABEL)
    address_cols = resolve_columns(headers, ADDRESS_PART_FIELDS, CUSTOMER_FILE_LABEL)

    candidates = []
    for index, row in enumerate(data_rows):
        name = coerce_trimmed_string(cell_at(row, cols['customer_name']))
        if not name:
            logger.debug(f"Customer row {index}: no customer name, skipped")
            continue
        candidates.append(CustomerData(
            sap_code=coerce_trimmed_string(cell_at(row, cols['sap_code']), placeholder_sap_code(index)),
            customer_name=name,
            address=build_address(row, address_cols),
            gstin=coerce_trimmed_string(cell_at(row, cols['gstin']), GSTIN_NOT_PROVIDED),
            pan=coerce_trimmed_string(cell_at(row, cols['pan']), PAN_NOT_PROVIDED),
            email=coerce_trimmed_string(cell_at(row, cols['email'])),
            mobile=coerce_trimmed_string(cell_at(row, cols['mobile'])),
        ))

    # Dedup on name: dict overwrite keeps the last row, insertion order keeps the first position
    unique = {}
    for customer in candidates:
        if customer.customer_name in unique:
            logger.debug(f"Customer '{customer.customer_name}' superseded by a later row")
        unique[customer.customer_name] = customer

    logger.info(f"Customer Master: {len(candidates)} rows -> {len(unique)} unique customers")
    return list(unique.values())


def parse_customer_master(file_obj):
    """Customer Master workbook (first sheet) -> list of CustomerData."""
    rows = read_sheet_rows(file_obj, None, CUSTOMER_FILE_LABEL)
    header_idx = find_header_row(rows, CUSTOMER_HEADER_KEYWORDS, CUSTOMER_FILE_LABEL)
    headers, data_rows = split_header(rows, header_idx)
    return normalize_customer_rows(headers, data_rows)
