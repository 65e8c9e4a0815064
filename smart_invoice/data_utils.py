# smart_invoice/data_utils.py
import io
import logging

import pandas as pd

from .constants import NOT_FOUND
from .data_cleaner import is_blank_row
from .errors import HeaderNotFoundError, SheetNotFoundError, SpreadsheetDecodeError

logger = logging.getLogger(__name__)


# --- SPREADSHEET READER ---
def open_workbook(file_obj, file_label=""):
    """
    Opens an uploaded workbook (path, raw bytes or binary file object).
    Anything pandas cannot open is reported as SpreadsheetDecodeError.
    """
    if isinstance(file_obj, (bytes, bytearray)):
        file_obj = io.BytesIO(file_obj)
    elif hasattr(file_obj, 'seek'):
        file_obj.seek(0)
    try:
        return pd.ExcelFile(file_obj)
    except Exception as e:
        logger.error(f"{file_label or 'Workbook'}: decode failed: {e}")
        raise SpreadsheetDecodeError(file_label, e) from e


def sheet_to_rows(xls, sheet_name):
    """Returns a sheet as a list of row lists, empty cells as None."""
    df = pd.read_excel(xls, sheet_name=sheet_name, header=None, dtype=object)
    df = df.astype(object).where(pd.notna(df), None)
    return df.values.tolist()


def read_sheet_rows(file_obj, sheet_name=None, file_label=""):
    """
    Reads one sheet of a workbook into raw rows.
    sheet_name=None -> first sheet. A named sheet must exist literally.
    """
    xls = open_workbook(file_obj, file_label)
    if sheet_name is None:
        if not xls.sheet_names:
            raise SpreadsheetDecodeError(file_label, "workbook has no sheets")
        sheet_name = xls.sheet_names[0]
    elif sheet_name not in xls.sheet_names:
        raise SheetNotFoundError(sheet_name, file_label, xls.sheet_names)

    logger.debug(f"{file_label}: available sheets {xls.sheet_names}, reading '{sheet_name}'")
    try:
        rows = sheet_to_rows(xls, sheet_name)
    except Exception as e:
        raise SpreadsheetDecodeError(file_label, e) from e
    logger.debug(f"{file_label}: {len(rows)} raw rows in '{sheet_name}'")
    return rows


# --- HEADER LOCATOR ---
def find_header_row(rows, keywords, file_label="", sheet_name=None):
    """
    Index of the first row holding a text cell that contains any keyword
    (case-insensitive). Rows are scanned in order; first match wins.
    """
    keywords_lower = [k.lower() for k in keywords]
    for idx, row in enumerate(rows):
        for cell in row:
            if isinstance(cell, str) and any(k in cell.lower() for k in keywords_lower):
                logger.debug(f"{file_label}: header row found at index {idx}")
                return idx
    raise HeaderNotFoundError(keywords, file_label, sheet_name)


def split_header(rows, header_idx):
    """Header cells plus the non-blank data rows below them."""
    headers = list(rows[header_idx])
    data_rows = [r for r in rows[header_idx + 1:] if not is_blank_row(r)]
    return headers, data_rows


# --- COLUMN RESOLVER ---
def _header_text(h):
    return h.strip().lower() if isinstance(h, str) else None


def find_column_index(headers, synonyms, exact=False, exclude=()):
    """
    Finds a column index from a prioritized list of synonyms.
    For each synonym (in order) an exact header match beats a partial one.
    Returns NOT_FOUND when nothing matches.
    """
    existing = [_header_text(h) for h in headers]
    excluded = [e.lower() for e in exclude]

    def usable(text):
        return text is not None and not any(e in text for e in excluded)

    for candidate in synonyms:
        clean_candidate = candidate.strip().lower()
        # Exact match
        for i, ex_col in enumerate(existing):
            if usable(ex_col) and ex_col == clean_candidate:
                return i
        if exact:
            continue
        # Partial match
        for i, ex_col in enumerate(existing):
            if usable(ex_col) and clean_candidate in ex_col:
                return i
    return NOT_FOUND


def resolve_columns(headers, field_table, file_label=""):
    """Maps every logical field of a FieldSpec table to a column index."""
    resolved = {}
    for name, spec in field_table.items():
        idx = find_column_index(headers, spec.synonyms, spec.exact, spec.exclude)
        if idx == NOT_FOUND:
            logger.warning(f"{file_label}: column for '{name}' not found (tried {spec.synonyms})")
        else:
            logger.debug(f"{file_label}: '{name}' -> column {idx} ({headers[idx]!r})")
        resolved[name] = idx
    return resolved


def cell_at(row, idx):
    """Cell value, or None for an unresolved column or a short row."""
    if idx == NOT_FOUND or idx >= len(row):
        return None
    return row[idx]
