# smart_invoice/data_cleaner.py
# Cell coercion applied at the row-to-record boundary. Spreadsheet cells
# arrive as str / int / float / bool / None / NaN; everything downstream
# only sees str and float.

import math
import re

import pandas as pd

LEADING_NUMBER = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def is_empty_cell(val):
    if val is None: return True
    if isinstance(val, float) and math.isnan(val): return True
    return isinstance(val, str) and val == ''


def is_blank_row(row):
    """True when a row has no non-empty cell at all."""
    return all(is_empty_cell(c) for c in row)


def coerce_trimmed_string(val, default=''):
    """
    Standardizes a text cell.
    Excel hands back numeric codes as floats ('100234.0'), so whole floats
    lose their decimal part.
    """
    if val is None or (not isinstance(val, str) and pd.isna(val)):
        return default
    if isinstance(val, float) and val.is_integer():
        val = int(val)
    s_val = str(val).strip()
    return s_val if s_val else default


def coerce_numeric_or_zero(val):
    """
    Robust conversion to float from the leading number of the cell
    ('5000 Rs' -> 5000.0). Bad cells degrade to 0.0, never raise.
    """
    if isinstance(val, bool): return 0.0
    if isinstance(val, (int, float)):
        return float(val) if math.isfinite(val) else 0.0
    if val is None or str(val).strip() == '': return 0.0
    match = LEADING_NUMBER.match(str(val).replace(',', '').replace(' ', ''))
    if not match:
        return 0.0
    f_val = float(match.group(0))
    return f_val if math.isfinite(f_val) else 0.0
