# smart_invoice/utils.py
import logging
import math
import os
import re

from .constants import DEFAULT_RENDER_DELAY, LOG_FORMAT


def configure_logging(level=None):
    """Level: argument, else SMART_INVOICE_LOG_LEVEL, else INFO."""
    level = level or os.environ.get("SMART_INVOICE_LOG_LEVEL", "INFO")
    logging.basicConfig(level=level, format=LOG_FORMAT)


def render_delay():
    """Seconds to pause between rendered documents in the UI."""
    try:
        return float(os.environ.get("SMART_INVOICE_RENDER_DELAY", DEFAULT_RENDER_DELAY))
    except ValueError:
        return DEFAULT_RENDER_DELAY


def format_inr(amount):
    """1234567.5 -> '12,34,567.50' (lakh/crore digit grouping)."""
    try:
        value = float(amount)
    except (TypeError, ValueError):
        return "0.00"
    if not math.isfinite(value):
        return str(value)
    sign = "-" if value < 0 else ""
    whole, frac = f"{abs(value):.2f}".split(".")
    if len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        whole = ",".join(groups + [tail])
    return f"{sign}{whole}.{frac}"


def safe_file_stem(name):
    """Replaces every non-alphanumeric character with '_'."""
    return re.sub(r'[^a-zA-Z0-9]', '_', name or "")
