# smart_invoice/report_gen.py
import io
import zipfile

import pandas as pd

from .constants import SUMMARY_ROWS, SUMMARY_SHEET_NAME

INDIAN_NUMBER_FORMAT = r"[>=10000000]##\,##\,##\,##0.00;[>=100000]##\,##\,##0.00;##,##0.00"


def summary_frame(totals):
    return pd.DataFrame(
        [(label, getattr(totals, attr)) for label, attr in SUMMARY_ROWS],
        columns=["Summary Category", "Total Value"],
    )


def generate_summary_excel(totals):
    """Writes the 'Invoice Summary' sheet; returns a BytesIO positioned at 0."""
    output = io.BytesIO()
    export_df = summary_frame(totals)
    with pd.ExcelWriter(output, engine='xlsxwriter') as writer:
        export_df.to_excel(writer, index=False, sheet_name=SUMMARY_SHEET_NAME)
        wb = writer.book; ws = writer.sheets[SUMMARY_SHEET_NAME]
        fmt_hdr = wb.add_format({'bold': True, 'bg_color': '#4472C4', 'font_color': 'white',
                                 'border': 1, 'align': 'center'})
        fmt_money = wb.add_format({'num_format': INDIAN_NUMBER_FORMAT, 'border': 1})
        fmt_total = wb.add_format({'num_format': INDIAN_NUMBER_FORMAT, 'border': 1, 'bold': True})
        for cn, v in enumerate(export_df.columns):
            ws.write(0, cn, v, fmt_hdr)
        ws.set_column(0, 0, 62)
        ws.set_column(1, 1, 20, fmt_money)
        last = len(export_df)
        ws.write(last, 1, export_df.iloc[-1]["Total Value"], fmt_total)
    output.seek(0)
    return output


def generate_documents_zip(documents):
    """Bundles GeneratedDocument items into one ZIP archive."""
    zip_buffer = io.BytesIO()
    with zipfile.ZipFile(zip_buffer, "w", zipfile.ZIP_DEFLATED, False) as zip_file:
        for doc in documents:
            zip_file.writestr(doc.file_name, doc.content)
    zip_buffer.seek(0)
    return zip_buffer
