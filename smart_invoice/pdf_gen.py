# smart_invoice/pdf_gen.py
# Single-page A4 tax invoice / debit note for one merged record and one
# document type. All figures come from tax_calculator; this module only lays
# them out.
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas
from reportlab.lib import colors
from reportlab.platypus import Table, TableStyle
import io

from .constants import DOC_KIND_TITLES, JUBILANT_COMPANY_NAME
from .tax_calculator import compute_document_values
from .utils import format_inr


def draw_header(c, width, height, record, title):
    """Customer name on the left, red document title on the right."""
    c.setFillColor(colors.black)
    c.setFont("Helvetica-Bold", 11)
    c.drawString(40, height - 50, record.customer.customer_name)

    c.setFont("Helvetica-Bold", 13)
    c.setFillColor(colors.red)
    c.drawRightString(width - 40, height - 50, title)
    c.setFillColor(colors.black)

    c.setFont("Helvetica-Bold", 8)
    c.drawString(width - 200, height - 70, "INVOICE NO :")
    c.drawString(width - 200, height - 82, "DATE :")


def draw_customer_block(c, y, record):
    cust = record.customer
    c.setFont("Helvetica-Bold", 8)
    c.drawString(40, y, "Add:")
    c.setFont("Helvetica", 8)
    for line in wrap_text(cust.address, 60):
        c.drawString(80, y, line)
        y -= 11

    rows = [
        ("GSTIN:", cust.gstin, "PAN:", cust.pan),
        ("EMAIL:", cust.email or "N/A", "MOB:", cust.mobile or "N/A"),
    ]
    for l1, v1, l2, v2 in rows:
        c.setFont("Helvetica-Bold", 8); c.drawString(40, y, l1)
        c.setFont("Helvetica", 8);      c.drawString(80, y, v1)
        c.setFont("Helvetica-Bold", 8); c.drawString(240, y, l2)
        c.setFont("Helvetica", 8);      c.drawString(275, y, v2)
        y -= 12
    return y


def draw_bill_to_block(c, y, values):
    c.setFont("Helvetica-Bold", 8)
    c.drawString(40, y, "To :")
    y -= 11
    c.drawString(40, y, JUBILANT_COMPANY_NAME)
    y -= 11
    c.setFont("Helvetica", 7)
    for line in values.bill_to_address:
        for part in wrap_text(line, 110):
            c.drawString(40, y, part)
            y -= 10
    c.setFont("Helvetica-Bold", 7)
    c.drawString(40, y, f"GSTIN : {values.bill_to_gstin}")
    return y - 14


def wrap_text(text, max_chars):
    """Greedy word wrap on character count."""
    lines, current = [], ""
    for word in str(text).split():
        if current and len(current) + 1 + len(word) > max_chars:
            lines.append(current)
            current = word
        else:
            current = f"{current} {word}".strip()
    if current:
        lines.append(current)
    return lines or [""]


def build_table_data(values, format_number):
    """Service rows, tax rows and the total row; freight has no Qty/Rate columns."""
    with_qty = values.doc_type != "freight"
    head = ["Service Description", "HSN / SAC", "Qty", "Rate", "Amount"] if with_qty \
        else ["Service Description", "HSN / SAC", "Amount"]
    filler = [""] * (len(head) - 2)

    rows = [head]
    for item in values.line_items:
        if with_qty:
            rows.append([item.description, item.hsn_sac, format_number(item.quantity),
                         format_number(item.rate), format_number(item.amount)])
        else:
            rows.append([item.description, item.hsn_sac, format_number(item.amount)])

    if values.inter_state:
        rows.append(["IGST @ 18%"] + filler + [format_number(values.igst)])
    else:
        rows.append(["CGST @ 9%"] + filler + [format_number(values.cgst)])
        rows.append(["SGST @ 9%"] + filler + [format_number(values.sgst)])

    rows.append([f"Rupees: {values.amount_in_words}"] + filler[:-1] + ["TOTAL", format_number(values.total)])
    return rows


def create_document_pdf(record, doc_type, kind="invoice", format_number=format_inr):
    """Renders one document and returns the PDF bytes."""
    values = compute_document_values(record, doc_type)
    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    width, height = A4

    draw_header(c, width, height, record, DOC_KIND_TITLES[kind])
    y = draw_customer_block(c, height - 75, record)
    y = draw_bill_to_block(c, y - 6, values)

    if values.service_description:
        c.setFont("Helvetica", 7)
        for line in wrap_text(values.service_description, 70):
            c.drawString(width - 260, y, line)
            y -= 10
    y -= 10

    table_data = build_table_data(values, format_number)
    n_cols = len(table_data[0])
    col_widths = [210, 60, 60, 70, 80] if n_cols == 5 else [340, 60, 80]
    last = len(table_data) - 1

    table = Table(table_data, colWidths=col_widths)
    style = [
        ('FONTNAME', (0, 0), (-1, -1), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, -1), 7),
        ('ALIGN', (0, 0), (-1, 0), 'CENTER'),
        ('ALIGN', (1, 1), (1, -1), 'CENTER'),
        ('ALIGN', (-1, 1), (-1, -1), 'RIGHT'),
        ('GRID', (0, 0), (-1, -1), 0.3, colors.black),
        ('BOTTOMPADDING', (0, len(values.line_items)), (-1, len(values.line_items)), 40),
    ]
    if n_cols > 3:
        style.append(('SPAN', (0, last), (n_cols - 3, last)))
    table.setStyle(TableStyle(style))
    _, h_table = table.wrapOn(c, width, height)
    table.drawOn(c, 40, y - h_table)
    y -= h_table + 20

    c.setFont("Helvetica-Bold", 7)
    c.setFillColor(colors.red)
    c.drawString(40, y, "TAX PAYABLE UNDER REVERSE CHARGE : NO")
    c.drawRightString(width - 40, y - 25, "SIGNATURE/ DIGITAL SIGNATURE")
    c.setFillColor(colors.black)

    c.save()
    buffer.seek(0)
    return buffer.getvalue()
