"""Shared reportlab pieces for the printable exports."""

from io import BytesIO

from django.conf import settings
from django.http import HttpResponse
from django.utils import timezone
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from sppg.dates import indonesian_date

HEADER_BG = colors.HexColor("#1E3A8A")


def styles():
    base = getSampleStyleSheet()
    return {
        "base": base,
        "org": ParagraphStyle("Org", parent=base["Normal"], fontSize=12, alignment=1,
                              fontName="Helvetica-Bold", leading=15),
        "sub": ParagraphStyle("Sub", parent=base["Normal"], fontSize=8, alignment=1, leading=10),
        "title": ParagraphStyle("Title", parent=base["Normal"], fontSize=11, fontName="Helvetica-Bold",
                                spaceBefore=4, spaceAfter=2),
        "small": ParagraphStyle("Small", parent=base["Normal"], fontSize=8, leading=10),
    }


def letterhead(st) -> list:
    return [
        Paragraph(settings.KITCHEN_AGENCY, st["org"]),
        Paragraph(settings.KITCHEN_FOUNDATION, st["org"]),
        Paragraph(settings.KITCHEN_NAME, st["org"]),
        Paragraph(f"Alamat : {settings.KITCHEN_ADDRESS}", st["sub"]),
        Paragraph(f"Telepon : {settings.KITCHEN_PHONE}.", st["sub"]),
        Spacer(1, 3 * mm),
    ]


def report_heading(st, title: str) -> list:
    return [
        Paragraph(title, st["title"]),
        Paragraph(f"Dicetak pada: {indonesian_date(timezone.now(), with_time=True)}", st["small"]),
        Spacer(1, 3 * mm),
    ]


def data_table(header: list, rows: list, col_widths=None) -> Table:
    t = Table([header] + rows, colWidths=col_widths, repeatRows=1)
    t.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), HEADER_BG),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 8),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
    ]))
    return t


def render_pdf(story: list, pagesize=A4) -> bytes:
    buffer = BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=pagesize, leftMargin=14 * mm, rightMargin=14 * mm,
                            topMargin=12 * mm, bottomMargin=12 * mm)
    doc.build(story)
    return buffer.getvalue()


def pdf_response(content: bytes, filename: str) -> HttpResponse:
    response = HttpResponse(content, content_type="application/pdf")
    response["Content-Disposition"] = f'attachment; filename="{filename}"'
    return response


def rupiah(value) -> str:
    return f"{int(round(float(value or 0))):,}".replace(",", ".")


def number(value) -> str:
    v = float(value or 0)
    return str(int(v)) if v == int(v) else f"{v:g}"
