"""Printable delivery notes (two per A4 page) and the daily Surat Jalan summary."""

from datetime import date

from django.conf import settings
from django.http import JsonResponse
from reportlab.lib import colors
from reportlab.lib.units import mm
from reportlab.platypus import PageBreak, Paragraph, Spacer, Table, TableStyle

from accounts.decorators import login_required_json
from audit.utils import audit_log
from reporting.letterhead import data_table, letterhead, pdf_response, render_pdf, styles
from sppg.dates import indonesian_date, local_day
from .destinations import address_for
from .models import Distribution
from .serials import serial_prefix
from .services import distributions_for_day

NOTES_PER_PAGE = 2
NOTE_HEIGHT = 128 * mm
NOTE_WIDTH = 180 * mm  # A4 less the 14 mm side margins, with room for the box line


def print_order(d: Distribution):
    """Planning time, then serial number compared numerically."""
    return d.timestamp, serial_prefix(d.serial_number or "") or 0, d.serial_number or ""


def delivery_note(d: Distribution, st) -> list:
    fields = [
        ["No. Surat Jalan", d.serial_number or "-"],
        ["Tanggal", indonesian_date(d.timestamp)],
        ["Tujuan", d.destination],
        ["Alamat", Paragraph(address_for(d.destination), st["small"])],
        ["Penerima", d.recipient_name],
        ["Jumlah Porsi", f"{d.portions} porsi"],
        ["Pengemudi", d.driver_name or "-"],
    ]
    body = Table(fields, colWidths=[36 * mm, 136 * mm])
    body.setStyle(TableStyle([
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("LINEBELOW", (0, 0), (-1, -1), 0.25, colors.lightgrey),
    ]))
    signatures = Table(
        [["Pengirim", "Pengemudi", "Penerima"],
         ["", "", ""],
         [f"( {settings.KITCHEN_NAME} )", f"( {d.driver_name or '..........'} )", f"( {d.recipient_name} )"]],
        colWidths=[56 * mm, 56 * mm, 56 * mm], rowHeights=[6 * mm, 16 * mm, 6 * mm],
    )
    signatures.setStyle(TableStyle([
        ("ALIGN", (0, 0), (-1, -1), "CENTER"),
        ("FONTSIZE", (0, 0), (-1, -1), 8),
    ]))
    return [
        Paragraph(f"{settings.KITCHEN_NAME} - SURAT JALAN MBG", st["title"]),
        body,
        Spacer(1, 4 * mm),
        signatures,
    ]


def build_delivery_notes(distributions) -> bytes:
    st = styles()
    story = []
    for n, d in enumerate(distributions):
        if n and n % NOTES_PER_PAGE == 0:
            story.append(PageBreak())
        elif n:
            story.append(Spacer(1, 8 * mm))
        frame = Table([[delivery_note(d, st)]], colWidths=[NOTE_WIDTH], rowHeights=[NOTE_HEIGHT])
        frame.setStyle(TableStyle([
            ("BOX", (0, 0), (-1, -1), 0.75, colors.black),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ]))
        story.append(frame)
    return render_pdf(story)


def build_surat_jalan(day: date, distributions) -> bytes:
    st = styles()
    story = letterhead(st) + [
        Paragraph("SURAT JALAN MBG", st["title"]),
        Paragraph(f"Tanggal: {indonesian_date(day)}", st["small"]),
        Spacer(1, 3 * mm),
    ]
    rows = [[str(i), d.destination, str(d.portions), d.recipient_name] for i, d in enumerate(distributions, start=1)]
    story.append(data_table(["No.", "Tujuan", "Porsi", "Penerima"], rows,
                            col_widths=[12 * mm, 80 * mm, 25 * mm, 60 * mm]))
    return render_pdf(story)


def _day(request) -> date | None:
    raw = request.GET.get("date")
    if not raw:
        return local_day()
    try:
        return date.fromisoformat(raw)
    except ValueError:
        return None


@login_required_json
def export_delivery_notes(request):
    ids = [i for i in request.GET.get("ids", "").split(",") if i]
    if ids:
        qs = Distribution.objects.filter(pk__in=ids)
    else:
        day = _day(request)
        if day is None:
            return JsonResponse({"error": "Tanggal tidak valid."}, status=400)
        qs = distributions_for_day(day)
    notes = sorted(qs, key=print_order)
    if not notes:
        return JsonResponse({"error": "Tidak ada distribusi untuk dicetak."}, status=404)
    audit_log(request.user, "PDF_EXPORTED", payload={"report": "delivery_notes", "count": len(notes)}, request=request)
    return pdf_response(build_delivery_notes(notes), "Surat_Jalan_Per_Sekolah.pdf")


@login_required_json
def export_surat_jalan(request):
    day = _day(request)
    if day is None:
        return JsonResponse({"error": "Tanggal tidak valid."}, status=400)
    rows = sorted(distributions_for_day(day), key=print_order)
    audit_log(request.user, "PDF_EXPORTED", payload={"report": "surat_jalan", "date": day.isoformat()}, request=request)
    return pdf_response(build_surat_jalan(day, rows), f"Surat_Jalan_{day.isoformat()}.pdf")
