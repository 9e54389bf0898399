from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.units import mm

from accounts.decorators import login_required_json
from audit.utils import audit_log
from reporting.letterhead import (
    data_table, letterhead, number, pdf_response, render_pdf, report_heading, rupiah, styles,
)
from .models import Procurement


def procurement_report_rows(qs) -> list[list[str]]:
    rows = []
    for p in qs:
        item = p.first_item
        rows.append([
            p.id[:8],
            p.funding_source or Procurement.Funding.YAYASAN,
            p.supplier,
            item.get("name") or "-",
            f"{number(item.get('quantity'))} {item.get('unit') or ''}".strip(),
            rupiah(item.get("price")),
            p.status,
            rupiah(p.total_price),
        ])
    return rows


def build_procurement_report(qs) -> bytes:
    st = styles()
    story = letterhead(st) + report_heading(st, "LAPORAN PENGADAAN BARANG - PROGRAM MBG")
    story.append(data_table(
        ["ID Pesanan", "Sumber", "Supplier", "Barang", "Qty", "Harga (IDR)", "Status", "Total"],
        procurement_report_rows(qs),
        col_widths=[22 * mm, 28 * mm, 45 * mm, 50 * mm, 25 * mm, 30 * mm, 25 * mm, 35 * mm],
    ))
    return render_pdf(story, pagesize=landscape(A4))


@login_required_json
def export_procurement_pdf(request):
    qs = Procurement.objects.all()
    audit_log(request.user, "PDF_EXPORTED", payload={"report": "procurement", "count": qs.count()}, request=request)
    return pdf_response(build_procurement_report(qs), "Laporan_Pengadaan.pdf")
