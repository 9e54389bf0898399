from reportlab.lib.units import mm

from accounts.decorators import login_required_json
from audit.utils import audit_log
from reporting.letterhead import data_table, letterhead, number, pdf_response, render_pdf, report_heading, styles
from .models import ItemType, StockItem

REPORT_TITLES = {
    ItemType.BAHAN: "LAPORAN STOK: BAHAN BAKU",
    ItemType.ALAT: "LAPORAN STOK: PERALATAN",
}


def stock_report_rows(item_type: str) -> list[list[str]]:
    items = sorted(StockItem.objects.filter(item_type=item_type), key=lambda i: i.name.lower())
    return [
        [str(n), i.name, i.category, number(i.quantity), i.unit, "KRITIS" if i.is_critical else "AMAN"]
        for n, i in enumerate(items, start=1)
    ]


def build_stock_report(item_type: str) -> bytes:
    st = styles()
    story = letterhead(st) + report_heading(st, REPORT_TITLES[item_type])
    story.append(data_table(
        ["No.", "Nama Barang", "Kategori", "Stok Sistem", "Satuan", "Kondisi"],
        stock_report_rows(item_type),
        col_widths=[12 * mm, 55 * mm, 35 * mm, 25 * mm, 20 * mm, 25 * mm],
    ))
    return render_pdf(story)


@login_required_json
def export_stock_pdf(request):
    item_type = request.GET.get("type") or ItemType.BAHAN
    if item_type not in ItemType.values:
        item_type = ItemType.BAHAN
    audit_log(request.user, "PDF_EXPORTED", payload={"report": "stock", "type": item_type}, request=request)
    return pdf_response(build_stock_report(item_type), f"Laporan_Stok_{item_type}.pdf")
