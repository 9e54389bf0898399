from django.shortcuts import get_object_or_404
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, Spacer

from accounts.decorators import login_required_json
from reporting.letterhead import data_table, letterhead, number, pdf_response, render_pdf, styles
from sppg.dates import indonesian_date
from .models import MenuPlan


def build_menu_pdf(plan: MenuPlan) -> bytes:
    st = styles()
    story = letterhead(st)
    story += [
        Paragraph("RENCANA MENU MBG", st["title"]),
        Paragraph(f"Menu: {plan.name}", st["small"]),
        Paragraph(f"Porsi: {plan.portions}", st["small"]),
        Paragraph(f"Tanggal: {indonesian_date(plan.date)}", st["small"]),
        Spacer(1, 3 * mm),
    ]
    rows = [[ing.get("name", ""), number(ing.get("quantity")), ing.get("unit", "")] for ing in plan.ingredients or []]
    story.append(data_table(["Bahan", "Jumlah", "Satuan"], rows, col_widths=[90 * mm, 40 * mm, 40 * mm]))
    return render_pdf(story)


@login_required_json
def export_menu_pdf(request, menu_id: str):
    plan = get_object_or_404(MenuPlan, pk=menu_id)
    return pdf_response(build_menu_pdf(plan), f"Menu_{plan.name.replace(' ', '_')}.pdf")
