from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_POST

from accounts.decorators import login_required_json, require_capability
from accounts.models import Capability
from audit.utils import audit_log
from sppg.photos import PhotoRequired, photo_from_request
from .forms import ProcurementEditForm, ProcurementForm
from .models import Procurement
from .services import (
    ProcurementError, attach_invoice, create_procurement, edit_price, edit_supplier,
    process_order, receive_goods,
)


def _conflict(p: Procurement):
    return JsonResponse({"error": "Status pesanan sudah berubah.", "procurement": p.to_dict()}, status=409)


@login_required_json
def procurement_list(request):
    qs = Procurement.objects.select_related("performed_by")
    status = request.GET.get("status")
    if status:
        qs = qs.filter(status=status)
    return JsonResponse({"procurements": [p.to_dict() for p in qs]})


@require_capability(Capability.CAN_ORDER)
@require_POST
def procurement_create(request):
    form = ProcurementForm(request.POST)
    if not form.is_valid():
        return JsonResponse({"errors": form.errors}, status=400)
    try:
        p = create_procurement(actor=request.user, **form.cleaned_data)
    except ProcurementError as e:
        return JsonResponse({"error": str(e)}, status=400)
    return JsonResponse({"procurement": p.to_dict()})


@require_capability(Capability.CAN_ORDER)
@require_POST
def procurement_process(request, procurement_id: str):
    p = get_object_or_404(Procurement, pk=procurement_id)
    if not process_order(p):
        return _conflict(p)
    return JsonResponse({"procurement": p.to_dict()})


@require_capability(Capability.CAN_RECEIVE)
@require_POST
def procurement_invoice(request, procurement_id: str):
    p = get_object_or_404(Procurement, pk=procurement_id)
    try:
        photo = photo_from_request(request)
    except PhotoRequired as e:
        return JsonResponse({"error": str(e)}, status=400)
    if not attach_invoice(p, photo):
        return _conflict(p)
    return JsonResponse({"procurement": p.to_dict()})


@require_capability(Capability.CAN_RECEIVE)
@require_POST
def procurement_receive(request, procurement_id: str):
    p = get_object_or_404(Procurement, pk=procurement_id)
    try:
        photo = photo_from_request(request)
    except PhotoRequired as e:
        return JsonResponse({"error": str(e)}, status=400)
    if not receive_goods(p, photo):
        return _conflict(p)
    return JsonResponse({"procurement": p.to_dict()})


@require_capability(Capability.CAN_ORDER)
@require_POST
def procurement_edit(request, procurement_id: str):
    p = get_object_or_404(Procurement, pk=procurement_id)
    form = ProcurementEditForm(request.POST)
    if not form.is_valid():
        return JsonResponse({"errors": form.errors}, status=400)
    try:
        if form.cleaned_data["field"] == "supplier":
            edit_supplier(p, form.cleaned_data["value"])
        else:
            edit_price(p, form.cleaned_data["value"])
    except ProcurementError as e:
        return JsonResponse({"error": str(e)}, status=400)
    return JsonResponse({"procurement": p.to_dict()})


@require_capability(Capability.CAN_ORDER)
@require_POST
def procurement_delete(request, procurement_id: str):
    p = get_object_or_404(Procurement, pk=procurement_id)
    audit_log(request.user, "PROCUREMENT_CANCELLED", target=p,
              payload={"supplier": p.supplier, "status": p.status}, request=request)
    p.delete()
    return JsonResponse({"ok": True})
