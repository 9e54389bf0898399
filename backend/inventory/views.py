from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_POST

from accounts.decorators import login_required_json, require_capability
from accounts.models import Capability
from .forms import StockItemForm, StockMutationForm
from .models import StockItem, StockTransaction
from .services import StockMutationError, apply_stock_mutation


@login_required_json
def stock_list(request):
    qs = StockItem.objects.all()
    item_type = request.GET.get("type")
    if item_type:
        qs = qs.filter(item_type=item_type)
    return JsonResponse({"items": [i.to_dict() | {"is_critical": i.is_critical} for i in qs]})


@require_capability(Capability.CAN_MANAGE_STOCK)
@require_POST
def stock_save(request, item_id: str | None = None):
    item = get_object_or_404(StockItem, pk=item_id) if item_id else None
    form = StockItemForm(request.POST, instance=item)
    if not form.is_valid():
        return JsonResponse({"errors": form.errors}, status=400)
    item = form.save()
    return JsonResponse({"item": item.to_dict()})


@require_capability(Capability.CAN_MANAGE_STOCK)
@require_POST
def stock_mutate(request, item_id: str):
    item = get_object_or_404(StockItem, pk=item_id)
    form = StockMutationForm(request.POST)
    if not form.is_valid():
        return JsonResponse({"errors": form.errors}, status=400)
    try:
        tx = apply_stock_mutation(
            item, form.cleaned_data["mode"], form.cleaned_data["amount"],
            actor=request.user, notes=form.cleaned_data["notes"],
        )
    except StockMutationError as e:
        return JsonResponse({"error": str(e)}, status=400)
    return JsonResponse({"item": item.to_dict(), "transaction": tx.to_dict()})


@require_capability(Capability.CAN_MANAGE_STOCK)
@require_POST
def stock_delete(request, item_id: str):
    item = get_object_or_404(StockItem, pk=item_id)
    item.delete()
    return JsonResponse({"ok": True})


@login_required_json
def transaction_list(request):
    qs = StockTransaction.objects.select_related("performed_by")
    item_id = request.GET.get("item")
    if item_id:
        qs = qs.filter(item_id=item_id)
    return JsonResponse({"transactions": [t.to_dict() for t in qs[:500]]})
