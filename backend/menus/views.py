from django.http import HttpResponse, JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_POST

from accounts.decorators import login_required_json, require_capability
from accounts.models import Capability
from sppg.http import json_body
from .forms import MenuPlanForm
from .models import MenuPlan
from .services import MenuPlanError, create_menu_plan


@login_required_json
def menu_list(request):
    qs = MenuPlan.objects.select_related("performed_by")
    return JsonResponse({"menus": [m.to_dict() for m in qs]})


@require_capability(Capability.CAN_CREATE_MENU)
@require_POST
def menu_create(request):
    data = json_body(request)
    if data is None:
        return HttpResponse(status=400)
    form = MenuPlanForm(data)
    if not form.is_valid():
        return JsonResponse({"errors": form.errors}, status=400)
    try:
        plan = create_menu_plan(actor=request.user, **form.cleaned_data)
    except MenuPlanError as e:
        return JsonResponse({"error": str(e)}, status=400)
    return JsonResponse({"menu": plan.to_dict()})


@require_capability(Capability.CAN_CREATE_MENU)
@require_POST
def menu_delete(request, menu_id: str):
    plan = get_object_or_404(MenuPlan, pk=menu_id)
    plan.delete()
    return JsonResponse({"ok": True})
