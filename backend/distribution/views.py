from datetime import date

from django.http import HttpResponse, JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_POST

from accounts.decorators import login_required_json, require_capability
from accounts.models import Capability
from sppg.dates import local_day
from sppg.http import json_body
from sppg.photos import PhotoRequired, photo_from_request
from .destinations import address_for, destinations
from .forms import BulkDistributionForm, DeliveryEvidenceForm, PickupFinishForm
from .models import Distribution
from .services import (
    DistributionError, DuplicateDestination, cancel_distribution, clear_history, confirm_delivery,
    create_distributions, distributions_for_day, finish_pickup, start_delivery, start_pickup,
)


def _day_param(request) -> date | None:
    raw = request.GET.get("date")
    if not raw:
        return local_day()
    try:
        return date.fromisoformat(raw)
    except ValueError:
        return None


def _conflict(d: Distribution):
    return JsonResponse({"error": "Status distribusi sudah berubah.", "distribution": d.to_dict()}, status=409)


@login_required_json
def distribution_list(request):
    if request.GET.get("date") == "all":
        qs = Distribution.objects.all()
    else:
        day = _day_param(request)
        if day is None:
            return JsonResponse({"error": "Tanggal tidak valid."}, status=400)
        qs = distributions_for_day(day)
    status = request.GET.get("status")
    if status:
        qs = qs.filter(status=status)
    return JsonResponse({"distributions": [d.to_dict() for d in qs.select_related("performed_by")]})


@login_required_json
def destination_list(request):
    return JsonResponse({"destinations": [{"name": n, "address": address_for(n)} for n in destinations()]})


@require_capability(Capability.CAN_DISTRIBUTE)
@require_POST
def distribution_bulk_create(request):
    data = json_body(request)
    if data is None:
        return HttpResponse(status=400)
    form = BulkDistributionForm(data)
    if not form.is_valid():
        return JsonResponse({"errors": form.errors}, status=400)
    try:
        created = create_distributions(
            form.cleaned_data["entries"], form.cleaned_data["recipient_name"], actor=request.user,
        )
    except DuplicateDestination as e:
        return JsonResponse({"error": str(e), "conflicts": e.destinations}, status=409)
    except DistributionError as e:
        return JsonResponse({"error": str(e)}, status=400)
    return JsonResponse({"distributions": [d.to_dict() for d in created]}, status=201)


@require_capability(Capability.CAN_DISTRIBUTE)
@require_POST
def distribution_start(request, distribution_id: str):
    d = get_object_or_404(Distribution, pk=distribution_id)
    if not start_delivery(d, actor=request.user):
        return _conflict(d)
    return JsonResponse({"distribution": d.to_dict()})


@require_capability(Capability.CAN_DISTRIBUTE)
@require_POST
def distribution_confirm(request, distribution_id: str):
    d = get_object_or_404(Distribution, pk=distribution_id)
    form = DeliveryEvidenceForm(request.POST)
    if not form.is_valid():
        return JsonResponse({"errors": form.errors}, status=400)
    try:
        photo = photo_from_request(request)
    except PhotoRequired as e:
        return JsonResponse({"error": str(e)}, status=400)
    if not confirm_delivery(d, photo, location=form.location()):
        return _conflict(d)
    return JsonResponse({"distribution": d.to_dict()})


@require_capability(Capability.CAN_DISTRIBUTE)
@require_POST
def distribution_pickup_start(request, distribution_id: str):
    d = get_object_or_404(Distribution, pk=distribution_id)
    if not start_pickup(d, actor=request.user):
        return _conflict(d)
    return JsonResponse({"distribution": d.to_dict()})


@require_capability(Capability.CAN_DISTRIBUTE)
@require_POST
def distribution_pickup_finish(request, distribution_id: str):
    d = get_object_or_404(Distribution, pk=distribution_id)
    form = PickupFinishForm(request.POST)
    if not form.is_valid():
        return JsonResponse({"errors": form.errors}, status=400)
    try:
        done = finish_pickup(d, form.cleaned_data["count"])
    except DistributionError as e:
        return JsonResponse({"error": str(e)}, status=400)
    if not done:
        return _conflict(d)
    return JsonResponse({"distribution": d.to_dict()})


@require_capability(Capability.CAN_DISTRIBUTE)
@require_POST
def distribution_cancel(request, distribution_id: str):
    d = get_object_or_404(Distribution, pk=distribution_id)
    if not cancel_distribution(d, actor=request.user, request=request):
        return _conflict(d)
    return JsonResponse({"ok": True})


@require_capability(Capability.CAN_DISTRIBUTE)
@require_POST
def distribution_clear_history(request):
    n = clear_history(actor=request.user, request=request)
    return JsonResponse({"ok": True, "deleted": n})
