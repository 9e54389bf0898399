from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_POST

from accounts.decorators import login_required_json, require_roles
from accounts.models import Role
from accounts.services import UsernameTaken
from .forms import VolunteerForm
from .models import Division, Volunteer
from .services import MissingUsername, delete_roster_entry, roster, save_volunteer


@login_required_json
def volunteer_list(request):
    division = request.GET.get("division") or None
    if division and division not in Division.values:
        return JsonResponse({"error": "Unknown division."}, status=400)
    return JsonResponse({"volunteers": roster(division)})


@require_roles(Role.ADMIN, Role.KA_SPPG, allow_superuser=True)
@require_POST
def volunteer_save(request, volunteer_id: str | None = None):
    volunteer = get_object_or_404(Volunteer, pk=volunteer_id) if volunteer_id else None
    form = VolunteerForm(request.POST)
    if not form.is_valid():
        return JsonResponse({"errors": form.errors}, status=400)
    try:
        volunteer = save_volunteer(volunteer=volunteer, **form.cleaned_data)
    except MissingUsername as e:
        return JsonResponse({"error": str(e)}, status=400)
    except UsernameTaken:
        return JsonResponse({"error": "Username sudah digunakan."}, status=409)
    return JsonResponse({"volunteer": volunteer.to_dict()})


@require_roles(Role.ADMIN, allow_superuser=True)
@require_POST
def volunteer_delete(request, volunteer_id: str):
    if not delete_roster_entry(volunteer_id, actor=request.user, request=request):
        return JsonResponse({"error": "Not found."}, status=404)
    return JsonResponse({"ok": True})
