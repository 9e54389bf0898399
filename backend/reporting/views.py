from datetime import date

from django.http import JsonResponse
from django.views.decorators.http import require_POST

from accounts.decorators import login_required_json, require_roles
from accounts.models import Role
from .services import SCOPE_ALL, SCOPE_LOCATIONS, activity_feed, dashboard_summary, delete_activity, photo_gallery


@login_required_json
def dashboard(request):
    raw = request.GET.get("date")
    day = None
    if raw:
        try:
            day = date.fromisoformat(raw)
        except ValueError:
            return JsonResponse({"error": "Tanggal tidak valid."}, status=400)
    return JsonResponse(dashboard_summary(day))


@login_required_json
def activity(request):
    scope = request.GET.get("scope") or SCOPE_ALL
    if scope not in (SCOPE_ALL, SCOPE_LOCATIONS):
        return JsonResponse({"error": "Unknown scope."}, status=400)
    return JsonResponse({"activities": activity_feed(scope)})


@require_roles(Role.ADMIN, allow_superuser=True)
@require_POST
def activity_delete(request, kind: str, source_id: str):
    if not delete_activity(kind, source_id, actor=request.user, request=request):
        return JsonResponse({"error": "Not found."}, status=404)
    return JsonResponse({"ok": True})


@login_required_json
def gallery(request):
    return JsonResponse({"photos": photo_gallery()})
