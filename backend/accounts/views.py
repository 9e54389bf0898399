from django.contrib.auth import authenticate, login, logout
from django.http import HttpResponseBadRequest, JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.csrf import ensure_csrf_cookie
from django.views.decorators.http import require_POST

from .decorators import login_required_json, require_roles
from .forms import LoginForm, StaffForm
from .models import Role, User
from .services import ProtectedAccount, UsernameTaken, delete_staff, save_staff


@require_POST
def login_view(request):
    form = LoginForm(request.POST)
    if not form.is_valid():
        return JsonResponse({"errors": form.errors}, status=400)
    user = authenticate(request, username=form.cleaned_data["username"], password=form.cleaned_data["password"])
    if user is None:
        return JsonResponse({"error": "Akses ditolak. Periksa kredensial Anda."}, status=403)
    login(request, user)
    return JsonResponse({"user": user.to_dict(), "capabilities": user.capabilities()})


@require_POST
def logout_view(request):
    logout(request)
    return JsonResponse({"ok": True})


@ensure_csrf_cookie  # clients read csrftoken from here before POSTing
@login_required_json
def whoami(request):
    u = request.user
    return JsonResponse({"user": u.to_dict(), "capabilities": u.capabilities()})


@require_roles(Role.ADMIN, allow_superuser=True)
def staff_list(request):
    users = User.objects.staff().order_by("username")
    return JsonResponse({"users": [u.to_dict() for u in users]})


@require_roles(Role.ADMIN, allow_superuser=True)
@require_POST
def staff_save(request, user_id: str | None = None):
    user = get_object_or_404(User, pk=user_id) if user_id else None
    form = StaffForm(request.POST)
    if not form.is_valid():
        return JsonResponse({"errors": form.errors}, status=400)
    try:
        user = save_staff(user=user, **form.cleaned_data)
    except UsernameTaken:
        return JsonResponse({"error": "Username sudah digunakan."}, status=409)
    return JsonResponse({"user": user.to_dict()})


@require_roles(Role.ADMIN, allow_superuser=True)
@require_POST
def staff_delete(request, user_id: str):
    user = get_object_or_404(User, pk=user_id)
    try:
        delete_staff(user, actor=request.user, request=request)
    except ProtectedAccount as e:
        return HttpResponseBadRequest(str(e))
    return JsonResponse({"ok": True})
