from functools import wraps
from django.http import HttpResponseForbidden


def require_roles(*roles, allow_superuser=False):
    """
    Usage:
    @require_roles("ADMIN", allow_superuser=True)
    def view(request): ...
    """
    def decorator(view_func):
        @wraps(view_func)
        def _wrapped(request, *args, **kwargs):
            u = request.user
            if not u.is_authenticated:
                return HttpResponseForbidden("Auth required.")
            if allow_superuser and u.is_superuser:
                return view_func(request, *args, **kwargs)
            if u.role in roles:
                return view_func(request, *args, **kwargs)
            return HttpResponseForbidden("Insufficient role.")
        return _wrapped
    return decorator


def require_capability(*caps):
    """
    Passes when the user holds ANY of the given capabilities.
    ADMIN role holds all of them (see User.has_capability).
    """
    def decorator(view_func):
        @wraps(view_func)
        def _wrapped(request, *args, **kwargs):
            u = request.user
            if not u.is_authenticated:
                return HttpResponseForbidden("Auth required.")
            if u.is_superuser or any(u.has_capability(c) for c in caps):
                return view_func(request, *args, **kwargs)
            return HttpResponseForbidden("Insufficient permission.")
        return _wrapped
    return decorator


def login_required_json(view_func):
    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return HttpResponseForbidden("Auth required.")
        return view_func(request, *args, **kwargs)
    return _wrapped
