import json, time, logging, os
from django.utils.deprecation import MiddlewareMixin
from django.utils.timezone import now

log = logging.getLogger("request")
REDACT = os.getenv("REDACT_PII_IN_LOGS","1") == "1"
LOG_REQUESTS = os.getenv("LOG_REQUESTS","1") == "1"

REDACT_KEYS = {"password", "phone", "username", "photo", "photo_url"}

def _scrub(keys):
    if not REDACT or not keys: return list(keys or [])
    return [("***redacted***" if k.lower() in REDACT_KEYS else k) for k in keys]

class RequestLogMiddleware(MiddlewareMixin):
    """One JSON line per request on the `request` logger. Bodies are never logged, only form keys."""

    def process_request(self, request):
        if not LOG_REQUESTS: return
        request._ts = time.time()

    def process_response(self, request, response):
        if not LOG_REQUESTS: return response
        try:
            dur = time.time() - getattr(request, "_ts", time.time())
            u = getattr(request, "user", None)
            payload = {
                "ts": now().isoformat(),
                "method": request.method,
                "path": request.path,
                "status": response.status_code,
                "duration_ms": int(dur*1000),
                "user": (u.username if u and u.is_authenticated else None),
                "ip": request.META.get("REMOTE_ADDR"),
                "ua": request.META.get("HTTP_USER_AGENT",""),
            }
            if request.method in ("POST","PUT","PATCH") and request.content_type != "application/json":
                payload["body_keys"] = _scrub(getattr(request, "POST", {}).keys())
                if request.FILES:
                    payload["files"] = len(request.FILES)
            log.info(json.dumps(payload))
        except Exception:
            log.debug("request log line failed", exc_info=True)
        return response
