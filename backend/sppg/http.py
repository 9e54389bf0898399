import json


def json_body(request):
    """Decoded JSON object from the request, POST data for form posts, None when unparseable."""
    if request.content_type == "application/json":
        try:
            data = json.loads(request.body.decode("utf-8") or "{}")
        except (UnicodeDecodeError, ValueError):
            return None
        return data if isinstance(data, dict) else None
    return request.POST
