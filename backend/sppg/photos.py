"""Evidence photos arrive as a multipart upload (`photo`) or an already-encoded `photo_url`."""

import base64

MAX_PHOTO_BYTES = 5 * 1024 * 1024
ALLOWED_PREFIXES = ("data:image/", "https://", "http://")


class PhotoRequired(Exception): ...


def photo_from_request(request, field: str = "photo") -> str:
    upload = request.FILES.get(field)
    if upload is not None:
        if upload.size > MAX_PHOTO_BYTES:
            raise PhotoRequired("Foto terlalu besar.")
        content_type = upload.content_type or "image/jpeg"
        if not content_type.startswith("image/"):
            raise PhotoRequired("Berkas bukan gambar.")
        encoded = base64.b64encode(upload.read()).decode("ascii")
        return f"data:{content_type};base64,{encoded}"
    url = (request.POST.get(f"{field}_url") or "").strip()
    if url.startswith(ALLOWED_PREFIXES):
        return url
    raise PhotoRequired("Foto bukti wajib diambil.")
