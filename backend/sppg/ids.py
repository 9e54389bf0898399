import uuid


def new_id() -> str:
    """Opaque row id shared with the hosted row store (TEXT primary keys)."""
    return uuid.uuid4().hex[:12]
