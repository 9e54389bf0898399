"""Whole-database JSON snapshot, one array per collection in row-store format."""

import json

from django.core.serializers.json import DjangoJSONEncoder
from django.utils import timezone

from rowstore.rows import TABLES, model_for, to_row


def snapshot() -> dict:
    data = {"exported_at": timezone.now().isoformat(), "collections": {}}
    for table in TABLES:
        data["collections"][table] = [to_row(obj) for obj in model_for(table).objects.all()]
    return data


def snapshot_bytes(data: dict | None = None) -> bytes:
    data = data if data is not None else snapshot()
    return json.dumps(data, cls=DjangoJSONEncoder, ensure_ascii=False, indent=2).encode("utf-8")


def counts(data: dict) -> dict:
    return {k: len(v) for k, v in data.get("collections", {}).items()}
