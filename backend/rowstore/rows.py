"""Mapping between local models and rows of the hosted store.

Rows use the store's camelCase attribute names (`recipientName`,
`pickedUpCount`, ...). Passwords never leave the local database.
"""

from __future__ import annotations

import re

from django.apps import apps
from django.db import models

# table -> model label, in dependency order for a full pull
TABLES = {
    "users": "accounts.User",
    "stock": "inventory.StockItem",
    "transactions": "inventory.StockTransaction",
    "menu_plans": "menus.MenuPlan",
    "procurements": "procurement.Procurement",
    "distributions": "distribution.Distribution",
    "volunteers": "volunteers.Volunteer",
}

# row attribute -> model field where the names differ
ALIASES = {
    "transactions": {"type": "kind"},
}

NEVER_PULLED = {"password"}

_CAMEL_RE = re.compile(r"_([a-z0-9])")
_SNAKE_RE = re.compile(r"(?<!^)(?=[A-Z])")


def camel(key: str) -> str:
    return _CAMEL_RE.sub(lambda m: m.group(1).upper(), key)


def snake(key: str) -> str:
    return _SNAKE_RE.sub("_", key).lower()


def model_for(table: str):
    return apps.get_model(TABLES[table])


def table_for(model) -> str | None:
    label = model._meta.label
    for table, model_label in TABLES.items():
        if model_label == label:
            return table
    return None


def to_row(instance) -> dict:
    data = instance.to_dict()
    data.pop("password", None)
    return {camel(k): v for k, v in data.items()}


def _field_for(model, attr: str, aliases: dict):
    name = aliases.get(attr, attr)
    for f in model._meta.concrete_fields:
        if f.name == name or f.attname == name:
            return f
    return None


def apply_row(table: str, row: dict):
    """Insert-or-replace one remote row locally, keyed by id. Last writer wins."""
    model = model_for(table)
    row_id = row.get("id")
    if not row_id:
        return None
    obj = model.objects.filter(pk=row_id).first()
    created = obj is None
    if created:
        obj = model(pk=row_id)

    aliases = ALIASES.get(table, {})
    User = apps.get_model(TABLES["users"])
    for key, value in row.items():
        attr = snake(key)
        if attr == "performed_by":
            obj.performed_by = User.objects.filter(username=value).first() if value else None
            continue
        if attr == "id" or attr in NEVER_PULLED:
            continue
        f = _field_for(model, attr, aliases)
        if f is None:
            continue
        if isinstance(f, models.ForeignKey):
            target = f.related_model
            setattr(obj, f.attname, value if value and target.objects.filter(pk=value).exists() else None)
            continue
        if value is None and not f.null:
            value = "" if isinstance(f, (models.CharField, models.TextField)) else f.get_default()
        elif value is not None:
            value = f.to_python(value)
        setattr(obj, f.attname, value)

    if created and table == "users":
        obj.set_unusable_password()
    obj.save()
    return obj
