"""Volunteer roster.

A volunteer may be granted an app login. That login is a RELAWAN user whose
capabilities default to the volunteer's division. Revoking access deletes
the user; the volunteer record stays.
"""

from __future__ import annotations

import logging

from django.db import transaction
from django.utils import timezone

from accounts.models import Capability, Role, User
from accounts.services import UsernameTaken
from audit.utils import audit_log
from .models import Division, Volunteer, default_capabilities

log = logging.getLogger(__name__)

DEFAULT_VOLUNTEER_PASSWORD = "MBG123"
ORPHAN_PREFIX = "orphan-"


class MissingUsername(Exception): ...


@transaction.atomic
def save_volunteer(
    *,
    name: str,
    division: str,
    phone: str = "",
    is_coordinator: bool = False,
    status: str = Volunteer.Status.ACTIVE,
    give_access: bool = False,
    username: str = "",
    password: str = "",
    permissions=None,
    volunteer: Volunteer | None = None,
) -> Volunteer:
    """Create or update a volunteer and reconcile its linked login."""
    if volunteer is None:
        volunteer = Volunteer()

    linked = volunteer.user if volunteer.user_id else None

    if give_access:
        username = (username or "").strip().lower().replace(" ", "")
        if not username:
            raise MissingUsername("Username wajib diisi untuk akses aplikasi.")
        clash = User.objects.filter(username=username)
        if linked is not None:
            clash = clash.exclude(pk=linked.pk)
        if clash.exists():
            raise UsernameTaken(username)

        if permissions is None:
            permissions = default_capabilities(division)

        if linked is None:
            linked = User(role=Role.RELAWAN)
        linked.username = username
        linked.full_name = name
        linked.role = Role.RELAWAN
        linked.permissions = [c for c in Capability.values if c in set(permissions)]
        if password:
            linked.set_password(password)
        elif linked._state.adding:
            linked.set_password(DEFAULT_VOLUNTEER_PASSWORD)
        linked.save()
    elif linked is not None:
        log.info("revoking app access for volunteer %s (user %s)", name, linked.username)
        volunteer.user = None
        linked.delete()
        linked = None

    volunteer.name = name
    volunteer.division = division
    volunteer.phone = phone
    volunteer.is_coordinator = is_coordinator
    volunteer.status = status
    volunteer.user = linked
    volunteer.save()
    return volunteer


@transaction.atomic
def delete_volunteer(volunteer: Volunteer) -> None:
    user = volunteer.user if volunteer.user_id else None
    volunteer.delete()
    if user is not None:
        user.delete()


@transaction.atomic
def delete_roster_entry(entry_id: str, actor=None, request=None) -> bool:
    """Delete a roster row by id; `orphan-<user id>` rows remove the bare user."""
    if entry_id.startswith(ORPHAN_PREFIX):
        user = User.objects.filter(pk=entry_id[len(ORPHAN_PREFIX):], role=Role.RELAWAN).first()
        if user is None:
            return False
        audit_log(actor, "VOLUNTEER_DELETED", target=user, payload={"username": user.username}, request=request)
        user.delete()
        return True
    volunteer = Volunteer.objects.filter(pk=entry_id).select_related("user").first()
    if volunteer is None:
        return False
    audit_log(actor, "VOLUNTEER_DELETED", target=volunteer, payload={"name": volunteer.name}, request=request)
    delete_volunteer(volunteer)
    return True


def roster(division: str | None = None) -> list[dict]:
    """
    Volunteers plus RELAWAN users that have no volunteer record, so no login
    is ever hidden from the roster. Those orphans are listed under DISTRIBUSI.
    """
    rows = [v.to_dict() for v in Volunteer.objects.all()]
    linked = {r["user_id"] for r in rows if r["user_id"]}
    orphans = User.objects.filter(role=Role.RELAWAN).exclude(pk__in=linked).order_by("username")
    now = timezone.now().isoformat()
    for u in orphans:
        rows.append({
            "id": f"{ORPHAN_PREFIX}{u.id}",
            "name": u.display_name,
            "division": Division.DISTRIBUSI.value,
            "phone": "-",
            "status": Volunteer.Status.ACTIVE.value,
            "joined_at": now,
            "is_coordinator": False,
            "user_id": u.id,
        })
    if division:
        rows = [r for r in rows if r["division"] == division]
    return rows
