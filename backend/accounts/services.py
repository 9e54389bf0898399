from __future__ import annotations

import logging

from django.db import transaction

from audit.utils import audit_log
from .models import Capability, Role, User

log = logging.getLogger(__name__)


class ProtectedAccount(Exception):
    """Raised when an operation would remove the master admin account."""


class UsernameTaken(Exception): ...


def _clean_permissions(perms) -> list[str]:
    return [p for p in Capability.values if p in set(perms or [])]


@transaction.atomic
def save_staff(*, username: str, full_name: str, role: str, permissions=None,
               password: str | None = None, user: User | None = None) -> User:
    """Create a staff account, or update `user` in place when given."""
    clash = User.objects.filter(username=username)
    if user is not None:
        clash = clash.exclude(pk=user.pk)
    if clash.exists():
        raise UsernameTaken(username)

    if user is None:
        user = User(username=username)
    user.username = username
    user.full_name = full_name
    user.role = role
    user.permissions = _clean_permissions(permissions)
    if password:
        user.set_password(password)
    elif user._state.adding:
        user.set_unusable_password()
    user.save()
    return user


@transaction.atomic
def delete_staff(user: User, actor=None, request=None) -> None:
    if user.is_master:
        raise ProtectedAccount("Akun Admin Utama tidak dapat dihapus.")
    log.info("deleting staff account %s", user.username)
    audit_log(actor, "STAFF_DELETED", target=user, payload={"username": user.username}, request=request)
    user.delete()


def ensure_master_admin(*, username: str, password: str, full_name: str) -> tuple[User, bool]:
    user, created = User.objects.get_or_create(
        pk="master-admin",
        defaults={
            "username": username,
            "full_name": full_name,
            "role": Role.ADMIN,
            "permissions": list(Capability.values),
            "is_staff": True,
            "is_superuser": True,
        },
    )
    if created:
        user.set_password(password)
        user.save(update_fields=["password"])
    return user, created
