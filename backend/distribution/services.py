"""Delivery lifecycle, bulk planning and cancellation.

Transitions return False and leave the row untouched when the record is not in
the required predecessor status. A clock that reads earlier than the previous
stamp is clamped to it, so lifecycle timestamps never go backwards.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date, datetime

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from audit.utils import audit_log
from sppg.dates import bounds_for_day, local_day
from .models import Distribution, SerialCounter
from .serials import next_serial_numbers, serial_prefix, serial_suffix

log = logging.getLogger(__name__)

Status = Distribution.Status

# field each transition stamps, in lifecycle order
STAMP_FIELDS = ["timestamp", "sent_at", "delivered_at", "pickup_started_at", "picked_up_at"]


class DistributionError(Exception): ...


class DuplicateDestination(DistributionError):
    def __init__(self, destinations):
        self.destinations = list(destinations)
        super().__init__("Sudah ada distribusi hari ini untuk: " + ", ".join(self.destinations))


def _clamped_now(d: Distribution, stamp_field: str, now: datetime | None) -> datetime:
    now = now or timezone.now()
    earlier = STAMP_FIELDS[:STAMP_FIELDS.index(stamp_field)]
    previous = [getattr(d, f) for f in earlier if getattr(d, f)]
    return max([now] + previous)


def _actor_name(actor) -> str:
    if actor is None or not getattr(actor, "is_authenticated", False):
        return ""
    return actor.display_name


@transaction.atomic
def _advance(d: Distribution, required: str, target: str, stamp_field: str,
             now: datetime | None, **changes) -> bool:
    current = Distribution.objects.select_for_update().get(pk=d.pk)
    if current.status != required:
        log.info("distribution %s: %s ignored in status %s", d.pk, target, current.status)
        return False
    current.status = target
    setattr(current, stamp_field, _clamped_now(current, stamp_field, now))
    for field, value in changes.items():
        setattr(current, field, value)
    fields = ["status", stamp_field, *changes]
    current.save(update_fields=fields)
    for field in fields:
        setattr(d, field, getattr(current, field))
    return True


def start_delivery(d: Distribution, actor=None, now: datetime | None = None) -> bool:
    return _advance(d, Status.PREPARING, Status.ON_DELIVERY, "sent_at", now,
                    driver_name=_actor_name(actor))


def confirm_delivery(d: Distribution, photo_url: str, location: dict | None = None,
                     now: datetime | None = None) -> bool:
    """Needs the evidence photo; without one nothing happens."""
    if not photo_url:
        return False
    changes = {"photo_url": photo_url}
    if location:
        changes["location"] = location
    return _advance(d, Status.ON_DELIVERY, Status.DELIVERED, "delivered_at", now, **changes)


def start_pickup(d: Distribution, actor=None, now: datetime | None = None) -> bool:
    return _advance(d, Status.DELIVERED, Status.PICKING_UP, "pickup_started_at", now,
                    pickup_driver_name=_actor_name(actor))


def parse_pickup_count(raw) -> int:
    if isinstance(raw, bool):
        raise DistributionError("Jumlah ompreng tidak valid.")
    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw if raw is not None else "").strip()
        if not (text.isascii() and text.isdigit()):
            raise DistributionError("Jumlah ompreng tidak valid.")
        value = int(text)
    if value < 0:
        raise DistributionError("Jumlah ompreng tidak valid.")
    return value


def finish_pickup(d: Distribution, count, now: datetime | None = None) -> bool:
    """Raises DistributionError for a count that is not a non-negative integer."""
    count = parse_pickup_count(count)
    return _advance(d, Status.PICKING_UP, Status.PICKED_UP, "picked_up_at", now,
                    picked_up_count=count)


def distributions_for_day(day: date):
    start, end = bounds_for_day(day)
    return Distribution.objects.filter(timestamp__range=(start, end))


def conflicting_destinations(day: date, destinations) -> list[str]:
    """Requested destinations that already have a distribution on `day`, in request order."""
    taken = set(distributions_for_day(day).values_list("destination", flat=True))
    return [name for name in destinations if name in taken]


def _normalise_entries(entries) -> list[tuple[str, int]]:
    pairs = entries.items() if isinstance(entries, Mapping) else entries
    seen, out = set(), []
    for name, portions in pairs:
        name = (name or "").strip()
        if not name:
            raise DistributionError("Nama tujuan wajib diisi.")
        if name in seen:
            raise DuplicateDestination([name])
        try:
            portions = int(portions)
        except (TypeError, ValueError):
            raise DistributionError(f"Porsi untuk {name} tidak valid.")
        if portions < 0:
            raise DistributionError(f"Porsi untuk {name} tidak valid.")
        seen.add(name)
        out.append((name, portions))
    if not out:
        raise DistributionError("Pilih setidaknya satu sekolah tujuan.")
    return out


@transaction.atomic
def _allocate_serials(day: date, count: int) -> list[str]:
    """Serials are never reissued, even after the records holding them are deleted."""
    suffix = serial_suffix(day)
    SerialCounter.objects.get_or_create(suffix=suffix)
    counter = SerialCounter.objects.select_for_update().get(suffix=suffix)
    existing = Distribution.objects.filter(serial_number__endswith=suffix).values_list("serial_number", flat=True)
    serials = next_serial_numbers(day, count, list(existing), issued=counter.last_number)
    counter.last_number = serial_prefix(serials[-1])
    counter.save(update_fields=["last_number"])
    return serials


@transaction.atomic
def create_distributions(entries, recipient_name: str = "", actor=None,
                         now: datetime | None = None) -> list[Distribution]:
    """
    Plan one PREPARING distribution per destination for today.

    `entries` is an ordered mapping (or sequence of pairs) destination -> portions.
    The whole batch is rejected when any destination already has a record on
    the same civil day. Serials follow the order of `entries`.
    """
    now = now or timezone.now()
    pairs = _normalise_entries(entries)
    day = local_day(now)

    conflicts = conflicting_destinations(day, [name for name, _ in pairs])
    if conflicts:
        log.info("bulk plan rejected, destinations already planned on %s: %s", day, conflicts)
        raise DuplicateDestination(conflicts)

    serials = _allocate_serials(day, len(pairs))

    recipient_name = (recipient_name or "").strip() or settings.DEFAULT_RECIPIENT_NAME
    performer = actor if getattr(actor, "is_authenticated", False) else None
    created = []
    for (name, portions), serial in zip(pairs, serials):
        created.append(Distribution.objects.create(
            serial_number=serial,
            destination=name,
            recipient_name=recipient_name,
            portions=portions,
            status=Status.PREPARING,
            timestamp=now,
            performed_by=performer,
        ))
    return created


def can_cancel(d: Distribution) -> bool:
    return d.status in settings.DISTRIBUTION_CANCELLABLE_STATUSES


@transaction.atomic
def cancel_distribution(d: Distribution, actor=None, request=None) -> bool:
    if not can_cancel(d):
        return False
    audit_log(actor, "DISTRIBUTION_CANCELLED", target=d,
              payload={"serial_number": d.serial_number, "destination": d.destination, "status": d.status},
              request=request)
    d.delete()
    return True


@transaction.atomic
def clear_history(actor=None, request=None) -> int:
    """Administrative removal of every finished (PICKED_UP) distribution."""
    qs = Distribution.objects.filter(status=Status.PICKED_UP)
    n = qs.count()
    if n:
        audit_log(actor, "DISTRIBUTION_HISTORY_CLEARED", payload={"count": n}, request=request)
        qs.delete()
    return n
