"""Civil-date helpers. Every "day" in the app is a day in settings.TIME_ZONE."""

from __future__ import annotations

from datetime import date, datetime

from django.utils import timezone

MONTHS_ID = [
    "Januari", "Februari", "Maret", "April", "Mei", "Juni",
    "Juli", "Agustus", "September", "Oktober", "November", "Desember",
]


def local_day(dt: datetime | None = None) -> date:
    return timezone.localdate(dt or timezone.now())


def bounds_for_day(day: date):
    tz = timezone.get_current_timezone()
    start = timezone.make_aware(datetime.combine(day, datetime.min.time()), tz)
    end = timezone.make_aware(datetime.combine(day, datetime.max.time()), tz)
    return start, end


def indonesian_date(value: date | datetime | None, with_time: bool = False) -> str:
    """`10 Mei 2025`, or `10 Mei 2025 08:15 WIB` with `with_time`."""
    if value is None:
        return "-"
    if isinstance(value, datetime):
        local = timezone.localtime(value)
        text = f"{local.day} {MONTHS_ID[local.month - 1]} {local.year}"
        if with_time:
            text += f" {local:%H:%M} WIB"
        return text
    return f"{value.day} {MONTHS_ID[value.month - 1]} {value.year}"
