"""
Delivery-note serial numbers: NNN/<agency code>/<roman month>/<year>,
e.g. 001/SJ/MRTJSH/XI/2025. Numbering restarts for every (month, year).
"""

from __future__ import annotations

from datetime import date
from typing import Iterable

from django.conf import settings

ROMAN_MONTHS = ["I", "II", "III", "IV", "V", "VI", "VII", "VIII", "IX", "X", "XI", "XII"]


def roman_month(month: int) -> str:
    if 1 <= month <= 12:
        return ROMAN_MONTHS[month - 1]
    return str(month)


def serial_suffix(day: date, agency_code: str | None = None) -> str:
    code = agency_code or settings.SERIAL_AGENCY_CODE
    return f"/{code}/{roman_month(day.month)}/{day.year}"


def serial_prefix(serial: str) -> int | None:
    """Leading number of a serial, or None when it is not a plain number."""
    head = (serial or "").split("/", 1)[0]
    if not (head.isascii() and head.isdigit()):
        return None
    return int(head)


def next_serial_numbers(day: date, count: int, existing: Iterable[str],
                        agency_code: str | None = None, issued: int = 0) -> list[str]:
    """
    `count` consecutive serials for `day`, continuing after the highest number
    already used with the same suffix, or after `issued` (the highest number
    ever handed out) when that is larger. The maximum is taken once for the batch.
    """
    suffix = serial_suffix(day, agency_code)
    used = [serial_prefix(s) for s in existing if s and s.endswith(suffix)]
    start = max([n for n in used if n is not None] + [issued])
    return [f"{start + i:03d}{suffix}" for i in range(1, count + 1)]
