from __future__ import annotations
from datetime import datetime
from typing import Optional


def _to_int(s: str) -> Optional[int]:
    # ASCII digits only: no sign, no whitespace, no unicode numerals
    if not s or not (s.isascii() and s.isdigit()):
        return None
    return int(s)


def parse_european_date(s: str) -> Optional[datetime]:
    """
    Parse 'DD.MM.YYYY HH:MM' into a naive local datetime.

    Returns None when the shape is wrong (separator counts), a component is
    not numeric, or the values do not name a real calendar instant
    (e.g. 31.04, 24:00, month 13).
    """
    parts = s.split(" ")
    if len(parts) != 2:
        return None

    date_parts = parts[0].split(".")
    if len(date_parts) != 3:
        return None

    time_parts = parts[1].split(":")
    if len(time_parts) != 2:
        return None

    nums = [_to_int(p) for p in (*date_parts, *time_parts)]
    if any(n is None for n in nums):
        return None
    day, month, year, hour, minute = nums

    try:
        return datetime(year, month, day, hour, minute)  # type: ignore[arg-type]
    except ValueError:
        return None


def format_european_date(ts: datetime) -> str:
    """Inverse of parse_european_date."""
    return f"{ts.day:02d}.{ts.month:02d}.{ts.year:04d} {ts.hour:02d}:{ts.minute:02d}"
