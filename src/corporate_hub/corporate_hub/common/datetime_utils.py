from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_optional_date(value: Optional[str], field_name: str) -> Optional[date]:
    v = (value or "").strip()
    if not v:
        return None
    try:
        return parse_iso_date(v)
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")


def require_date(value: Optional[str], field_name: str) -> date:
    parsed = parse_optional_date(value, field_name)
    if parsed is None:
        raise ValidationError(f"{field_name} is required")
    return parsed


def parse_optional_time(value: Optional[str], field_name: str) -> Optional[time]:
    v = (value or "").strip()
    if not v:
        return None
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"{field_name} must be a time (HH:MM)")


def combine(day: date, t: Optional[time]) -> Optional[datetime]:
    return datetime.combine(day, t) if t is not None else None


def inclusive_days(start: date, end: date) -> int:
    """Number of calendar days covered by [start, end]."""
    return abs((end - start).days) + 1


def format_time(value) -> str:
    if value is None:
        return "-"
    try:
        return value.strftime("%H:%M")
    except AttributeError:
        return str(value)[:5]


def today() -> date:
    return date.today()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch it.
    """
    return datetime.now()
