from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..core.constants import CLOCK_FORMAT, ISO_DATE_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, ISO_DATE_FORMAT).date()


def parse_optional_date(value: Optional[str], field_name: str) -> Optional[date]:
    v = (value or "").strip()
    if not v:
        return None
    try:
        return parse_iso_date(v)
    except ValueError:
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch it.
    """
    return datetime.now()


def format_clock(moment: datetime) -> str:
    """24-hour HH:MM clock string, as stored on attendance records."""
    return moment.strftime(CLOCK_FORMAT)


def clock_hour(value: str) -> int:
    """Hour component of a free-form HH:MM clock string."""
    head = (value or "").strip().split(":", 1)[0]
    try:
        return int(head)
    except ValueError:
        raise ValidationError(f"Invalid clock time: {value!r}")
