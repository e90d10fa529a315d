"""Date formatting and age helpers shared by queries, exports and templates."""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional

# Fixed English abbreviations so output does not depend on the process locale.
_MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

DAYS_PER_YEAR = 365.25


def format_day_month_year(value: Optional[date], separator: str = " ") -> Optional[str]:
    """Render ``value`` as ``dd MMM yyyy`` using ``separator`` between parts."""
    if value is None:
        return None
    month = _MONTH_ABBREVIATIONS[value.month - 1]
    return f"{value.day:02d}{separator}{month}{separator}{value.year:04d}"


def compute_age(date_of_birth: Optional[date], now: Optional[datetime] = None) -> Optional[float]:
    """Return the age in years rounded to one decimal, or None without a birth date."""
    if date_of_birth is None:
        return None
    if now is None:
        now = datetime.now()
    if isinstance(date_of_birth, datetime):
        born = date_of_birth.replace(tzinfo=None)
    else:
        born = datetime.combine(date_of_birth, time.min)
    elapsed_days = (now.replace(tzinfo=None) - born).total_seconds() / 86400
    return round(elapsed_days / DAYS_PER_YEAR, 1)
