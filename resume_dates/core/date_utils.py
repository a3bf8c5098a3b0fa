"""Calendar arithmetic used by the validators, on the engine's fixed-length year and month."""

from datetime import date
from typing import Optional

from resume_dates.core.constants import DAYS_PER_MONTH, DAYS_PER_YEAR


def years_between(start: date, end: date) -> float:
    """Signed years from ``start`` to ``end`` (negative when ``end`` is earlier)."""
    return (end - start).days / DAYS_PER_YEAR


def months_between(start: date, end: date) -> float:
    return (end - start).days / DAYS_PER_MONTH


def format_date(value: Optional[date]) -> str:
    return value.isoformat() if value else ""


def format_year(value: Optional[date]) -> str:
    return str(value.year) if value else ""


def describe_span(months: float) -> str:
    """Human wording for a span given in months, e.g. ``7 months`` or ``2.5 years``."""
    if months < 12:
        rounded = max(1, round(months))
        return f"{rounded} month{'s' if rounded != 1 else ''}"
    years = months / 12
    return f"{years:.1f} years"
