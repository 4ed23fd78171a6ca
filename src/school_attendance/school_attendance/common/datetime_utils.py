from __future__ import annotations

from datetime import date, datetime

from ..core.constants import ISO_DATE_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, ISO_DATE_FORMAT).date()


def format_iso_date(value: date) -> str:
    return value.strftime(ISO_DATE_FORMAT)


def as_date(value) -> date:
    """Accept a date, a datetime or an ISO string and return the calendar day."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_iso_date(str(value))


def month_label(value: date) -> str:
    """e.g. 'January 2026'."""
    return f"{value.strftime('%B')} {value.year}"


def day_label(value: date) -> str:
    """e.g. 'Monday, January 5, 2026'."""
    return f"{value.strftime('%A')}, {value.strftime('%B')} {value.day}, {value.year}"


def today_local() -> date:
    """Current local day.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return date.today()
