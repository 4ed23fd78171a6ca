from __future__ import annotations

from datetime import date

from ...core.enums import Period
from .base import PeriodFilter


class YearPeriod(PeriodFilter):
    """Same calendar year."""

    period = Period.YEAR

    def matches(self, day: date, anchor: date) -> bool:
        return day.year == anchor.year

    def label(self, anchor: date) -> str:
        return str(anchor.year)
