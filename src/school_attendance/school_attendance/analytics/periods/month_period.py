from __future__ import annotations

from datetime import date

from ...common.datetime_utils import month_label
from ...core.enums import Period
from .base import PeriodFilter


class MonthPeriod(PeriodFilter):
    """Same month of the same year."""

    period = Period.MONTH

    def matches(self, day: date, anchor: date) -> bool:
        return day.year == anchor.year and day.month == anchor.month

    def label(self, anchor: date) -> str:
        return month_label(anchor)
