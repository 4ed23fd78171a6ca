from __future__ import annotations

from datetime import date

from ...common.datetime_utils import day_label
from ...core.enums import Period
from .base import PeriodFilter


class DayPeriod(PeriodFilter):
    """Exact calendar day."""

    period = Period.DAY

    def matches(self, day: date, anchor: date) -> bool:
        return day == anchor

    def label(self, anchor: date) -> str:
        return day_label(anchor)
