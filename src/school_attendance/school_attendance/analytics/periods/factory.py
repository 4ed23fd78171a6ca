from __future__ import annotations

from dataclasses import dataclass

from ...common.validators import require_choice
from ...core.enums import Period
from .base import PeriodFilter
from .day_period import DayPeriod
from .month_period import MonthPeriod
from .year_period import YearPeriod


@dataclass
class PeriodFilterFactory:
    """Factory Pattern: pick the period strategy for a Period value."""

    def for_period(self, period: Period | str) -> PeriodFilter:
        period = require_choice(period, Period, "period")
        if period == Period.DAY:
            return DayPeriod()
        if period == Period.MONTH:
            return MonthPeriod()
        return YearPeriod()
