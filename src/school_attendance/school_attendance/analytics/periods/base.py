from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from ...core.enums import Period


class PeriodFilter(ABC):
    """Strategy Pattern: decide whether a day falls inside a period window."""

    period: Period

    @abstractmethod
    def matches(self, day: date, anchor: date) -> bool:
        raise NotImplementedError

    @abstractmethod
    def label(self, anchor: date) -> str:
        raise NotImplementedError
