from __future__ import annotations

from dataclasses import dataclass

from ..analytics.model import ClassSummary, StudentStats
from ..core.enums import Period, Role
from .base import DashboardView


@dataclass(frozen=True)
class TeacherDashboardState:
    overview: ClassSummary
    students: list[StudentStats]
    period: Period


class TeacherDashboardView(DashboardView):
    """The class teacher's class: overall stats plus the per-student list."""

    role = Role.TEACHER

    def __init__(self, channel, reports, *, class_id: str, period: Period = Period.MONTH, **kwargs):
        super().__init__(channel, reports, **kwargs)
        self.class_id = class_id
        self.period = Period(period)

    def compute(self) -> TeacherDashboardState:
        overview = self._reports.class_overview([self.class_id])[0]
        students = self._reports.student_list(self.class_id, period=self.period, anchor=self._today())
        return TeacherDashboardState(overview=overview, students=students, period=self.period)
