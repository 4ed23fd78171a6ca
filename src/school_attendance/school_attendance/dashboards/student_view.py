from __future__ import annotations

from ..analytics.model import StudentYearlySummary
from ..core.enums import Role
from .base import DashboardView


class StudentDashboardView(DashboardView):
    """A student's own attendance for the current year."""

    role = Role.STUDENT

    def __init__(self, channel, reports, *, student_id: str, class_id: str, **kwargs):
        super().__init__(channel, reports, **kwargs)
        self.student_id = student_id
        self.class_id = class_id

    def compute(self) -> StudentYearlySummary:
        return self._reports.student_summary(self.student_id, year=self._today().year, class_id=self.class_id)
