from __future__ import annotations

from ..analytics.model import ClassSummary
from ..core.enums import Role
from .base import DashboardView


class AdminDashboardView(DashboardView):
    role = Role.ADMIN

    def compute(self) -> list[ClassSummary]:
        return self._reports.class_overview()
