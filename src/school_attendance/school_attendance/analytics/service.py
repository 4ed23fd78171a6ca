from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ..attendance.store import AttendanceStore
from ..common.validators import require_choice
from ..core.enums import Period
from ..core.exceptions import NotFoundError
from ..roster.model import ClassInfo
from ..roster.repository import RosterRepository
from . import engine
from .model import ClassSummary, StudentDetail, StudentStats, StudentYearlySummary
from .periods.factory import PeriodFilterFactory
from .report import render_student_report


class AttendanceReportService:
    """Class -> student -> records drill-down, recomputed from the store on every call."""

    def __init__(
        self,
        store: AttendanceStore,
        roster: RosterRepository,
        *,
        period_factory: Optional[PeriodFilterFactory] = None,
    ):
        self._store = store
        self._roster = roster
        self._periods = period_factory or PeriodFilterFactory()

    def _require_class(self, class_id: str) -> ClassInfo:
        info = self._roster.get_class(class_id)
        if not info:
            raise NotFoundError(f"Class {class_id} does not exist")
        return info

    def class_overview(self, class_ids: Optional[Iterable[str]] = None) -> list[ClassSummary]:
        if class_ids is None:
            classes = list(self._roster.list_classes())
        else:
            classes = [self._require_class(cid) for cid in class_ids]

        summary = []
        for info in classes:
            stats = engine.compute_stats(self._store.query(class_id=info.class_id))
            summary.append(
                ClassSummary(
                    class_id=info.class_id,
                    name=info.name,
                    section=info.section,
                    student_count=len(self._roster.students_in_class(info.class_id)),
                    stats=stats,
                )
            )

        summary.sort(key=lambda c: (-c.stats.percentage, c.class_id))
        return summary

    def student_list(self, class_id: str, *, period: Period | str, anchor: date) -> list[StudentStats]:
        self._require_class(class_id)
        records = engine.filter_by_period(
            self._store.query(class_id=class_id), period, anchor, factory=self._periods
        )
        return engine.class_breakdown(records, self._roster.students_in_class(class_id))

    def student_detail(
        self,
        student_id: str,
        class_id: str,
        *,
        period: Period | str,
        anchor: date,
    ) -> StudentDetail:
        self._require_class(class_id)
        period = require_choice(period, Period, "period")
        strategy = self._periods.for_period(period)

        records = engine.filter_by_period(
            self._store.query(student_id=student_id, class_id=class_id), period, anchor, factory=self._periods
        )
        breakdown = None
        if period == Period.YEAR:
            breakdown = tuple(engine.monthly_attendance(records, anchor.year))

        return StudentDetail(
            student_id=student_id,
            class_id=class_id,
            period=period,
            anchor=anchor,
            period_label=strategy.label(anchor),
            stats=engine.compute_stats(records),
            records=tuple(engine.sort_newest_first(records)),
            monthly_breakdown=breakdown,
        )

    def student_summary(self, student_id: str, *, year: int, class_id: Optional[str] = None) -> StudentYearlySummary:
        return engine.student_yearly_summary(
            student_id, self._store.query(student_id=student_id, class_id=class_id), year
        )

    def student_report_text(
        self,
        student_id: str,
        class_id: str,
        *,
        year: int,
        student_name: Optional[str] = None,
    ) -> str:
        info = self._require_class(class_id)
        summary = self.student_summary(student_id, year=year, class_id=class_id)
        return render_student_report(summary, student_name=student_name, class_label=info.display_name)
