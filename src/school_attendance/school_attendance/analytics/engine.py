"""Pure attendance analytics.

Every function here maps a record sequence (and arguments) to a result without
touching any store or channel. Period filtering is never applied implicitly:
callers filter with ``filter_by_period`` first and then compute stats.

A record whose status is not present/absent/late still counts towards
``total_days`` but lands in none of the status buckets.
"""
from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import month_label
from ..core.enums import AttendanceStatus, Period
from .model import AttendanceStats, MonthlyAttendance, StudentStats, StudentYearlySummary
from .periods.factory import PeriodFilterFactory

_default_factory = PeriodFilterFactory()


def _percentage(attended: int, total: int) -> int:
    if total <= 0:
        return 0
    # round-half-up of 100 * attended / total in integer arithmetic
    return (200 * attended + total) // (2 * total)


def compute_stats(records: Iterable[AttendanceRecord]) -> AttendanceStats:
    total = present = absent = late = 0
    for r in records:
        total += 1
        if r.status == AttendanceStatus.PRESENT:
            present += 1
        elif r.status == AttendanceStatus.ABSENT:
            absent += 1
        elif r.status == AttendanceStatus.LATE:
            late += 1

    return AttendanceStats(
        total_days=total,
        present_days=present + late,
        absent_days=absent,
        late_days=late,
        percentage=_percentage(present + late, total),
    )


def filter_by_period(
    records: Iterable[AttendanceRecord],
    period: Period | str,
    anchor: date,
    *,
    factory: Optional[PeriodFilterFactory] = None,
) -> list[AttendanceRecord]:
    strategy = (factory or _default_factory).for_period(period)
    return [r for r in records if strategy.matches(r.date, anchor)]


def sort_newest_first(records: Iterable[AttendanceRecord]) -> list[AttendanceRecord]:
    # Two stable passes: student id ascending inside each day, days descending.
    ordered = sorted(records, key=lambda r: r.student_id)
    ordered.sort(key=lambda r: r.date, reverse=True)
    return ordered


def class_breakdown(
    all_records: Iterable[AttendanceRecord],
    class_roster: Sequence[str],
) -> list[StudentStats]:
    """Stats per rostered student, best attendance first.

    Students with no records still appear (all-zero stats). Records of students
    outside the roster are ignored.
    """
    by_student: dict[str, list[AttendanceRecord]] = {sid: [] for sid in class_roster}
    for r in all_records:
        bucket = by_student.get(r.student_id)
        if bucket is not None:
            bucket.append(r)

    rows = [StudentStats(student_id=sid, stats=compute_stats(recs)) for sid, recs in by_student.items()]
    rows.sort(key=lambda row: (-row.stats.percentage, row.student_id))
    return rows


def _records_by_month(records: Iterable[AttendanceRecord], year: int) -> dict[int, list[AttendanceRecord]]:
    months: dict[int, list[AttendanceRecord]] = {}
    for r in records:
        if r.date.year == year:
            months.setdefault(r.date.month, []).append(r)
    return dict(sorted(months.items()))


def monthly_breakdown(student_records: Iterable[AttendanceRecord], year: int) -> dict[str, AttendanceStats]:
    """Month label ('March 2026') -> stats, calendar order, empty months omitted."""
    return {
        month_label(date(year, month, 1)): compute_stats(recs)
        for month, recs in _records_by_month(student_records, year).items()
    }


def monthly_attendance(student_records: Iterable[AttendanceRecord], year: int) -> list[MonthlyAttendance]:
    """Like ``monthly_breakdown`` but keeps each month's records, newest first."""
    return [
        MonthlyAttendance(
            label=month_label(date(year, month, 1)),
            year=year,
            month=month,
            stats=compute_stats(recs),
            records=tuple(sort_newest_first(recs)),
        )
        for month, recs in _records_by_month(student_records, year).items()
    ]


def student_yearly_summary(
    student_id: str,
    records: Iterable[AttendanceRecord],
    year: int,
) -> StudentYearlySummary:
    own = [r for r in records if r.student_id == student_id and r.date.year == year]
    return StudentYearlySummary(
        student_id=student_id,
        year=year,
        stats=compute_stats(own),
        months=tuple(monthly_attendance(own, year)),
    )


def available_years(records: Iterable[AttendanceRecord]) -> list[int]:
    return sorted({r.date.year for r in records}, reverse=True)


def available_months(records: Iterable[AttendanceRecord], year: int) -> list[int]:
    return sorted({r.date.month for r in records if r.date.year == year}, reverse=True)
