from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..core.enums import Period


@dataclass(frozen=True)
class AttendanceStats:
    """Derived counts over a record subset.

    ``present_days`` already includes ``late_days``.
    """

    total_days: int = 0
    present_days: int = 0
    absent_days: int = 0
    late_days: int = 0
    percentage: int = 0

    def to_dict(self) -> dict:
        return {
            "totalDays": self.total_days,
            "presentDays": self.present_days,
            "absentDays": self.absent_days,
            "lateDays": self.late_days,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class StudentStats:
    student_id: str
    stats: AttendanceStats

    def to_dict(self) -> dict:
        return {"studentId": self.student_id, **self.stats.to_dict()}


@dataclass(frozen=True)
class MonthlyAttendance:
    label: str
    year: int
    month: int
    stats: AttendanceStats
    records: tuple[AttendanceRecord, ...] = ()

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "year": self.year,
            "month": self.month,
            "stats": self.stats.to_dict(),
            "records": [r.to_dict() for r in self.records],
        }


@dataclass(frozen=True)
class StudentYearlySummary:
    student_id: str
    year: int
    stats: AttendanceStats
    months: tuple[MonthlyAttendance, ...] = ()


@dataclass(frozen=True)
class ClassSummary:
    """Top level of the drill-down: one class x section."""

    class_id: str
    name: str
    section: str
    student_count: int
    stats: AttendanceStats

    def to_dict(self) -> dict:
        return {
            "classId": self.class_id,
            "name": self.name,
            "section": self.section,
            "studentCount": self.student_count,
            **self.stats.to_dict(),
        }


@dataclass(frozen=True)
class StudentDetail:
    """Bottom level of the drill-down: one student's records in one class."""

    student_id: str
    class_id: str
    period: Period
    anchor: date
    period_label: str
    stats: AttendanceStats
    records: tuple[AttendanceRecord, ...] = ()
    monthly_breakdown: Optional[tuple[MonthlyAttendance, ...]] = field(default=None)

    def to_dict(self) -> dict:
        data = {
            "studentId": self.student_id,
            "classId": self.class_id,
            "period": self.period.value,
            "anchor": self.anchor.isoformat(),
            "periodLabel": self.period_label,
            "stats": self.stats.to_dict(),
            "records": [r.to_dict() for r in self.records],
        }
        if self.monthly_breakdown is not None:
            data["monthlyBreakdown"] = [m.to_dict() for m in self.monthly_breakdown]
        return data
