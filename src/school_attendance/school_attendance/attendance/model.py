from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Mapping, Optional, Sequence

from ..common.datetime_utils import as_date, format_iso_date
from ..core.enums import AttendanceStatus
from ..core.exceptions import BatchError, UnknownStatusError


def parse_status(value) -> AttendanceStatus:
    try:
        return AttendanceStatus(value)
    except ValueError:
        raise UnknownStatusError(f"Unknown attendance status: {value!r}") from None


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's status in one class on one day."""

    student_id: str
    class_id: str
    date: date
    status: AttendanceStatus
    marked_by: str
    record_id: Optional[str] = None

    @property
    def identity(self) -> tuple[str, str, date]:
        return (self.student_id, self.class_id, self.date)

    @property
    def day_key(self) -> tuple[date, str]:
        return (self.date, self.class_id)

    def to_dict(self) -> dict:
        status = self.status.value if isinstance(self.status, AttendanceStatus) else str(self.status)
        return {
            "id": self.record_id,
            "studentId": self.student_id,
            "classId": self.class_id,
            "date": format_iso_date(self.date),
            "status": status,
            "markedBy": self.marked_by,
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "AttendanceRecord":
        return cls(
            record_id=data.get("id"),
            student_id=str(data["studentId"]),
            class_id=str(data["classId"]),
            date=as_date(data["date"]),
            status=parse_status(data["status"]),
            marked_by=str(data.get("markedBy") or ""),
        )


@dataclass(frozen=True)
class AttendanceBatch:
    """All entries for one class on one day, submitted as a unit."""

    records: tuple[AttendanceRecord, ...]

    def __post_init__(self):
        object.__setattr__(self, "records", tuple(self.records))

    @classmethod
    def of(
        cls,
        *,
        date: date,
        class_id: str,
        marks: Mapping[str, AttendanceStatus | str],
        marked_by: str,
    ) -> "AttendanceBatch":
        day = as_date(date)
        return cls(
            tuple(
                AttendanceRecord(
                    student_id=str(student_id),
                    class_id=str(class_id),
                    date=day,
                    status=parse_status(status),
                    marked_by=str(marked_by),
                )
                for student_id, status in marks.items()
            )
        )

    @property
    def key(self) -> tuple[date, str]:
        """The shared (date, class_id) pair; raises BatchError if there is none."""
        if not self.records:
            raise BatchError("Attendance batch is empty")
        keys = {r.day_key for r in self.records}
        if len(keys) > 1:
            raise BatchError(f"Attendance batch mixes {len(keys)} (date, class) keys")
        return next(iter(keys))

    def __len__(self) -> int:
        return len(self.records)


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar range used by store queries."""

    start: Optional[date] = None
    end: Optional[date] = None

    def __contains__(self, day: date) -> bool:
        if self.start and day < self.start:
            return False
        if self.end and day > self.end:
            return False
        return True


def records_from_dicts(rows: Sequence[Mapping]) -> list[AttendanceRecord]:
    return [AttendanceRecord.from_dict(r) for r in rows]
