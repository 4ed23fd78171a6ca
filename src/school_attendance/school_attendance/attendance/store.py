"""In-process attendance record store.

The store keeps the authoritative record set as an immutable tuple. Writers build
the next tuple under a lock and swap it in with a single assignment, so readers
always see either the pre- or the post-mutation snapshot.
"""
from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import replace
from datetime import date, datetime
from typing import Callable, Iterable, Optional

from ..common.validators import require_non_empty
from ..core.constants import ATTENDANCE_ID_PREFIX
from ..core.exceptions import BatchError, ValidationError
from .model import AttendanceBatch, AttendanceRecord, DateRange, parse_status

logger = logging.getLogger(__name__)

RecordPredicate = Callable[[AttendanceRecord], bool]


def generate_record_id() -> str:
    return f"{ATTENDANCE_ID_PREFIX}{uuid.uuid4().hex[:12].upper()}"


class AttendanceStore:
    def __init__(
        self,
        records: Iterable[AttendanceRecord] = (),
        *,
        id_factory: Callable[[], str] = generate_record_id,
    ):
        self._lock = threading.RLock()
        self._id_factory = id_factory
        self._records: tuple[AttendanceRecord, ...] = ()
        records = list(records)
        if records:
            self.replace_all(records)

    def __len__(self) -> int:
        return len(self._records)

    def snapshot(self) -> tuple[AttendanceRecord, ...]:
        return self._records

    def submit_batch(self, batch: AttendanceBatch) -> tuple[AttendanceRecord, ...]:
        """Replace every record of the batch's (date, class) with the batch.

        Students present in an earlier submission for the same day and class but
        missing from ``batch`` lose their record. Ids carried by incoming records
        are ignored: a record keeps the id of the one it replaces, otherwise it
        gets a fresh one.
        """
        day, class_id = batch.key
        incoming = self._validate_batch(batch)

        with self._lock:
            current = self._records
            replaced = {r.identity: r for r in current if r.day_key == (day, class_id)}
            kept = [r for r in current if r.day_key != (day, class_id)]

            taken = {r.record_id for r in current}
            committed = []
            for record in incoming:
                previous = replaced.get(record.identity)
                record_id = previous.record_id if previous is not None else self._new_id(taken)
                committed.append(replace(record, record_id=record_id))

            self._records = tuple(kept + committed)

        dropped = len(set(replaced) - {r.identity for r in committed})
        logger.info(
            "Attendance batch committed for class=%s date=%s (%d records, %d replaced, %d dropped)",
            class_id,
            day,
            len(committed),
            len(replaced),
            dropped,
        )
        return tuple(committed)

    def query(
        self,
        *,
        student_id: Optional[str] = None,
        class_id: Optional[str] = None,
        date_range: Optional[DateRange] = None,
    ) -> list[AttendanceRecord]:
        records = self._records
        return [
            r
            for r in records
            if (student_id is None or r.student_id == student_id)
            and (class_id is None or r.class_id == class_id)
            and (date_range is None or r.date in date_range)
        ]

    def records_for_day(self, day: date, class_id: Optional[str] = None) -> list[AttendanceRecord]:
        return self.query(class_id=class_id, date_range=DateRange(day, day))

    def purge(self, predicate: RecordPredicate) -> int:
        with self._lock:
            current = self._records
            kept = tuple(r for r in current if not predicate(r))
            removed = len(current) - len(kept)
            if removed:
                self._records = kept
        logger.debug("Purged %d attendance records", removed)
        return removed

    def purge_student(self, student_id: str) -> int:
        return self.purge(lambda r: r.student_id == student_id)

    def purge_class(self, class_id: str) -> int:
        return self.purge(lambda r: r.class_id == class_id)

    def replace_all(self, records: Iterable[AttendanceRecord]) -> None:
        """Swap in a whole record set (start-up load, backup import)."""
        seen: set[tuple] = set()
        ids: set[str] = set()
        prepared = []
        for record in records:
            record = self._normalize(record)
            if record.identity in seen:
                raise ValidationError(
                    f"Duplicate attendance for student {record.student_id} "
                    f"in class {record.class_id} on {record.date}"
                )
            seen.add(record.identity)
            if record.record_id:
                if record.record_id in ids:
                    raise ValidationError(f"Duplicate attendance record id {record.record_id}")
                ids.add(record.record_id)
            prepared.append(record)

        prepared = [r if r.record_id else replace(r, record_id=self._new_id(ids)) for r in prepared]

        with self._lock:
            self._records = tuple(prepared)
        logger.info("Attendance store loaded with %d records", len(prepared))

    def restore(self, snapshot: tuple[AttendanceRecord, ...]) -> None:
        """Put back a tuple previously returned by ``snapshot``."""
        with self._lock:
            self._records = tuple(snapshot)
        logger.warning("Attendance store restored to a snapshot of %d records", len(self._records))

    def _new_id(self, taken: set) -> str:
        record_id = self._id_factory()
        if record_id in taken:
            raise ValidationError(f"Attendance record id {record_id} is already in use")
        taken.add(record_id)
        return record_id

    def _validate_batch(self, batch: AttendanceBatch) -> list[AttendanceRecord]:
        students: set[str] = set()
        normalized = []
        for record in batch.records:
            record = self._normalize(record)
            if record.student_id in students:
                raise BatchError(f"Student {record.student_id} appears twice in one batch")
            students.add(record.student_id)
            normalized.append(record)
        return normalized

    @staticmethod
    def _normalize(record: AttendanceRecord) -> AttendanceRecord:
        status = parse_status(record.status)
        require_non_empty(record.student_id, "student_id")
        require_non_empty(record.class_id, "class_id")
        require_non_empty(record.marked_by, "marked_by")
        if isinstance(record.date, datetime) or not isinstance(record.date, date):
            raise ValidationError(f"Attendance date must be a calendar day, got {record.date!r}")
        if status is record.status:
            return record
        return replace(record, status=status)
