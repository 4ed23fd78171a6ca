from __future__ import annotations

import logging
import threading
from datetime import date
from typing import Callable, Iterable, Mapping, Optional, TypeVar

from ..common.validators import require_non_empty
from ..core.enums import AttendanceStatus, Channel
from ..realtime.channel import UpdateChannel
from .model import AttendanceBatch, AttendanceRecord, DateRange
from .repository import AttendanceSnapshotRepository
from .store import AttendanceStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AttendanceService:
    """Owner of the store: persists after every mutation, then broadcasts.

    Writes are serialized so snapshots reach the repository in commit order.
    Nothing is saved or published when a mutation is rejected, and a mutation
    whose save fails is rolled back in memory before the error propagates.
    """

    def __init__(
        self,
        store: AttendanceStore,
        snapshots: AttendanceSnapshotRepository,
        channel: UpdateChannel,
    ):
        self._store = store
        self._snapshots = snapshots
        self._channel = channel
        self._write_lock = threading.Lock()

    def load(self) -> int:
        records = list(self._snapshots.load_all())
        with self._write_lock:
            self._store.replace_all(records)
        return len(records)

    def _write(self, mutate: Callable[[], T], *, changed: Callable[[T], bool] = lambda result: True) -> T:
        with self._write_lock:
            before = self._store.snapshot()
            result = mutate()
            if not changed(result):
                return result
            try:
                self._snapshots.save_all(self._store.snapshot())
            except Exception:
                logger.error("Saving attendance failed; rolling back to %d records", len(before))
                self._store.restore(before)
                raise
        return result

    def mark_attendance(self, batch: AttendanceBatch) -> tuple[AttendanceRecord, ...]:
        committed = self._write(lambda: self._store.submit_batch(batch))

        day, class_id = batch.key
        self._channel.publish(
            Channel.ATTENDANCE,
            {
                "action": "marked",
                "date": day,
                "class_id": class_id,
                "records": committed,
            },
        )
        return committed

    def mark_day(
        self,
        *,
        day: date,
        class_id: str,
        marks: Mapping[str, AttendanceStatus | str],
        marked_by: str,
    ) -> tuple[AttendanceRecord, ...]:
        batch = AttendanceBatch.of(
            date=day,
            class_id=require_non_empty(class_id, "class_id"),
            marks=marks,
            marked_by=require_non_empty(marked_by, "marked_by"),
        )
        return self.mark_attendance(batch)

    def attendance_for_day(self, day: date, class_id: Optional[str] = None) -> list[AttendanceRecord]:
        return self._store.records_for_day(day, class_id)

    def find(
        self,
        *,
        student_id: Optional[str] = None,
        class_id: Optional[str] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[AttendanceRecord]:
        date_range = DateRange(start, end) if (start or end) else None
        return self._store.query(student_id=student_id, class_id=class_id, date_range=date_range)

    def _purged(self, purge: Callable[[], int], **scope) -> int:
        removed = self._write(purge, changed=bool)
        if removed:
            self._channel.publish(Channel.ATTENDANCE, {"action": "purged", "removed": removed, **scope})
        logger.info("Removed %d attendance records for %s", removed, scope)
        return removed

    def remove_student(self, student_id: str) -> int:
        return self._purged(lambda: self._store.purge_student(student_id), student_id=student_id)

    def remove_class(self, class_id: str) -> int:
        return self._purged(lambda: self._store.purge_class(class_id), class_id=class_id)

    def import_backup(self, records: Iterable[AttendanceRecord]) -> int:
        records = list(records)
        self._write(lambda: self._store.replace_all(records))
        count = len(self._store)
        self._channel.publish(Channel.ATTENDANCE, {"action": "imported", "count": count})
        return count
