from __future__ import annotations

from typing import Iterable, Sequence

from .model import AttendanceRecord
from .repository import AttendanceSnapshotRepository


class InMemorySnapshotRepository(AttendanceSnapshotRepository):
    """Keeps the last saved snapshot in memory; counts saves for callers that care."""

    def __init__(self, records: Iterable[AttendanceRecord] = ()):
        self._records: tuple[AttendanceRecord, ...] = tuple(records)
        self.save_count = 0

    def load_all(self) -> Sequence[AttendanceRecord]:
        return self._records

    def save_all(self, records: Sequence[AttendanceRecord]) -> None:
        self._records = tuple(records)
        self.save_count += 1
