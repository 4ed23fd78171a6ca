from __future__ import annotations

from typing import Protocol, Sequence

from .model import AttendanceRecord


class AttendanceSnapshotRepository(Protocol):
    """Durable load/save hook for the whole attendance record set."""

    def load_all(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def save_all(self, records: Sequence[AttendanceRecord]) -> None:
        raise NotImplementedError
