from __future__ import annotations

from typing import Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceRecord
from .repository import AttendanceSnapshotRepository


class MySQLAttendanceSnapshotRepository(AttendanceSnapshotRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def load_all(self) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT record_id, student_id, class_id, attendance_date, status, marked_by
                FROM attendance_records
                ORDER BY attendance_date, class_id, student_id
                """
            )
            rows = fetchall(cur)
            return [
                AttendanceRecord(
                    record_id=str(r["record_id"]),
                    student_id=str(r["student_id"]),
                    class_id=str(r["class_id"]),
                    date=r["attendance_date"],
                    status=AttendanceStatus(r["status"]),
                    marked_by=str(r["marked_by"]),
                )
                for r in rows
            ]

    def save_all(self, records: Sequence[AttendanceRecord]) -> None:
        # Whole-table replace inside one transaction; db_cursor rolls back on error.
        with db_cursor(self._conn_factory, dictionary=False) as (_, cur):
            cur.execute("DELETE FROM attendance_records")
            if records:
                cur.executemany(
                    """
                    INSERT INTO attendance_records(record_id, student_id, class_id, attendance_date, status, marked_by)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    [
                        (r.record_id, r.student_id, r.class_id, r.date, r.status.value, r.marked_by)
                        for r in records
                    ],
                )
