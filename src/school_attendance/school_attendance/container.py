from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .analytics.service import AttendanceReportService
from .attendance.json_snapshot_repository import JsonFileSnapshotRepository
from .attendance.memory_snapshot_repository import InMemorySnapshotRepository
from .attendance.mysql_snapshot_repository import MySQLAttendanceSnapshotRepository
from .attendance.repository import AttendanceSnapshotRepository
from .attendance.service import AttendanceService
from .attendance.store import AttendanceStore
from .core.exceptions import ValidationError
from .database.connection import DatabaseConnection, DBConfig
from .realtime.channel import UpdateChannel
from .roster.json_roster_repository import JsonFileRosterRepository
from .roster.memory_roster_repository import InMemoryRosterRepository
from .roster.mysql_roster_repository import MySQLRosterRepository
from .roster.repository import RosterRepository


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    snapshots: AttendanceSnapshotRepository
    roster: RosterRepository

    store: AttendanceStore
    channel: UpdateChannel

    attendance_service: AttendanceService
    report_service: AttendanceReportService


def build_container(
    *,
    backend: str = "memory",
    data_file: str | Path | None = None,
    db_config: Optional[dict] = None,
    roster: Optional[RosterRepository] = None,
    load: bool = True,
) -> Container:
    """Wire one store, one channel and the services around them."""

    conn = None
    if backend == "mysql":
        if not db_config:
            raise ValidationError("mysql backend requires DB_CONFIG")
        conn = DatabaseConnection(DBConfig.from_dict(db_config))
        snapshots: AttendanceSnapshotRepository = MySQLAttendanceSnapshotRepository(conn)
        roster = roster or MySQLRosterRepository(conn)
    elif backend == "json":
        if not data_file:
            raise ValidationError("json backend requires ATTENDANCE_DATA_FILE")
        snapshots = JsonFileSnapshotRepository(data_file)
        roster = roster or JsonFileRosterRepository(data_file)
    elif backend == "memory":
        snapshots = InMemorySnapshotRepository()
    else:
        raise ValidationError(f"Unknown attendance backend: {backend}")

    roster = roster or InMemoryRosterRepository()
    store = AttendanceStore()
    channel = UpdateChannel()

    attendance_service = AttendanceService(store, snapshots, channel)
    report_service = AttendanceReportService(store, roster)
    if load:
        attendance_service.load()

    return Container(
        conn=conn,
        snapshots=snapshots,
        roster=roster,
        store=store,
        channel=channel,
        attendance_service=attendance_service,
        report_service=report_service,
    )
