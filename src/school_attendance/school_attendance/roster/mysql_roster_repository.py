from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ClassInfo
from .repository import RosterRepository


class MySQLRosterRepository(RosterRepository):
    """Read-only view over the classes/class_students tables owned by the CRUD side."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_classes(self) -> Sequence[ClassInfo]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT class_id, name, section FROM classes ORDER BY name, section")
            return [
                ClassInfo(class_id=str(r["class_id"]), name=r["name"], section=r.get("section") or "")
                for r in fetchall(cur)
            ]

    def get_class(self, class_id: str) -> Optional[ClassInfo]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT class_id, name, section FROM classes WHERE class_id=%s", (class_id,))
            r = fetchone(cur)
            if not r:
                return None
            return ClassInfo(class_id=str(r["class_id"]), name=r["name"], section=r.get("section") or "")

    def students_in_class(self, class_id: str) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT student_id FROM class_students WHERE class_id=%s ORDER BY student_id",
                (class_id,),
            )
            return [str(r["student_id"]) for r in fetchall(cur)]
