from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from ..common.json_document import read_document
from ..core.constants import CLASSES_STORAGE_KEY
from ..core.exceptions import ValidationError
from .model import ClassInfo
from .repository import RosterRepository


class JsonFileRosterRepository(RosterRepository):
    """Classes stored next to attendance in the same JSON document.

    Each entry looks like ``{"id", "name", "section", "students": [...]}``.
    The file is re-read on every call so edits made by other tools show up.
    """

    def __init__(self, path: str | Path, *, key: str = CLASSES_STORAGE_KEY):
        self._path = Path(path)
        self._key = key

    def _entries(self) -> dict[str, dict]:
        rows = read_document(self._path).get(self._key) or []
        if not isinstance(rows, list):
            raise ValidationError(f"'{self._key}' in {self._path} must be a list")

        entries: dict[str, dict] = {}
        for row in rows:
            if not isinstance(row, dict) or not row.get("id") or not row.get("name"):
                raise ValidationError(f"Class entry in {self._path} needs an id and a name: {row!r}")
            students = row.get("students") or []
            if not isinstance(students, list):
                raise ValidationError(f"Students of class {row['id']} in {self._path} must be a list")
            entries[str(row["id"])] = row
        return entries

    @staticmethod
    def _to_class(row: dict) -> ClassInfo:
        return ClassInfo(class_id=str(row["id"]), name=str(row["name"]), section=str(row.get("section") or ""))

    def list_classes(self) -> Sequence[ClassInfo]:
        return [self._to_class(row) for row in self._entries().values()]

    def get_class(self, class_id: str) -> Optional[ClassInfo]:
        row = self._entries().get(class_id)
        return self._to_class(row) if row else None

    def students_in_class(self, class_id: str) -> Sequence[str]:
        row = self._entries().get(class_id)
        if not row:
            return []
        return [str(sid) for sid in row.get("students") or []]
