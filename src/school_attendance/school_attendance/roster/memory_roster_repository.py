from __future__ import annotations

from typing import Iterable, Mapping, Optional, Sequence

from .model import ClassInfo
from .repository import RosterRepository


class InMemoryRosterRepository(RosterRepository):
    def __init__(
        self,
        classes: Iterable[ClassInfo] = (),
        students: Optional[Mapping[str, Sequence[str]]] = None,
    ):
        self._classes: dict[str, ClassInfo] = {c.class_id: c for c in classes}
        self._students: dict[str, list[str]] = {k: list(v) for k, v in (students or {}).items()}

    def list_classes(self) -> Sequence[ClassInfo]:
        return list(self._classes.values())

    def get_class(self, class_id: str) -> Optional[ClassInfo]:
        return self._classes.get(class_id)

    def students_in_class(self, class_id: str) -> Sequence[str]:
        return list(self._students.get(class_id, []))
