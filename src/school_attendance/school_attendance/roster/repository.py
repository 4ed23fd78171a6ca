from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ClassInfo


class RosterRepository(Protocol):
    def list_classes(self) -> Sequence[ClassInfo]:
        raise NotImplementedError

    def get_class(self, class_id: str) -> Optional[ClassInfo]:
        raise NotImplementedError

    def students_in_class(self, class_id: str) -> Sequence[str]:
        """Student ids enrolled in the class, in roster order."""

        raise NotImplementedError
