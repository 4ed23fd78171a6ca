from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ClassInfo:
    """A class x section as listed in the roster."""

    class_id: str
    name: str
    section: str = ""

    @property
    def display_name(self) -> str:
        return f"{self.name}-{self.section}" if self.section else self.name
