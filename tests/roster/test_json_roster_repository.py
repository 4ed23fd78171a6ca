from __future__ import annotations

import json

import pytest

from src.school_attendance.school_attendance.core.exceptions import ValidationError
from src.school_attendance.school_attendance.roster.json_roster_repository import JsonFileRosterRepository
from src.school_attendance.school_attendance.roster.model import ClassInfo


def _write(path, classes):
    path.write_text(json.dumps({"kv2_classes": classes, "kv2_users": []}), encoding="utf-8")


def test_reads_classes_and_students(tmp_path):
    path = tmp_path / "data.json"
    _write(path, [
        {"id": "C10A", "name": "10", "section": "A", "students": ["S1", "S2"]},
        {"id": "C9B", "name": "9", "section": "B", "students": []},
    ])
    repo = JsonFileRosterRepository(path)

    assert repo.list_classes() == [ClassInfo("C10A", "10", "A"), ClassInfo("C9B", "9", "B")]
    assert repo.get_class("C10A").display_name == "10-A"
    assert repo.get_class("C11") is None
    assert repo.students_in_class("C10A") == ["S1", "S2"]
    assert repo.students_in_class("C11") == []


def test_missing_file_means_no_classes(tmp_path):
    repo = JsonFileRosterRepository(tmp_path / "missing.json")
    assert repo.list_classes() == []


def test_class_without_id_is_rejected(tmp_path):
    path = tmp_path / "data.json"
    _write(path, [{"name": "10", "students": []}])

    with pytest.raises(ValidationError):
        JsonFileRosterRepository(path).list_classes()
