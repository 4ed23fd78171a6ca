from __future__ import annotations

import threading
from datetime import date

import pytest

from src.school_attendance.school_attendance.attendance.memory_snapshot_repository import InMemorySnapshotRepository
from src.school_attendance.school_attendance.attendance.model import AttendanceBatch, AttendanceRecord
from src.school_attendance.school_attendance.attendance.service import AttendanceService
from src.school_attendance.school_attendance.attendance.store import AttendanceStore
from src.school_attendance.school_attendance.core.enums import AttendanceStatus, Channel
from src.school_attendance.school_attendance.core.exceptions import BatchError, UnknownStatusError
from src.school_attendance.school_attendance.realtime.channel import UpdateChannel

MONDAY = date(2026, 1, 5)


class RecordingChannel(UpdateChannel):
    """Remembers what the store looked like when each event went out."""

    def __init__(self, store: AttendanceStore):
        super().__init__()
        self._store = store
        self.events = []

    def publish(self, channel, payload=None):
        self.events.append((Channel(channel), payload, len(self._store)))
        return super().publish(channel, payload)


class FailingSnapshotRepository(InMemorySnapshotRepository):
    def save_all(self, records):
        raise OSError("disk full")


class BlockingSnapshotRepository(InMemorySnapshotRepository):
    """First save waits until the test lets it through."""

    def __init__(self):
        super().__init__()
        self.first_save_started = threading.Event()
        self.release_first_save = threading.Event()

    def save_all(self, records):
        if not self.first_save_started.is_set():
            self.first_save_started.set()
            assert self.release_first_save.wait(5)
        super().save_all(records)


def _service(records=()):
    store = AttendanceStore()
    snapshots = InMemorySnapshotRepository(records)
    channel = RecordingChannel(store)
    return AttendanceService(store, snapshots, channel), store, snapshots, channel


def test_mark_day_commits_saves_then_publishes():
    svc, store, snapshots, channel = _service()

    svc.mark_day(day=MONDAY, class_id="10-A", marks={"S1": "present", "S2": "absent"}, marked_by="T1")

    assert len(store) == 2
    assert snapshots.save_count == 1
    assert len(snapshots.load_all()) == 2

    [(name, payload, store_size_at_publish)] = channel.events
    assert name is Channel.ATTENDANCE
    assert payload["action"] == "marked"
    assert payload["class_id"] == "10-A"
    assert payload["date"] == MONDAY
    assert store_size_at_publish == 2


def test_rejected_batch_is_neither_saved_nor_published():
    svc, store, snapshots, channel = _service()

    with pytest.raises(BatchError):
        svc.mark_attendance(AttendanceBatch(()))
    with pytest.raises(UnknownStatusError):
        svc.mark_day(day=MONDAY, class_id="10-A", marks={"S1": "sick"}, marked_by="T1")

    assert snapshots.save_count == 0
    assert channel.events == []


def test_subscriber_sees_new_state_when_notified():
    svc, store, _, channel = _service()
    seen = []
    channel.on_attendance_update(lambda payload: seen.append(len(store.records_for_day(MONDAY, "10-A"))))

    svc.mark_day(day=MONDAY, class_id="10-A", marks={"S1": "present", "S2": "late", "S3": "absent"}, marked_by="T1")

    assert seen == [3]


def test_load_fills_store_from_repository():
    record = AttendanceRecord(
        record_id="ATT1", student_id="S1", class_id="10-A", date=MONDAY, status=AttendanceStatus.PRESENT, marked_by="T1"
    )
    svc, store, _, _ = _service([record])

    assert svc.load() == 1
    assert store.snapshot() == (record,)


def test_remove_student_publishes_only_when_something_was_removed():
    svc, store, snapshots, channel = _service()
    svc.mark_day(day=MONDAY, class_id="10-A", marks={"S1": "present", "S2": "absent"}, marked_by="T1")
    channel.events.clear()

    assert svc.remove_student("S1") == 1
    assert svc.remove_student("S1") == 0

    assert [e[1]["action"] for e in channel.events] == ["purged"]
    assert channel.events[0][1]["student_id"] == "S1"
    assert snapshots.save_count == 2


def test_remove_class_purges_all_its_records():
    svc, store, _, _ = _service()
    svc.mark_day(day=MONDAY, class_id="10-A", marks={"S1": "present"}, marked_by="T1")
    svc.mark_day(day=MONDAY, class_id="9-B", marks={"S7": "late"}, marked_by="T2")

    assert svc.remove_class("10-A") == 1
    assert [r.class_id for r in store.snapshot()] == ["9-B"]


def test_import_backup_replaces_everything():
    svc, store, snapshots, channel = _service()
    svc.mark_day(day=MONDAY, class_id="10-A", marks={"S1": "present"}, marked_by="T1")
    backup = [
        AttendanceRecord(
            record_id="OLD1", student_id="S5", class_id="8-C", date=date(2025, 6, 2), status=AttendanceStatus.ABSENT, marked_by="T9"
        )
    ]

    assert svc.import_backup(backup) == 1

    assert store.snapshot() == tuple(backup)
    assert channel.events[-1][1] == {"action": "imported", "count": 1}
    assert list(snapshots.load_all()) == backup


def test_find_with_date_bounds():
    svc, _, _, _ = _service()
    svc.mark_day(day=MONDAY, class_id="10-A", marks={"S1": "present"}, marked_by="T1")
    svc.mark_day(day=date(2026, 2, 2), class_id="10-A", marks={"S1": "absent"}, marked_by="T1")

    assert len(svc.find(student_id="S1")) == 2
    assert len(svc.find(student_id="S1", start=date(2026, 2, 1))) == 1
    assert len(svc.attendance_for_day(MONDAY)) == 1


def test_failed_save_rolls_back_store_and_publishes_nothing():
    store = AttendanceStore()
    channel = RecordingChannel(store)
    svc = AttendanceService(store, FailingSnapshotRepository(), channel)

    with pytest.raises(OSError):
        svc.mark_day(day=MONDAY, class_id="10-A", marks={"S1": "present"}, marked_by="T1")

    assert len(store) == 0
    assert channel.events == []


def test_failed_save_keeps_earlier_records_on_purge_and_import():
    record = AttendanceRecord(
        record_id="ATT1", student_id="S1", class_id="10-A", date=MONDAY, status=AttendanceStatus.PRESENT, marked_by="T1"
    )
    store = AttendanceStore([record])
    svc = AttendanceService(store, FailingSnapshotRepository(), UpdateChannel())

    with pytest.raises(OSError):
        svc.remove_student("S1")
    with pytest.raises(OSError):
        svc.import_backup([])

    assert store.snapshot() == (record,)


def test_concurrent_writes_reach_repository_in_commit_order():
    store = AttendanceStore()
    snapshots = BlockingSnapshotRepository()
    svc = AttendanceService(store, snapshots, UpdateChannel())

    first = threading.Thread(
        target=svc.mark_day, kwargs=dict(day=MONDAY, class_id="10-A", marks={"S1": "present"}, marked_by="T1")
    )
    second = threading.Thread(
        target=svc.mark_day, kwargs=dict(day=date(2026, 1, 6), class_id="10-A", marks={"S1": "late"}, marked_by="T1")
    )
    first.start()
    assert snapshots.first_save_started.wait(5)
    second.start()
    second.join(0.2)
    snapshots.release_first_save.set()
    first.join(5)
    second.join(5)

    assert len(store) == 2
    assert len(snapshots.load_all()) == 2
    assert snapshots.save_count == 2
