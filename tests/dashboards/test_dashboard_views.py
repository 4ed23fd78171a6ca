from __future__ import annotations

from datetime import date

import pytest

from src.school_attendance.school_attendance.analytics.service import AttendanceReportService
from src.school_attendance.school_attendance.attendance.memory_snapshot_repository import InMemorySnapshotRepository
from src.school_attendance.school_attendance.attendance.service import AttendanceService
from src.school_attendance.school_attendance.attendance.store import AttendanceStore
from src.school_attendance.school_attendance.core.enums import Channel, Period
from src.school_attendance.school_attendance.dashboards.admin_view import AdminDashboardView
from src.school_attendance.school_attendance.dashboards.student_view import StudentDashboardView
from src.school_attendance.school_attendance.dashboards.teacher_view import TeacherDashboardView
from src.school_attendance.school_attendance.realtime.channel import UpdateChannel
from src.school_attendance.school_attendance.roster.memory_roster_repository import InMemoryRosterRepository
from src.school_attendance.school_attendance.roster.model import ClassInfo

TODAY = date(2026, 1, 5)


@pytest.fixture()
def wiring():
    roster = InMemoryRosterRepository([ClassInfo("C10A", "10", "A")], {"C10A": ["S1", "S2", "S3"]})
    store = AttendanceStore()
    channel = UpdateChannel()
    service = AttendanceService(store, InMemorySnapshotRepository(), channel)
    reports = AttendanceReportService(store, roster)
    return service, reports, channel


def test_every_open_view_recomputes_after_a_batch(wiring):
    service, reports, channel = wiring
    student = StudentDashboardView(channel, reports, student_id="S3", class_id="C10A", today=lambda: TODAY)
    teacher = TeacherDashboardView(channel, reports, class_id="C10A", period=Period.DAY, today=lambda: TODAY)
    admin = AdminDashboardView(channel, reports, today=lambda: TODAY)
    for view in (student, teacher, admin):
        view.open()

    assert student.state.stats.total_days == 0
    assert teacher.state.overview.stats.total_days == 0

    service.mark_day(day=TODAY, class_id="C10A", marks={"S1": "present", "S2": "absent", "S3": "late"}, marked_by="T1")

    assert student.state.stats.late_days == 1
    assert teacher.state.overview.stats.percentage == 67
    assert [s.student_id for s in teacher.state.students] == ["S1", "S3", "S2"]
    assert admin.state[0].stats.total_days == 3
    assert all(v.refresh_count == 2 for v in (student, teacher, admin))
    assert admin.last_event["action"] == "marked"


def test_closed_view_stops_refreshing(wiring):
    service, reports, channel = wiring
    admin = AdminDashboardView(channel, reports)
    admin.open()
    admin.close()

    service.mark_day(day=TODAY, class_id="C10A", marks={"S1": "present"}, marked_by="T1")

    assert admin.refresh_count == 1
    assert not admin.is_open
    assert channel.subscriber_count(Channel.ATTENDANCE) == 0


def test_opening_twice_registers_once(wiring):
    _, reports, channel = wiring
    view = AdminDashboardView(channel, reports)
    view.open()
    view.open()

    assert channel.subscriber_count(Channel.ATTENDANCE) == 1


def test_broken_view_does_not_stop_other_views(wiring):
    service, reports, channel = wiring

    class BrokenView(AdminDashboardView):
        def compute(self):
            if self.refresh_count:
                raise RuntimeError("render failed")
            return super().compute()

    broken = BrokenView(channel, reports)
    healthy = AdminDashboardView(channel, reports)
    broken.open()
    healthy.open()

    service.mark_day(day=TODAY, class_id="C10A", marks={"S1": "absent"}, marked_by="T1")

    assert healthy.state[0].stats.absent_days == 1
