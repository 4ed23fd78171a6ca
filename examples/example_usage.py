"""Example: wire the services without Flask.

A teacher marks a day, an admin dashboard listening on the update channel
recomputes its class overview immediately.
"""

from datetime import date

from src.school_attendance.school_attendance.container import build_container
from src.school_attendance.school_attendance.dashboards.admin_view import AdminDashboardView
from src.school_attendance.school_attendance.roster.memory_roster_repository import InMemoryRosterRepository
from src.school_attendance.school_attendance.roster.model import ClassInfo


def main():
    roster = InMemoryRosterRepository([ClassInfo("C10A", "10", "A")], {"C10A": ["S1", "S2", "S3"]})
    container = build_container(backend="memory", roster=roster)

    admin = AdminDashboardView(container.channel, container.report_service)
    admin.open()

    container.attendance_service.mark_day(
        day=date(2026, 1, 5),
        class_id="C10A",
        marks={"S1": "present", "S2": "absent", "S3": "late"},
        marked_by="T1",
    )
    for summary in admin.state:
        print(summary.to_dict())

    print(container.report_service.student_report_text("S3", "C10A", year=2026))
    admin.close()


if __name__ == "__main__":
    main()
