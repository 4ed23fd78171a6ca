from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Dashboard roles."""

    STUDENT = "student"
    TEACHER = "teacher"
    ADMIN = "admin"


class AttendanceStatus(str, Enum):
    """Status a teacher can mark for one student on one day."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"


class Period(str, Enum):
    """Analytics window anchored on a calendar day."""

    DAY = "day"
    MONTH = "month"
    YEAR = "year"


class Channel(str, Enum):
    """Update channels, one per mutation kind."""

    ATTENDANCE = "attendance_updates"
    ASSIGNMENT = "assignment_updates"
    TIMETABLE = "timetable_updates"
    EXAM_TIMETABLE = "exam_timetable_updates"
    PROFILE = "profile_updates"
    ANNOUNCEMENT = "announcement_updates"
    GRADE = "grade_updates"
