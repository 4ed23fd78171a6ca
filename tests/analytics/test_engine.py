from __future__ import annotations

from datetime import date

from src.school_attendance.school_attendance.analytics import engine
from src.school_attendance.school_attendance.analytics.model import AttendanceStats
from src.school_attendance.school_attendance.attendance.model import AttendanceRecord
from src.school_attendance.school_attendance.core.enums import AttendanceStatus, Period

P, A, L = AttendanceStatus.PRESENT, AttendanceStatus.ABSENT, AttendanceStatus.LATE


def _rec(status, day=date(2026, 1, 5), student_id="S1", class_id="10-A"):
    return AttendanceRecord(student_id=student_id, class_id=class_id, date=day, status=status, marked_by="T1")


def test_late_counts_as_present_and_is_reported_separately():
    stats = engine.compute_stats([_rec(P), _rec(P), _rec(A), _rec(L)])

    assert stats == AttendanceStats(total_days=4, present_days=3, absent_days=1, late_days=1, percentage=75)


def test_empty_input_gives_zero_stats():
    assert engine.compute_stats([]) == AttendanceStats(0, 0, 0, 0, 0)


def test_monday_scenario_for_class_10a():
    records = [_rec(P, student_id="S1"), _rec(A, student_id="S2"), _rec(L, student_id="S3")]

    stats = engine.compute_stats(records)

    assert stats.to_dict() == {"totalDays": 3, "presentDays": 2, "absentDays": 1, "lateDays": 1, "percentage": 67}


def test_percentage_rounds_half_up():
    # 1 of 8 attended = 12.5%
    records = [_rec(P)] + [_rec(A)] * 7
    assert engine.compute_stats(records).percentage == 13
    # 5 of 8 attended = 62.5%
    records = [_rec(P)] * 5 + [_rec(A)] * 3
    assert engine.compute_stats(records).percentage == 63


def test_unrecognized_status_counts_in_total_only():
    records = [_rec(P), _rec("excused"), _rec(A)]

    stats = engine.compute_stats(records)

    assert stats.total_days == 3
    assert stats.present_days == 1
    assert stats.absent_days == 1
    assert stats.late_days == 0
    # the discrepancy: one day belongs to no bucket
    assert stats.total_days - stats.present_days - stats.absent_days == 1
    assert stats.percentage == 33


def test_filter_by_period_day_month_year():
    records = [
        _rec(P, day=date(2026, 3, 10)),
        _rec(A, day=date(2026, 3, 11)),
        _rec(L, day=date(2026, 4, 10)),
        _rec(P, day=date(2025, 3, 10)),
    ]
    anchor = date(2026, 3, 10)

    assert engine.filter_by_period(records, Period.DAY, anchor) == records[:1]
    assert engine.filter_by_period(records, Period.MONTH, anchor) == records[:2]
    assert engine.filter_by_period(records, Period.YEAR, anchor) == records[:3]
    assert engine.filter_by_period(records, "year", date(2025, 12, 31)) == records[3:]


def test_year_filter_is_idempotent():
    records = [_rec(P, day=date(2026, m, 1)) for m in (1, 6, 12)] + [_rec(A, day=date(2024, 2, 29))]
    anchor = date(2026, 7, 4)

    once = engine.filter_by_period(records, Period.YEAR, anchor)
    twice = engine.filter_by_period(once, Period.YEAR, anchor)

    assert twice == once


def test_class_breakdown_sorted_by_percentage_then_student_id():
    records = [
        _rec(A, student_id="S1"),
        _rec(P, student_id="S2"),
        _rec(P, student_id="S3"),
        _rec(P, student_id="S9"),
    ]

    rows = engine.class_breakdown(records, ["S3", "S1", "S2", "S4"])

    assert [r.student_id for r in rows] == ["S2", "S3", "S1", "S4"]
    assert rows[-1].stats == AttendanceStats()
    assert all(r.student_id != "S9" for r in rows)


def test_monthly_breakdown_only_lists_months_with_records():
    records = [
        _rec(P, day=date(2026, 3, 2)),
        _rec(A, day=date(2026, 3, 3)),
        _rec(L, day=date(2026, 1, 15)),
        _rec(P, day=date(2025, 3, 2)),
    ]

    breakdown = engine.monthly_breakdown(records, 2026)

    assert list(breakdown) == ["January 2026", "March 2026"]
    assert breakdown["March 2026"].percentage == 50
    assert breakdown["January 2026"].late_days == 1


def test_monthly_attendance_keeps_records_newest_first():
    records = [_rec(P, day=date(2026, 3, 2)), _rec(A, day=date(2026, 3, 20)), _rec(P, day=date(2026, 3, 9))]

    [march] = engine.monthly_attendance(records, 2026)

    assert march.month == 3
    assert [r.date.day for r in march.records] == [20, 9, 2]


def test_student_yearly_summary_ignores_other_students_and_years():
    records = [
        _rec(P, day=date(2026, 2, 2)),
        _rec(A, day=date(2026, 5, 4)),
        _rec(A, day=date(2026, 5, 4), student_id="S2"),
        _rec(P, day=date(2025, 5, 4)),
    ]

    summary = engine.student_yearly_summary("S1", records, 2026)

    assert summary.stats.total_days == 2
    assert [m.label for m in summary.months] == ["February 2026", "May 2026"]


def test_available_years_and_months_are_descending():
    records = [_rec(P, day=date(2025, 11, 3)), _rec(P, day=date(2026, 1, 5)), _rec(P, day=date(2026, 4, 1))]

    assert engine.available_years(records) == [2026, 2025]
    assert engine.available_months(records, 2026) == [4, 1]
    assert engine.available_months(records, 2024) == []


def test_sort_newest_first_breaks_ties_by_student():
    records = [
        _rec(P, day=date(2026, 1, 5), student_id="S2"),
        _rec(P, day=date(2026, 1, 6), student_id="S3"),
        _rec(P, day=date(2026, 1, 5), student_id="S1"),
    ]

    ordered = engine.sort_newest_first(records)

    assert [(r.date.day, r.student_id) for r in ordered] == [(6, "S3"), (5, "S1"), (5, "S2")]


def test_same_input_same_output():
    records = [_rec(P), _rec(A, student_id="S2")]
    assert engine.compute_stats(records) == engine.compute_stats(list(records))
    assert engine.class_breakdown(records, ["S1", "S2"]) == engine.class_breakdown(records, ["S1", "S2"])
