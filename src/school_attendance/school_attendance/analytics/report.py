from __future__ import annotations

from typing import Optional

from .model import StudentYearlySummary


def render_student_report(
    summary: StudentYearlySummary,
    *,
    student_name: Optional[str] = None,
    class_label: Optional[str] = None,
) -> str:
    """Plain-text yearly attendance report for one student."""

    stats = summary.stats
    lines = [f"Attendance Report for {student_name or summary.student_id}"]
    if class_label:
        lines.append(f"Class: {class_label}")
    lines += [
        f"Student ID: {summary.student_id}",
        "",
        f"Yearly Statistics ({summary.year}):",
        f"Total Days: {stats.total_days}",
        f"Present Days: {stats.present_days}",
        f"Absent Days: {stats.absent_days}",
        f"Late Days: {stats.late_days}",
        f"Attendance Percentage: {stats.percentage}%",
        "",
        "Monthly Breakdown:",
    ]
    for month in summary.months:
        lines += [
            "",
            f"{month.label}:",
            f"  Present: {month.stats.present_days} days",
            f"  Absent: {month.stats.absent_days} days",
            f"  Percentage: {month.stats.percentage}%",
        ]
    return "\n".join(lines) + "\n"
