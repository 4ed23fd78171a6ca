from __future__ import annotations

from flask import Flask, Response, jsonify, request

from ..common.datetime_utils import parse_iso_date, today_local
from ..common.http import json_errors
from ..core.constants import DEFAULT_PERIOD
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    reports = container.report_service

    def _anchor():
        value = request.args.get("date")
        if not value:
            return today_local()
        try:
            return parse_iso_date(value)
        except ValueError:
            raise ValidationError("date must be YYYY-MM-DD") from None

    @app.route("/api/reports/classes", methods=["GET"], endpoint="reports_classes")
    @json_errors
    def classes():
        return jsonify({"success": True, "classes": [c.to_dict() for c in reports.class_overview()]})

    @app.route("/api/reports/classes/<class_id>/students", methods=["GET"], endpoint="reports_students")
    @json_errors
    def students(class_id: str):
        period = request.args.get("period") or DEFAULT_PERIOD
        rows = reports.student_list(class_id, period=period, anchor=_anchor())
        return jsonify({"success": True, "period": period, "students": [r.to_dict() for r in rows]})

    @app.route(
        "/api/reports/classes/<class_id>/students/<student_id>",
        methods=["GET"],
        endpoint="reports_student_detail",
    )
    @json_errors
    def student_detail(class_id: str, student_id: str):
        period = request.args.get("period") or DEFAULT_PERIOD
        detail = reports.student_detail(student_id, class_id, period=period, anchor=_anchor())
        return jsonify({"success": True, "detail": detail.to_dict()})

    @app.route(
        "/api/reports/classes/<class_id>/students/<student_id>/report.txt",
        methods=["GET"],
        endpoint="reports_student_text",
    )
    @json_errors
    def student_report_text(class_id: str, student_id: str):
        try:
            year = int(request.args.get("year") or today_local().year)
        except ValueError:
            raise ValidationError("year must be a number") from None

        text = reports.student_report_text(
            student_id, class_id, year=year, student_name=request.args.get("name") or None
        )
        filename = f"attendance_{student_id}_{year}.txt"
        return Response(
            text,
            mimetype="text/plain",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
