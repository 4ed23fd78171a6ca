from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import json_errors
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _parse_date(value, field_name: str):
        if not value:
            return None
        try:
            return parse_iso_date(value)
        except (TypeError, ValueError):
            raise ValidationError(f"{field_name} must be YYYY-MM-DD") from None

    @app.route("/api/attendance/batch", methods=["POST"], endpoint="attendance_submit_batch")
    @json_errors
    def submit_batch():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        day = _parse_date(data.get("date"), "date")
        if day is None:
            raise ValidationError("date is required")

        marks = data.get("marks") or {}
        if not isinstance(marks, dict):
            raise ValidationError("marks must be an object of studentId -> status")

        committed = container.attendance_service.mark_day(
            day=day,
            class_id=data.get("classId") or "",
            marks=marks,
            marked_by=data.get("markedBy") or "",
        )
        return jsonify({"success": True, "records": [r.to_dict() for r in committed]}), 201

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_query")
    @json_errors
    def query():
        day = _parse_date(request.args.get("date"), "date")
        start = _parse_date(request.args.get("start"), "start")
        end = _parse_date(request.args.get("end"), "end")
        if day is not None:
            start = end = day

        records = container.attendance_service.find(
            student_id=request.args.get("studentId") or None,
            class_id=request.args.get("classId") or None,
            start=start,
            end=end,
        )
        records.sort(key=lambda r: (r.date, r.class_id, r.student_id))
        return jsonify({"success": True, "records": [r.to_dict() for r in records]})

    @app.route("/api/students/<student_id>/attendance", methods=["DELETE"], endpoint="attendance_purge_student")
    @json_errors
    def purge_student(student_id: str):
        removed = container.attendance_service.remove_student(student_id)
        return jsonify({"success": True, "removed": removed})

    @app.route("/api/classes/<class_id>/attendance", methods=["DELETE"], endpoint="attendance_purge_class")
    @json_errors
    def purge_class(class_id: str):
        removed = container.attendance_service.remove_class(class_id)
        return jsonify({"success": True, "removed": removed})
