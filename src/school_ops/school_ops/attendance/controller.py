from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.api_errors import date_arg, json_endpoint
from ..common.datetime_utils import now_local, parse_iso_date
from ..core.exceptions import ValidationError
from ..container import Container
from .service import FieldEdit


def _edit_from_payload(data: object) -> FieldEdit:
    if not isinstance(data, dict):
        raise ValidationError("Each edit must be an object")
    raw_date = str(data.get("date") or "").strip()
    if not raw_date:
        raise ValidationError("date is required")
    try:
        record_date = parse_iso_date(raw_date)
    except ValueError:
        raise ValidationError("Invalid date (expected YYYY-MM-DD)")
    student_id = str(data.get("student_id") or "").strip()
    if not student_id:
        raise ValidationError("student_id is required")
    return FieldEdit(
        student_id=student_id,
        record_date=record_date,
        field=data.get("field") or "",
        value=data.get("value"),
    )


def register(app: Flask, container: Container) -> None:
    svc = container.attendance_service

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    @json_endpoint
    def attendance_list():
        record_date = date_arg("date", now_local().date())
        records = svc.list_for_date(record_date)
        return jsonify({"success": True, "date": record_date.isoformat(), "records": [r.to_dict() for r in records]})

    @app.route("/api/attendance/edit", methods=["POST"], endpoint="attendance_edit")
    @json_endpoint
    def attendance_edit():
        data = request.get_json(silent=True) or {}
        edits = data.get("edits")
        if edits is None:
            edits = [data]
        if not isinstance(edits, list):
            raise ValidationError("edits must be a list")

        records = svc.apply_edits(_edit_from_payload(e) for e in edits)
        return jsonify({"success": True, "records": [r.to_dict() for r in records]})

    @app.route("/api/attendance/absences", methods=["GET"], endpoint="attendance_absences")
    @json_endpoint
    def attendance_absences():
        rows = svc.absence_report(
            start=date_arg("start", None),
            end=date_arg("end", None),
            class_filter=(request.args.get("class") or "").strip() or None,
            absence_filter=request.args.get("filter") or "all",
            search=request.args.get("q"),
        )
        return jsonify({"success": True, "students": [r.to_dict() for r in rows]})
