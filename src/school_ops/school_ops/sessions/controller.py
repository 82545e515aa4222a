from __future__ import annotations

from flask import Flask, jsonify

from ..common.api_errors import date_arg, json_endpoint
from ..common.datetime_utils import now_local
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.session_service

    @app.route("/api/sessions/completed", methods=["GET"], endpoint="sessions_completed")
    @json_endpoint
    def sessions_completed():
        record_date = date_arg("date", now_local().date())
        ids = svc.completed_sessions(record_date=record_date)
        return jsonify({"success": True, "date": record_date.isoformat(), "completed": sorted(ids)})

    @app.route("/api/sessions/<slot_id>/bulk-report", methods=["GET"], endpoint="sessions_bulk_report")
    @json_endpoint
    def sessions_bulk_report(slot_id: str):
        report = svc.bulk_report(slot_id=slot_id, record_date=date_arg("date", now_local().date()))
        return jsonify({"success": True, "report": report.to_dict()})

    @app.route("/api/sessions/readiness", methods=["GET"], endpoint="sessions_readiness")
    @json_endpoint
    def sessions_readiness():
        record_date = date_arg("date", now_local().date())
        classes = svc.readiness(record_date=record_date)
        return jsonify({"success": True, "date": record_date.isoformat(), "classes": [c.to_dict() for c in classes]})
