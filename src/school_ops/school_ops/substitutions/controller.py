from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.api_errors import json_endpoint
from ..common.datetime_utils import parse_iso_date
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.substitution_request_service

    def _payload() -> dict:
        return request.get_json(silent=True) or {}

    @app.route("/api/substitution-requests", methods=["GET"], endpoint="subreq_list")
    @json_endpoint
    def subreq_list():
        return jsonify({"success": True, "requests": [r.to_dict() for r in svc.list_all()]})

    @app.route("/api/substitution-requests", methods=["POST"], endpoint="subreq_create")
    @json_endpoint
    def subreq_create():
        data = _payload()
        try:
            request_date = parse_iso_date(str(data.get("date") or "").strip())
        except ValueError:
            raise ValidationError("Invalid date (expected YYYY-MM-DD)")

        req = svc.create(
            request_date=request_date,
            slot_id=str(data.get("slot_id") or ""),
            substitute_teacher=data.get("substitute_teacher", ""),
            requested_by=data.get("requested_by"),
        )
        return jsonify({"success": True, "request": req.to_dict()}), 201

    @app.route("/api/substitution-requests/pending", methods=["GET"], endpoint="subreq_pending")
    @json_endpoint
    def subreq_pending():
        reqs = svc.list_pending_for_teacher(request.args.get("teacher", ""))
        return jsonify({"success": True, "requests": [r.to_dict() for r in reqs]})

    @app.route("/api/substitution-requests/<int:request_id>/accept", methods=["POST"], endpoint="subreq_accept")
    @json_endpoint
    def subreq_accept(request_id: int):
        req = svc.accept(request_id=request_id)
        return jsonify({"success": True, "request": req.to_dict()})

    @app.route("/api/substitution-requests/<int:request_id>/reject", methods=["POST"], endpoint="subreq_reject")
    @json_endpoint
    def subreq_reject(request_id: int):
        req = svc.reject(request_id=request_id, reason=_payload().get("reason", ""))
        return jsonify({"success": True, "request": req.to_dict()})

    @app.route("/api/substitution-requests/<int:request_id>", methods=["DELETE"], endpoint="subreq_cancel")
    @json_endpoint
    def subreq_cancel(request_id: int):
        svc.cancel(request_id=request_id)
        return jsonify({"success": True})
