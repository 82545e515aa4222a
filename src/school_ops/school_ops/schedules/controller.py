from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.api_errors import json_endpoint
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.schedule_service

    def _payload() -> dict:
        return request.get_json(silent=True) or {}

    @app.route("/api/schedule", methods=["GET"], endpoint="schedule_list")
    @json_endpoint
    def schedule_list():
        year = request.args.get("academic_year") or None
        slots = svc.list_schedule(academic_year=year)
        return jsonify({"success": True, "slots": [s.to_dict() for s in slots]})

    @app.route("/api/schedule", methods=["POST"], endpoint="schedule_add")
    @json_endpoint
    def schedule_add():
        data = _payload()
        slot = svc.add_slot(
            day=data.get("day"),
            period=data.get("period"),
            subject=data.get("subject", ""),
            class_room=data.get("class_room", ""),
            teacher=data.get("teacher", ""),
        )
        return jsonify({"success": True, "slot": slot.to_dict()}), 201

    @app.route("/api/schedule/<slot_id>", methods=["PUT"], endpoint="schedule_update")
    @json_endpoint
    def schedule_update(slot_id: str):
        data = _payload()
        slot = svc.update_slot(
            slot_id=slot_id,
            day=data.get("day"),
            period=data.get("period"),
            subject=data.get("subject", ""),
            class_room=data.get("class_room", ""),
            teacher=data.get("teacher", ""),
        )
        return jsonify({"success": True, "slot": slot.to_dict()})

    @app.route("/api/schedule/<slot_id>", methods=["DELETE"], endpoint="schedule_delete")
    @json_endpoint
    def schedule_delete(slot_id: str):
        svc.delete_slot(slot_id=slot_id)
        return jsonify({"success": True})

    @app.route("/api/schedule/<slot_id>/substitute", methods=["POST"], endpoint="schedule_assign_substitute")
    @json_endpoint
    def schedule_assign_substitute(slot_id: str):
        slot = svc.assign_substitute(slot_id=slot_id, teacher=_payload().get("teacher", ""))
        return jsonify({"success": True, "slot": slot.to_dict()})

    @app.route("/api/schedule/<slot_id>/substitute", methods=["DELETE"], endpoint="schedule_remove_substitute")
    @json_endpoint
    def schedule_remove_substitute(slot_id: str):
        slot = svc.remove_substitute(slot_id=slot_id)
        return jsonify({"success": True, "slot": slot.to_dict()})

    @app.route("/api/schedule/<slot_id>/substitute-options", methods=["GET"], endpoint="schedule_substitute_options")
    @json_endpoint
    def schedule_substitute_options(slot_id: str):
        teachers = request.args.getlist("teacher") or None
        options = svc.substitute_options(slot_id=slot_id, teachers=teachers)
        return jsonify(
            {
                "success": True,
                "slot": options.slot.to_dict(),
                "candidates": [
                    {
                        "teacher": c.teacher,
                        "is_free": c.is_free,
                        "conflicting_slot": c.conflicting_slot.to_dict() if c.conflicting_slot else None,
                    }
                    for c in options.candidates
                ],
            }
        )
