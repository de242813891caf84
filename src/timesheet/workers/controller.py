from __future__ import annotations

from flask import Flask, jsonify, request

from ..attendance.mapping import worker_to_dict
from ..common.http import error_response, json_body
from ..core.exceptions import NotFoundError, ValidationError


def register(app: Flask, container) -> None:
    service = container.attendance_service

    @app.route("/api/workers", methods=["GET"], endpoint="workers_list")
    def workers_list():
        return jsonify({"success": True, "workers": [worker_to_dict(w) for w in service.list_workers()]})

    @app.route("/api/workers", methods=["POST"], endpoint="workers_add")
    def workers_add():
        try:
            data = json_body(request)
            worker = service.add_worker(
                str(data.get("name") or ""),
                str(data.get("position") or ""),
                str(data.get("phone") or ""),
            )
        except ValidationError as e:
            return error_response(str(e))
        return jsonify({"success": True, "worker": worker_to_dict(worker)}), 201

    @app.route("/api/workers/<worker_id>", methods=["DELETE"], endpoint="workers_delete")
    def workers_delete(worker_id: str):
        try:
            removed = service.delete_worker(worker_id)
        except NotFoundError as e:
            return error_response(str(e), 404)
        return jsonify({"success": True, "removed_records": removed})
