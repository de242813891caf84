from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file

from ..common.datetime_utils import to_iso_timestamp
from ..common.http import error_response
from ..core.enums import SyncStatus
from .service import SyncResult


def _result_response(result: SyncResult):
    body = {
        "success": result.status == SyncStatus.SUCCESS,
        "status": result.status.value,
        "message": result.message,
    }
    if result.status == SyncStatus.SUCCESS:
        body.update(
            workers=result.workers,
            records=result.records,
            synced_at=to_iso_timestamp(result.synced_at) if result.synced_at else None,
        )
        return jsonify(body), 200
    return jsonify(body), 400


def register(app: Flask, container) -> None:
    sync = container.sync_service

    @app.route("/api/sync/code", methods=["GET"], endpoint="sync_code_export")
    def sync_code_export():
        return jsonify({"success": True, "code": sync.generate_sync_code()})

    @app.route("/api/sync/code", methods=["POST"], endpoint="sync_code_import")
    def sync_code_import():
        data = request.get_json(silent=True) or {}
        code = data.get("code") if isinstance(data, dict) else None
        if not isinstance(code, str) or not code.strip():
            return error_response("Sync code must not be empty")
        return _result_response(sync.import_sync_code(code))

    @app.route("/api/sync/backup", methods=["GET"], endpoint="sync_backup_export")
    def sync_backup_export():
        backup = sync.export_backup()
        return send_file(
            io.BytesIO(backup.content),
            mimetype=backup.mimetype,
            as_attachment=True,
            download_name=backup.filename,
        )

    @app.route("/api/sync/backup", methods=["POST"], endpoint="sync_backup_import")
    def sync_backup_import():
        upload = request.files.get("file")
        if upload is None or not upload.filename:
            return error_response("No backup file selected")
        return _result_response(sync.import_backup(upload.read()))

    @app.route("/api/sync/info", methods=["GET"], endpoint="sync_info")
    def sync_info():
        last = sync.last_sync_time()
        return jsonify({"success": True, "last_sync": to_iso_timestamp(last) if last else None})

    @app.route("/api/sync/data", methods=["DELETE"], endpoint="sync_clear")
    def sync_clear():
        sync.clear_all_data()
        return jsonify({"success": True})
