from __future__ import annotations

import csv
import io
from dataclasses import asdict
from datetime import timedelta

from flask import Flask, jsonify, request

from ..common.datetime_utils import to_iso_timestamp
from ..common.http import date_arg, error_response
from ..core.exceptions import NotFoundError, ValidationError


def register(app: Flask, container) -> None:
    stats = container.statistics_service
    attendance = container.attendance_service

    def _range_args():
        end = date_arg(request.args.get("end"), container.clock().date(), "end")
        start = date_arg(request.args.get("start"), end - timedelta(days=7), "start")
        if start > end:
            raise ValidationError("start must not be after end")
        return start, end

    def _write_report_csv(*, data, filename: str):
        """Write report rows to CSV response."""

        out = io.StringIO()
        writer = csv.DictWriter(
            out,
            fieldnames=[
                "work_date",
                "worker_id",
                "name",
                "shift",
                "status",
                "arrival",
                "departure",
                "worked_hours",
                "notes",
            ],
        )
        writer.writeheader()
        for row in data.rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/statistics", methods=["GET"], endpoint="statistics_overview")
    def statistics_overview():
        workers = {
            worker_id: asdict(s) for worker_id, s in stats.all_worker_stats().items()
        }
        return jsonify(
            {
                "success": True,
                "workers": workers,
                "average_attendance_rate": stats.average_attendance_rate(),
            }
        )

    @app.route("/api/statistics/daily", methods=["GET"], endpoint="statistics_daily")
    def statistics_daily():
        try:
            summary = stats.daily_summary(date_arg(request.args.get("date"), container.clock().date()))
        except ValidationError as e:
            return error_response(str(e))
        out = asdict(summary)
        out["work_date"] = summary.work_date.isoformat()
        return jsonify({"success": True, "summary": out})

    @app.route("/api/statistics/hours", methods=["GET"], endpoint="statistics_hours")
    def statistics_hours():
        try:
            start, end = _range_args()
        except ValidationError as e:
            return error_response(str(e))
        data = stats.worked_hours_report(start=start, end=end, worker_id=request.args.get("worker_id"))
        return jsonify(
            {"success": True, "start": start.isoformat(), "end": end.isoformat(), "rows": data.rows, "summary": data.summary}
        )

    @app.route("/api/statistics/hours.csv", methods=["GET"], endpoint="statistics_hours_csv")
    def statistics_hours_csv():
        try:
            start, end = _range_args()
        except ValidationError as e:
            return error_response(str(e))
        data = stats.worked_hours_report(start=start, end=end, worker_id=request.args.get("worker_id"))
        filename = f"worked_hours_{start.strftime('%Y%m%d')}_{end.strftime('%Y%m%d')}.csv"
        return _write_report_csv(data=data, filename=filename)

    @app.route("/api/statistics/info", methods=["GET"], endpoint="statistics_info")
    def statistics_info():
        info = stats.dataset_info()
        out = asdict(info)
        out["last_sync"] = to_iso_timestamp(info.last_sync) if info.last_sync else None
        return jsonify({"success": True, "info": out})

    @app.route("/api/statistics/<worker_id>", methods=["GET"], endpoint="statistics_worker")
    def statistics_worker(worker_id: str):
        try:
            attendance.get_worker(worker_id)
        except NotFoundError as e:
            return error_response(str(e), 404)
        return jsonify({"success": True, "worker_id": worker_id, "stats": asdict(stats.worker_stats(worker_id))})
