from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_clock_time
from ..common.http import date_arg, error_response, json_body
from ..common.validators import optional_clock_time, optional_non_negative_int, require_iso_date, require_non_empty
from ..core.enums import AttendanceStatus
from ..core.exceptions import DomainError, NotFoundError, ValidationError
from ..shifts.model import ShiftSchedule
from .mapping import record_to_dict, worker_to_dict


def shift_to_dict(shift: ShiftSchedule) -> dict:
    return {
        "name": shift.name,
        "start": format_clock_time(shift.start_time),
        "end": format_clock_time(shift.end_time),
        "days": list(shift.days),
    }


def register(app: Flask, container) -> None:
    service = container.attendance_service

    def _record_with_hours(record) -> dict:
        out = record_to_dict(record)
        try:
            worked = service.worked_hours(record)
            out["worked"] = {"hours": worked.hours, "minutes": worked.minutes, "totalMinutes": worked.total_minutes}
        except DomainError:
            out["worked"] = None
        return out

    @app.route("/api/shifts", methods=["GET"], endpoint="shifts_list")
    def shifts_list():
        try:
            day = request.args.get("date")
            shifts = container.shifts.shifts_for_date(require_iso_date(day, "date")) if day else container.shifts.list_all()
        except ValidationError as e:
            return error_response(str(e))
        return jsonify({"success": True, "shifts": [shift_to_dict(s) for s in shifts]})

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_day")
    def attendance_day():
        try:
            day = date_arg(request.args.get("date"), container.clock().date())
        except ValidationError as e:
            return error_response(str(e))

        sheet = [
            {
                "worker": worker_to_dict(entry.worker),
                "shift": entry.shift.name,
                "record": record_to_dict(entry.record) if entry.record else None,
                "worked": {
                    "hours": entry.worked.hours,
                    "minutes": entry.worked.minutes,
                    "totalMinutes": entry.worked.total_minutes,
                },
            }
            for entry in service.day_sheet(day)
        ]
        return jsonify({"success": True, "date": day.isoformat(), "sheet": sheet})

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_mark")
    def attendance_mark():
        try:
            data = json_body(request)
            try:
                status = AttendanceStatus(data.get("status"))
            except ValueError:
                raise ValidationError(f"Unknown status: {data.get('status')!r}") from None

            record = service.mark_attendance(
                require_non_empty(str(data.get("workerId") or ""), "workerId"),
                require_iso_date(str(data.get("date") or ""), "date"),
                require_non_empty(str(data.get("shift") or ""), "shift"),
                status,
                arrival_time=optional_clock_time(data.get("arrivalTime"), "arrivalTime"),
                departure_time=optional_clock_time(data.get("departureTime"), "departureTime"),
                lunch_break=optional_non_negative_int(data.get("lunchBreak"), "lunchBreak"),
                notes=(str(data["notes"]).strip() or None) if data.get("notes") else None,
            )
        except NotFoundError as e:
            return error_response(str(e), 404)
        except DomainError as e:
            return error_response(str(e))
        return jsonify({"success": True, "record": _record_with_hours(record)})

    @app.route("/api/workers/<worker_id>/records", methods=["GET"], endpoint="attendance_worker_records")
    def attendance_worker_records(worker_id: str):
        try:
            service.get_worker(worker_id)
        except NotFoundError as e:
            return error_response(str(e), 404)
        records = sorted(service.records_for_worker(worker_id), key=lambda r: (r.work_date, r.shift))
        return jsonify({"success": True, "records": [_record_with_hours(r) for r in records]})
