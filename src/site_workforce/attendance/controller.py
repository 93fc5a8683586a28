from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_optional_date
from ..common.web import domain_errors, json_body, login_required, parse_enum, roles_required
from ..container import Container
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import ValidationError
from .model import AttendanceFilter, record_to_dict


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_day")
    @login_required
    @domain_errors("load attendance")
    def attendance_day():
        site_id = request.args.get("site_id") or None
        work_date = parse_optional_date(request.args.get("date"), "date")

        records = service.load_day(
            site_id=site_id,
            work_date=work_date,
            status=parse_enum(AttendanceStatus, request.args.get("status"), "status"),
            search_query=request.args.get("search") or None,
        )
        summary = service.summarize(work_date=work_date, site_id=site_id)
        return jsonify({"success": True, "records": [record_to_dict(r) for r in records], "summary": summary.as_dict()})

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @login_required
    @domain_errors("load attendance history")
    def attendance_history():
        criteria = AttendanceFilter(
            site_id=request.args.get("site_id") or None,
            start_date=parse_optional_date(request.args.get("start"), "start"),
            end_date=parse_optional_date(request.args.get("end"), "end"),
            status=parse_enum(AttendanceStatus, request.args.get("status"), "status"),
            search_query=request.args.get("search") or None,
        )
        records = service.list_attendance(criteria)
        return jsonify({"success": True, "records": [record_to_dict(r) for r in records]})

    @app.route("/api/attendance/summary", methods=["GET"], endpoint="attendance_summary")
    @login_required
    @domain_errors("load the attendance summary")
    def attendance_summary():
        summary = service.summarize(
            work_date=parse_optional_date(request.args.get("date"), "date"),
            site_id=request.args.get("site_id") or None,
        )
        return jsonify({"success": True, "summary": summary.as_dict()})

    @app.route("/api/attendance/mark", methods=["POST"], endpoint="attendance_mark")
    @login_required
    @domain_errors("mark attendance")
    def attendance_mark():
        data = json_body()
        record = service.mark_attendance(
            str(data.get("worker_id") or ""),
            work_date=parse_optional_date(data.get("date"), "date"),
            check_in_time=data.get("check_in_time") or None,
        )
        return jsonify({"success": True, "record": record_to_dict(record)}), 201

    @app.route("/api/attendance/<record_id>/status", methods=["POST"], endpoint="attendance_status")
    @login_required
    @domain_errors("update attendance")
    def attendance_status(record_id: str):
        data = json_body()
        status = parse_enum(AttendanceStatus, data.get("status"), "status")
        if status is None:
            raise ValidationError("Status is required")

        record = service.update_status(
            record_id,
            status,
            check_in_time=data.get("check_in_time"),
            check_out_time=data.get("check_out_time"),
            overtime_hours=data.get("overtime_hours"),
        )
        return jsonify({"success": True, "record": record_to_dict(record)})

    @app.route("/api/attendance/<record_id>/checkout", methods=["POST"], endpoint="attendance_checkout")
    @login_required
    @domain_errors("mark checkout")
    def attendance_checkout(record_id: str):
        data = json_body()
        record = service.check_out(record_id, check_out_time=data.get("check_out_time") or None)
        return jsonify({"success": True, "record": record_to_dict(record)})

    @app.route("/api/attendance/<record_id>", methods=["DELETE"], endpoint="attendance_delete")
    @roles_required(Role.ADMIN)
    @domain_errors("delete attendance")
    def attendance_delete(record_id: str):
        service.delete_attendance(record_id)
        return jsonify({"success": True})
