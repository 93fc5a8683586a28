from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_optional_date
from ..common.web import domain_errors, json_body, login_required, parse_enum, roles_required
from ..container import Container
from ..core.enums import PayrollStatus, Role
from ..core.exceptions import ValidationError
from .model import PayrollFilter, payroll_to_dict


def register(app: Flask, container: Container) -> None:
    service = container.payroll_service

    def _filter_from_args() -> PayrollFilter:
        return PayrollFilter(
            site_id=request.args.get("site_id") or None,
            period=request.args.get("period") or None,
            status=parse_enum(PayrollStatus, request.args.get("status"), "status"),
            search_query=request.args.get("search") or None,
        )

    @app.route("/api/payroll/generate", methods=["POST"], endpoint="payroll_generate")
    @roles_required(Role.ADMIN, Role.SITE_MANAGER)
    @domain_errors("generate payroll")
    def payroll_generate():
        data = json_body()
        start = parse_optional_date(data.get("start_date"), "start_date")
        end = parse_optional_date(data.get("end_date"), "end_date")
        if start is None or end is None:
            raise ValidationError("start_date and end_date are required")

        site_id = str(data.get("site_id") or "")
        if data.get("store", True):
            records = service.generate_and_store(site_id=site_id, start=start, end=end)
        else:
            records = service.generate(site_id=site_id, start=start, end=end)
        return jsonify({"success": True, "records": [payroll_to_dict(r) for r in records]})

    @app.route("/api/payroll", methods=["GET"], endpoint="payroll_list")
    @login_required
    @domain_errors("load payroll")
    def payroll_list():
        records = service.list_payroll(_filter_from_args())
        return jsonify({"success": True, "records": [payroll_to_dict(r) for r in records]})

    @app.route("/api/payroll/summary", methods=["GET"], endpoint="payroll_summary")
    @login_required
    @domain_errors("load the payroll summary")
    def payroll_summary():
        return jsonify({"success": True, "summary": service.summarize(_filter_from_args()).as_dict()})

    @app.route("/api/payroll/<payroll_id>/status", methods=["POST"], endpoint="payroll_status")
    @roles_required(Role.ADMIN)
    @domain_errors("update payroll status")
    def payroll_status(payroll_id: str):
        data = json_body()
        status = parse_enum(PayrollStatus, data.get("status"), "status")
        if status is None:
            raise ValidationError("Status is required")

        record = service.update_status(
            payroll_id,
            status,
            payment_date=parse_optional_date(data.get("payment_date"), "payment_date"),
        )
        return jsonify({"success": True, "record": payroll_to_dict(record)})
