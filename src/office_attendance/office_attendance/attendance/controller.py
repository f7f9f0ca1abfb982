from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import isoformat_or_none, parse_iso_date
from ..core.enums import AttendanceState
from ..core.exceptions import DomainError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def error_response(exc: DomainError):
    if exc.kind.is_client_error:
        return jsonify({"error": str(exc), "kind": exc.kind.value}), 400

    logger.error(f"{exc.kind.value}: {exc}")
    return jsonify({"error": "Service temporarily unavailable", "kind": exc.kind.value}), 503


def register(app: Flask, container: Container) -> None:
    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"error": "Authentication required"}), 401
            return view(*args, **kwargs)

        return wrapper

    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        return error_response(exc)

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="check_in")
    @login_required
    def check_in():
        result = container.attendance_engine.check_in(int(session["user_id"]), session.get("name", ""))
        return jsonify(result.to_dict())

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="check_out")
    @login_required
    def check_out():
        result = container.attendance_engine.check_out(int(session["user_id"]))
        return jsonify(result.to_dict())

    @app.route("/api/attendance/me", methods=["GET"], endpoint="my_status")
    @login_required
    def my_status():
        record = container.attendance_engine.today_record(int(session["user_id"]))
        if record is None:
            return jsonify({"state": AttendanceState.NO_RECORD.value, "checkInTime": None, "checkOutTime": None})
        return jsonify(
            {
                "state": record.state.value,
                "checkInTime": isoformat_or_none(record.check_in_time),
                "checkOutTime": isoformat_or_none(record.check_out_time),
            }
        )

    @app.route("/api/attendance/current", methods=["GET"], endpoint="current_employees")
    @login_required
    def current_employees():
        entries = container.attendance_engine.current_presence()
        return jsonify({"employeesInOffice": [e.to_dict() for e in entries]})

    @app.route("/api/attendance/reports", methods=["GET"], endpoint="reports")
    @login_required
    def reports():
        start_raw = (request.args.get("startDate") or "").strip()
        end_raw = (request.args.get("endDate") or "").strip()
        if not start_raw or not end_raw:
            raise ValidationError("Start date and end date are required")

        try:
            start, end = parse_iso_date(start_raw), parse_iso_date(end_raw)
        except ValueError as exc:
            raise ValidationError("Dates must use YYYY-MM-DD") from exc

        report = container.attendance_engine.report(start, end)
        return jsonify(report.to_dict())
