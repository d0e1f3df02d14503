from __future__ import annotations

import logging
from typing import Any, Dict

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_time_of_day
from ..core.constants import DATE_FORMAT
from ..core.exceptions import (
    ConflictError,
    InvalidStateError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from ..container import Container
from .model import AttendanceRecord

logger = logging.getLogger(__name__)

_STATUS_CODES = {
    ValidationError: 400,
    ConflictError: 400,
    InvalidStateError: 400,
    NotFoundError: 404,
}


def record_to_json(record: AttendanceRecord) -> Dict[str, Any]:
    return {
        "id": record.record_id,
        "employeeId": record.employee_id,
        "date": record.work_date.strftime(DATE_FORMAT),
        "clockIn": format_time_of_day(record.clock_in),
        "clockOut": format_time_of_day(record.clock_out),
        "duration": record.duration,
        "status": record.status.value,
    }


def _error(exc: Exception):
    for exc_type, code in _STATUS_CODES.items():
        if isinstance(exc, exc_type):
            return jsonify({"error": str(exc)}), code
    if not isinstance(exc, StorageError):
        logger.exception("Unexpected error while handling %s %s", request.method, request.path)
    return jsonify({"error": "Internal server error"}), 500


def _json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance", methods=["GET"], endpoint="list_attendance")
    def list_attendance():
        # An empty ?employee_id= means no filter.
        employee_id = request.args.get("employee_id") or None
        try:
            records = service.list_records(employee_id)
        except Exception as e:
            return _error(e)
        return jsonify([record_to_json(r) for r in records]), 200

    @app.route("/api/attendance/today/<employee_id>", methods=["GET"], endpoint="today_attendance")
    def today_attendance(employee_id: str):
        try:
            record = service.get_today(employee_id)
        except Exception as e:
            return _error(e)
        return jsonify(record_to_json(record)), 200

    @app.route("/api/attendance", methods=["POST"], endpoint="clock_in")
    def clock_in():
        try:
            data = _json_body()
            # status and duration are always derived; client values are ignored.
            record = service.clock_in(
                data.get("employeeId"),
                data.get("date"),
                data.get("clockIn"),
            )
        except Exception as e:
            return _error(e)
        return jsonify(record_to_json(record)), 201

    @app.route("/api/attendance/<employee_id>/<work_date>", methods=["PUT"], endpoint="clock_out")
    def clock_out(employee_id: str, work_date: str):
        try:
            data = _json_body()
            record = service.clock_out(employee_id, work_date, data.get("clockOut"))
        except Exception as e:
            return _error(e)
        return jsonify(record_to_json(record)), 200

