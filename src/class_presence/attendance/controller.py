from __future__ import annotations

from dataclasses import asdict
from datetime import date, datetime
from enum import Enum
from functools import wraps
from typing import Any

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import now_local
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..container import Container
from .location import ReportedLocation
from .model import AttendanceRecord
from .results import ConfirmationResult

_HTTP_STATUS = {
    "confirmed": 201,
    "already_confirmed": 200,
    "not_yet_started": 422,
    "expired": 422,
    "wrong_date": 422,
    "out_of_range": 422,
    "location_unavailable": 422,
    "wrong_validation_method": 409,
    "configuration_error": 409,
    "cancelled": 409,
    "not_found": 404,
}


def describe(result: ConfirmationResult) -> str:
    """User-facing text for a confirmation outcome."""
    kind = result.kind
    if kind == "confirmed":
        return f"Presence confirmed. You are {result.distance_meters:.0f} m from the institution."
    if kind == "already_confirmed":
        return "Your presence for this class was already confirmed."
    if kind == "not_yet_started":
        return f"Class begins at {result.starts_at:%H:%M}. Confirmation opens then."
    if kind == "expired":
        return f"The confirmation window closed at {result.expired_at:%H:%M}."
    if kind == "wrong_date":
        return f"This class is on {result.class_date:%Y-%m-%d}. Confirmation is only possible on that day."
    if kind == "out_of_range":
        return f"You are {result.distance_meters:.0f} m away; the allowed radius is {result.allowed_radius:.0f} m."
    if kind == "location_unavailable":
        return result.reason
    if kind == "wrong_validation_method":
        return f"This class uses '{result.method}' confirmation, not geolocation."
    if kind == "configuration_error":
        return "The institution's attendance settings are incomplete. Please contact an administrator."
    if kind == "not_found":
        return f"The {result.what} could not be found."
    return "Confirmation was cancelled."


def _jsonable(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return value


def result_payload(result: ConfirmationResult) -> dict:
    payload = {k: _jsonable(v) for k, v in asdict(result).items()}
    payload.update(
        kind=result.kind,
        category=result.category.value,
        success=result.kind in ("confirmed", "already_confirmed"),
        message=describe(result),
    )
    return payload


def record_payload(record: AttendanceRecord) -> dict:
    return {k: _jsonable(v) for k, v in asdict(record).items()}


def current_role() -> Role | None:
    try:
        return Role(session.get("role"))
    except ValueError:
        return None


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Please sign in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def register(app: Flask, container: Container) -> None:
    def staff_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"success": False, "message": "Please sign in to continue"}), 401
            if current_role() not in (Role.ADMIN, Role.COORDINATOR, Role.TEACHER):
                return jsonify({"success": False, "message": "Forbidden"}), 403
            return view(*args, **kwargs)

        return wrapper

    @app.route("/api/classes/<class_id>/attendance/confirm", methods=["POST"], endpoint="api_confirm_attendance")
    @login_required
    def api_confirm_attendance(class_id: str):
        """Student self-confirmation; body carries the browser geolocation outcome."""
        try:
            locator = ReportedLocation.from_payload(request.get_json(silent=True) or {})
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400

        result = container.confirmation_service.confirm_attendance(
            class_id,
            str(session["user_id"]),
            now_local(),
            locator=locator,
        )
        return jsonify(result_payload(result)), _HTTP_STATUS.get(result.kind, 400)

    @app.route("/api/classes/<class_id>/attendance/roll-call", methods=["POST"], endpoint="api_roll_call")
    @staff_required
    def api_roll_call(class_id: str):
        data = request.get_json(silent=True) or {}
        try:
            record = container.roll_call_service.mark(
                current_role=current_role(),
                marked_by=str(session["user_id"]),
                class_id=class_id,
                student_id=str(data.get("student_id") or ""),
                status=str(data.get("status") or ""),
                now=now_local(),
                notes=data.get("notes"),
            )
        except AuthorizationError as e:
            return jsonify({"success": False, "message": str(e)}), 403
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        return jsonify({"success": True, "record": record_payload(record)}), 200

    @app.route("/api/classes/<class_id>/attendance", methods=["GET"], endpoint="api_class_attendance")
    @staff_required
    def api_class_attendance(class_id: str):
        records = container.roll_call_service.list_for_class(class_id)
        return jsonify(
            {
                "success": True,
                "records": [record_payload(r) for r in records],
                "summary": container.roll_call_service.summary_for_class(class_id),
            }
        )
