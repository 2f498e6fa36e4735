from __future__ import annotations

from flask import Flask, jsonify, request

from ..attendance.controller import current_role, login_required
from ..container import Container
from ..core.exceptions import AuthorizationError, ConfigurationError, ValidationError
from .model import InstitutionAttendancePolicy


def _policy_payload(policy: InstitutionAttendancePolicy) -> dict:
    return {
        "institution_id": policy.institution_id,
        "validation_method": policy.validation_method.value,
        "tolerance_minutes": policy.tolerance_minutes,
        "latitude": policy.latitude,
        "longitude": policy.longitude,
        "radius_meters": policy.effective_radius,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/institutions/<institution_id>/policy", methods=["GET"], endpoint="api_institution_policy")
    @login_required
    def api_institution_policy(institution_id: str):
        try:
            policy = container.policy_service.get(institution_id)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 404
        except ConfigurationError as e:
            return jsonify({"success": False, "message": str(e)}), 409
        return jsonify({"success": True, "policy": _policy_payload(policy)})

    @app.route(
        "/api/admin/institutions/<institution_id>/geolocation",
        methods=["PUT"],
        endpoint="api_update_geolocation",
    )
    @login_required
    def api_update_geolocation(institution_id: str):
        data = request.get_json(silent=True) or {}
        try:
            policy = container.policy_service.update_geolocation(
                current_role=current_role(),
                institution_id=institution_id,
                latitude=data.get("latitude"),
                longitude=data.get("longitude"),
                radius_meters=data.get("radius_meters"),
            )
        except AuthorizationError as e:
            return jsonify({"success": False, "message": str(e)}), 403
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except ConfigurationError as e:
            return jsonify({"success": False, "message": str(e)}), 409
        return jsonify({"success": True, "policy": _policy_payload(policy)})
