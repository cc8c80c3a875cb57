from __future__ import annotations

from flask import Flask, jsonify, request

from ..core.enums import RejectReason
from ..core.exceptions import DecodeError
from ..container import Container
from ..registrations.controller import registration_to_dict
from .frame_source import decode_image, first_payload
from .model import ScanResult

_STATUS_BY_REASON = {
    RejectReason.INVALID_CREDENTIAL: 400,
    RejectReason.UNKNOWN_REGISTRATION: 404,
    RejectReason.ALREADY_ATTENDED: 409,
}


def _scan_response(result: ScanResult):
    body = {
        "success": result.success,
        "state": result.state.value,
        "reason": result.reason.value if result.reason else None,
        "message": result.message,
    }
    if result.registration is not None:
        body["registration"] = registration_to_dict(result.registration)
        body["registration"]["event_name"] = result.event_name
    if result.attended_at is not None:
        body["attended_at"] = result.attended_at.isoformat()

    status = 200 if result.success else _STATUS_BY_REASON.get(result.reason, 400)
    return jsonify(body), status


def register(app: Flask, container: Container) -> None:
    @app.route("/api/checkin", methods=["POST"], endpoint="api_checkin")
    def api_checkin():
        """Check in from a payload already decoded by the scanner client."""
        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            return jsonify({"success": False, "message": "Request body must be a JSON object"}), 400
        payload = str(data.get("payload", "")).strip()
        if not payload:
            return jsonify({"success": False, "message": "QR payload is required"}), 400

        return _scan_response(container.checkin_service.scan(payload))

    @app.route("/api/checkin/image", methods=["POST"], endpoint="api_checkin_image")
    def api_checkin_image():
        """Accept an uploaded frame, decode the QR code, and check in."""
        if "image" not in request.files:
            return jsonify({"success": False, "message": "Image file is missing"}), 400

        try:
            payload = first_payload(decode_image(request.files["image"].stream))
        except DecodeError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        if payload is None:
            return jsonify({"success": False, "message": "No QR code detected in the image"}), 400

        return _scan_response(container.checkin_service.scan(payload))
