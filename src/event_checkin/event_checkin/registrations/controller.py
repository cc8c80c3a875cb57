from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file

from ..core.exceptions import AlreadyRegistered, NotFound, ValidationError
from ..container import Container
from ..credentials.renderer import render_png
from .model import Registration


def registration_to_dict(reg: Registration) -> dict:
    return {
        "event_id": reg.event_id,
        "name": reg.name,
        "email": reg.email,
        "registration_id": reg.registration_id,
        "qr_payload": reg.qr_payload,
        "created_at": reg.created_at.isoformat(),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/events/<event_id>/registrations", methods=["POST"], endpoint="api_register")
    def api_register(event_id: str):
        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            return jsonify({"success": False, "message": "Request body must be a JSON object"}), 400
        try:
            reg = container.registration_service.register(
                event_id,
                str(data.get("name", "")),
                str(data.get("email", "")),
            )
        except AlreadyRegistered as e:
            body = {"success": False, "message": "You are already registered for this event!"}
            if e.registration is not None:
                body["registration"] = registration_to_dict(e.registration)
            return jsonify(body), 409
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400

        return jsonify({"success": True, "registration": registration_to_dict(reg)}), 201

    @app.route("/api/registrations/<registration_id>/qr.png", methods=["GET"], endpoint="api_registration_qr")
    def api_registration_qr(registration_id: str):
        try:
            reg = container.registration_service.get_by_code(registration_id)
        except NotFound as e:
            return jsonify({"success": False, "message": str(e)}), 404

        buf = io.BytesIO(render_png(reg.qr_payload))
        return send_file(
            buf,
            mimetype="image/png",
            download_name=f"{reg.registration_id}.png",
        )
