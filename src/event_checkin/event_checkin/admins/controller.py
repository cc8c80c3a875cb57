from __future__ import annotations

from datetime import datetime
from functools import wraps
from typing import Optional

from flask import Flask, jsonify, request, session

from ..core.exceptions import AuthenticationError
from ..container import Container
from .service import AdminSession


def current_admin() -> Optional[AdminSession]:
    """Rebuild the admin session object from the Flask cookie session."""
    if "admin_id" not in session:
        return None
    return AdminSession(
        admin_id=int(session["admin_id"]),
        email=session.get("admin_email", ""),
        issued_at=datetime.fromisoformat(session["admin_issued_at"]),
    )


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        admin = current_admin()
        if admin is None:
            return jsonify({"success": False, "message": "Admin login required"}), 401
        return view(admin, *args, **kwargs)

    return wrapper


def register(app: Flask, container: Container) -> None:
    @app.route("/admin/login", methods=["POST"], endpoint="admin_login")
    def admin_login():
        data = request.get_json(silent=True)
        if data is None:
            data = request.form
        elif not isinstance(data, dict):
            return jsonify({"success": False, "message": "Request body must be a JSON object"}), 400
        try:
            admin = container.auth_service.authenticate(
                str(data.get("email", "")),
                str(data.get("password", "")),
            )
        except AuthenticationError as e:
            return jsonify({"success": False, "message": str(e)}), 401

        session.clear()
        session["admin_id"] = admin.admin_id
        session["admin_email"] = admin.email
        session["admin_issued_at"] = admin.issued_at.isoformat()
        return jsonify({"success": True, "email": admin.email})

    @app.route("/admin/logout", methods=["POST"], endpoint="admin_logout")
    def admin_logout():
        session.clear()
        return jsonify({"success": True})
