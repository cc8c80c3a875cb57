from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file

from ..admins.controller import admin_required
from ..admins.service import AdminSession
from ..common.datetime_utils import format_timestamp
from ..core.constants import ALL_EVENTS
from ..container import Container
from .export import CsvExportSink, ExcelExportSink

_SINKS = {
    "xlsx": ExcelExportSink,
    "csv": CsvExportSink,
}


def register(app: Flask, container: Container) -> None:
    @app.route("/admin/stats", methods=["GET"], endpoint="admin_stats")
    @admin_required
    def admin_stats(admin: AdminSession):
        return jsonify(container.cached_stats.get(admin).to_dict())

    @app.route("/admin/records", methods=["GET"], endpoint="admin_records")
    @admin_required
    def admin_records(admin: AdminSession):
        event_filter = request.args.get("event", ALL_EVENTS)
        records = container.report_service.filtered_records(admin, event_filter)
        return jsonify(
            [
                {
                    "name": r.name,
                    "email": r.email,
                    "registration_id": r.registration_id,
                    "status": r.status.value,
                    "timestamp": format_timestamp(r.timestamp),
                    "event_name": r.event_name,
                }
                for r in records
            ]
        )

    @app.route("/admin/export", methods=["GET"], endpoint="admin_export")
    @admin_required
    def admin_export(admin: AdminSession):
        event_filter = request.args.get("event", ALL_EVENTS)
        fmt = request.args.get("format", "xlsx").lower()
        sink_cls = _SINKS.get(fmt)
        if sink_cls is None:
            return jsonify({"success": False, "message": f"Unsupported export format: {fmt}"}), 400

        svc = container.report_service
        records = svc.filtered_records(admin, event_filter)
        out = svc.export(admin, records, svc.report_filename(event_filter), sink_cls())
        return send_file(
            io.BytesIO(out.content),
            mimetype=out.mimetype,
            as_attachment=True,
            download_name=out.filename,
        )
