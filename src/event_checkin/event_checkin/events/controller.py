from __future__ import annotations

from flask import Flask, jsonify

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/events", methods=["GET"], endpoint="api_events")
    def api_events():
        events = container.events_repo.list_all()
        return jsonify(
            [
                {
                    "id": e.id,
                    "name": e.name,
                    "description": e.description,
                    "date": e.date.isoformat(),
                    "location": e.location,
                }
                for e in events
            ]
        )
