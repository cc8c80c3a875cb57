from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .database.bootstrap import apply_schema, apply_seed_sql, ensure_admin, list_tables

from .container import Container, build_container
from .core.exceptions import AuthorizationError, StorageUnavailable
from .admins.controller import register as register_admins
from .checkin.controller import register as register_checkin
from .events.controller import register as register_events
from .registrations.controller import register as register_registrations
from .reporting.controller import register as register_reporting

logger = logging.getLogger(__name__)

_DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app() -> Flask:
    load_dotenv(override=False)
    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)

    logging.basicConfig(level=getattr(logging, str(getattr(settings, "LOG_LEVEL", "INFO")).upper(), logging.INFO))

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=_DATABASE_DIR / "schema.sql")
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=_DATABASE_DIR / "seed.sql")
        ensure_admin(
            db_config,
            email=getattr(settings, "ADMIN_EMAIL"),
            password=getattr(settings, "ADMIN_PASSWORD"),
        )
        logger.info("demo seed ready")

    container = build_container(
        db_config=db_config,
        stats_ttl_seconds=getattr(settings, "STATS_CACHE_TTL", None),
    )
    register_routes(app, container)

    return app


def register_routes(app: Flask, container: Container) -> None:
    @app.errorhandler(StorageUnavailable)
    def storage_unavailable(e: StorageUnavailable):
        return jsonify({"success": False, "retryable": True, "message": str(e)}), 503

    @app.errorhandler(AuthorizationError)
    def unauthorized(e: AuthorizationError):
        return jsonify({"success": False, "message": str(e)}), 401

    register_events(app, container)
    register_registrations(app, container)
    register_checkin(app, container)
    register_admins(app, container)
    register_reporting(app, container)
