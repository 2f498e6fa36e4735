from __future__ import annotations

import atexit
import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .database.bootstrap import apply_schema
from .database.connection import DatabaseConnection, DBConfig
from .institutions.controller import register as register_institutions

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def setup_logging(app: Flask, level_name: str) -> None:
    level = logging.getLevelName(str(level_name).upper())
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))

    package_logger = logging.getLogger("class_presence")
    package_logger.setLevel(level)
    if not package_logger.handlers:
        package_logger.addHandler(handler)
    app.logger.setLevel(level)


def create_app(container: Container | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    setup_logging(app, getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        app.logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(DatabaseConnection.get_instance(DBConfig.from_mapping(db_config)), schema_path=SCHEMA_PATH)
        container = build_container(
            db_config=db_config,
            location_timeout_ms=int(getattr(settings, "LOCATION_TIMEOUT_MS", 10_000)),
            location_workers=int(getattr(settings, "LOCATION_WORKERS", 16)),
        )
        atexit.register(container.close)

    app.extensions["class_presence"] = container

    register_attendance(app, container)
    register_institutions(app, container)

    @app.route("/health")
    def health_check():
        return jsonify({"status": "healthy", "service": "class-presence"})

    return app
