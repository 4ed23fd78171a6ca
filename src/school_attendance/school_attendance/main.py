from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .analytics.controller import register as register_reports
from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )

    backend = getattr(settings, "ATTENDANCE_BACKEND", "memory")
    db_config = getattr(settings, "DB_CONFIG", None)
    logger.info("settings=%s backend=%s", settings_module, backend)

    if container is None:
        if backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
            conn = DatabaseConnection(DBConfig.from_dict(db_config))
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(conn, schema_path=schema_path)
            logger.info("schema ready (tables=%d)", len(list_tables(conn)))

        container = build_container(
            backend=backend,
            data_file=getattr(settings, "ATTENDANCE_DATA_FILE", None),
            db_config=db_config,
        )

    app.extensions["school_attendance"] = container

    @app.route("/health", endpoint="health")
    def health():
        return jsonify({"success": True, "records": len(container.store)})

    register_attendance(app, container)
    register_reports(app, container)

    return app
