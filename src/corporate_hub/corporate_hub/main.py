from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, render_template

from config import get_settings_module

from .access.guards import install_access_gate
from .announcements.controller import register as register_announcements
from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.constants import DEFAULT_SESSION_DAYS, DEFAULT_TOKEN_MAX_AGE_SECONDS
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_accounts, list_tables
from .database.connection import DBConfig
from .leaves.controller import register as register_leaves
from .payroll.controller import register as register_payroll
from .performance.controller import register as register_performance
from .profiles.controller import register as register_profiles
from .profiles.tokens import LoggingMailer
from .requests.controller import register as register_requests
from .support.controller import register as register_support

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[3]


def register_routes(app: Flask, container: Container) -> None:
    install_access_gate(app, container.profile_service.find)

    register_profiles(app, container)
    register_dashboard(app, container)
    register_attendance(app, container)
    register_leaves(app, container)
    register_payroll(app, container)
    register_performance(app, container)
    register_announcements(app, container)
    register_requests(app, container)
    register_support(app, container)

    @app.errorhandler(403)
    def forbidden(_e):
        return render_template("403.html"), 403


def create_app(container: Container | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates", static_folder="../../../static")

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["SESSION_DAYS"] = int(getattr(settings, "SESSION_DAYS", DEFAULT_SESSION_DAYS))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        db = DBConfig.from_dict(db_config)
        logger.info("settings=%s db=%s", settings_module, db.describe())

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db, schema_path=REPO_ROOT / "database" / "schema.sql")
            logger.info("Schema ready (tables=%d)", len(list_tables(db)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db, seed_path=REPO_ROOT / "database" / "seed.sql")
            ensure_demo_accounts(db)

        container = build_container(
            db_config=db_config,
            secret_key=app.secret_key,
            token_max_age_seconds=int(getattr(settings, "TOKEN_MAX_AGE_SECONDS", DEFAULT_TOKEN_MAX_AGE_SECONDS)),
            mailer=LoggingMailer(getattr(settings, "APP_BASE_URL", "http://localhost:5000")),
        )

    register_routes(app, container)
    return app
