from __future__ import annotations

import logging

from flask import Flask, jsonify, render_template

from ..access.guards import current_user, login_required, role_required
from ..attendance.service import PUNCH_LABELS
from ..container import Container
from ..core.enums import Role

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/employee", endpoint="employee_dashboard")
    @login_required
    def employee_dashboard():
        overview = container.dashboard_service.employee_overview(current_user())
        return render_template(
            "employee/dashboard.html",
            overview=overview,
            punch_labels=PUNCH_LABELS,
            active_page="dashboard",
        )

    @app.route("/hr", endpoint="hr_dashboard")
    @role_required(Role.HR_ADMIN)
    def hr_dashboard():
        stats = container.dashboard_service.hr_stats()
        return render_template("hr/dashboard.html", stats=stats, active_page="dashboard")

    @app.route("/hr/api/stats", endpoint="hr_api_stats")
    @role_required(Role.HR_ADMIN)
    def hr_api_stats():
        try:
            stats = container.dashboard_service.hr_stats()
            return jsonify({"success": True, "stats": stats.as_json()}), 200
        except Exception:
            logger.exception("Failed to load HR stats")
            return jsonify({"success": False, "message": "System error while loading statistics"}), 500
