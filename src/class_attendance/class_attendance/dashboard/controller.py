from __future__ import annotations

import logging

from flask import Flask, current_app, flash, jsonify, render_template

from ..common.web import api_login_required, login_required
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/dashboard", endpoint="dashboard")
    @login_required
    def dashboard():
        snapshot = None
        try:
            snapshot = container.live_dashboard.current()
        except Exception:
            flash("Could not load dashboard data", "danger")
        return render_template(
            "dashboard.html",
            snapshot=snapshot,
            refresh_seconds=current_app.config["DASHBOARD_REFRESH_SECONDS"],
            active_page="dashboard",
        )

    @app.route("/api/dashboard", endpoint="api_dashboard")
    @api_login_required
    def api_dashboard():
        try:
            return jsonify(container.live_dashboard.current().to_dict())
        except Exception:
            return jsonify({"error": "Could not load dashboard data"}), 503
