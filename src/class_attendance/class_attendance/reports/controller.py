from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.validators import optional_year
from ..common.web import arg_date, login_required
from ..container import Container
from ..core.constants import BRANCHES
from ..core.exceptions import DomainError
from .export import format_rate

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    service = container.report_service

    def _filters():
        default_start, default_end = service.default_range()
        start = arg_date(request.args.get("start"), default_start)
        end = arg_date(request.args.get("end"), default_end)
        course = request.args.get("course") or None
        year = optional_year(request.args.get("year"))
        return start, end, course, year

    @app.route("/reports", methods=["GET"], endpoint="reports")
    @login_required
    def reports():
        report = None
        start = end = course = year = None
        try:
            start, end, course, year = _filters()
            report = service.build(start=start, end=end, course=course, year=year)
        except DomainError as e:
            flash(str(e), "warning")
        except Exception:
            logger.exception("Error fetching attendance data")
            flash("Could not load report", "danger")

        return render_template(
            "reports.html",
            report=report,
            start=start.isoformat() if start else "",
            end=end.isoformat() if end else "",
            course=course or "",
            year=year or "",
            branches=BRANCHES,
            format_rate=format_rate,
            active_page="reports",
        )

    @app.route("/reports.csv", methods=["GET"], endpoint="reports_csv")
    @login_required
    def reports_csv():
        try:
            start, end, course, year = _filters()
            export = service.export(start=start, end=end, course=course, year=year)
        except DomainError as e:
            flash(str(e), "warning")
            return redirect(url_for("reports"))
        except Exception:
            logger.exception("Error exporting report")
            flash("Could not export report", "danger")
            return redirect(url_for("reports"))

        return app.response_class(
            export.content.encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={export.filename}"},
        )
