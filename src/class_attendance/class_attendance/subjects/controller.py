from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.validators import optional_year
from ..common.web import is_confirmed, login_required
from ..container import Container
from ..core.constants import BRANCHES
from ..core.exceptions import DomainError, NotFoundError
from .service import filter_subjects, parse_subject_form

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    service = container.subject_service

    def _render_form(subject=None, values=None):
        return render_template(
            "subject_form.html",
            subject=subject,
            values=values or {},
            branches=BRANCHES,
            active_page="subjects",
        )

    @app.route("/subjects", endpoint="subjects")
    @login_required
    def subjects():
        filters = {"search": request.args.get("q", ""), "course": request.args.get("course", "")}
        rows = []
        try:
            filters["year"] = optional_year(request.args.get("year"))
            rows = filter_subjects(service.list_subjects(), **filters)
        except DomainError as e:
            flash(str(e), "warning")
        except Exception:
            logger.exception("Error fetching subjects")
            flash("Could not load subjects", "danger")

        return render_template(
            "subjects.html",
            subjects=rows,
            filters=filters,
            branches=BRANCHES,
            active_page="subjects",
        )

    @app.route("/subjects/new", methods=["GET", "POST"], endpoint="add_subject")
    @login_required
    def add_subject():
        if request.method == "POST":
            try:
                service.create(parse_subject_form(request.form))
                flash("Subject added.", "success")
                return redirect(url_for("subjects"))
            except DomainError as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Error saving subject")
                flash("Could not save subject", "danger")
            return _render_form(values=request.form)
        return _render_form()

    @app.route("/subjects/<int:subject_id>/edit", methods=["GET", "POST"], endpoint="edit_subject")
    @login_required
    def edit_subject(subject_id: int):
        try:
            subject = service.get(subject_id)
        except NotFoundError as e:
            flash(str(e), "warning")
            return redirect(url_for("subjects"))

        if request.method == "POST":
            try:
                service.update(subject_id, parse_subject_form(request.form))
                flash("Subject updated.", "success")
                return redirect(url_for("subjects"))
            except DomainError as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Error saving subject %s", subject_id)
                flash("Could not save subject", "danger")
            return _render_form(subject=subject, values=request.form)
        return _render_form(subject=subject)

    @app.route("/subjects/<int:subject_id>/delete", methods=["POST"], endpoint="delete_subject")
    @login_required
    def delete_subject(subject_id: int):
        try:
            service.delete(subject_id, confirmed=is_confirmed(request.form.get("confirm")))
            flash("Subject deleted.", "success")
        except DomainError as e:
            flash(str(e), "warning")
        except Exception:
            logger.exception("Error deleting subject %s", subject_id)
            flash("Could not delete subject", "danger")
        return redirect(url_for("subjects"))
