from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.validators import optional_year
from ..common.web import is_confirmed, login_required
from ..container import Container
from ..core.constants import BRANCHES
from ..core.exceptions import DomainError, NotFoundError
from .service import filter_students, parse_student_form

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    service = container.student_service

    def _render_form(student=None, values=None):
        return render_template(
            "student_form.html",
            student=student,
            values=values or {},
            branches=BRANCHES,
            active_page="students",
        )

    @app.route("/students", endpoint="students")
    @login_required
    def students():
        filters = {
            "search": request.args.get("q", ""),
            "course": request.args.get("course", ""),
            "section": request.args.get("section", ""),
        }
        all_students = []
        rows = []
        try:
            filters["year"] = optional_year(request.args.get("year"))
            all_students = service.list_students()
            rows = filter_students(all_students, **filters)
        except DomainError as e:
            flash(str(e), "warning")
        except Exception:
            logger.exception("Error fetching students")
            flash("Could not load students", "danger")

        return render_template(
            "students.html",
            students=rows,
            total=len(all_students),
            filters=filters,
            branches=BRANCHES,
            sections=service.sections(all_students),
            active_page="students",
        )

    @app.route("/students/new", methods=["GET", "POST"], endpoint="add_student")
    @login_required
    def add_student():
        if request.method == "POST":
            try:
                service.create(parse_student_form(request.form))
                flash("Student added.", "success")
                return redirect(url_for("students"))
            except DomainError as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Error saving student")
                flash("Could not save student", "danger")
            return _render_form(values=request.form)
        return _render_form()

    @app.route("/students/<int:student_id>/edit", methods=["GET", "POST"], endpoint="edit_student")
    @login_required
    def edit_student(student_id: int):
        try:
            student = service.get(student_id)
        except NotFoundError as e:
            flash(str(e), "warning")
            return redirect(url_for("students"))

        if request.method == "POST":
            try:
                service.update(student_id, parse_student_form(request.form))
                flash("Student updated.", "success")
                return redirect(url_for("students"))
            except DomainError as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Error saving student %s", student_id)
                flash("Could not save student", "danger")
            return _render_form(student=student, values=request.form)
        return _render_form(student=student)

    @app.route("/students/<int:student_id>/delete", methods=["POST"], endpoint="delete_student")
    @login_required
    def delete_student(student_id: int):
        try:
            service.delete(student_id, confirmed=is_confirmed(request.form.get("confirm")))
            flash("Student deleted.", "success")
        except DomainError as e:
            flash(str(e), "warning")
        except Exception:
            logger.exception("Error deleting student %s", student_id)
            flash("Could not delete student", "danger")
        return redirect(url_for("students"))
