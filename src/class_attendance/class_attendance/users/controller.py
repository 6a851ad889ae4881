from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..container import Container
from ..core.enums import Role
from ..core.exceptions import DomainError
from .model import SessionUser

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/", methods=["GET", "POST"], endpoint="login")
    def login():
        if SessionUser.load(session):
            return redirect(url_for("dashboard"))

        error = None
        form = {"username": "", "role": Role.TEACHER.value}
        if request.method == "POST":
            form["username"] = request.form.get("username", "")
            form["role"] = request.form.get("role", Role.TEACHER.value)
            try:
                user = container.auth_service.authenticate(
                    form["username"],
                    request.form.get("password", ""),
                    form["role"],
                )
                session.permanent = True
                user.store(session)
                return redirect(url_for("dashboard"))
            except DomainError as e:
                error = str(e)
            except Exception:
                logger.exception("Login failed")
                error = "Unexpected error while logging in"

        return render_template("login.html", error=error, form=form, roles=list(Role))

    @app.route("/logout", methods=["GET", "POST"], endpoint="logout")
    def logout():
        SessionUser.clear(session)
        flash("You have been logged out.", "info")
        return redirect(url_for("login"))
