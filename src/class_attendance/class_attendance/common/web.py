from __future__ import annotations

from datetime import date
from functools import wraps
from typing import Optional

from flask import flash, g, jsonify, redirect, session, url_for

from ..core.exceptions import ValidationError
from ..users.model import SessionUser
from .datetime_utils import parse_iso_date


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        user = SessionUser.load(session)
        if user is None:
            flash("Please log in to continue", "warning")
            return redirect(url_for("login"))
        g.current_user = user
        return view(*args, **kwargs)

    return wrapper


def api_login_required(view):
    """Like ``login_required`` but answers 401 JSON instead of redirecting."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        user = SessionUser.load(session)
        if user is None:
            return jsonify({"error": "Not logged in"}), 401
        g.current_user = user
        return view(*args, **kwargs)

    return wrapper


def arg_date(value: Optional[str], default: date) -> date:
    if not value:
        return default
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"Invalid date: {value}")


def arg_int(value: Optional[str]) -> Optional[int]:
    if value in (None, ""):
        return None
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"Invalid number: {value}")


def is_confirmed(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in {"1", "yes", "true", "on"}
