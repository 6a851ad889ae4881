from __future__ import annotations

import logging

from flask import Flask, flash, jsonify, redirect, render_template, request, url_for

from ..common.datetime_utils import today_local
from ..common.validators import optional_year
from ..common.web import api_login_required, arg_date, arg_int, login_required
from ..container import Container
from ..core.constants import ATTENDANCE_POLL_SECONDS, BRANCHES
from ..core.enums import AttendanceStatus
from ..core.exceptions import DomainError, ValidationError

logger = logging.getLogger(__name__)

STATUS_FIELD_PREFIX = "status_"


def _collect_statuses(form) -> dict[int, str]:
    statuses: dict[int, str] = {}
    for key, value in form.items():
        if not key.startswith(STATUS_FIELD_PREFIX) or not value:
            continue
        try:
            statuses[int(key[len(STATUS_FIELD_PREFIX):])] = value
        except ValueError:
            continue
    return statuses


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service
    live = container.live_attendance

    @app.route("/attendance", methods=["GET"], endpoint="attendance")
    @login_required
    def attendance():
        selection = {
            "subject": request.args.get("subject", ""),
            "period": request.args.get("period", ""),
            "date": request.args.get("date", ""),
            "course": request.args.get("course", ""),
            "year": request.args.get("year", ""),
            "section": request.args.get("section", ""),
        }
        subjects, periods, roster, records, stats = [], [], [], [], None
        sections: list[str] = []
        try:
            work_date = arg_date(selection["date"], today_local())
            selection["date"] = work_date.isoformat()
            subject_id = arg_int(selection["subject"])
            period_id = arg_int(selection["period"])

            subjects = container.subject_service.list_subjects()
            periods = service.selectable_periods()
            sections = container.student_service.sections()
            roster = service.roster(
                course=selection["course"] or None,
                year=optional_year(selection["year"]),
                section=selection["section"] or None,
            )
            if subject_id and period_id:
                view = live.current(subject_id=subject_id, period_id=period_id, work_date=work_date)
                records, stats = view.records, view.stats
        except DomainError as e:
            flash(str(e), "warning")
        except Exception:
            logger.exception("Error fetching attendance")
            flash("Could not load attendance data", "danger")

        return render_template(
            "attendance.html",
            selection=selection,
            subjects=subjects,
            periods=periods,
            roster=roster,
            records=records,
            stats=stats,
            sections=sections,
            branches=BRANCHES,
            statuses=list(AttendanceStatus),
            poll_seconds=ATTENDANCE_POLL_SECONDS,
            active_page="attendance",
        )

    @app.route("/api/attendance", methods=["GET"], endpoint="api_attendance")
    @api_login_required
    def api_attendance():
        try:
            subject_id = arg_int(request.args.get("subject"))
            period_id = arg_int(request.args.get("period"))
            work_date = arg_date(request.args.get("date"), today_local())
            if not subject_id or not period_id:
                raise ValidationError("Select a subject, period and date first")
            view = live.current(subject_id=subject_id, period_id=period_id, work_date=work_date)
            return jsonify(view.to_dict())
        except DomainError as e:
            return jsonify({"error": str(e)}), 400
        except Exception:
            logger.exception("Error fetching attendance")
            return jsonify({"error": "Could not load attendance data"}), 503

    @app.route("/attendance/mark", methods=["POST"], endpoint="mark_attendance")
    @login_required
    def mark_attendance():
        args = {k: request.form.get(k, "") for k in ("subject", "period", "date", "course", "year", "section")}
        try:
            result = service.mark(
                subject_id=arg_int(args["subject"]),
                period_id=arg_int(args["period"]),
                work_date=arg_date(args["date"], today_local()),
                statuses=_collect_statuses(request.form),
            )
            summary = ", ".join(f"{m.name}: {m.status.value}" for m in result.marked)
            flash(f"Attendance saved for {result.count} student(s). {summary}", "success")
        except DomainError as e:
            flash(str(e), "warning")
        except Exception:
            logger.exception("Error saving attendance")
            flash("Could not save attendance", "danger")

        return redirect(url_for("attendance", **{k: v for k, v in args.items() if v}))
