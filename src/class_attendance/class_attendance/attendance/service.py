from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Callable, Mapping, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.text_filter import matches_facets
from ..core.constants import DASHBOARD_REFRESH_SECONDS, MAX_WATCHED_SESSIONS
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..database.changes import ChangeEvent, ChangeFeed, Subscription
from ..periods.model import Period
from ..periods.repository import PeriodRepository
from ..sessions.repository import SessionRepository
from ..students.model import Student
from ..students.repository import StudentRepository
from .model import AttendanceMark, AttendanceRow, MarkedEntry, MarkResult
from .repository import AttendanceRepository
from .stats import StatusCounts

logger = logging.getLogger(__name__)


def parse_status(value) -> AttendanceStatus:
    if isinstance(value, AttendanceStatus):
        return value
    try:
        return AttendanceStatus(str(value).strip().lower())
    except ValueError:
        raise ValidationError(f"Unknown attendance status: {value!r}")


def build_marks(
    *,
    subject_id: int,
    session_id: int,
    work_date: date,
    statuses: Mapping[int, AttendanceStatus],
    now: datetime,
) -> list[AttendanceMark]:
    """One mark per student; absent students never get a time-in."""

    return [
        AttendanceMark(
            student_id=int(student_id),
            subject_id=int(subject_id),
            session_id=int(session_id),
            work_date=work_date,
            status=status,
            time_in=now if status.attended else None,
        )
        for student_id, status in statuses.items()
    ]


class AttendanceService:
    """Attendance recorder for one (subject, period, date) selection."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        periods: PeriodRepository,
        sessions: SessionRepository,
        *,
        feed: Optional[ChangeFeed] = None,
    ):
        self._attendance = attendance
        self._students = students
        self._periods = periods
        self._sessions = sessions
        self._feed = feed

    def selectable_periods(self) -> list[Period]:
        return [p for p in self._periods.list_all() if not p.is_lunch_break]

    def roster(
        self,
        *,
        course: Optional[str] = None,
        year: Optional[int] = None,
        section: Optional[str] = None,
    ) -> list[Student]:
        return [s for s in self._students.list_all() if matches_facets(s, course=course, year=year, section=section)]

    def session_records(self, *, subject_id: int, period_id: int, work_date: date) -> Sequence[AttendanceRow]:
        return self._attendance.list_for_slot(subject_id=int(subject_id), period_id=int(period_id), work_date=work_date)

    def session_stats(self, rows: Sequence[AttendanceRow]) -> StatusCounts:
        return StatusCounts.of(r.status for r in rows)

    def _resolve_session(self, *, subject_id: int, period: Period, work_date: date) -> tuple[int, bool]:
        existing = self._sessions.find(subject_id=subject_id, period_id=period.period_id, work_date=work_date)
        if existing:
            return existing.session_id, False

        session_id = self._sessions.create(
            subject_id=subject_id,
            period_id=period.period_id,
            work_date=work_date,
            start_time=period.start_time,
            end_time=period.end_time,
        )
        logger.info("Created class session %s for subject=%s period=%s date=%s", session_id, subject_id, period.period_id, work_date)
        return session_id, True

    def mark(
        self,
        *,
        subject_id: Optional[int],
        period_id: Optional[int],
        work_date: Optional[date],
        statuses: Mapping[int, object],
        now: Optional[datetime] = None,
    ) -> MarkResult:
        if not subject_id or not period_id or not work_date:
            raise ValidationError("Select a subject, period and date first")
        if not statuses:
            raise ValidationError("Mark at least one student")

        parsed = {int(sid): parse_status(st) for sid, st in statuses.items()}

        period = self._periods.get_by_id(int(period_id))
        if not period:
            raise ValidationError("Period not found")

        now = now or now_local()
        session_id, created = self._resolve_session(subject_id=int(subject_id), period=period, work_date=work_date)

        marks = build_marks(subject_id=int(subject_id), session_id=session_id, work_date=work_date, statuses=parsed, now=now)
        self._attendance.upsert_many(marks)

        names = {s.student_id: s.name for s in self._students.list_all()}
        marked = [MarkedEntry(name=names.get(sid, "Unknown"), status=status) for sid, status in parsed.items()]
        logger.info("Saved %d attendance mark(s) for session %s", len(marked), session_id)
        return MarkResult(session_id=session_id, session_created=created, marked=marked)

    def watch(self, *, subject_id: int, work_date: date, on_change: Callable[[ChangeEvent], None]) -> Subscription:
        """Subscribe to record changes for a subject, keeping only the selected date."""

        if self._feed is None:
            raise RuntimeError("Change feed is not configured")

        def _forward(event: ChangeEvent) -> None:
            if event.row.get("work_date") == work_date:
                on_change(event)

        return self._feed.subscribe("attendance_records", _forward, where={"subject_id": int(subject_id)})


@dataclass(frozen=True)
class SessionView:
    subject_id: int
    period_id: int
    work_date: date
    records: Sequence[AttendanceRow]
    stats: StatusCounts
    computed_at: datetime

    def to_dict(self) -> dict:
        s = self.stats
        return {
            "subject_id": self.subject_id,
            "period_id": self.period_id,
            "date": self.work_date.isoformat(),
            "total": s.total,
            "present": s.present,
            "late": s.late,
            "absent": s.absent,
            "attendance_rate": round(s.rate, 1),
            "last_updated": self.computed_at.isoformat(timespec="seconds"),
            "records": [
                {
                    "student_id": r.student_id,
                    "student_name": r.student_name or "Unknown",
                    "student_code": r.student_code or "N/A",
                    "status": r.status.value,
                    "time_in": r.time_in.strftime("%H:%M:%S") if r.time_in else None,
                }
                for r in self.records
            ],
        }


@dataclass
class _Watched:
    subscription: Subscription
    view: Optional[SessionView] = None
    stale: bool = True


class LiveAttendance:
    """Cached record lists per (subject, period, date) selection.

    Each selection holds a ``watch`` subscription that marks it stale when a
    record for that subject and date changes. The least recently used
    selections are dropped past ``max_watched``. Call ``close()`` on teardown.
    """

    def __init__(
        self,
        service: AttendanceService,
        *,
        refresh_seconds: int = DASHBOARD_REFRESH_SECONDS,
        max_watched: int = MAX_WATCHED_SESSIONS,
        clock: Callable[[], datetime] = now_local,
    ):
        self._service = service
        self._refresh = timedelta(seconds=int(refresh_seconds))
        self._max_watched = max(1, int(max_watched))
        self._clock = clock
        self._lock = threading.Lock()
        self._watched: "OrderedDict[tuple, _Watched]" = OrderedDict()

    def _on_change(self, key: tuple, event: ChangeEvent) -> None:
        logger.debug("Attendance change for selection %s: %s", key, event.change_type.value)
        with self._lock:
            entry = self._watched.get(key)
            if entry is not None:
                entry.stale = True

    def _entry(self, key: tuple) -> _Watched:
        entry = self._watched.get(key)
        if entry is not None:
            self._watched.move_to_end(key)
            return entry

        subject_id, _, work_date = key
        subscription = self._service.watch(
            subject_id=subject_id,
            work_date=work_date,
            on_change=lambda event: self._on_change(key, event),
        )
        entry = _Watched(subscription=subscription)
        self._watched[key] = entry
        while len(self._watched) > self._max_watched:
            _, dropped = self._watched.popitem(last=False)
            dropped.subscription.unsubscribe()
        return entry

    def current(self, *, subject_id: int, period_id: int, work_date: date) -> SessionView:
        key = (int(subject_id), int(period_id), work_date)
        now = self._clock()
        with self._lock:
            entry = self._entry(key)
            view = entry.view
            if not entry.stale and view is not None and now - view.computed_at < self._refresh:
                return view
            entry.stale = False

        try:
            records = list(self._service.session_records(subject_id=key[0], period_id=key[1], work_date=work_date))
        except Exception:
            with self._lock:
                entry.stale = True
            raise

        view = SessionView(
            subject_id=key[0],
            period_id=key[1],
            work_date=work_date,
            records=records,
            stats=self._service.session_stats(records),
            computed_at=now,
        )
        with self._lock:
            entry.view = view
        return view

    def watched_count(self) -> int:
        with self._lock:
            return len(self._watched)

    def close(self) -> None:
        with self._lock:
            entries = list(self._watched.values())
            self._watched.clear()
        for entry in entries:
            entry.subscription.unsubscribe()
