from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus, ChangeType
from ..database.changes import ChangeFeed
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_date
from .model import AttendanceMark, AttendanceRow
from .repository import AttendanceRepository

_SELECT_ROWS = """
    SELECT
        ar.record_id, ar.student_id, ar.subject_id, ar.session_id, ar.work_date,
        ar.status, ar.time_in, ar.created_at,
        st.name AS student_name, st.student_code, st.course, st.year, st.section,
        sb.name AS subject_name, sb.code AS subject_code,
        cs.period_id
    FROM attendance_records ar
    LEFT JOIN students st ON st.student_id = ar.student_id
    LEFT JOIN subjects sb ON sb.subject_id = ar.subject_id
    LEFT JOIN class_sessions cs ON cs.session_id = ar.session_id
"""


def _opt_int(value) -> Optional[int]:
    return int(value) if value is not None else None


def _to_row(r: dict) -> AttendanceRow:
    return AttendanceRow(
        record_id=int(r["record_id"]),
        student_id=int(r["student_id"]),
        subject_id=_opt_int(r.get("subject_id")),
        session_id=_opt_int(r.get("session_id")),
        work_date=normalize_mysql_date(r["work_date"]),
        status=AttendanceStatus(r["status"]),
        time_in=r.get("time_in"),
        created_at=r.get("created_at"),
        student_name=r.get("student_name"),
        student_code=r.get("student_code"),
        course=r.get("course"),
        year=_opt_int(r.get("year")),
        section=r.get("section"),
        subject_name=r.get("subject_name"),
        subject_code=r.get("subject_code"),
        period_id=_opt_int(r.get("period_id")),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    TABLE = "attendance_records"

    def __init__(self, conn_factory: DatabaseConnection, feed: Optional[ChangeFeed] = None):
        self._conn_factory = conn_factory
        self._feed = feed

    def upsert_many(self, marks: Sequence[AttendanceMark]) -> int:
        if not marks:
            return 0

        changes: list[tuple[ChangeType, AttendanceMark]] = []
        with db_cursor(self._conn_factory) as (_, cur):
            for m in marks:
                cur.execute(
                    """
                    INSERT INTO attendance_records(student_id, subject_id, session_id, work_date, status, time_in, time_out)
                    VALUES(%s,%s,%s,%s,%s,%s,NULL)
                    ON DUPLICATE KEY UPDATE status=VALUES(status), time_in=VALUES(time_in), time_out=NULL
                    """,
                    (m.student_id, m.subject_id, m.session_id, m.work_date, m.status.value, m.time_in),
                )
                # MySQL reports 1 for a fresh row and 2 for an updated one.
                changes.append((ChangeType.INSERT if cur.rowcount == 1 else ChangeType.UPDATE, m))

        if self._feed is not None:
            for change_type, m in changes:
                self._feed.notify(
                    self.TABLE,
                    change_type,
                    {
                        "student_id": m.student_id,
                        "subject_id": m.subject_id,
                        "session_id": m.session_id,
                        "work_date": m.work_date,
                        "status": m.status.value,
                    },
                )
        return len(changes)

    def list_for_slot(self, *, subject_id: int, period_id: int, work_date: date) -> Sequence[AttendanceRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT_ROWS
                + """
                WHERE ar.work_date=%s AND ar.subject_id=%s AND cs.period_id=%s
                ORDER BY st.name
                """,
                (work_date, int(subject_id), int(period_id)),
            )
            return [_to_row(r) for r in fetchall(cur)]

    def list_range(self, *, start_date: date, end_date: date) -> Sequence[AttendanceRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT_ROWS
                + """
                WHERE ar.work_date BETWEEN %s AND %s
                ORDER BY ar.work_date DESC, ar.record_id ASC
                """,
                (start_date, end_date),
            )
            return [_to_row(r) for r in fetchall(cur)]

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT_ROWS + " WHERE ar.work_date=%s ORDER BY ar.created_at DESC, ar.record_id DESC",
                (work_date,),
            )
            return [_to_row(r) for r in fetchall(cur)]

    def list_recent(self, limit: int) -> Sequence[AttendanceRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT_ROWS + " ORDER BY ar.created_at DESC, ar.record_id DESC LIMIT %s",
                (int(limit),),
            )
            return [_to_row(r) for r in fetchall(cur)]
