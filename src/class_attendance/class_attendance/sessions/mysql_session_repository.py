from __future__ import annotations

from datetime import date, time
from typing import Optional

from ..core.enums import ChangeType
from ..database.changes import ChangeFeed
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, normalize_mysql_date, normalize_mysql_time
from .model import ClassSession
from .repository import SessionRepository


class MySQLSessionRepository(SessionRepository):
    TABLE = "class_sessions"

    def __init__(self, conn_factory: DatabaseConnection, feed: Optional[ChangeFeed] = None):
        self._conn_factory = conn_factory
        self._feed = feed

    def find(self, *, subject_id: int, period_id: int, work_date: date) -> Optional[ClassSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT session_id, subject_id, period_id, work_date, start_time, end_time, created_at
                FROM class_sessions
                WHERE subject_id=%s AND period_id=%s AND work_date=%s
                ORDER BY session_id
                LIMIT 1
                """,
                (int(subject_id), int(period_id), work_date),
            )
            r = fetchone(cur)
            if not r:
                return None
            return ClassSession(
                session_id=int(r["session_id"]),
                subject_id=int(r["subject_id"]),
                period_id=int(r["period_id"]),
                work_date=normalize_mysql_date(r["work_date"]),
                start_time=normalize_mysql_time(r.get("start_time")),
                end_time=normalize_mysql_time(r.get("end_time")),
                created_at=r.get("created_at"),
            )

    def create(
        self,
        *,
        subject_id: int,
        period_id: int,
        work_date: date,
        start_time: Optional[time],
        end_time: Optional[time],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO class_sessions(subject_id, period_id, work_date, start_time, end_time)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(subject_id), int(period_id), work_date, start_time, end_time),
            )
            session_id = int(cur.lastrowid)
        if self._feed is not None:
            self._feed.notify(
                self.TABLE,
                ChangeType.INSERT,
                {"session_id": session_id, "subject_id": int(subject_id), "period_id": int(period_id), "work_date": work_date},
            )
        return session_id
