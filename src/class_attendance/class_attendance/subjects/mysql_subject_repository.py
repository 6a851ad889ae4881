from __future__ import annotations

from dataclasses import asdict
from typing import Optional, Sequence

from ..core.enums import ChangeType
from ..database.changes import ChangeFeed
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Subject, SubjectInput
from .repository import SubjectRepository

_COLUMNS = "subject_id, name, code, course, year, created_at"


def _to_subject(r: dict) -> Subject:
    return Subject(
        subject_id=int(r["subject_id"]),
        name=r["name"],
        code=r["code"],
        course=r["course"],
        year=int(r["year"]),
        created_at=r.get("created_at"),
    )


class MySQLSubjectRepository(SubjectRepository):
    TABLE = "subjects"

    def __init__(self, conn_factory: DatabaseConnection, feed: Optional[ChangeFeed] = None):
        self._conn_factory = conn_factory
        self._feed = feed

    def _notify(self, change_type: ChangeType, row: dict) -> None:
        if self._feed is not None:
            self._feed.notify(self.TABLE, change_type, row)

    def list_all(self) -> Sequence[Subject]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM subjects ORDER BY course ASC, year ASC, name ASC")
            return [_to_subject(r) for r in fetchall(cur)]

    def get_by_id(self, subject_id: int) -> Optional[Subject]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM subjects WHERE subject_id=%s", (int(subject_id),))
            r = fetchone(cur)
            return _to_subject(r) if r else None

    def get_by_code(self, code: str) -> Optional[Subject]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM subjects WHERE code=%s", (code,))
            r = fetchone(cur)
            return _to_subject(r) if r else None

    def create(self, data: SubjectInput) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO subjects(name, code, course, year) VALUES(%s,%s,%s,%s)",
                (data.name, data.code, data.course, data.year),
            )
            subject_id = int(cur.lastrowid)
        self._notify(ChangeType.INSERT, {"subject_id": subject_id, **asdict(data)})
        return subject_id

    def update(self, subject_id: int, data: SubjectInput) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE subjects SET name=%s, code=%s, course=%s, year=%s WHERE subject_id=%s",
                (data.name, data.code, data.course, data.year, int(subject_id)),
            )
            ok = cur.rowcount > 0
        if ok:
            self._notify(ChangeType.UPDATE, {"subject_id": int(subject_id), **asdict(data)})
        return ok

    def delete_by_id(self, subject_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM subjects WHERE subject_id=%s", (int(subject_id),))
            ok = cur.rowcount > 0
        if ok:
            self._notify(ChangeType.DELETE, {"subject_id": int(subject_id)})
        return ok
