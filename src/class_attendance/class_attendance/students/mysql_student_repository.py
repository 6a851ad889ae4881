from __future__ import annotations

from dataclasses import asdict
from typing import Optional, Sequence

from ..core.enums import ChangeType
from ..database.changes import ChangeFeed
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Student, StudentInput
from .repository import StudentRepository

_COLUMNS = "student_id, student_code, name, email, course, year, section, created_at"


def _to_student(r: dict) -> Student:
    return Student(
        student_id=int(r["student_id"]),
        student_code=r["student_code"],
        name=r["name"],
        email=r["email"],
        course=r["course"],
        year=int(r["year"]),
        section=r["section"],
        created_at=r.get("created_at"),
    )


class MySQLStudentRepository(StudentRepository):
    TABLE = "students"

    def __init__(self, conn_factory: DatabaseConnection, feed: Optional[ChangeFeed] = None):
        self._conn_factory = conn_factory
        self._feed = feed

    def _notify(self, change_type: ChangeType, row: dict) -> None:
        if self._feed is not None:
            self._feed.notify(self.TABLE, change_type, row)

    def list_all(self) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students ORDER BY name")
            return [_to_student(r) for r in fetchall(cur)]

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM students")
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE student_id=%s", (int(student_id),))
            r = fetchone(cur)
            return _to_student(r) if r else None

    def get_by_code(self, student_code: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE student_code=%s", (student_code,))
            r = fetchone(cur)
            return _to_student(r) if r else None

    def create(self, data: StudentInput) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO students(student_code, name, email, course, year, section)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (data.student_code, data.name, data.email, data.course, data.year, data.section),
            )
            student_id = int(cur.lastrowid)
        self._notify(ChangeType.INSERT, {"student_id": student_id, **asdict(data)})
        return student_id

    def update(self, student_id: int, data: StudentInput) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE students
                SET student_code=%s, name=%s, email=%s, course=%s, year=%s, section=%s
                WHERE student_id=%s
                """,
                (data.student_code, data.name, data.email, data.course, data.year, data.section, int(student_id)),
            )
            ok = cur.rowcount > 0
        if ok:
            self._notify(ChangeType.UPDATE, {"student_id": int(student_id), **asdict(data)})
        return ok

    def delete_by_id(self, student_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE student_id=%s", (int(student_id),))
            ok = cur.rowcount > 0
        if ok:
            self._notify(ChangeType.DELETE, {"student_id": int(student_id)})
        return ok
