from __future__ import annotations

import pytest

from src.class_attendance.class_attendance.database.bootstrap import _run_script


class FakeCursor:
    def __init__(self, fail_on=None):
        self.fail_on = fail_on
        self.executed = []
        self.closed = False

    def execute(self, stmt):
        if self.fail_on and self.fail_on in stmt:
            raise RuntimeError(f"cannot run: {stmt}")
        self.executed.append(stmt)

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.cursor_kwargs = None
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, **kwargs):
        self.cursor_kwargs = kwargs
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnectionFactory:
    def __init__(self, conn):
        self.conn = conn

    def connect(self):
        return self.conn


SCRIPT = """
CREATE DATABASE IF NOT EXISTS other_db;
USE other_db;
INSERT INTO periods (name) VALUES ('Period 1');
INSERT INTO periods (name) VALUES ('Lunch Break');
"""


def test_script_commits_and_closes_cursor():
    cur = FakeCursor()
    conn = FakeConnection(cur)

    count = _run_script(FakeConnectionFactory(conn), SCRIPT)

    assert count == 2
    assert cur.executed == [
        "INSERT INTO periods (name) VALUES ('Period 1')",
        "INSERT INTO periods (name) VALUES ('Lunch Break')",
    ]
    assert conn.cursor_kwargs == {"dictionary": False}
    assert conn.committed and not conn.rolled_back
    assert cur.closed and conn.closed


def test_failing_statement_rolls_back_and_closes_cursor():
    cur = FakeCursor(fail_on="Lunch Break")
    conn = FakeConnection(cur)

    with pytest.raises(RuntimeError):
        _run_script(FakeConnectionFactory(conn), SCRIPT)

    assert conn.rolled_back and not conn.committed
    assert cur.closed and conn.closed
