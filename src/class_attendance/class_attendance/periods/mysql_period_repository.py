from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import Period
from .repository import PeriodRepository


def _to_period(r: dict) -> Period:
    return Period(
        period_id=int(r["period_id"]),
        period_number=int(r["period_number"]),
        name=r["name"],
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r["end_time"]),
    )


class MySQLPeriodRepository(PeriodRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Period]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT period_id, period_number, name, start_time, end_time
                FROM periods
                ORDER BY period_number
                """
            )
            return [_to_period(r) for r in fetchall(cur)]

    def get_by_id(self, period_id: int) -> Optional[Period]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT period_id, period_number, name, start_time, end_time
                FROM periods
                WHERE period_id=%s
                """,
                (int(period_id),),
            )
            r = fetchone(cur)
            return _to_period(r) if r else None
