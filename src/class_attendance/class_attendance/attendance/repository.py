from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import AttendanceMark, AttendanceRow


class AttendanceRepository(Protocol):
    def upsert_many(self, marks: Sequence[AttendanceMark]) -> int:
        """Insert or overwrite all marks in one transaction.

        A mark whose conflict key already exists replaces that row's status
        and time-in. Returns the number of marks written.
        """

        raise NotImplementedError

    def list_for_slot(self, *, subject_id: int, period_id: int, work_date: date) -> Sequence[AttendanceRow]:
        """Records for a subject on a date whose session sits in the given period."""

        raise NotImplementedError

    def list_range(self, *, start_date: date, end_date: date) -> Sequence[AttendanceRow]:
        """Records dated within [start_date, end_date], newest date first."""

        raise NotImplementedError

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRow]:
        raise NotImplementedError

    def list_recent(self, limit: int) -> Sequence[AttendanceRow]:
        """Most recently created records across all dates, newest first."""

        raise NotImplementedError
