from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol

from .model import ClassSession


class SessionRepository(Protocol):
    def find(self, *, subject_id: int, period_id: int, work_date: date) -> Optional[ClassSession]:
        raise NotImplementedError

    def create(
        self,
        *,
        subject_id: int,
        period_id: int,
        work_date: date,
        start_time: Optional[time],
        end_time: Optional[time],
    ) -> int:
        """Insert a session row and return its id."""

        raise NotImplementedError
