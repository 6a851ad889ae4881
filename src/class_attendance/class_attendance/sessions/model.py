from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional


@dataclass(frozen=True)
class ClassSession:
    """One occurrence of a subject in a period on a date."""

    session_id: int
    subject_id: int
    period_id: int
    work_date: date
    start_time: Optional[time]
    end_time: Optional[time]
    created_at: Optional[datetime] = None
