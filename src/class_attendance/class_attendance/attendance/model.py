from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's status for one session."""

    record_id: int
    student_id: int
    subject_id: Optional[int]
    session_id: Optional[int]
    work_date: date
    status: AttendanceStatus
    time_in: Optional[datetime] = None
    time_out: Optional[datetime] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class AttendanceMark:
    """Write model for the batch upsert.

    (student_id, subject_id, session_id, work_date) is the conflict key.
    """

    student_id: int
    subject_id: Optional[int]
    session_id: Optional[int]
    work_date: date
    status: AttendanceStatus
    time_in: Optional[datetime]

    @property
    def key(self) -> tuple:
        return (self.student_id, self.subject_id, self.session_id, self.work_date)


@dataclass(frozen=True)
class AttendanceRow:
    """Read-model: record joined with student, subject and session period."""

    record_id: int
    student_id: int
    subject_id: Optional[int]
    session_id: Optional[int]
    work_date: date
    status: AttendanceStatus
    time_in: Optional[datetime] = None
    created_at: Optional[datetime] = None
    student_name: Optional[str] = None
    student_code: Optional[str] = None
    course: Optional[str] = None
    year: Optional[int] = None
    section: Optional[str] = None
    subject_name: Optional[str] = None
    subject_code: Optional[str] = None
    period_id: Optional[int] = None


@dataclass(frozen=True)
class MarkedEntry:
    name: str
    status: AttendanceStatus


@dataclass(frozen=True)
class MarkResult:
    """What the caller shows after a successful save."""

    session_id: int
    session_created: bool
    marked: list[MarkedEntry]

    @property
    def count(self) -> int:
        return len(self.marked)
