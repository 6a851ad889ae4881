from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Student:
    """Domain entity: a student on the roster."""

    student_id: int
    student_code: str
    name: str
    email: str
    course: str
    year: int
    section: str
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class StudentInput:
    """Validated form data for create/update."""

    student_code: str
    name: str
    email: str
    course: str
    year: int
    section: str
