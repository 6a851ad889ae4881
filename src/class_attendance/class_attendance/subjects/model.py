from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Subject:
    subject_id: int
    name: str
    code: str
    course: str
    year: int
    created_at: Optional[datetime] = None

    @property
    def label(self) -> str:
        return f"{self.code} - {self.name}"


@dataclass(frozen=True)
class SubjectInput:
    name: str
    code: str
    course: str
    year: int
