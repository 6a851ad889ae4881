from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..core.enums import AttendanceStatus


def attendance_rate(attended: int, total: int) -> float:
    """(present + late) / total * 100, or 0 when there is nothing to divide by."""

    if total <= 0:
        return 0.0
    return attended / total * 100


@dataclass
class StatusCounts:
    total: int = 0
    present: int = 0
    late: int = 0
    absent: int = 0

    def add(self, status: AttendanceStatus) -> None:
        self.total += 1
        if status == AttendanceStatus.PRESENT:
            self.present += 1
        elif status == AttendanceStatus.LATE:
            self.late += 1
        else:
            self.absent += 1

    @property
    def attended(self) -> int:
        return self.present + self.late

    @property
    def rate(self) -> float:
        return attendance_rate(self.attended, self.total)

    @classmethod
    def of(cls, statuses: Iterable[AttendanceStatus]) -> "StatusCounts":
        counts = cls()
        for status in statuses:
            counts.add(status)
        return counts
