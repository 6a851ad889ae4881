"""Pure aggregation over already-fetched attendance rows.

Nothing here touches the database: give it rows, get numbers back.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Hashable, Iterable, Optional, Sequence

from ..attendance.model import AttendanceRow
from ..attendance.stats import StatusCounts


@dataclass
class GroupRow:
    """Counts for one student or one subject."""

    key: Hashable
    name: Optional[str]
    code: Optional[str]
    course: Optional[str] = None
    counts: StatusCounts = field(default_factory=StatusCounts)

    @property
    def total(self) -> int:
        return self.counts.total

    @property
    def present(self) -> int:
        return self.counts.present

    @property
    def late(self) -> int:
        return self.counts.late

    @property
    def absent(self) -> int:
        return self.counts.absent

    @property
    def rate(self) -> float:
        return self.counts.rate


@dataclass(frozen=True)
class ReportData:
    overall: StatusCounts
    by_student: list[GroupRow]
    by_subject: list[GroupRow]


def filter_rows(
    rows: Iterable[AttendanceRow],
    *,
    course: Optional[str] = None,
    year: Optional[int] = None,
) -> list[AttendanceRow]:
    out = []
    for r in rows:
        if course and r.course != course:
            continue
        if year is not None and r.year != int(year):
            continue
        out.append(r)
    return out


def _group(rows: Sequence[AttendanceRow], key: Callable[[AttendanceRow], Hashable], make: Callable[[AttendanceRow], GroupRow]) -> list[GroupRow]:
    groups: dict[Hashable, GroupRow] = {}
    for r in rows:
        k = key(r)
        g = groups.get(k)
        if g is None:
            g = make(r)
            groups[k] = g
        g.counts.add(r.status)

    # dicts keep first-seen order and sort() is stable, so ties stay in encounter order.
    out = list(groups.values())
    out.sort(key=lambda g: g.rate, reverse=True)
    return out


def student_report(rows: Sequence[AttendanceRow]) -> list[GroupRow]:
    return _group(
        rows,
        key=lambda r: r.student_id,
        make=lambda r: GroupRow(key=r.student_id, name=r.student_name, code=r.student_code, course=r.course),
    )


def subject_report(rows: Sequence[AttendanceRow]) -> list[GroupRow]:
    return _group(
        rows,
        key=lambda r: r.subject_id,
        make=lambda r: GroupRow(key=r.subject_id, name=r.subject_name, code=r.subject_code),
    )


def build_report(
    rows: Iterable[AttendanceRow],
    *,
    course: Optional[str] = None,
    year: Optional[int] = None,
) -> ReportData:
    filtered = filter_rows(rows, course=course, year=year)
    return ReportData(
        overall=StatusCounts.of(r.status for r in filtered),
        by_student=student_report(filtered),
        by_subject=subject_report(filtered),
    )
