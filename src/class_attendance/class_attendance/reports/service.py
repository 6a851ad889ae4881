from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import today_local
from ..core.constants import DEFAULT_REPORT_DAYS
from ..core.exceptions import ValidationError
from .aggregator import ReportData, build_report
from .export import render_csv, report_filename


@dataclass(frozen=True)
class ReportExport:
    filename: str
    content: str


class ReportService:
    def __init__(self, attendance: AttendanceRepository, *, default_days: int = DEFAULT_REPORT_DAYS):
        self._attendance = attendance
        self._default_days = int(default_days)

    def default_range(self, today: Optional[date] = None) -> tuple[date, date]:
        today = today or today_local()
        return today - timedelta(days=self._default_days), today

    def build(
        self,
        *,
        start: date,
        end: date,
        course: Optional[str] = None,
        year: Optional[int] = None,
    ) -> ReportData:
        if start > end:
            raise ValidationError("Start date must not be after end date")
        rows = self._attendance.list_range(start_date=start, end_date=end)
        return build_report(rows, course=course, year=year)

    def export(
        self,
        *,
        start: date,
        end: date,
        course: Optional[str] = None,
        year: Optional[int] = None,
    ) -> ReportExport:
        report = self.build(start=start, end=end, course=course, year=year)
        return ReportExport(filename=report_filename(start, end), content=render_csv(report, start=start, end=end))
