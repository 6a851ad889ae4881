from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Iterable, Optional, Sequence

from ..attendance.model import AttendanceRow
from ..attendance.repository import AttendanceRepository
from ..attendance.stats import StatusCounts, attendance_rate
from ..common.datetime_utils import now_local
from ..core.constants import DASHBOARD_REFRESH_SECONDS, RECENT_FEED_LIMIT
from ..database.changes import ChangeEvent, ChangeFeed
from ..students.repository import StudentRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TodaySummary:
    total_students: int
    present: int
    absent: int
    late: int
    rate: float


@dataclass(frozen=True)
class DashboardSnapshot:
    summary: TodaySummary
    recent: Sequence[AttendanceRow]
    computed_at: datetime

    def to_dict(self) -> dict:
        s = self.summary
        return {
            "total_students": s.total_students,
            "present_today": s.present,
            "absent_today": s.absent,
            "late_today": s.late,
            "attendance_rate": round(s.rate, 1),
            "last_updated": self.computed_at.isoformat(timespec="seconds"),
            "recent": [
                {
                    "student_name": r.student_name or "Unknown",
                    "student_code": r.student_code or "N/A",
                    "subject": r.subject_code or "N/A",
                    "date": r.work_date.isoformat(),
                    "status": r.status.value,
                    "time_in": r.time_in.strftime("%H:%M:%S") if r.time_in else None,
                }
                for r in self.recent
            ],
        }


def summarize_today(total_students: int, today_rows: Iterable[AttendanceRow]) -> TodaySummary:
    """Today's counts; the rate is over the whole roster, not over records."""

    counts = StatusCounts.of(r.status for r in today_rows)
    return TodaySummary(
        total_students=int(total_students),
        present=counts.present,
        absent=counts.absent,
        late=counts.late,
        rate=attendance_rate(counts.attended, total_students),
    )


class DashboardService:
    def __init__(
        self,
        students: StudentRepository,
        attendance: AttendanceRepository,
        *,
        recent_limit: int = RECENT_FEED_LIMIT,
    ):
        self._students = students
        self._attendance = attendance
        self._recent_limit = int(recent_limit)

    def snapshot(self, *, now: Optional[datetime] = None) -> DashboardSnapshot:
        now = now or now_local()
        total = self._students.count()
        today_rows = self._attendance.list_for_date(now.date())
        recent = list(self._attendance.list_recent(self._recent_limit))[: self._recent_limit]
        return DashboardSnapshot(summary=summarize_today(total, today_rows), recent=recent, computed_at=now)


class LiveDashboard:
    """Cached snapshot, recomputed on first use, after the refresh interval,
    or after any change on ``attendance_records``.

    Call ``close()`` on teardown to drop the change subscription.
    """

    def __init__(
        self,
        service: DashboardService,
        feed: ChangeFeed,
        *,
        refresh_seconds: int = DASHBOARD_REFRESH_SECONDS,
        clock: Callable[[], datetime] = now_local,
    ):
        self._service = service
        self._refresh = timedelta(seconds=int(refresh_seconds))
        self._clock = clock
        self._lock = threading.Lock()
        self._snapshot: Optional[DashboardSnapshot] = None
        self._stale = True
        self._subscription = feed.subscribe("attendance_records", self._on_change)

    def _on_change(self, event: ChangeEvent) -> None:
        logger.debug("Attendance change detected: %s", event.change_type.value)
        with self._lock:
            self._stale = True

    def _due(self, now: datetime) -> bool:
        if self._stale or self._snapshot is None:
            return True
        return now - self._snapshot.computed_at >= self._refresh

    def current(self) -> DashboardSnapshot:
        now = self._clock()
        with self._lock:
            if not self._due(now):
                return self._snapshot
            self._stale = False

        try:
            snapshot = self._service.snapshot(now=now)
        except Exception:
            logger.exception("Error fetching dashboard data")
            with self._lock:
                self._stale = True
                if self._snapshot is not None:
                    return self._snapshot
            raise

        with self._lock:
            self._snapshot = snapshot
        return snapshot

    def close(self) -> None:
        self._subscription.unsubscribe()
