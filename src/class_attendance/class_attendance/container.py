from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService, LiveAttendance
from .core.constants import DASHBOARD_REFRESH_SECONDS
from .dashboard.service import DashboardService, LiveDashboard
from .database.changes import ChangeFeed
from .database.connection import DatabaseConnection, DBConfig
from .periods.mysql_period_repository import MySQLPeriodRepository
from .periods.repository import PeriodRepository
from .reports.service import ReportService
from .sessions.mysql_session_repository import MySQLSessionRepository
from .sessions.repository import SessionRepository
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentService
from .subjects.mysql_subject_repository import MySQLSubjectRepository
from .subjects.repository import SubjectRepository
from .subjects.service import SubjectService
from .users.service import AuthService, build_accounts


@dataclass(frozen=True)
class Container:
    feed: ChangeFeed

    students_repo: StudentRepository
    subjects_repo: SubjectRepository
    periods_repo: PeriodRepository
    sessions_repo: SessionRepository
    attendance_repo: AttendanceRepository

    auth_service: AuthService
    student_service: StudentService
    subject_service: SubjectService
    attendance_service: AttendanceService
    report_service: ReportService
    dashboard_service: DashboardService
    live_dashboard: LiveDashboard
    live_attendance: LiveAttendance

    def close(self) -> None:
        self.live_dashboard.close()
        self.live_attendance.close()


def assemble(
    *,
    feed: ChangeFeed,
    students_repo: StudentRepository,
    subjects_repo: SubjectRepository,
    periods_repo: PeriodRepository,
    sessions_repo: SessionRepository,
    attendance_repo: AttendanceRepository,
    demo_users: Mapping[str, Mapping[str, str]],
    refresh_seconds: int = DASHBOARD_REFRESH_SECONDS,
) -> Container:
    """Wire services over whatever repositories are given (MySQL or in-memory)."""

    dashboard_service = DashboardService(students_repo, attendance_repo)
    attendance_service = AttendanceService(attendance_repo, students_repo, periods_repo, sessions_repo, feed=feed)
    return Container(
        feed=feed,
        students_repo=students_repo,
        subjects_repo=subjects_repo,
        periods_repo=periods_repo,
        sessions_repo=sessions_repo,
        attendance_repo=attendance_repo,
        auth_service=AuthService(build_accounts(demo_users)),
        student_service=StudentService(students_repo),
        subject_service=SubjectService(subjects_repo),
        attendance_service=attendance_service,
        report_service=ReportService(attendance_repo),
        dashboard_service=dashboard_service,
        live_dashboard=LiveDashboard(dashboard_service, feed, refresh_seconds=refresh_seconds),
        live_attendance=LiveAttendance(attendance_service, refresh_seconds=refresh_seconds),
    )


def build_container(
    *,
    db_config: dict,
    demo_users: Mapping[str, Mapping[str, str]],
    refresh_seconds: int = DASHBOARD_REFRESH_SECONDS,
    feed: Optional[ChangeFeed] = None,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    feed = feed or ChangeFeed()

    return assemble(
        feed=feed,
        students_repo=MySQLStudentRepository(conn, feed),
        subjects_repo=MySQLSubjectRepository(conn, feed),
        periods_repo=MySQLPeriodRepository(conn),
        sessions_repo=MySQLSessionRepository(conn, feed),
        attendance_repo=MySQLAttendanceRepository(conn, feed),
        demo_users=demo_users,
        refresh_seconds=refresh_seconds,
    )
