from __future__ import annotations

from dataclasses import dataclass

import pytest

from src.class_attendance.class_attendance.attendance.service import AttendanceService
from src.class_attendance.class_attendance.database.changes import ChangeFeed
from tests.fakes import (
    InMemoryAttendance,
    InMemoryPeriods,
    InMemorySessions,
    InMemoryStudents,
    InMemorySubjects,
    default_periods,
    make_student,
    make_subject,
)


@dataclass
class World:
    feed: ChangeFeed
    students: InMemoryStudents
    subjects: InMemorySubjects
    periods: InMemoryPeriods
    sessions: InMemorySessions
    attendance: InMemoryAttendance


@pytest.fixture
def world() -> World:
    """Three CS301 students (S1..S3), two subjects and the seeded periods."""

    feed = ChangeFeed()
    students = InMemoryStudents(
        [
            make_student(1, "Aarav Sharma", code="S1"),
            make_student(2, "Diya Patel", code="S2"),
            make_student(3, "Kabir Rao", code="S3", section="B"),
            make_student(4, "Meera Nair", code="S4", course="Information Technology", year=2),
        ],
        feed=feed,
    )
    subjects = InMemorySubjects(
        [
            make_subject(1, "CS301", "Database Management Systems"),
            make_subject(2, "IT201", "Web Technologies", course="Information Technology", year=2),
        ]
    )
    sessions = InMemorySessions()
    return World(
        feed=feed,
        students=students,
        subjects=subjects,
        periods=InMemoryPeriods(default_periods()),
        sessions=sessions,
        attendance=InMemoryAttendance(students, subjects, sessions, feed=feed),
    )


@pytest.fixture
def recorder(world: World) -> AttendanceService:
    return AttendanceService(world.attendance, world.students, world.periods, world.sessions, feed=world.feed)
