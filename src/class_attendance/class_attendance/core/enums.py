from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role chosen on the login screen."""

    ADMIN = "admin"
    TEACHER = "teacher"


class AttendanceStatus(str, Enum):
    """Attendance outcome stored per student and session."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"

    @property
    def attended(self) -> bool:
        return self is not AttendanceStatus.ABSENT


class ChangeType(str, Enum):
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
