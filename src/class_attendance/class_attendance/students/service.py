from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional, Sequence

from ..common.text_filter import distinct, matches_facets, matches_text
from ..common.validators import require_non_empty, require_section, require_year
from ..core.exceptions import NotFoundError, ValidationError
from .model import Student, StudentInput
from .repository import StudentRepository

logger = logging.getLogger(__name__)


def filter_students(
    students: Iterable[Student],
    *,
    search: Optional[str] = None,
    course: Optional[str] = None,
    year: Optional[int] = None,
    section: Optional[str] = None,
) -> list[Student]:
    """Free-text match on code/name/email, AND-ed with the categorical facets."""

    return [
        s
        for s in students
        if matches_text(search, s.student_code, s.name, s.email)
        and matches_facets(s, course=course, year=year, section=section)
    ]


def parse_student_form(form: Mapping[str, str]) -> StudentInput:
    return StudentInput(
        student_code=require_non_empty(form.get("student_code"), "Student ID"),
        name=require_non_empty(form.get("name"), "Name"),
        email=require_non_empty(form.get("email"), "Email"),
        course=require_non_empty(form.get("course"), "Course"),
        year=require_year(form.get("year")),
        section=require_section(form.get("section")),
    )


class StudentService:
    """Use case: manage the student roster."""

    def __init__(self, students: StudentRepository):
        self._students = students

    def list_students(self) -> Sequence[Student]:
        return self._students.list_all()

    def sections(self, students: Optional[Iterable[Student]] = None) -> list[str]:
        students = self._students.list_all() if students is None else students
        return distinct(s.section for s in students)

    def get(self, student_id: int) -> Student:
        student = self._students.get_by_id(int(student_id))
        if not student:
            raise NotFoundError("Student not found")
        return student

    def create(self, data: StudentInput) -> int:
        if self._students.get_by_code(data.student_code):
            raise ValidationError(f"Student ID {data.student_code} already exists")
        student_id = self._students.create(data)
        logger.info("Created student %s (%s)", student_id, data.student_code)
        return student_id

    def update(self, student_id: int, data: StudentInput) -> None:
        current = self.get(student_id)
        clash = self._students.get_by_code(data.student_code)
        if clash and clash.student_id != current.student_id:
            raise ValidationError(f"Student ID {data.student_code} already exists")
        self._students.update(current.student_id, data)
        logger.info("Updated student %s", current.student_id)

    def delete(self, student_id: int, *, confirmed: bool) -> None:
        if not confirmed:
            raise ValidationError("Please confirm deleting this student")
        if not self._students.delete_by_id(int(student_id)):
            raise NotFoundError("Student not found")
        logger.info("Deleted student %s", student_id)
