from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional, Sequence

from ..common.text_filter import matches_facets, matches_text
from ..common.validators import require_non_empty, require_year
from ..core.exceptions import NotFoundError, ValidationError
from .model import Subject, SubjectInput
from .repository import SubjectRepository

logger = logging.getLogger(__name__)


def filter_subjects(
    subjects: Iterable[Subject],
    *,
    search: Optional[str] = None,
    course: Optional[str] = None,
    year: Optional[int] = None,
) -> list[Subject]:
    return [
        s
        for s in subjects
        if matches_text(search, s.name, s.code, s.course) and matches_facets(s, course=course, year=year)
    ]


def parse_subject_form(form: Mapping[str, str]) -> SubjectInput:
    return SubjectInput(
        name=require_non_empty(form.get("name"), "Subject name"),
        code=require_non_empty(form.get("code"), "Subject code").upper(),
        course=require_non_empty(form.get("course"), "Course"),
        year=require_year(form.get("year")),
    )


class SubjectService:
    def __init__(self, subjects: SubjectRepository):
        self._subjects = subjects

    def list_subjects(self) -> Sequence[Subject]:
        return self._subjects.list_all()

    def get(self, subject_id: int) -> Subject:
        subject = self._subjects.get_by_id(int(subject_id))
        if not subject:
            raise NotFoundError("Subject not found")
        return subject

    def create(self, data: SubjectInput) -> int:
        if self._subjects.get_by_code(data.code):
            raise ValidationError(f"Subject code {data.code} already exists")
        subject_id = self._subjects.create(data)
        logger.info("Created subject %s (%s)", subject_id, data.code)
        return subject_id

    def update(self, subject_id: int, data: SubjectInput) -> None:
        current = self.get(subject_id)
        clash = self._subjects.get_by_code(data.code)
        if clash and clash.subject_id != current.subject_id:
            raise ValidationError(f"Subject code {data.code} already exists")
        self._subjects.update(current.subject_id, data)
        logger.info("Updated subject %s", current.subject_id)

    def delete(self, subject_id: int, *, confirmed: bool) -> None:
        if not confirmed:
            raise ValidationError("Please confirm deleting this subject")
        if not self._subjects.delete_by_id(int(subject_id)):
            raise NotFoundError("Subject not found")
        logger.info("Deleted subject %s", subject_id)
