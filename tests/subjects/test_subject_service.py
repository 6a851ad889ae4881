from __future__ import annotations

import pytest

from src.class_attendance.class_attendance.core.exceptions import NotFoundError, ValidationError
from src.class_attendance.class_attendance.subjects.service import SubjectService, filter_subjects, parse_subject_form
from tests.fakes import InMemorySubjects, make_subject

IT = "Information Technology"


def _subjects():
    return [
        make_subject(1, "CS301", "Database Management Systems"),
        make_subject(2, "CS302", "Operating Systems"),
        make_subject(3, "IT201", "Web Technologies", course=IT, year=2),
    ]


def test_list_is_ordered_by_course_year_name():
    svc = SubjectService(InMemorySubjects(_subjects()))

    assert [s.code for s in svc.list_subjects()] == ["CS301", "CS302", "IT201"]


def test_search_matches_name_code_and_course():
    subjects = _subjects()

    assert [s.code for s in filter_subjects(subjects, search="operating")] == ["CS302"]
    assert [s.code for s in filter_subjects(subjects, search="it201")] == ["IT201"]
    assert [s.code for s in filter_subjects(subjects, search="information")] == ["IT201"]
    assert [s.code for s in filter_subjects(subjects, year=3)] == ["CS301", "CS302"]


def test_create_uppercases_code_and_rejects_duplicates():
    svc = SubjectService(InMemorySubjects(_subjects()))
    form = {"name": "Compilers", "code": "cs401", "course": "Computer Science and Engineering", "year": "4"}

    new_id = svc.create(parse_subject_form(form))

    assert svc.get(new_id).code == "CS401"
    with pytest.raises(ValidationError, match="already exists"):
        svc.create(parse_subject_form(form))


def test_delete_needs_confirmation_and_existing_target():
    svc = SubjectService(InMemorySubjects(_subjects()))

    with pytest.raises(ValidationError):
        svc.delete(1, confirmed=False)
    with pytest.raises(NotFoundError):
        svc.delete(99, confirmed=True)

    svc.delete(1, confirmed=True)
    assert [s.code for s in svc.list_subjects()] == ["CS302", "IT201"]


def test_required_fields():
    with pytest.raises(ValidationError, match="Subject code is required"):
        parse_subject_form({"name": "X", "code": "", "course": "Y", "year": "1"})
