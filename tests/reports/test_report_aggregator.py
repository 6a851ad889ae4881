from __future__ import annotations

from src.class_attendance.class_attendance.core.enums import AttendanceStatus as S
from src.class_attendance.class_attendance.reports.aggregator import build_report, filter_rows
from tests.fakes import make_row

CSE = "Computer Science and Engineering"
IT = "Information Technology"


def _rows():
    return [
        make_row(1, 1, 10, S.PRESENT, student_name="A", course=CSE, year=3, subject_code="CS301"),
        make_row(2, 2, 10, S.ABSENT, student_name="B", course=CSE, year=3, subject_code="CS301"),
        make_row(3, 1, 20, S.LATE, student_name="A", course=CSE, year=3, subject_code="CS302"),
        make_row(4, 3, 20, S.PRESENT, student_name="C", course=IT, year=2, subject_code="CS302"),
        make_row(5, 2, 20, S.PRESENT, student_name="B", course=CSE, year=3, subject_code="CS302"),
    ]


def test_overall_stats():
    report = build_report(_rows())
    o = report.overall

    assert (o.total, o.present, o.late, o.absent) == (5, 3, 1, 1)
    assert o.rate == 80.0


def test_groups_partition_the_records():
    report = build_report(_rows())

    assert sum(g.total for g in report.by_student) == report.overall.total
    assert sum(g.total for g in report.by_subject) == report.overall.total
    assert sorted(g.key for g in report.by_student) == [1, 2, 3]
    assert sorted(g.key for g in report.by_subject) == [10, 20]


def test_rows_sorted_by_rate_desc_with_stable_ties():
    report = build_report(_rows())

    # A: 2/2, B: 1/2, C: 1/1 -> A and C tie at 100, A was seen first.
    assert [(g.name, g.rate) for g in report.by_student] == [("A", 100.0), ("C", 100.0), ("B", 50.0)]
    assert [g.code for g in report.by_subject] == ["CS302", "CS301"]


def test_per_group_counts():
    report = build_report(_rows())
    b = next(g for g in report.by_student if g.name == "B")

    assert (b.total, b.present, b.late, b.absent) == (2, 1, 0, 1)
    assert b.course == CSE


def test_course_and_year_filters():
    it_only = build_report(_rows(), course=IT)
    year3 = build_report(_rows(), year=3)

    assert it_only.overall.total == 1
    assert [g.name for g in it_only.by_student] == ["C"]
    assert year3.overall.total == 4
    assert build_report(_rows(), course=IT, year=3).overall.total == 0


def test_filter_rows_without_filters_keeps_everything():
    rows = _rows()

    assert filter_rows(rows) == rows


def test_records_without_subject_group_together():
    rows = [make_row(1, 1, None, S.PRESENT), make_row(2, 2, None, S.ABSENT)]

    report = build_report(rows)

    assert len(report.by_subject) == 1
    assert report.by_subject[0].total == 2
    assert report.by_subject[0].name is None
