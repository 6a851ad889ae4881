from __future__ import annotations

from datetime import date, datetime, time

import pytest

from src.class_attendance.class_attendance.core.enums import AttendanceStatus, ChangeType
from src.class_attendance.class_attendance.core.exceptions import ValidationError

DAY = date(2024, 3, 1)
NOW = datetime(2024, 3, 1, 9, 5, 0)


def _mark(recorder, statuses, *, period_id=1, now=NOW):
    return recorder.mark(subject_id=1, period_id=period_id, work_date=DAY, statuses=statuses, now=now)


def test_marking_session_yields_expected_stats(recorder):
    _mark(recorder, {1: "present", 2: "late", 3: "absent"})

    rows = recorder.session_records(subject_id=1, period_id=1, work_date=DAY)
    stats = recorder.session_stats(rows)

    assert (stats.total, stats.present, stats.late, stats.absent) == (3, 1, 1, 1)
    assert round(stats.rate, 1) == 66.7


def test_first_mark_creates_session_from_period_times(recorder, world):
    result = _mark(recorder, {1: "present"})

    assert result.session_created is True
    session = world.sessions.sessions[result.session_id]
    assert (session.start_time, session.end_time) == (time(9, 0), time(9, 50))
    assert session.work_date == DAY


def test_second_mark_reuses_existing_session(recorder, world):
    first = _mark(recorder, {1: "present"})
    second = _mark(recorder, {2: "late"})

    assert second.session_created is False
    assert second.session_id == first.session_id
    assert world.sessions.created == 1


def test_remark_overwrites_instead_of_duplicating(recorder, world):
    _mark(recorder, {1: "present", 2: "present"})
    _mark(recorder, {1: "absent"}, now=datetime(2024, 3, 1, 9, 30))

    rows = recorder.session_records(subject_id=1, period_id=1, work_date=DAY)
    by_student = {r.student_id: r for r in rows}

    assert len(world.attendance.records) == 2
    assert by_student[1].status == AttendanceStatus.ABSENT
    assert by_student[1].time_in is None
    assert by_student[2].status == AttendanceStatus.PRESENT


def test_absent_never_gets_time_in(recorder):
    _mark(recorder, {1: "absent", 2: "late", 3: "present"})

    rows = {r.student_id: r for r in recorder.session_records(subject_id=1, period_id=1, work_date=DAY)}

    assert rows[1].time_in is None
    assert rows[2].time_in == NOW
    assert rows[3].time_in == NOW


def test_mark_result_lists_names_in_input_order(recorder):
    result = _mark(recorder, {3: AttendanceStatus.ABSENT, 1: "PRESENT", 99: "late"})

    assert [(m.name, m.status) for m in result.marked] == [
        ("Kabir Rao", AttendanceStatus.ABSENT),
        ("Aarav Sharma", AttendanceStatus.PRESENT),
        ("Unknown", AttendanceStatus.LATE),
    ]
    assert result.count == 3


def test_records_are_scoped_to_the_selected_period(recorder):
    _mark(recorder, {1: "present"}, period_id=1)
    _mark(recorder, {2: "absent"}, period_id=2)

    p1 = recorder.session_records(subject_id=1, period_id=1, work_date=DAY)
    p2 = recorder.session_records(subject_id=1, period_id=2, work_date=DAY)

    assert [r.student_id for r in p1] == [1]
    assert [r.student_id for r in p2] == [2]


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"subject_id": None, "period_id": 1, "work_date": DAY, "statuses": {1: "present"}}, "Select a subject"),
        ({"subject_id": 1, "period_id": None, "work_date": DAY, "statuses": {1: "present"}}, "Select a subject"),
        ({"subject_id": 1, "period_id": 1, "work_date": DAY, "statuses": {}}, "at least one"),
        ({"subject_id": 1, "period_id": 42, "work_date": DAY, "statuses": {1: "present"}}, "Period not found"),
        ({"subject_id": 1, "period_id": 1, "work_date": DAY, "statuses": {1: "excused"}}, "Unknown attendance status"),
    ],
)
def test_invalid_selection_is_rejected_without_writes(recorder, world, kwargs, message):
    with pytest.raises(ValidationError, match=message):
        recorder.mark(**kwargs)

    assert world.attendance.records == {}
    assert world.sessions.created == 0


def test_failed_upsert_propagates_and_writes_nothing(recorder, world, monkeypatch):
    def boom(marks):
        raise RuntimeError("connection lost")

    monkeypatch.setattr(world.attendance, "upsert_many", boom)

    with pytest.raises(RuntimeError):
        _mark(recorder, {1: "present"})

    assert world.attendance.records == {}


def test_roster_facets_use_and_semantics(recorder):
    assert [s.student_code for s in recorder.roster()] == ["S1", "S2", "S3", "S4"]
    assert [s.student_code for s in recorder.roster(year=3)] == ["S1", "S2", "S3"]
    assert [s.student_code for s in recorder.roster(year=3, section="B")] == ["S3"]
    assert recorder.roster(course="Information Technology", section="B") == []


def test_lunch_break_is_not_selectable(recorder):
    names = [p.name for p in recorder.selectable_periods()]

    assert names == ["Period 1", "Period 2"]


def test_watch_only_forwards_selected_subject_and_date(recorder, world):
    events = []
    sub = recorder.watch(subject_id=1, work_date=DAY, on_change=events.append)

    _mark(recorder, {1: "present"})
    recorder.mark(subject_id=1, period_id=1, work_date=date(2024, 3, 2), statuses={1: "present"}, now=NOW)
    recorder.mark(subject_id=2, period_id=1, work_date=DAY, statuses={4: "late"}, now=NOW)

    assert [(e.change_type, e.row["student_id"]) for e in events] == [(ChangeType.INSERT, 1)]

    sub.unsubscribe()
    _mark(recorder, {1: "absent"})
    assert len(events) == 1
