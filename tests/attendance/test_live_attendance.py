from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from src.class_attendance.class_attendance.attendance.service import LiveAttendance

DAY = date(2024, 3, 1)
NOW = datetime(2024, 3, 1, 9, 5, 0)


class _Clock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def reads(world, monkeypatch):
    calls = []
    original = world.attendance.list_for_slot

    def counting(**kwargs):
        calls.append(kwargs)
        return original(**kwargs)

    monkeypatch.setattr(world.attendance, "list_for_slot", counting)
    return calls


@pytest.fixture
def clock():
    return _Clock(NOW)


@pytest.fixture
def live(recorder, clock):
    view = LiveAttendance(recorder, refresh_seconds=30, clock=clock)
    yield view
    view.close()


def _mark(recorder, subject_id, work_date, statuses):
    recorder.mark(subject_id=subject_id, period_id=1, work_date=work_date, statuses=statuses, now=NOW)


def test_view_is_cached_until_interval_passes(live, reads, clock):
    first = live.current(subject_id=1, period_id=1, work_date=DAY)
    assert live.current(subject_id=1, period_id=1, work_date=DAY) is first
    assert len(reads) == 1

    clock.now += timedelta(seconds=30)
    live.current(subject_id=1, period_id=1, work_date=DAY)
    assert len(reads) == 2


def test_mark_on_selected_subject_and_date_refreshes(live, recorder, reads):
    assert live.current(subject_id=1, period_id=1, work_date=DAY).stats.total == 0

    _mark(recorder, 1, DAY, {1: "present", 2: "late"})
    view = live.current(subject_id=1, period_id=1, work_date=DAY)

    assert len(reads) == 2
    assert (view.stats.present, view.stats.late) == (1, 1)
    assert view.to_dict()["attendance_rate"] == 100.0


def test_changes_elsewhere_keep_the_cache(live, recorder, reads):
    live.current(subject_id=1, period_id=1, work_date=DAY)

    _mark(recorder, 1, date(2024, 3, 2), {1: "present"})
    _mark(recorder, 2, DAY, {4: "late"})
    live.current(subject_id=1, period_id=1, work_date=DAY)

    assert len(reads) == 1


def test_oldest_selection_is_dropped_past_the_limit(recorder, world, clock):
    live = LiveAttendance(recorder, max_watched=2, clock=clock)

    for day in (1, 2, 3):
        live.current(subject_id=1, period_id=1, work_date=date(2024, 3, day))

    assert live.watched_count() == 2
    assert world.feed.subscriber_count("attendance_records") == 2

    live.close()
    assert live.watched_count() == 0
    assert world.feed.subscriber_count("attendance_records") == 0


def test_failed_read_leaves_selection_stale(live, world, monkeypatch, reads):
    def boom(**kwargs):
        raise RuntimeError("db down")

    with monkeypatch.context() as m:
        m.setattr(world.attendance, "list_for_slot", boom)
        with pytest.raises(RuntimeError):
            live.current(subject_id=1, period_id=1, work_date=DAY)

    live.current(subject_id=1, period_id=1, work_date=DAY)
    assert len(reads) == 1
