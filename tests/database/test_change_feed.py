from __future__ import annotations

from src.class_attendance.class_attendance.core.enums import ChangeType
from src.class_attendance.class_attendance.database.changes import ChangeFeed


def test_subscriber_receives_events_for_its_table_only():
    feed = ChangeFeed()
    seen = []
    feed.subscribe("attendance_records", seen.append)

    feed.notify("students", ChangeType.INSERT, {"student_id": 1})
    feed.notify("attendance_records", ChangeType.UPDATE, {"student_id": 1})

    assert [(e.table, e.change_type) for e in seen] == [("attendance_records", ChangeType.UPDATE)]


def test_where_filter_requires_every_column_to_match():
    feed = ChangeFeed()
    seen = []
    feed.subscribe("attendance_records", seen.append, where={"subject_id": 1, "status": "late"})

    feed.notify("attendance_records", ChangeType.INSERT, {"subject_id": 1, "status": "present"})
    feed.notify("attendance_records", ChangeType.INSERT, {"subject_id": 2, "status": "late"})
    delivered = feed.notify("attendance_records", ChangeType.INSERT, {"subject_id": 1, "status": "late"})

    assert delivered == 1
    assert len(seen) == 1


def test_all_change_types_are_delivered():
    feed = ChangeFeed()
    seen = []
    feed.subscribe("students", lambda e: seen.append(e.change_type))

    for change in ChangeType:
        feed.notify("students", change)

    assert seen == list(ChangeType)


def test_unsubscribe_stops_delivery_and_is_idempotent():
    feed = ChangeFeed()
    seen = []
    sub = feed.subscribe("students", seen.append)

    sub.unsubscribe()
    sub.unsubscribe()
    feed.notify("students", ChangeType.DELETE, {"student_id": 3})

    assert seen == []
    assert not sub.active
    assert feed.subscriber_count() == 0


def test_failing_callback_does_not_block_other_subscribers(caplog):
    feed = ChangeFeed()
    seen = []

    def broken(event):
        raise RuntimeError("boom")

    feed.subscribe("students", broken)
    feed.subscribe("students", seen.append)

    delivered = feed.notify("students", ChangeType.INSERT, {"student_id": 1})

    assert delivered == 1
    assert len(seen) == 1
    assert "failed for students" in caplog.text
