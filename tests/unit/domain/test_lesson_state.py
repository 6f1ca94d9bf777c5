"""Unit tests for the lesson state variants and Lesson.apply_state"""

import pytest
from datetime import datetime

from src.domain.lesson_state import (
    Attended,
    CancelledLate,
    CancelledOnTime,
    LessonStatus,
    Missed,
    Scheduled,
    closed_state,
    state_from_columns,
)


def test_billable_flag_per_variant():
    cancelled_at = datetime(2025, 3, 1, 9, 0)
    assert Scheduled().is_billable is True
    assert Attended().is_billable is True
    assert Missed(cancelled_at=cancelled_at, cancelled_by=1).is_billable is True
    assert CancelledLate(cancelled_at=cancelled_at, cancelled_by=1).is_billable is True
    assert CancelledOnTime(cancelled_at=cancelled_at, cancelled_by=1).is_billable is False


def test_apply_state_writes_audit_fields(make_lesson):
    lesson = make_lesson()
    cancelled_at = datetime(2025, 3, 11, 8, 0)

    lesson.apply_state(closed_state(LessonStatus.CANCELLED_ON_TIME, cancelled_at, 7, "Holiday"))

    assert lesson.status == LessonStatus.CANCELLED_ON_TIME
    assert lesson.is_billable is False
    assert lesson.cancelled_at == cancelled_at
    assert lesson.cancelled_by == 7
    assert lesson.cancellation_reason == "Holiday"


def test_apply_open_state_clears_audit_fields(make_lesson):
    lesson = make_lesson()
    lesson.apply_state(closed_state(LessonStatus.MISSED, datetime(2025, 3, 11), 7))

    lesson.apply_state(Attended())

    assert lesson.status == LessonStatus.ATTENDED
    assert lesson.is_billable is True
    assert lesson.cancelled_at is None
    assert lesson.cancelled_by is None


def test_state_round_trips_through_columns(make_lesson):
    lesson = make_lesson()
    lesson.apply_state(closed_state(LessonStatus.CANCELLED_LATE, datetime(2025, 3, 11), 3, "Late"))

    state = lesson.state

    assert isinstance(state, CancelledLate)
    assert state.cancelled_by == 3
    assert state.reason == "Late"


def test_closed_status_without_audit_fields_is_rejected():
    with pytest.raises(ValueError):
        state_from_columns(LessonStatus.MISSED, None, None, None)
