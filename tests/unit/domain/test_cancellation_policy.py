"""Unit tests for CancellationPolicy

Tests cover:
- attended and missed are always billable
- Non-admin cancellations inside and outside the policy window
- Exact window boundary (24h online, 48h in person)
- Admin override in both directions
- Terminal states reject further transitions
"""

import pytest
from datetime import timedelta

from src.domain.cancellation_policy import CancellationPolicy
from src.domain.lesson import LessonType
from src.domain.lesson_state import (
    Attended,
    CancelledLate,
    CancelledOnTime,
    LessonStatus,
    Missed,
    closed_state,
)
from src.domain.user import Actor

TEACHER = Actor(user_id=7, is_admin=False)
ADMIN = Actor(user_id=1, is_admin=True)


@pytest.fixture
def policy():
    return CancellationPolicy()


class TestAttendanceOutcomes:
    def test_attended_is_billable(self, policy, make_lesson, now):
        result = policy.resolve(make_lesson(), LessonStatus.ATTENDED, TEACHER, now)

        assert result.is_ok()
        assert isinstance(result.value, Attended)
        assert result.value.is_billable is True

    def test_missed_is_billable_and_audited(self, policy, make_lesson, now):
        result = policy.resolve(make_lesson(), LessonStatus.MISSED, TEACHER, now, "No show")

        assert result.is_ok()
        state = result.value
        assert isinstance(state, Missed)
        assert state.is_billable is True
        assert state.cancelled_at == now
        assert state.cancelled_by == TEACHER.user_id
        assert state.reason == "No show"


class TestNonAdminCancellation:
    def test_exactly_at_window_is_on_time(self, policy, make_lesson, now):
        """
        Given: An online lesson starting exactly 24h from now
        When: A teacher cancels on time
        Then: The lesson is cancelled on time and not billable
        """
        lesson = make_lesson(starts_in=timedelta(hours=24))

        result = policy.resolve(lesson, LessonStatus.CANCELLED_ON_TIME, TEACHER, now)

        assert result.is_ok()
        assert isinstance(result.value, CancelledOnTime)
        assert result.value.is_billable is False

    def test_one_second_inside_window_is_too_late(self, policy, make_lesson, now):
        """
        Given: An online lesson starting in 23:59:59
        When: A teacher requests an on-time cancellation
        Then: CANCELLATION_TOO_LATE is returned
        """
        lesson = make_lesson(starts_in=timedelta(hours=24) - timedelta(seconds=1))

        result = policy.resolve(lesson, LessonStatus.CANCELLED_ON_TIME, TEACHER, now)

        assert result.is_err()
        assert result.error.code == "CANCELLATION_TOO_LATE"

    def test_late_cancellation_inside_window(self, policy, make_lesson, now):
        lesson = make_lesson(starts_in=timedelta(hours=2))

        result = policy.resolve(lesson, LessonStatus.CANCELLED_LATE, TEACHER, now, "Sick")

        assert result.is_ok()
        assert isinstance(result.value, CancelledLate)
        assert result.value.is_billable is True
        assert result.value.reason == "Sick"

    def test_late_cancellation_outside_window_is_rejected(self, policy, make_lesson, now):
        lesson = make_lesson(starts_in=timedelta(days=5))

        result = policy.resolve(lesson, LessonStatus.CANCELLED_LATE, TEACHER, now)

        assert result.is_err()
        assert result.error.code == "CANCELLATION_NOT_LATE"

    def test_in_person_lessons_use_48h_window(self, policy, make_lesson, now):
        """
        Given: An office lesson starting in 30h
        When: A teacher cancels on time
        Then: It is too late because in-person lessons need 48h notice
        """
        lesson = make_lesson(starts_in=timedelta(hours=30), lesson_type=LessonType.IN_PERSON_OFFICE)

        result = policy.resolve(lesson, LessonStatus.CANCELLED_ON_TIME, TEACHER, now)

        assert result.is_err()
        assert result.error.code == "CANCELLATION_TOO_LATE"

    def test_company_lessons_exactly_48h_is_on_time(self, policy, make_lesson, now):
        lesson = make_lesson(starts_in=timedelta(hours=48), lesson_type=LessonType.IN_PERSON_COMPANY)

        result = policy.resolve(lesson, LessonStatus.CANCELLED_ON_TIME, TEACHER, now)

        assert result.is_ok()
        assert isinstance(result.value, CancelledOnTime)

    def test_lesson_already_started(self, policy, make_lesson, now):
        lesson = make_lesson(starts_in=-timedelta(hours=1))

        result = policy.resolve(lesson, LessonStatus.CANCELLED_ON_TIME, TEACHER, now)

        assert result.error.code == "CANCELLATION_TOO_LATE"

    def test_custom_windows(self, make_lesson, now):
        policy = CancellationPolicy(online_window=timedelta(hours=6))
        lesson = make_lesson(starts_in=timedelta(hours=7))

        result = policy.resolve(lesson, LessonStatus.CANCELLED_ON_TIME, TEACHER, now)

        assert result.is_ok()


class TestAdminOverride:
    def test_admin_can_cancel_on_time_inside_window(self, policy, make_lesson, now):
        lesson = make_lesson(starts_in=timedelta(minutes=30))

        result = policy.resolve(lesson, LessonStatus.CANCELLED_ON_TIME, ADMIN, now)

        assert result.is_ok()
        assert isinstance(result.value, CancelledOnTime)
        assert result.value.cancelled_by == ADMIN.user_id

    def test_admin_can_cancel_late_outside_window(self, policy, make_lesson, now):
        lesson = make_lesson(starts_in=timedelta(days=10))

        result = policy.resolve(lesson, LessonStatus.CANCELLED_LATE, ADMIN, now)

        assert result.is_ok()
        assert isinstance(result.value, CancelledLate)


class TestTerminalStates:
    @pytest.mark.parametrize(
        "status",
        [
            LessonStatus.ATTENDED,
            LessonStatus.MISSED,
            LessonStatus.CANCELLED_ON_TIME,
            LessonStatus.CANCELLED_LATE,
        ],
    )
    def test_non_scheduled_lessons_cannot_transition(self, policy, make_lesson, now, status):
        lesson = make_lesson()
        lesson.apply_state(
            Attended() if status == LessonStatus.ATTENDED else closed_state(status, now, TEACHER.user_id)
        )

        result = policy.resolve(lesson, LessonStatus.ATTENDED, ADMIN, now)

        assert result.is_err()
        assert result.error.code == "INVALID_STATUS_TRANSITION"

    def test_cannot_move_back_to_scheduled(self, policy, make_lesson, now):
        result = policy.resolve(make_lesson(), LessonStatus.SCHEDULED, ADMIN, now)

        assert result.error.code == "INVALID_STATUS_TRANSITION"

    def test_closed_row_without_audit_fields_is_rejected_loudly(self, policy, make_lesson, now):
        """
        Given: A row marked cancelled_late but missing who cancelled and when
        When: Any transition is resolved
        Then: The inconsistent row raises instead of being treated as scheduled
        """
        lesson = make_lesson(status=LessonStatus.CANCELLED_LATE)

        with pytest.raises(ValueError, match="missing cancellation audit fields"):
            policy.resolve(lesson, LessonStatus.ATTENDED, ADMIN, now)
