"""Unit tests for UpdateLessonStatus use case

Tests cover:
- Policy decisions are applied to the lesson
- Only on-time cancellations debit the revenue ledger
- Policy violations leave the lesson unchanged
- Cancellation e-mails carry the billing reason
"""

import pytest
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.lessons.update_lesson_status import UpdateLessonStatus
from src.app.use_cases.lessons.dtos import UpdateLessonStatusCommandDTO
from src.domain.lesson_state import LessonStatus
from src.domain.student import Student
from src.domain.user import Actor


@pytest.fixture
def mock_lesson_repo():
    repo = MagicMock()
    repo.update = AsyncMock(side_effect=lambda lesson: lesson)
    return repo


@pytest.fixture
def mock_authorization_service():
    service = MagicMock()
    service.get_actor = AsyncMock(return_value=Actor(user_id=7, is_admin=False))
    return service


@pytest.fixture
def mock_ledger_service():
    service = MagicMock()
    service.debit_lesson = AsyncMock()
    return service


@pytest.fixture
def mock_student_repo():
    repo = MagicMock()
    repo.get_by_id = AsyncMock(
        return_value=Student(id=3, workspace_id=1, name="Anna", email="anna@example.com")
    )
    return repo


@pytest.fixture
def mock_notification_service():
    service = MagicMock()
    service.send_email = AsyncMock(return_value=True)
    return service


@pytest.fixture
def use_case(
    mock_uow, mock_lesson_repo, mock_authorization_service, mock_ledger_service,
    mock_student_repo, mock_notification_service, now,
):
    return UpdateLessonStatus(
        mock_uow,
        mock_lesson_repo,
        mock_authorization_service,
        mock_ledger_service,
        mock_student_repo,
        mock_notification_service,
        clock=lambda: now,
    )


def command(status, user_id=7, reason=None):
    return UpdateLessonStatusCommandDTO(
        lesson_id=1, status=status, user_id=user_id, cancellation_reason=reason
    )


@pytest.mark.asyncio
class TestTransitions:
    async def test_on_time_cancellation_debits_ledger(
        self, use_case, mock_uow, mock_lesson_repo, mock_ledger_service,
        mock_notification_service, make_lesson, now,
    ):
        """
        Given: An online lesson 3 days ahead
        When: The teacher cancels on time
        Then: Not billable, ledger debited, student told "Cancelled"
        """
        lesson = make_lesson(student_id=3)
        mock_lesson_repo.get_by_id = AsyncMock(return_value=lesson)

        result = await use_case.execute(command(LessonStatus.CANCELLED_ON_TIME, reason="Holiday"))

        assert result.is_ok()
        assert result.value.status == LessonStatus.CANCELLED_ON_TIME
        assert result.value.is_billable is False
        assert result.value.cancelled_by == 7
        assert result.value.cancelled_at == now
        assert result.value.cancellation_reason == "Holiday"
        mock_ledger_service.debit_lesson.assert_called_once_with(lesson)
        mock_uow.commit.assert_called_once()

        email = mock_notification_service.send_email.call_args[0][0]
        assert email.subject == "Lesson Cancelled"
        assert "Reason:</strong> Cancelled<" in email.html

    async def test_late_cancellation_keeps_ledger(
        self, use_case, mock_lesson_repo, mock_ledger_service, mock_notification_service, make_lesson,
    ):
        mock_lesson_repo.get_by_id = AsyncMock(
            return_value=make_lesson(starts_in=timedelta(hours=3), student_id=3)
        )

        result = await use_case.execute(command(LessonStatus.CANCELLED_LATE))

        assert result.value.status == LessonStatus.CANCELLED_LATE
        assert result.value.is_billable is True
        mock_ledger_service.debit_lesson.assert_not_called()
        email = mock_notification_service.send_email.call_args[0][0]
        assert "Late Cancellation (Billable)" in email.html

    async def test_attended_sends_no_email(
        self, use_case, mock_lesson_repo, mock_ledger_service, mock_notification_service, make_lesson,
    ):
        mock_lesson_repo.get_by_id = AsyncMock(return_value=make_lesson(student_id=3))

        result = await use_case.execute(command(LessonStatus.ATTENDED))

        assert result.value.status == LessonStatus.ATTENDED
        assert result.value.cancelled_at is None
        mock_ledger_service.debit_lesson.assert_not_called()
        mock_notification_service.send_email.assert_not_called()

    async def test_admin_on_time_inside_window(
        self, use_case, mock_lesson_repo, mock_authorization_service, mock_ledger_service, make_lesson,
    ):
        mock_authorization_service.get_actor.return_value = Actor(user_id=1, is_admin=True)
        mock_lesson_repo.get_by_id = AsyncMock(return_value=make_lesson(starts_in=timedelta(hours=1)))

        result = await use_case.execute(command(LessonStatus.CANCELLED_ON_TIME, user_id=1))

        assert result.value.is_billable is False
        mock_ledger_service.debit_lesson.assert_called_once()


@pytest.mark.asyncio
class TestRejections:
    async def test_too_late_leaves_lesson_unchanged(
        self, use_case, mock_uow, mock_lesson_repo, mock_ledger_service, make_lesson,
    ):
        """
        Given: An online lesson starting in 2 hours
        When: The teacher asks for an on-time cancellation
        Then: CANCELLATION_TOO_LATE, nothing written
        """
        lesson = make_lesson(starts_in=timedelta(hours=2))
        mock_lesson_repo.get_by_id = AsyncMock(return_value=lesson)

        result = await use_case.execute(command(LessonStatus.CANCELLED_ON_TIME))

        assert result.error.code == "CANCELLATION_TOO_LATE"
        assert lesson.status == LessonStatus.SCHEDULED
        assert lesson.is_billable is True
        mock_lesson_repo.update.assert_not_called()
        mock_ledger_service.debit_lesson.assert_not_called()
        mock_uow.commit.assert_not_called()

    async def test_lesson_not_found(self, use_case, mock_lesson_repo, mock_uow):
        mock_lesson_repo.get_by_id = AsyncMock(return_value=None)

        result = await use_case.execute(command(LessonStatus.ATTENDED))

        assert result.error.code == "LESSON_NOT_FOUND"
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()

    async def test_user_not_found(
        self, use_case, mock_lesson_repo, mock_authorization_service, make_lesson, mock_uow
    ):
        mock_lesson_repo.get_by_id = AsyncMock(return_value=make_lesson())
        mock_authorization_service.get_actor.return_value = None

        result = await use_case.execute(command(LessonStatus.ATTENDED, user_id=99))

        assert result.error.code == "USER_NOT_FOUND"
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()

    async def test_terminal_state(self, use_case, mock_lesson_repo, make_lesson):
        mock_lesson_repo.get_by_id = AsyncMock(return_value=make_lesson(status=LessonStatus.ATTENDED))

        result = await use_case.execute(command(LessonStatus.MISSED))

        assert result.error.code == "INVALID_STATUS_TRANSITION"
