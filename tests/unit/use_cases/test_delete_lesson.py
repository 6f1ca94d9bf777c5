"""Unit tests for DeleteLesson use case"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.lessons.delete_lesson import DeleteLesson
from src.app.use_cases.lessons.dtos import DeleteLessonCommandDTO


@pytest.mark.asyncio
class TestDeleteLesson:
    async def test_detaches_invoice_items(self, mock_uow, make_lesson):
        lesson = make_lesson(invoice_id=100)
        lesson_repo = MagicMock()
        lesson_repo.get_by_id = AsyncMock(return_value=lesson)
        lesson_repo.delete = AsyncMock()
        item_repo = MagicMock()
        item_repo.detach_lesson = AsyncMock(return_value=1)

        result = await DeleteLesson(mock_uow, lesson_repo, item_repo).execute(
            DeleteLessonCommandDTO(lesson_id=1)
        )

        assert result.is_ok()
        assert result.value.detached_invoice_items == 1
        item_repo.detach_lesson.assert_called_once_with(1)
        lesson_repo.delete.assert_called_once_with(lesson)
        mock_uow.commit.assert_called_once()

    async def test_not_found(self, mock_uow):
        lesson_repo = MagicMock()
        lesson_repo.get_by_id = AsyncMock(return_value=None)
        item_repo = MagicMock()
        item_repo.detach_lesson = AsyncMock()

        result = await DeleteLesson(mock_uow, lesson_repo, item_repo).execute(
            DeleteLessonCommandDTO(lesson_id=9)
        )

        assert result.error.code == "LESSON_NOT_FOUND"
        item_repo.detach_lesson.assert_not_called()
        mock_uow.rollback.assert_called_once()
