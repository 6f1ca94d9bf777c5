"""Lesson lifecycle use cases"""
from .schedule_lesson import ScheduleLesson
from .update_lesson_status import UpdateLessonStatus
from .delete_lesson import DeleteLesson
from .dtos import (
    ScheduleLessonCommandDTO,
    UpdateLessonStatusCommandDTO,
    DeleteLessonCommandDTO,
    LessonResponseDTO,
    DeleteLessonResponseDTO,
)

__all__ = [
    "ScheduleLesson",
    "UpdateLessonStatus",
    "DeleteLesson",
    "ScheduleLessonCommandDTO",
    "UpdateLessonStatusCommandDTO",
    "DeleteLessonCommandDTO",
    "LessonResponseDTO",
    "DeleteLessonResponseDTO",
]
