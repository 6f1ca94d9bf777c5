"""Data Transfer Objects for Lesson Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from src.domain.base import to_naive_utc
from src.domain.lesson import Lesson, LessonType
from src.domain.lesson_state import LessonStatus


class ScheduleLessonCommandDTO(BaseModel):
    """
    Command DTO for scheduling a lesson

    Used as input to ScheduleLesson use case.
    """

    workspace_id: int = Field(..., description="Workspace identifier")

    teacher_id: int = Field(..., description="Teacher giving the lesson")

    customer_id: int = Field(..., description="Customer billed for the lesson")

    group_id: Optional[int] = Field(default=None, description="Student group (optional)")

    student_id: Optional[int] = Field(default=None, description="Individual student (optional)")

    title: str = Field(..., min_length=1, max_length=255)

    start: datetime = Field(..., description="Lesson start")

    end: datetime = Field(..., description="Lesson end (must be after start)")

    lesson_type: LessonType = Field(..., description="online, in_person_office or in_person_company")

    rate: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Fixed lesson price in major units (omit for hourly billing)"
    )

    notes: Optional[str] = Field(default=None)

    @field_validator("start", "end")
    @classmethod
    def normalize_to_utc(cls, value: datetime) -> datetime:
        return to_naive_utc(value)

    class Config:
        json_schema_extra = {
            "example": {
                "workspace_id": 1,
                "teacher_id": 7,
                "customer_id": 42,
                "student_id": 3,
                "title": "English B2",
                "start": "2025-03-10T14:00:00Z",
                "end": "2025-03-10T15:30:00Z",
                "lesson_type": "online",
                "rate": None,
            }
        }


class UpdateLessonStatusCommandDTO(BaseModel):
    """
    Command DTO for a lesson status transition

    Used as input to UpdateLessonStatus use case.
    """

    lesson_id: int = Field(..., description="Lesson to transition")

    status: LessonStatus = Field(
        ...,
        description="attended, missed, cancelled_on_time or cancelled_late"
    )

    user_id: int = Field(..., description="User performing the transition")

    cancellation_reason: Optional[str] = Field(default=None, max_length=1000)


class DeleteLessonCommandDTO(BaseModel):
    lesson_id: int = Field(..., description="Lesson to delete")


class LessonResponseDTO(BaseModel):
    """
    Response DTO for lesson operations
    """

    lesson_id: int
    workspace_id: int
    teacher_id: int
    customer_id: int
    student_id: Optional[int] = None
    title: str
    start: datetime
    end: datetime
    lesson_type: LessonType
    rate: Optional[Decimal] = None
    status: LessonStatus
    is_billable: bool
    invoice_id: Optional[int] = None
    cancelled_at: Optional[datetime] = None
    cancelled_by: Optional[int] = None
    cancellation_reason: Optional[str] = None

    @classmethod
    def from_lesson(cls, lesson: Lesson) -> "LessonResponseDTO":
        return cls(
            lesson_id=lesson.id,
            workspace_id=lesson.workspace_id,
            teacher_id=lesson.teacher_id,
            customer_id=lesson.customer_id,
            student_id=lesson.student_id,
            title=lesson.title,
            start=lesson.start,
            end=lesson.end,
            lesson_type=lesson.lesson_type,
            rate=lesson.rate,
            status=lesson.status,
            is_billable=lesson.is_billable,
            invoice_id=lesson.invoice_id,
            cancelled_at=lesson.cancelled_at,
            cancelled_by=lesson.cancelled_by,
            cancellation_reason=lesson.cancellation_reason,
        )


class DeleteLessonResponseDTO(BaseModel):
    lesson_id: int
    detached_invoice_items: int = Field(
        ...,
        description="Invoice items that lost their reference to the lesson"
    )
