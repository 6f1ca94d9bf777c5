"""Request schemas for Lesson API

Pydantic models for validating incoming HTTP requests.
"""

from typing import Optional
from pydantic import BaseModel, Field
from src.domain.lesson_state import LessonStatus


class LessonStatusRequestSchema(BaseModel):
    """
    Request schema for a lesson status transition

    Used for POST /lessons/{lesson_id}/status endpoint.
    """

    status: LessonStatus = Field(
        ...,
        description="attended, missed, cancelled_on_time or cancelled_late"
    )

    user_id: int = Field(..., description="User performing the transition")

    cancellation_reason: Optional[str] = Field(default=None, max_length=1000)

    class Config:
        json_schema_extra = {
            "example": {
                "status": "cancelled_on_time",
                "user_id": 7,
                "cancellation_reason": "Student is ill",
            }
        }
