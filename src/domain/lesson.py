"""Lesson Domain Entity

A scheduled lesson and its billing state.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Numeric, String, Text
from src.domain.base import BaseModel, datetime_column, fk_column, id_column, utc_now
from src.domain.lesson_state import LessonState, LessonStatus, ClosedState, state_from_columns


class LessonType(str, Enum):
    """Where a lesson takes place"""
    ONLINE = "online"
    IN_PERSON_OFFICE = "in_person_office"
    IN_PERSON_COMPANY = "in_person_company"


class Lesson(BaseModel, table=True):
    """
    Lesson - A scheduled lesson for a customer

    Domain Rules:
    - Always created as scheduled and billable
    - status, is_billable and the cancellation audit fields change only
      through apply_state(), so they can never disagree
    - rate is an optional fixed price in major units; without it the
      customer's (or workspace's) hourly rate applies
    - A lesson with invoice_id set is never billed again
    """

    __tablename__ = "lessons"
    __table_args__ = (
        Index("ix_lessons_customer_start", "customer_id", "start"),
        Index("ix_lessons_workspace_start", "workspace_id", "start"),
    )

    id: Optional[int] = Field(default=None, sa_column=id_column())

    workspace_id: int = Field(sa_column=fk_column("workspaces.id", ondelete="CASCADE", index=False))

    teacher_id: int = Field(sa_column=fk_column("users.id"))

    customer_id: int = Field(sa_column=fk_column("customers.id", ondelete="CASCADE", index=False))

    group_id: Optional[int] = Field(default=None, description="Student group (optional)")

    student_id: Optional[int] = Field(
        default=None, sa_column=fk_column("students.id", nullable=True, ondelete="SET NULL")
    )

    title: str = Field(sa_column=Column(String(255), nullable=False))

    start: datetime = Field(description="Lesson start (UTC)", sa_column=datetime_column())

    end: datetime = Field(description="Lesson end (UTC)", sa_column=datetime_column())

    lesson_type: LessonType = Field(description="online, in_person_office or in_person_company")

    rate: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(10, 2), nullable=True),
        description="Fixed lesson price in major units (None = hourly billing)"
    )

    status: LessonStatus = Field(default=LessonStatus.SCHEDULED)

    is_billable: bool = Field(default=True)

    invoice_id: Optional[int] = Field(
        default=None,
        sa_column=fk_column("invoices.id", nullable=True, ondelete="SET NULL"),
        description="Invoice this lesson was billed on"
    )

    cancelled_at: Optional[datetime] = Field(default=None, sa_column=datetime_column(nullable=True))

    cancelled_by: Optional[int] = Field(
        default=None, sa_column=fk_column("users.id", nullable=True, index=False)
    )

    cancellation_reason: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    created_at: datetime = Field(default_factory=utc_now, sa_column=datetime_column())

    updated_at: datetime = Field(default_factory=utc_now, sa_column=datetime_column())

    @property
    def duration_hours(self) -> Decimal:
        seconds = Decimal(str((self.end - self.start).total_seconds()))
        return seconds / Decimal("3600")

    @property
    def state(self) -> LessonState:
        return state_from_columns(
            self.status, self.cancelled_at, self.cancelled_by, self.cancellation_reason
        )

    def apply_state(self, state: LessonState) -> None:
        """Write a lifecycle state onto the persisted columns."""
        self.status = state.status
        self.is_billable = state.is_billable
        if isinstance(state, ClosedState):
            self.cancelled_at = state.cancelled_at
            self.cancelled_by = state.cancelled_by
            self.cancellation_reason = state.reason
        else:
            self.cancelled_at = None
            self.cancelled_by = None
            self.cancellation_reason = None
        self.updated_at = utc_now()
