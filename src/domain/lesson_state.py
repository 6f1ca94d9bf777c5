"""Lesson billing states

Each lifecycle state is its own variant carrying only the fields that are
meaningful for it. Only cancellation-like states know who cancelled, when,
and why; ``is_billable`` is a property of the variant, never set freely.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import ClassVar, Optional, Union


class LessonStatus(str, Enum):
    """Lesson lifecycle status"""
    SCHEDULED = "scheduled"                  # Initial state
    ATTENDED = "attended"                    # Took place, billable
    CANCELLED_ON_TIME = "cancelled_on_time"  # Cancelled inside policy, free
    CANCELLED_LATE = "cancelled_late"        # Cancelled too late, billable
    MISSED = "missed"                        # No-show, billable


CANCELLATION_STATUSES = frozenset({LessonStatus.CANCELLED_ON_TIME, LessonStatus.CANCELLED_LATE})


@dataclass(frozen=True)
class Scheduled:
    status: ClassVar[LessonStatus] = LessonStatus.SCHEDULED
    is_billable: ClassVar[bool] = True


@dataclass(frozen=True)
class Attended:
    status: ClassVar[LessonStatus] = LessonStatus.ATTENDED
    is_billable: ClassVar[bool] = True


@dataclass(frozen=True)
class ClosedState:
    cancelled_at: datetime
    cancelled_by: int
    reason: Optional[str] = None


@dataclass(frozen=True)
class Missed(ClosedState):
    status: ClassVar[LessonStatus] = LessonStatus.MISSED
    is_billable: ClassVar[bool] = True


@dataclass(frozen=True)
class CancelledOnTime(ClosedState):
    status: ClassVar[LessonStatus] = LessonStatus.CANCELLED_ON_TIME
    is_billable: ClassVar[bool] = False


@dataclass(frozen=True)
class CancelledLate(ClosedState):
    status: ClassVar[LessonStatus] = LessonStatus.CANCELLED_LATE
    is_billable: ClassVar[bool] = True


LessonState = Union[Scheduled, Attended, Missed, CancelledOnTime, CancelledLate]

_CLOSED_VARIANTS = {
    LessonStatus.MISSED: Missed,
    LessonStatus.CANCELLED_ON_TIME: CancelledOnTime,
    LessonStatus.CANCELLED_LATE: CancelledLate,
}


def closed_state(
    status: LessonStatus, cancelled_at: datetime, cancelled_by: int, reason: Optional[str] = None
) -> LessonState:
    """Build the missed/cancelled variant for ``status``."""
    return _CLOSED_VARIANTS[status](cancelled_at=cancelled_at, cancelled_by=cancelled_by, reason=reason)


def state_from_columns(
    status: LessonStatus,
    cancelled_at: Optional[datetime],
    cancelled_by: Optional[int],
    reason: Optional[str],
) -> LessonState:
    if status == LessonStatus.SCHEDULED:
        return Scheduled()
    if status == LessonStatus.ATTENDED:
        return Attended()
    if cancelled_at is None or cancelled_by is None:
        raise ValueError(f"Lesson in status {status.value} is missing cancellation audit fields")
    return closed_state(status, cancelled_at, cancelled_by, reason)
