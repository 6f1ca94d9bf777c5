"""Cancellation Policy

Decides which lifecycle state a lesson moves into when a user reports it
attended, missed or cancelled. Pure: no storage access, the caller supplies
the acting user and the current time.
"""

from datetime import datetime, timedelta
from typing import Optional
from src.libs.result import Result, Return, Error
from src.domain.lesson import Lesson, LessonType
from src.domain.lesson_state import (
    Attended,
    CANCELLATION_STATUSES,
    LessonState,
    LessonStatus,
    Scheduled,
    closed_state,
)
from src.domain.user import Actor

ONLINE_CANCELLATION_WINDOW = timedelta(hours=24)
OFFLINE_CANCELLATION_WINDOW = timedelta(hours=48)


class CancellationPolicy:
    """
    Lesson cancellation policy

    Business Rules:
    1. Only scheduled lessons can transition; every other state is terminal
    2. attended and missed are always billable
    3. Admins pick the cancellation outcome freely:
       cancelled_late is billable, cancelled_on_time is not
    4. Non-admins are bound by the policy window (24h online, 48h otherwise):
       - less than the window before start: only cancelled_late is allowed
       - at least the window before start: only cancelled_on_time is allowed
    """

    def __init__(
        self,
        online_window: timedelta = ONLINE_CANCELLATION_WINDOW,
        offline_window: timedelta = OFFLINE_CANCELLATION_WINDOW,
    ):
        self.online_window = online_window
        self.offline_window = offline_window

    def window_for(self, lesson_type: LessonType) -> timedelta:
        if lesson_type == LessonType.ONLINE:
            return self.online_window
        return self.offline_window

    def resolve(
        self,
        lesson: Lesson,
        target: LessonStatus,
        actor: Actor,
        now: datetime,
        reason: Optional[str] = None,
    ) -> Result[LessonState]:
        """
        Resolve the state a lesson ends up in

        Args:
            lesson: Lesson being transitioned
            target: Requested status
            actor: User performing the transition
            now: Current time (UTC)
            reason: Optional cancellation reason

        Returns:
            Result[LessonState]: The new state or a policy error
        """
        current = lesson.state
        if not isinstance(current, Scheduled):
            return Return.err(
                Error(
                    code="INVALID_STATUS_TRANSITION",
                    message=f"Lesson {lesson.id} is already {current.status.value} and cannot change status",
                    reason="Only scheduled lessons can transition",
                )
            )

        if target == LessonStatus.SCHEDULED:
            return Return.err(
                Error(
                    code="INVALID_STATUS_TRANSITION",
                    message="A lesson cannot be moved back to scheduled",
                    reason="scheduled is the initial state only",
                )
            )

        if target == LessonStatus.ATTENDED:
            return Return.ok(Attended())

        if target == LessonStatus.MISSED:
            return Return.ok(closed_state(target, now, actor.user_id, reason))

        if target not in CANCELLATION_STATUSES:
            return Return.err(
                Error(
                    code="INVALID_STATUS_TRANSITION",
                    message=f"Unsupported target status {target}",
                    reason="Unknown status",
                )
            )

        if actor.is_admin:
            return Return.ok(closed_state(target, now, actor.user_id, reason))

        window = self.window_for(lesson.lesson_type)
        time_until_start = lesson.start - now

        if time_until_start < window:
            if target == LessonStatus.CANCELLED_ON_TIME:
                return Return.err(
                    Error(
                        code="CANCELLATION_TOO_LATE",
                        message="Too late to cancel without penalty. "
                                "Please contact admin or mark as Cancelled Late.",
                        reason=f"Less than {_hours(window)}h before lesson start",
                    )
                )
            return Return.ok(closed_state(LessonStatus.CANCELLED_LATE, now, actor.user_id, reason))

        if target == LessonStatus.CANCELLED_LATE:
            return Return.err(
                Error(
                    code="CANCELLATION_NOT_LATE",
                    message="Lesson is still inside the free cancellation window. "
                            "Only an admin can mark it as Cancelled Late.",
                    reason=f"At least {_hours(window)}h before lesson start",
                )
            )
        return Return.ok(closed_state(LessonStatus.CANCELLED_ON_TIME, now, actor.user_id, reason))


def _hours(window: timedelta) -> int:
    return int(window.total_seconds() // 3600)
