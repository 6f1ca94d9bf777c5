"""Lesson e-mails

Builds the student notifications for lesson events and hands them to the
notification service without letting a failed send reach the caller.
"""

import logging
from html import escape
from src.app.repositories.student_repository import StudentRepository
from src.app.services.notification_service import EmailNotification, NotificationService
from src.domain.lesson import Lesson

logger = logging.getLogger(__name__)

LATE_CANCELLATION_REASON = "Late Cancellation (Billable)"
CANCELLATION_REASON = "Cancelled"


def _when(lesson: Lesson) -> str:
    return f"{lesson.start:%d.%m.%Y %H:%M} UTC"


def lesson_scheduled_email(lesson: Lesson, to: str) -> EmailNotification:
    return EmailNotification(
        to=to,
        subject="Lesson Scheduled",
        html=(
            "<h1>Lesson Scheduled</h1>"
            "<p>A new lesson has been scheduled.</p>"
            f"<p><strong>Title:</strong> {escape(lesson.title)}</p>"
            f"<p><strong>Date:</strong> {_when(lesson)}</p>"
            f"<p><strong>Type:</strong> {lesson.lesson_type.value}</p>"
        ),
    )


def lesson_cancelled_email(lesson: Lesson, to: str) -> EmailNotification:
    reason = LATE_CANCELLATION_REASON if lesson.is_billable else CANCELLATION_REASON
    return EmailNotification(
        to=to,
        subject="Lesson Cancelled",
        html=(
            "<h1>Lesson Cancelled</h1>"
            "<p>The following lesson has been cancelled:</p>"
            f"<p><strong>Title:</strong> {escape(lesson.title)}</p>"
            f"<p><strong>Date:</strong> {_when(lesson)}</p>"
            f"<p><strong>Reason:</strong> {reason}</p>"
        ),
    )


async def notify_student(
    notification_service: NotificationService,
    student_repo: StudentRepository,
    lesson: Lesson,
    build_email,
) -> bool:
    """
    Send a lesson e-mail to the lesson's student, if it has one

    Returns:
        True if a send was requested and accepted
    """
    if lesson.student_id is None:
        return False

    try:
        student = await student_repo.get_by_id(lesson.student_id)
        if student is None or not student.email:
            return False
        return await notification_service.send_email(build_email(lesson, student.email))
    except Exception as e:
        logger.error(f"Failed to notify student of lesson {lesson.id}: {e}")
        return False
