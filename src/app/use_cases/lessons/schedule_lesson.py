"""ScheduleLesson Use Case

Creates a scheduled lesson and books its projected revenue.
"""

import logging
from src.libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.notification_service import NotificationService
from src.app.services.revenue_ledger import RevenueLedgerService
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.lesson_repository import LessonRepository
from src.app.repositories.student_repository import StudentRepository
from src.domain.lesson import Lesson
from src.domain.lesson_state import Scheduled
from .dtos import ScheduleLessonCommandDTO, LessonResponseDTO
from .notifications import lesson_scheduled_email, notify_student

logger = logging.getLogger(__name__)


class ScheduleLesson:
    """
    Use Case: Schedule a lesson

    Business Rules:
    1. end must be after start
    2. The customer must belong to the lesson's workspace
    3. A new lesson is always scheduled and billable
    4. Projected revenue is credited to the month of the lesson start
    5. The student is e-mailed after commit; a failed send does not fail
       the scheduling

    Flow:
    1. Validate times and customer
    2. Create lesson
    3. Credit revenue ledger
    4. Commit transaction
    5. Notify student
    """

    def __init__(
        self,
        uow: UnitOfWork,
        lesson_repo: LessonRepository,
        customer_repo: CustomerRepository,
        student_repo: StudentRepository,
        ledger_service: RevenueLedgerService,
        notification_service: NotificationService,
    ):
        self.uow = uow
        self.lesson_repo = lesson_repo
        self.customer_repo = customer_repo
        self.student_repo = student_repo
        self.ledger_service = ledger_service
        self.notification_service = notification_service

    async def execute(self, command: ScheduleLessonCommandDTO) -> Result[LessonResponseDTO]:
        try:
            # Step 1: Validate
            if command.end <= command.start:
                return Return.err(
                    Error(
                        code="INVALID_LESSON_TIME",
                        message="Lesson end must be after its start",
                        reason=f"start={command.start.isoformat()}, end={command.end.isoformat()}",
                    )
                )

            customer = await self.customer_repo.get_by_id(command.customer_id)
            if customer is None or customer.workspace_id != command.workspace_id:
                return Return.err(
                    Error(
                        code="CUSTOMER_NOT_FOUND",
                        message=f"Customer {command.customer_id} not found in workspace {command.workspace_id}",
                    )
                )

            # Step 2: Create lesson
            lesson = Lesson(
                workspace_id=command.workspace_id,
                teacher_id=command.teacher_id,
                customer_id=command.customer_id,
                group_id=command.group_id,
                student_id=command.student_id,
                title=command.title,
                start=command.start,
                end=command.end,
                lesson_type=command.lesson_type,
                rate=command.rate,
                notes=command.notes,
            )
            lesson.apply_state(Scheduled())
            lesson = await self.lesson_repo.create(lesson)

            # Step 3: Credit revenue ledger
            await self.ledger_service.credit_lesson(lesson)

            # Step 4: Commit transaction
            await self.uow.commit()
            logger.info(f"Scheduled lesson {lesson.id} for customer {lesson.customer_id}")

            # Step 5: Notify student
            await notify_student(
                self.notification_service, self.student_repo, lesson, lesson_scheduled_email
            )

            return Return.ok(LessonResponseDTO.from_lesson(lesson))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="SCHEDULE_LESSON_FAILED",
                    message="Failed to schedule lesson",
                    reason=str(e),
                )
            )
