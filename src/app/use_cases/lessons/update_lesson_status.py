"""UpdateLessonStatus Use Case

Moves a scheduled lesson into attended, missed or one of the cancellation
states, applying the cancellation policy.
"""

import logging
from typing import Callable, Optional
from datetime import datetime
from src.libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.authorization_service import AuthorizationService
from src.app.services.notification_service import NotificationService
from src.app.services.revenue_ledger import RevenueLedgerService
from src.app.repositories.lesson_repository import LessonRepository
from src.app.repositories.student_repository import StudentRepository
from src.domain.base import utc_now
from src.domain.cancellation_policy import CancellationPolicy
from src.domain.lesson_state import CANCELLATION_STATUSES, CancelledOnTime
from .dtos import UpdateLessonStatusCommandDTO, LessonResponseDTO
from .notifications import lesson_cancelled_email, notify_student

logger = logging.getLogger(__name__)


class UpdateLessonStatus:
    """
    Use Case: Transition a lesson's status

    Business Rules:
    1. The lesson and the acting user must exist
    2. The cancellation policy decides the resulting state; a policy
       violation leaves the lesson unchanged
    3. Only a transition into cancelled_on_time debits the revenue ledger
    4. Cancellations e-mail the student after commit; a failed send does
       not fail the transition

    Flow:
    1. Load and lock lesson
    2. Resolve acting user
    3. Resolve new state via policy
    4. Apply state, debit ledger if needed
    5. Commit transaction
    6. Notify student
    """

    def __init__(
        self,
        uow: UnitOfWork,
        lesson_repo: LessonRepository,
        authorization_service: AuthorizationService,
        ledger_service: RevenueLedgerService,
        student_repo: StudentRepository,
        notification_service: NotificationService,
        policy: Optional[CancellationPolicy] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.uow = uow
        self.lesson_repo = lesson_repo
        self.authorization_service = authorization_service
        self.ledger_service = ledger_service
        self.student_repo = student_repo
        self.notification_service = notification_service
        self.policy = policy or CancellationPolicy()
        self.clock = clock

    async def execute(self, command: UpdateLessonStatusCommandDTO) -> Result[LessonResponseDTO]:
        """
        Execute status transition

        Args:
            command: UpdateLessonStatusCommandDTO with lesson, target and user

        Returns:
            Result[LessonResponseDTO]: Updated lesson or error
        """
        try:
            # Step 1: Load lesson
            lesson = await self.lesson_repo.get_by_id(command.lesson_id, for_update=True)
            if lesson is None:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code="LESSON_NOT_FOUND",
                        message=f"Lesson {command.lesson_id} not found",
                    )
                )

            # Step 2: Resolve acting user
            actor = await self.authorization_service.get_actor(command.user_id)
            if actor is None:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code="USER_NOT_FOUND",
                        message=f"User {command.user_id} not found",
                    )
                )

            # Step 3: Apply policy
            decision = self.policy.resolve(
                lesson, command.status, actor, self.clock(), command.cancellation_reason
            )
            if decision.is_err():
                logger.info(
                    f"Rejected transition of lesson {lesson.id} to {command.status.value} "
                    f"by user {actor.user_id}: {decision.error.code}"
                )
                await self.uow.rollback()
                return decision

            # Step 4: Apply state and ledger side effect
            state = decision.value
            lesson.apply_state(state)
            if isinstance(state, CancelledOnTime):
                await self.ledger_service.debit_lesson(lesson)

            lesson = await self.lesson_repo.update(lesson)

            # Step 5: Commit transaction
            await self.uow.commit()
            logger.info(
                f"Lesson {lesson.id} -> {lesson.status.value} "
                f"(billable={lesson.is_billable}) by user {actor.user_id}"
            )

            # Step 6: Notify student
            if lesson.status in CANCELLATION_STATUSES:
                await notify_student(
                    self.notification_service, self.student_repo, lesson, lesson_cancelled_email
                )

            return Return.ok(LessonResponseDTO.from_lesson(lesson))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_LESSON_STATUS_FAILED",
                    message="Failed to update lesson status",
                    reason=str(e),
                )
            )
