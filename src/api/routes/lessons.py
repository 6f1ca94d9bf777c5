"""Lesson API Routes

FastAPI routes for the lesson lifecycle: scheduling, status transitions
under the cancellation policy, and deletion.
"""

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.schemas.lesson_request import LessonStatusRequestSchema
from src.app.use_cases.lessons.dtos import (
    ScheduleLessonCommandDTO,
    UpdateLessonStatusCommandDTO,
    DeleteLessonCommandDTO,
    LessonResponseDTO,
    DeleteLessonResponseDTO,
)
from src.app.use_cases.lessons.schedule_lesson import ScheduleLesson
from src.app.use_cases.lessons.update_lesson_status import UpdateLessonStatus
from src.app.use_cases.lessons.delete_lesson import DeleteLesson
from src.adapter.repositories import (
    SqlAlchemyCustomerRepository,
    SqlAlchemyInvoiceItemRepository,
    SqlAlchemyLessonRepository,
    SqlAlchemyStudentRepository,
    SqlAlchemyUserRepository,
)
from src.adapter.services.authorization_service import RepositoryAuthorizationService
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import (
    build_revenue_ledger_service,
    get_cancellation_policy,
    get_notification_service,
    get_session,
)
from src.api.error import ClientError

router = APIRouter(prefix="/lessons", tags=["Lessons"])


@router.post(
    "",
    response_model=LessonResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {
            "description": "Customer not found",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "CUSTOMER_NOT_FOUND",
                            "message": "Customer 42 not found in workspace 1"
                        }
                    }
                }
            }
        },
        400: {
            "description": "Validation error",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INVALID_LESSON_TIME",
                            "message": "Lesson end must be after its start"
                        }
                    }
                }
            }
        }
    }
)
async def schedule_lesson(
    command: ScheduleLessonCommandDTO,
    session: AsyncSession = Depends(get_session)
):
    """
    Schedule a lesson.

    The lesson starts as `scheduled` and billable. Its projected revenue
    (fixed rate, else the customer's or workspace's hourly rate, times the
    duration) is credited to the revenue ledger month of its start. The
    student, if any and with an e-mail address, is notified.

    **Returns:**
    - 201: Lesson scheduled
    - 400: end is not after start
    - 404: Customer not found in the workspace
    """
    use_case = ScheduleLesson(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyLessonRepository(session),
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyStudentRepository(session),
        build_revenue_ledger_service(session),
        get_notification_service(),
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/{lesson_id}/status",
    response_model=LessonResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        404: {
            "description": "Lesson or user not found",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "LESSON_NOT_FOUND",
                            "message": "Lesson 123 not found"
                        }
                    }
                }
            }
        },
        409: {
            "description": "Cancellation policy violation",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "CANCELLATION_TOO_LATE",
                            "message": "Too late to cancel without penalty. "
                                       "Please contact admin or mark as Cancelled Late."
                        }
                    }
                }
            }
        }
    }
)
async def update_lesson_status(
    lesson_id: int,
    request: LessonStatusRequestSchema,
    session: AsyncSession = Depends(get_session)
):
    """
    Transition a scheduled lesson.

    Policy window: 24h before start for online lessons, 48h otherwise.

    - `attended` and `missed` are billable.
    - Admins may choose `cancelled_on_time` (free) or `cancelled_late`
      (billable) at any time.
    - Other users may only cancel on time while at least the window remains
      before start, and only late once less than the window remains.

    An on-time cancellation debits the revenue ledger. Cancellations notify
    the student.

    **Example request:**
    ```json
    {"status": "cancelled_late", "user_id": 7, "cancellation_reason": "Sick"}
    ```

    **Returns:**
    - 200: Lesson transitioned
    - 404: Lesson or acting user not found
    - 409: Policy violation or lesson no longer scheduled
    """
    use_case = UpdateLessonStatus(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyLessonRepository(session),
        RepositoryAuthorizationService(SqlAlchemyUserRepository(session)),
        build_revenue_ledger_service(session),
        SqlAlchemyStudentRepository(session),
        get_notification_service(),
        policy=get_cancellation_policy(),
    )

    command = UpdateLessonStatusCommandDTO(
        lesson_id=lesson_id,
        status=request.status,
        user_id=request.user_id,
        cancellation_reason=request.cancellation_reason,
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.delete(
    "/{lesson_id}",
    response_model=DeleteLessonResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def delete_lesson(
    lesson_id: int,
    session: AsyncSession = Depends(get_session)
):
    """
    Delete a lesson.

    Invoice items generated from the lesson stay on their invoice but lose
    their reference to it.
    """
    use_case = DeleteLesson(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyLessonRepository(session),
        SqlAlchemyInvoiceItemRepository(session),
    )
    result = await use_case.execute(DeleteLessonCommandDTO(lesson_id=lesson_id))

    if result.is_err():
        raise ClientError(result.error)

    return result.value
