"""DeleteLesson Use Case

Deletes a lesson. Invoice items generated from it stay on their invoice but
lose the back-reference.
"""

import logging
from src.libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from src.app.repositories.lesson_repository import LessonRepository
from .dtos import DeleteLessonCommandDTO, DeleteLessonResponseDTO

logger = logging.getLogger(__name__)


class DeleteLesson:
    def __init__(
        self,
        uow: UnitOfWork,
        lesson_repo: LessonRepository,
        invoice_item_repo: InvoiceItemRepository,
    ):
        self.uow = uow
        self.lesson_repo = lesson_repo
        self.invoice_item_repo = invoice_item_repo

    async def execute(self, command: DeleteLessonCommandDTO) -> Result[DeleteLessonResponseDTO]:
        try:
            lesson = await self.lesson_repo.get_by_id(command.lesson_id, for_update=True)
            if lesson is None:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code="LESSON_NOT_FOUND",
                        message=f"Lesson {command.lesson_id} not found",
                    )
                )

            detached = await self.invoice_item_repo.detach_lesson(lesson.id)
            await self.lesson_repo.delete(lesson)
            await self.uow.commit()

            logger.info(f"Deleted lesson {command.lesson_id}, detached {detached} invoice item(s)")
            return Return.ok(
                DeleteLessonResponseDTO(
                    lesson_id=command.lesson_id,
                    detached_invoice_items=detached,
                )
            )

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DELETE_LESSON_FAILED",
                    message="Failed to delete lesson",
                    reason=str(e),
                )
            )
