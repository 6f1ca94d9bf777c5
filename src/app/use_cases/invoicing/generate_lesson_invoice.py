"""GenerateLessonInvoice Use Case

Bills a single lesson immediately, using the same line rules as the monthly
generator.
"""

import logging
from src.libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.lesson_repository import LessonRepository
from .dtos import GenerateLessonInvoiceCommandDTO, InvoiceResponseDTO
from .lesson_invoicer import LessonInvoicer

logger = logging.getLogger(__name__)


class GenerateLessonInvoice:
    """
    Use Case: Create a draft invoice for one lesson

    Business Rules:
    1. The lesson must be billable
    2. The lesson must not be invoiced yet
    """

    def __init__(
        self,
        uow: UnitOfWork,
        lesson_repo: LessonRepository,
        customer_repo: CustomerRepository,
        invoicer: LessonInvoicer,
    ):
        self.uow = uow
        self.lesson_repo = lesson_repo
        self.customer_repo = customer_repo
        self.invoicer = invoicer

    async def execute(self, command: GenerateLessonInvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
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

            if not lesson.is_billable:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code="LESSON_NOT_BILLABLE",
                        message=f"Lesson {lesson.id} is not billable",
                        reason=f"Lesson status is {lesson.status.value}",
                    )
                )

            if lesson.invoice_id is not None:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code="LESSON_ALREADY_INVOICED",
                        message=f"Lesson {lesson.id} is already on invoice {lesson.invoice_id}",
                    )
                )

            customer = await self.customer_repo.get_by_id(lesson.customer_id)
            if customer is None:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code="CUSTOMER_NOT_FOUND",
                        message=f"Customer {lesson.customer_id} not found",
                    )
                )

            invoiced = await self.invoicer.invoice_lessons(customer, [lesson], command.user_id)
            if invoiced.is_err():
                await self.uow.rollback()
                return invoiced

            await self.uow.commit()
            invoice, items = invoiced.value
            logger.info(f"Invoiced lesson {lesson.id} on {invoice.invoice_number}")
            return Return.ok(InvoiceResponseDTO.from_invoice(invoice, items))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="GENERATE_LESSON_INVOICE_FAILED",
                    message="Failed to generate lesson invoice",
                    reason=str(e),
                )
            )
