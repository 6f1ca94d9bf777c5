"""DeleteInvoice Use Case

Deletes a draft invoice. Its lessons are unlinked, not deleted, so the next
generator run can bill them again.
"""

import logging
from src.libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.lesson_repository import LessonRepository
from .dtos import DeleteInvoiceCommandDTO, DeleteInvoiceResponseDTO
from .invoice_builder import record_audit

logger = logging.getLogger(__name__)


class DeleteInvoice:
    """
    Use Case: Delete a draft invoice

    Flow:
    1. Load invoice, reject non-drafts
    2. Delete items
    3. Unlink lessons
    4. Delete invoice and record audit entry
    5. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        invoice_item_repo: InvoiceItemRepository,
        lesson_repo: LessonRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.invoice_item_repo = invoice_item_repo
        self.lesson_repo = lesson_repo

    async def execute(self, command: DeleteInvoiceCommandDTO) -> Result[DeleteInvoiceResponseDTO]:
        try:
            # Step 1: Load invoice
            invoice = await self.invoice_repo.get_by_id(command.invoice_id)
            if invoice is None:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice {command.invoice_id} not found",
                    )
                )

            if not invoice.is_draft:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_DRAFT",
                        message="Only draft invoices can be deleted. Cancel sent invoices instead.",
                        reason=f"Invoice status is {invoice.status.value}",
                    )
                )

            # Step 2: Delete items
            deleted_items = await self.invoice_item_repo.delete_by_invoice_id(invoice.id)

            # Step 3: Unlink lessons
            unlinked = await self.lesson_repo.unlink_invoice(invoice.id)

            # Step 4: Delete invoice
            await record_audit(self.invoice_repo, invoice, "deleted", command.user_id)
            await self.invoice_repo.delete(invoice)

            # Step 5: Commit transaction
            await self.uow.commit()
            logger.info(
                f"Deleted invoice {invoice.invoice_number} (id={command.invoice_id}), "
                f"unlinked {unlinked} lesson(s)"
            )

            return Return.ok(
                DeleteInvoiceResponseDTO(
                    invoice_id=command.invoice_id,
                    deleted_items=deleted_items,
                    unlinked_lessons=unlinked,
                )
            )

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DELETE_INVOICE_FAILED",
                    message="Failed to delete invoice",
                    reason=str(e),
                )
            )
