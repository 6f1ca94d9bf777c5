"""UpdateInvoiceStatus Use Case"""

import logging
from src.libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.base import utc_now
from src.domain.invoice import InvoiceStatus
from .dtos import UpdateInvoiceStatusCommandDTO, InvoiceResponseDTO
from .invoice_builder import record_audit

logger = logging.getLogger(__name__)


class UpdateInvoiceStatus:
    """
    Use Case: Change the status of an invoice (e.g. draft -> sent)

    sent_at and paid_at are stamped the first time the invoice enters sent
    or paid and are kept afterwards.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        invoice_item_repo: InvoiceItemRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.invoice_item_repo = invoice_item_repo

    async def execute(self, command: UpdateInvoiceStatusCommandDTO) -> Result[InvoiceResponseDTO]:
        try:
            invoice = await self.invoice_repo.get_by_id(command.invoice_id)
            if invoice is None:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice {command.invoice_id} not found",
                    )
                )

            now = utc_now()
            previous = invoice.status
            invoice.status = command.status
            if command.status == InvoiceStatus.SENT and invoice.sent_at is None:
                invoice.sent_at = now
            if command.status == InvoiceStatus.PAID and invoice.paid_at is None:
                invoice.paid_at = now
            invoice.updated_at = now
            invoice = await self.invoice_repo.update(invoice)

            await record_audit(
                self.invoice_repo, invoice, f"status_change_to_{command.status.value}", command.user_id
            )
            await self.uow.commit()
            logger.info(
                f"Invoice {invoice.invoice_number} status {previous.value} -> {invoice.status.value}"
            )

            items = await self.invoice_item_repo.get_by_invoice_id(invoice.id)
            return Return.ok(InvoiceResponseDTO.from_invoice(invoice, items))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_INVOICE_STATUS_FAILED",
                    message="Failed to update invoice status",
                    reason=str(e),
                )
            )
