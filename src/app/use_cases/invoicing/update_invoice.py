"""UpdateInvoice Use Case

Edits a draft invoice. Items are replaced wholesale and totals re-derived.
"""

import logging
from src.libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.base import utc_now
from src.domain.billing_rules import compute_totals
from .dtos import UpdateInvoiceCommandDTO, InvoiceResponseDTO
from .invoice_builder import drafts_from_inputs, items_from_drafts, record_audit

logger = logging.getLogger(__name__)


class UpdateInvoice:
    """
    Use Case: Edit a draft invoice

    Business Rules:
    1. Only draft invoices can be edited
    2. The invoice number never changes
    3. The customer must belong to the invoice's workspace
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        invoice_item_repo: InvoiceItemRepository,
        customer_repo: CustomerRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.invoice_item_repo = invoice_item_repo
        self.customer_repo = customer_repo

    async def execute(self, command: UpdateInvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
        try:
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
                        message="Cannot edit non-draft invoices. Create a credit note or new invoice instead.",
                        reason=f"Invoice status is {invoice.status.value}",
                    )
                )

            customer = await self.customer_repo.get_by_id(command.customer_id)
            if customer is None or customer.workspace_id != invoice.workspace_id:
                return Return.err(
                    Error(
                        code="CUSTOMER_NOT_FOUND",
                        message=f"Customer {command.customer_id} not found in workspace {invoice.workspace_id}",
                    )
                )

            lines = drafts_from_inputs(command.items)
            totals = compute_totals(lines)

            invoice.customer_id = command.customer_id
            invoice.date = command.date
            invoice.due_date = command.due_date
            invoice.notes = command.notes
            invoice.payment_terms = command.payment_terms
            invoice.subtotal = totals.subtotal
            invoice.tax_total = totals.tax_total
            invoice.total = totals.total
            invoice.updated_at = utc_now()
            invoice = await self.invoice_repo.update(invoice)

            await self.invoice_item_repo.delete_by_invoice_id(invoice.id)
            items = await self.invoice_item_repo.create_many(items_from_drafts(invoice.id, lines))

            await record_audit(self.invoice_repo, invoice, "updated", command.user_id)
            await self.uow.commit()
            logger.info(f"Updated invoice {invoice.invoice_number} (id={invoice.id})")

            return Return.ok(InvoiceResponseDTO.from_invoice(invoice, items))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_INVOICE_FAILED",
                    message="Failed to update invoice",
                    reason=str(e),
                )
            )
