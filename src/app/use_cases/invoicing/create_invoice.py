"""CreateInvoice Use Case

Creates an invoice from caller-supplied items, either with an auto-generated
number or with an imported (migrated) one.
"""

import logging
from datetime import timedelta
from src.libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.invoice_numbering import InvoiceNumberingService
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.base import utc_now
from src.domain.billing_rules import compute_totals, resolve_payment_terms
from src.domain.invoice import Invoice, InvoiceStatus
from .dtos import CreateInvoiceCommandDTO, InvoiceResponseDTO
from .invoice_builder import drafts_from_inputs, items_from_drafts, record_audit

logger = logging.getLogger(__name__)


class CreateInvoice:
    """
    Use Case: Create an invoice by hand

    Business Rules:
    1. The customer must belong to the workspace
    2. Manual numbers must be unique in the workspace and push the counter
       past their sequence
    3. Totals are derived from the items, never taken from the caller
    4. sent_at / paid_at are stamped when created directly as sent / paid

    Flow:
    1. Validate customer
    2. Issue invoice number
    3. Create invoice and items
    4. Record audit entry
    5. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        invoice_item_repo: InvoiceItemRepository,
        customer_repo: CustomerRepository,
        numbering_service: InvoiceNumberingService,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.invoice_item_repo = invoice_item_repo
        self.customer_repo = customer_repo
        self.numbering_service = numbering_service

    async def execute(self, command: CreateInvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
        """
        Execute invoice creation

        Args:
            command: CreateInvoiceCommandDTO with customer, dates and items

        Returns:
            Result[InvoiceResponseDTO]: Success with invoice details or error
        """
        try:
            # Step 1: Validate customer
            customer = await self.customer_repo.get_by_id(command.customer_id)
            if customer is None or customer.workspace_id != command.workspace_id:
                return Return.err(
                    Error(
                        code="CUSTOMER_NOT_FOUND",
                        message=f"Customer {command.customer_id} not found in workspace {command.workspace_id}",
                    )
                )

            # Step 2: Issue invoice number
            number_result = await self.numbering_service.issue(
                command.workspace_id, command.date, command.manual_invoice_number
            )
            if number_result.is_err():
                await self.uow.rollback()
                return number_result

            # Step 3: Create invoice and items
            lines = drafts_from_inputs(command.items)
            totals = compute_totals(lines)

            due_date = command.due_date
            if due_date is None:
                settings = await self.numbering_service.get_or_create_settings(command.workspace_id)
                due_date = command.date + timedelta(days=resolve_payment_terms(customer, settings))

            now = utc_now()
            invoice = await self.invoice_repo.create(
                Invoice(
                    workspace_id=command.workspace_id,
                    customer_id=command.customer_id,
                    invoice_number=number_result.value,
                    date=command.date,
                    due_date=due_date,
                    status=command.status,
                    subtotal=totals.subtotal,
                    tax_total=totals.tax_total,
                    total=totals.total,
                    notes=command.notes,
                    payment_terms=command.payment_terms,
                    sent_at=now if command.status == InvoiceStatus.SENT else None,
                    paid_at=now if command.status == InvoiceStatus.PAID else None,
                )
            )
            items = await self.invoice_item_repo.create_many(items_from_drafts(invoice.id, lines))

            # Step 4: Audit
            await record_audit(self.invoice_repo, invoice, "created", command.user_id)

            # Step 5: Commit transaction
            await self.uow.commit()
            logger.info(f"Created invoice {invoice.invoice_number} (id={invoice.id})")

            return Return.ok(InvoiceResponseDTO.from_invoice(invoice, items))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CREATE_INVOICE_FAILED",
                    message="Failed to create invoice",
                    reason=str(e),
                )
            )
