"""GetInvoice Use Case"""

from src.libs.result import Result, Return, Error
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from .dtos import InvoiceResponseDTO


class GetInvoice:
    def __init__(self, invoice_repo: InvoiceRepository, invoice_item_repo: InvoiceItemRepository):
        self.invoice_repo = invoice_repo
        self.invoice_item_repo = invoice_item_repo

    async def execute(self, invoice_id: int) -> Result[InvoiceResponseDTO]:
        try:
            invoice = await self.invoice_repo.get_by_id(invoice_id)
            if invoice is None:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice {invoice_id} not found",
                    )
                )

            items = await self.invoice_item_repo.get_by_invoice_id(invoice_id)
            return Return.ok(InvoiceResponseDTO.from_invoice(invoice, items))

        except Exception as e:
            return Return.err(
                Error(
                    code="GET_INVOICE_FAILED",
                    message="Failed to retrieve invoice",
                    reason=str(e),
                )
            )
