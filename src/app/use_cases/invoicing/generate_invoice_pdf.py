"""GenerateInvoicePdf Use Case

Renders an invoice with its items as a PDF document.
"""

import logging
from src.libs.result import Result, Return, Error
from src.app.repositories.company_settings_repository import CompanySettingsRepository
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.services.pdf_service import PdfService
from .dtos import InvoicePdfDTO

logger = logging.getLogger(__name__)


class GenerateInvoicePdf:
    """
    Use Case: Generate invoice PDF

    Flow:
    1. Load invoice, items, customer and settings
    2. Render PDF
    3. Return bytes with a download filename
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        invoice_item_repo: InvoiceItemRepository,
        customer_repo: CustomerRepository,
        settings_repo: CompanySettingsRepository,
        pdf_service: PdfService,
    ):
        self.invoice_repo = invoice_repo
        self.invoice_item_repo = invoice_item_repo
        self.customer_repo = customer_repo
        self.settings_repo = settings_repo
        self.pdf_service = pdf_service

    async def execute(self, invoice_id: int) -> Result[InvoicePdfDTO]:
        try:
            invoice = await self.invoice_repo.get_by_id(invoice_id)
            if invoice is None:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice {invoice_id} not found",
                    )
                )

            customer = await self.customer_repo.get_by_id(invoice.customer_id)
            if customer is None:
                return Return.err(
                    Error(
                        code="CUSTOMER_NOT_FOUND",
                        message=f"Customer {invoice.customer_id} not found",
                    )
                )

            items = await self.invoice_item_repo.get_by_invoice_id(invoice.id)
            settings = await self.settings_repo.get_by_workspace_id(invoice.workspace_id)

            content = self.pdf_service.generate_invoice(invoice, items, customer, settings)
            filename = f"invoice_{invoice.invoice_number.replace('/', '-')}.pdf"
            logger.info(f"Rendered PDF for invoice {invoice.invoice_number} ({len(content)} bytes)")

            return Return.ok(
                InvoicePdfDTO(
                    invoice_number=invoice.invoice_number,
                    filename=filename,
                    content=content,
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="GENERATE_INVOICE_PDF_FAILED",
                    message="Failed to generate invoice PDF",
                    reason=str(e),
                )
            )
