"""ExportInvoices Use Case

Produces the bookkeeping extract handed to external accounting software.
"""

import logging
from src.libs.result import Result, Return, Error
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.billing_rules import format_export_amount
from .dtos import ExportInvoicesCommandDTO, ExportInvoicesResponseDTO

logger = logging.getLogger(__name__)

DEFAULT_REVENUE_ACCOUNT = "8400"
DEFAULT_DEBTOR_ACCOUNT = "10000"

_FIELD_BREAKERS = str.maketrans({";": ",", "\r": " ", "\n": " "})


def export_field(text: str) -> str:
    """Free text may not contain the field or record separators."""
    return (text or "").translate(_FIELD_BREAKERS).strip()


class ExportInvoices:
    """
    Use Case: Export invoices as semicolon-separated booking lines

    One line per invoice, in the order requested:
    ``{total};S;{revenue account};{debtor account};{DDMMYYYY};{number};{customer}``
    with the total in major units and a comma decimal separator. Separators in
    free text (";", CR, LF) are replaced so each invoice stays one record. Unknown IDs
    and invoices of other workspaces are reported as missing.
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        customer_repo: CustomerRepository,
        revenue_account: str = DEFAULT_REVENUE_ACCOUNT,
        debtor_account: str = DEFAULT_DEBTOR_ACCOUNT,
    ):
        self.invoice_repo = invoice_repo
        self.customer_repo = customer_repo
        self.revenue_account = revenue_account
        self.debtor_account = debtor_account

    async def execute(self, command: ExportInvoicesCommandDTO) -> Result[ExportInvoicesResponseDTO]:
        try:
            invoices = await self.invoice_repo.get_by_ids(command.invoice_ids)
            invoices = [inv for inv in invoices if inv.workspace_id == command.workspace_id]
            found = {inv.id for inv in invoices}

            customer_names = {}
            lines = []
            for invoice in invoices:
                if invoice.customer_id not in customer_names:
                    customer = await self.customer_repo.get_by_id(invoice.customer_id)
                    customer_names[invoice.customer_id] = customer.name if customer else ""

                lines.append(
                    f"{format_export_amount(invoice.total)};S;{self.revenue_account};"
                    f"{self.debtor_account};{invoice.date:%d%m%Y};{export_field(invoice.invoice_number)};"
                    f"{export_field(customer_names[invoice.customer_id])}\r\n"
                )

            missing = [invoice_id for invoice_id in command.invoice_ids if invoice_id not in found]
            if missing:
                logger.warning(f"Export skipped unknown invoice(s) {missing}")

            return Return.ok(
                ExportInvoicesResponseDTO(
                    content="".join(lines),
                    invoice_count=len(lines),
                    missing_invoice_ids=missing,
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="EXPORT_INVOICES_FAILED",
                    message="Failed to export invoices",
                    reason=str(e),
                )
            )
