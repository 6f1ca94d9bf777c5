"""Helpers shared by the invoicing use cases"""

from typing import Iterable, List, Optional
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.billing_rules import InvoiceLineDraft, two_places
from src.domain.invoice import Invoice
from src.domain.invoice_audit_log import InvoiceAuditLog
from src.domain.invoice_item import InvoiceItem
from .dtos import InvoiceItemInputDTO


def drafts_from_inputs(items: Iterable[InvoiceItemInputDTO]) -> List[InvoiceLineDraft]:
    return [
        InvoiceLineDraft(
            description=item.description,
            quantity=two_places(item.quantity),
            unit=item.unit,
            unit_price=item.unit_price,
            tax_rate=two_places(item.tax_rate),
            service_date=item.service_date,
            start_time=item.start_time,
            end_time=item.end_time,
            lesson_id=item.lesson_id,
        )
        for item in items
    ]


def items_from_drafts(invoice_id: int, lines: Iterable[InvoiceLineDraft]) -> List[InvoiceItem]:
    return [
        InvoiceItem(
            invoice_id=invoice_id,
            position=position,
            description=line.description,
            quantity=line.quantity,
            unit=line.unit,
            unit_price=line.unit_price,
            tax_rate=line.tax_rate,
            total=line.total,
            service_date=line.service_date,
            start_time=line.start_time,
            end_time=line.end_time,
            lesson_id=line.lesson_id,
        )
        for position, line in enumerate(lines)
    ]


async def record_audit(
    invoice_repo: InvoiceRepository, invoice: Invoice, action: str, user_id: Optional[int]
) -> None:
    await invoice_repo.add_audit_entry(
        InvoiceAuditLog(
            workspace_id=invoice.workspace_id,
            invoice_id=invoice.id,
            user_id=user_id,
            action=action,
        )
    )
