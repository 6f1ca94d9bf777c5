"""SQLAlchemy Invoice Repository Implementation

Invoice headers and the append-only audit log share one session, so an
audit entry commits or rolls back with the change it records.
"""

from typing import Optional, List
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.base import utc_now
from src.domain.invoice import Invoice
from src.domain.invoice_audit_log import InvoiceAuditLog


class SqlAlchemyInvoiceRepository(InvoiceRepository):
    """SQLAlchemy implementation of InvoiceRepository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, invoice: Invoice) -> Invoice:
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def get_by_id(self, invoice_id: int) -> Optional[Invoice]:
        stmt = select(Invoice).where(Invoice.id == invoice_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_ids(self, invoice_ids: List[int]) -> List[Invoice]:
        if not invoice_ids:
            return []
        stmt = select(Invoice).where(Invoice.id.in_(invoice_ids))
        result = await self.session.execute(stmt)
        by_id = {invoice.id: invoice for invoice in result.scalars().all()}
        return [by_id[invoice_id] for invoice_id in invoice_ids if invoice_id in by_id]

    async def get_by_invoice_number(self, workspace_id: int, invoice_number: str) -> Optional[Invoice]:
        """
        Look up an invoice number within one workspace

        Numbers are only unique per workspace; two workspaces may both
        issue "25/03/1000".
        """
        stmt = select(Invoice).where(
            Invoice.workspace_id == workspace_id,
            Invoice.invoice_number == invoice_number,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update(self, invoice: Invoice) -> Invoice:
        invoice.updated_at = utc_now()
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def delete(self, invoice: Invoice) -> None:
        await self.session.delete(invoice)
        await self.session.flush()

    async def add_audit_entry(self, entry: InvoiceAuditLog) -> None:
        self.session.add(entry)
        await self.session.flush()
