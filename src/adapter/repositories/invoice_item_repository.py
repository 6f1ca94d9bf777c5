"""SQLAlchemy Invoice Item Repository Implementation

Implements invoice line item persistence using SQLAlchemy async session.
"""

from typing import List
from sqlalchemy import delete, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from src.domain.invoice_item import InvoiceItem


class SqlAlchemyInvoiceItemRepository(InvoiceItemRepository):
    """
    SQLAlchemy implementation of InvoiceItemRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_invoice_id(self, invoice_id: int) -> List[InvoiceItem]:
        """
        Retrieve all line items for an invoice

        Args:
            invoice_id: Invoice ID

        Returns:
            List of InvoiceItem ordered by position
        """
        statement = (
            select(InvoiceItem)
            .where(InvoiceItem.invoice_id == invoice_id)
            .order_by(InvoiceItem.position, InvoiceItem.id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def create_many(self, items: List[InvoiceItem]) -> List[InvoiceItem]:
        """
        Create multiple line items

        Args:
            items: List of InvoiceItem entities to persist

        Returns:
            List of created InvoiceItem with generated IDs
        """
        if not items:
            return []
        self.session.add_all(items)
        await self.session.flush()
        for item in items:
            await self.session.refresh(item)
        return items

    async def delete_by_invoice_id(self, invoice_id: int) -> int:
        statement = (
            delete(InvoiceItem)
            .where(InvoiceItem.invoice_id == invoice_id)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(statement)
        return result.rowcount

    async def detach_lesson(self, lesson_id: int) -> int:
        statement = (
            update(InvoiceItem)
            .where(InvoiceItem.lesson_id == lesson_id)
            .values(lesson_id=None)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(statement)
        return result.rowcount
