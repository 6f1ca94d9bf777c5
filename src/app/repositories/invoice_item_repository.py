"""Invoice Item Repository Interface

Defines the contract for invoice line item persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.invoice_item import InvoiceItem


class InvoiceItemRepository(ABC):
    """
    Repository interface for InvoiceItem persistence

    Items are never edited in place: an edit deletes and re-creates them.
    """

    @abstractmethod
    async def get_by_invoice_id(self, invoice_id: int) -> List[InvoiceItem]:
        """
        Retrieve all line items for an invoice, ordered by position

        Args:
            invoice_id: Invoice ID

        Returns:
            List of InvoiceItem
        """
        pass

    @abstractmethod
    async def create_many(self, items: List[InvoiceItem]) -> List[InvoiceItem]:
        pass

    @abstractmethod
    async def delete_by_invoice_id(self, invoice_id: int) -> int:
        """
        Delete all line items of an invoice

        Returns:
            Number of items deleted
        """
        pass

    @abstractmethod
    async def detach_lesson(self, lesson_id: int) -> int:
        """
        Remove the lesson back-reference from every item generated from it

        The items themselves, and the invoice totals, are left untouched.

        Returns:
            Number of items detached
        """
        pass
