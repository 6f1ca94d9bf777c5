"""Invoice Repository Interface

Invoice headers are stored here; line items live in InvoiceItemRepository.
"""

from abc import ABC, abstractmethod
from typing import Optional, List
from src.domain.invoice import Invoice
from src.domain.invoice_audit_log import InvoiceAuditLog


class InvoiceRepository(ABC):
    """
    Repository interface for Invoice persistence

    Provides access to invoice headers and their audit trail.
    """

    @abstractmethod
    async def create(self, invoice: Invoice) -> Invoice:
        """Persist an invoice header and return it with its ID"""
        pass

    @abstractmethod
    async def get_by_id(self, invoice_id: int) -> Optional[Invoice]:
        pass

    @abstractmethod
    async def get_by_ids(self, invoice_ids: List[int]) -> List[Invoice]:
        """
        Retrieve several invoices, preserving the order of ``invoice_ids``

        Unknown IDs are skipped.
        """
        pass

    @abstractmethod
    async def get_by_invoice_number(self, workspace_id: int, invoice_number: str) -> Optional[Invoice]:
        """
        Retrieve invoice by number within a workspace

        Args:
            workspace_id: Workspace identifier
            invoice_number: Invoice number

        Returns:
            Invoice if found, None otherwise
        """
        pass

    @abstractmethod
    async def update(self, invoice: Invoice) -> Invoice:
        pass

    @abstractmethod
    async def delete(self, invoice: Invoice) -> None:
        pass

    @abstractmethod
    async def add_audit_entry(self, entry: InvoiceAuditLog) -> None:
        pass
