"""PDF Generation Service Interface

Defines the contract for PDF generation operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.domain.company_settings import CompanySettings
from src.domain.customer import Customer
from src.domain.invoice import Invoice
from src.domain.invoice_item import InvoiceItem


class PdfService(ABC):
    """
    Service interface for PDF generation

    Provides PDF generation capabilities for invoices.
    """

    @abstractmethod
    def generate_invoice(
        self,
        invoice: Invoice,
        items: List[InvoiceItem],
        customer: Customer,
        settings: Optional[CompanySettings] = None,
    ) -> bytes:
        """
        Generate an invoice PDF

        Args:
            invoice: Invoice header with totals
            items: Line items, ordered by position
            customer: Billed customer
            settings: Workspace settings (company name), if any

        Returns:
            PDF document as bytes
        """
        pass
