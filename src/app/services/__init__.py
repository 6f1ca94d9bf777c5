from .unit_of_work import UnitOfWork
from .notification_service import NotificationService, EmailNotification
from .authorization_service import AuthorizationService
from .pdf_service import PdfService
from .revenue_ledger import RevenueLedgerService
from .invoice_numbering import InvoiceNumberingService

__all__ = [
    "UnitOfWork",
    "NotificationService",
    "EmailNotification",
    "AuthorizationService",
    "PdfService",
    "RevenueLedgerService",
    "InvoiceNumberingService",
]
