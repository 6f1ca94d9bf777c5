from .lesson_repository import LessonRepository
from .customer_repository import CustomerRepository
from .workspace_repository import WorkspaceRepository
from .user_repository import UserRepository
from .student_repository import StudentRepository
from .company_settings_repository import CompanySettingsRepository
from .revenue_ledger_repository import RevenueLedgerRepository
from .invoice_repository import InvoiceRepository
from .invoice_item_repository import InvoiceItemRepository

__all__ = [
    "LessonRepository",
    "CustomerRepository",
    "WorkspaceRepository",
    "UserRepository",
    "StudentRepository",
    "CompanySettingsRepository",
    "RevenueLedgerRepository",
    "InvoiceRepository",
    "InvoiceItemRepository",
]
