from .lesson_repository import SqlAlchemyLessonRepository
from .customer_repository import SqlAlchemyCustomerRepository
from .workspace_repository import SqlAlchemyWorkspaceRepository
from .user_repository import SqlAlchemyUserRepository
from .student_repository import SqlAlchemyStudentRepository
from .company_settings_repository import SqlAlchemyCompanySettingsRepository
from .revenue_ledger_repository import SqlAlchemyRevenueLedgerRepository
from .invoice_repository import SqlAlchemyInvoiceRepository
from .invoice_item_repository import SqlAlchemyInvoiceItemRepository

__all__ = [
    "SqlAlchemyLessonRepository",
    "SqlAlchemyCustomerRepository",
    "SqlAlchemyWorkspaceRepository",
    "SqlAlchemyUserRepository",
    "SqlAlchemyStudentRepository",
    "SqlAlchemyCompanySettingsRepository",
    "SqlAlchemyRevenueLedgerRepository",
    "SqlAlchemyInvoiceRepository",
    "SqlAlchemyInvoiceItemRepository",
]
