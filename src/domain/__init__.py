from .base import BaseModel, utc_now
from .workspace import Workspace
from .user import User, Actor
from .customer import Customer
from .student import Student
from .company_settings import CompanySettings
from .lesson_state import (
    LessonStatus,
    LessonState,
    Scheduled,
    Attended,
    Missed,
    CancelledOnTime,
    CancelledLate,
)
from .lesson import Lesson, LessonType
from .revenue_ledger import RevenueLedgerEntry
from .invoice import Invoice, InvoiceStatus
from .invoice_item import InvoiceItem
from .invoice_audit_log import InvoiceAuditLog

__all__ = [
    "BaseModel",
    "utc_now",
    "Workspace",
    "User",
    "Actor",
    "Customer",
    "Student",
    "CompanySettings",
    "LessonStatus",
    "LessonState",
    "Scheduled",
    "Attended",
    "Missed",
    "CancelledOnTime",
    "CancelledLate",
    "Lesson",
    "LessonType",
    "RevenueLedgerEntry",
    "Invoice",
    "InvoiceStatus",
    "InvoiceItem",
    "InvoiceAuditLog",
]
