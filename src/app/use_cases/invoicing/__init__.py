"""Invoicing use cases"""
from .create_invoice import CreateInvoice
from .update_invoice import UpdateInvoice
from .update_invoice_status import UpdateInvoiceStatus
from .delete_invoice import DeleteInvoice
from .get_invoice import GetInvoice
from .generate_monthly_invoices import GenerateMonthlyInvoices
from .generate_lesson_invoice import GenerateLessonInvoice
from .export_invoices import ExportInvoices
from .generate_invoice_pdf import GenerateInvoicePdf
from .lesson_invoicer import LessonInvoicer
from .dtos import (
    InvoiceItemInputDTO,
    CreateInvoiceCommandDTO,
    UpdateInvoiceCommandDTO,
    UpdateInvoiceStatusCommandDTO,
    DeleteInvoiceCommandDTO,
    GenerateMonthlyInvoicesCommandDTO,
    GenerateLessonInvoiceCommandDTO,
    ExportInvoicesCommandDTO,
    InvoiceItemDTO,
    InvoiceResponseDTO,
    MonthlyInvoicesResultDTO,
    DeleteInvoiceResponseDTO,
    ExportInvoicesResponseDTO,
    InvoicePdfDTO,
    WorkspaceRunFailureDTO,
    MonthlyInvoicingRunResultDTO,
)

__all__ = [
    "CreateInvoice",
    "UpdateInvoice",
    "UpdateInvoiceStatus",
    "DeleteInvoice",
    "GetInvoice",
    "GenerateMonthlyInvoices",
    "GenerateLessonInvoice",
    "ExportInvoices",
    "GenerateInvoicePdf",
    "LessonInvoicer",
    "InvoiceItemInputDTO",
    "CreateInvoiceCommandDTO",
    "UpdateInvoiceCommandDTO",
    "UpdateInvoiceStatusCommandDTO",
    "DeleteInvoiceCommandDTO",
    "GenerateMonthlyInvoicesCommandDTO",
    "GenerateLessonInvoiceCommandDTO",
    "ExportInvoicesCommandDTO",
    "InvoiceItemDTO",
    "InvoiceResponseDTO",
    "MonthlyInvoicesResultDTO",
    "DeleteInvoiceResponseDTO",
    "ExportInvoicesResponseDTO",
    "InvoicePdfDTO",
    "WorkspaceRunFailureDTO",
    "MonthlyInvoicingRunResultDTO",
]
