"""Data Transfer Objects for Invoicing Use Cases

Pydantic models for command inputs and response outputs. All money fields
are integer cents.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator
from src.domain.base import to_naive_utc
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_item import InvoiceItem

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class InvoiceItemInputDTO(BaseModel):
    """
    A line item supplied by the caller
    """

    description: str = Field(..., min_length=1, max_length=255)

    quantity: Decimal = Field(..., ge=0, description="Hours, lessons or pieces")

    unit: str = Field(..., min_length=1, max_length=20)

    unit_price: int = Field(..., ge=0, description="Price per unit in cents")

    tax_rate: Decimal = Field(..., ge=0, le=100, description="Tax rate in percent")

    service_date: Optional[date] = Field(default=None)

    start_time: Optional[str] = Field(default=None, pattern=TIME_PATTERN)

    end_time: Optional[str] = Field(default=None, pattern=TIME_PATTERN)

    lesson_id: Optional[int] = Field(default=None, description="Lesson the line bills")


class _InvoiceDatesMixin(BaseModel):
    @field_validator("date", "due_date", check_fields=False)
    @classmethod
    def normalize_to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value)


class CreateInvoiceCommandDTO(_InvoiceDatesMixin):
    """
    Command DTO for creating an invoice by hand

    Used as input to CreateInvoice use case. With manual_invoice_number set
    the invoice keeps that number (migration from another system) instead of
    drawing one from the workspace counter.
    """

    workspace_id: int = Field(..., description="Workspace identifier")

    customer_id: int = Field(..., description="Billed customer")

    date: datetime = Field(..., description="Invoice date, supplies YY/MM of the number")

    due_date: Optional[datetime] = Field(
        default=None,
        description="Payment due date (default: date + payment terms)"
    )

    items: List[InvoiceItemInputDTO] = Field(default_factory=list)

    notes: Optional[str] = Field(default=None)

    payment_terms: Optional[str] = Field(default=None, max_length=100)

    status: InvoiceStatus = Field(default=InvoiceStatus.DRAFT)

    manual_invoice_number: Optional[str] = Field(
        default=None,
        max_length=50,
        description="Existing invoice number to import (e.g. 25/09/5060)"
    )

    user_id: Optional[int] = Field(default=None, description="User recorded in the audit log")

    class Config:
        json_schema_extra = {
            "example": {
                "workspace_id": 1,
                "customer_id": 42,
                "date": "2025-09-30T00:00:00Z",
                "items": [
                    {
                        "description": "English lesson",
                        "quantity": "1.5",
                        "unit": "Hour",
                        "unit_price": 4000,
                        "tax_rate": "19",
                    }
                ],
                "manual_invoice_number": "25/09/5060",
            }
        }


class UpdateInvoiceCommandDTO(_InvoiceDatesMixin):
    """
    Command DTO for editing a draft invoice

    Items replace the existing items wholesale.
    """

    invoice_id: int

    customer_id: int

    date: datetime

    due_date: datetime

    items: List[InvoiceItemInputDTO] = Field(default_factory=list)

    notes: Optional[str] = None

    payment_terms: Optional[str] = Field(default=None, max_length=100)

    user_id: Optional[int] = None


class UpdateInvoiceStatusCommandDTO(BaseModel):
    invoice_id: int
    status: InvoiceStatus
    user_id: Optional[int] = None


class DeleteInvoiceCommandDTO(BaseModel):
    invoice_id: int
    user_id: Optional[int] = None


class GenerateMonthlyInvoicesCommandDTO(BaseModel):
    """
    Command DTO for the monthly invoice run of one workspace
    """

    workspace_id: int = Field(..., description="Workspace identifier")

    year: int = Field(..., ge=2000, le=9999)

    month: int = Field(..., ge=1, le=12, description="Calendar month (1-12)")


class GenerateLessonInvoiceCommandDTO(BaseModel):
    lesson_id: int
    user_id: Optional[int] = None


class ExportInvoicesCommandDTO(BaseModel):
    workspace_id: int
    invoice_ids: List[int] = Field(..., min_length=1)


class InvoiceItemDTO(BaseModel):
    item_id: int
    position: int
    description: str
    quantity: Decimal
    unit: str
    unit_price: int
    tax_rate: Decimal
    total: int
    service_date: Optional[date] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    lesson_id: Optional[int] = None

    @classmethod
    def from_item(cls, item: InvoiceItem) -> "InvoiceItemDTO":
        return cls(
            item_id=item.id,
            position=item.position,
            description=item.description,
            quantity=item.quantity,
            unit=item.unit,
            unit_price=item.unit_price,
            tax_rate=item.tax_rate,
            total=item.total,
            service_date=item.service_date,
            start_time=item.start_time,
            end_time=item.end_time,
            lesson_id=item.lesson_id,
        )


class InvoiceResponseDTO(BaseModel):
    """
    Response DTO for invoice operations
    """

    invoice_id: int
    workspace_id: int
    customer_id: int
    invoice_number: str
    date: datetime
    due_date: datetime
    status: InvoiceStatus
    subtotal: int = Field(..., description="Net amount in cents")
    tax_total: int = Field(..., description="Tax amount in cents")
    total: int = Field(..., description="Gross amount in cents")
    notes: Optional[str] = None
    payment_terms: Optional[str] = None
    sent_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None
    created_at: datetime
    items: List[InvoiceItemDTO] = Field(default_factory=list)

    @classmethod
    def from_invoice(cls, invoice: Invoice, items: List[InvoiceItem]) -> "InvoiceResponseDTO":
        return cls(
            invoice_id=invoice.id,
            workspace_id=invoice.workspace_id,
            customer_id=invoice.customer_id,
            invoice_number=invoice.invoice_number,
            date=invoice.date,
            due_date=invoice.due_date,
            status=invoice.status,
            subtotal=invoice.subtotal,
            tax_total=invoice.tax_total,
            total=invoice.total,
            notes=invoice.notes,
            payment_terms=invoice.payment_terms,
            sent_at=invoice.sent_at,
            paid_at=invoice.paid_at,
            created_at=invoice.created_at,
            items=[InvoiceItemDTO.from_item(item) for item in items],
        )


class MonthlyInvoicesResultDTO(BaseModel):
    """
    Result of a monthly invoice run for one workspace
    """

    workspace_id: int
    year: int
    month: int
    invoice_ids: List[int] = Field(
        default_factory=list,
        description="One invoice per customer with billable lessons"
    )
    lessons_invoiced: int = 0
    skipped_customer_ids: List[int] = Field(
        default_factory=list,
        description="Customers whose lessons were claimed by a concurrent run"
    )


class DeleteInvoiceResponseDTO(BaseModel):
    invoice_id: int
    deleted_items: int
    unlinked_lessons: int


class ExportInvoicesResponseDTO(BaseModel):
    content: str = Field(..., description="Semicolon-separated lines, CRLF terminated")
    invoice_count: int
    missing_invoice_ids: List[int] = Field(default_factory=list)


class InvoicePdfDTO(BaseModel):
    invoice_number: str
    filename: str
    content: bytes


class WorkspaceRunFailureDTO(BaseModel):
    workspace_id: int
    code: str
    message: str


class MonthlyInvoicingRunResultDTO(BaseModel):
    """
    Summary of one scheduled run over all workspaces
    """

    year: int
    month: int
    total_workspaces: int
    successful_workspaces: int
    invoices_created: int
    lessons_invoiced: int
    failures: List[WorkspaceRunFailureDTO] = Field(default_factory=list)
    execution_time_ms: int = 0
