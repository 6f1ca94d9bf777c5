"""Request schemas for Invoice API

Pydantic models for validating incoming HTTP requests.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field
from src.app.use_cases.invoicing.dtos import InvoiceItemInputDTO
from src.domain.invoice import InvoiceStatus


class UpdateInvoiceRequestSchema(BaseModel):
    """
    Request schema for editing a draft invoice

    Used for PUT /invoices/{invoice_id} endpoint.
    """

    customer_id: int
    date: datetime
    due_date: datetime
    items: List[InvoiceItemInputDTO] = Field(default_factory=list)
    notes: Optional[str] = None
    payment_terms: Optional[str] = Field(default=None, max_length=100)
    user_id: Optional[int] = None


class InvoiceStatusRequestSchema(BaseModel):
    """
    Request schema for an invoice status change

    Used for POST /invoices/{invoice_id}/status endpoint.
    """

    status: InvoiceStatus
    user_id: Optional[int] = None

    class Config:
        json_schema_extra = {"example": {"status": "sent", "user_id": 1}}


class GenerateLessonInvoiceRequestSchema(BaseModel):
    user_id: Optional[int] = None
