"""Invoice Domain Entity

Invoice header. Totals are always derived from the items, in minor currency
units (cents).
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, String, Text, UniqueConstraint
from src.domain.base import BaseModel, datetime_column, fk_column, id_column, utc_now


class InvoiceStatus(str, Enum):
    """Invoice status types"""
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    CANCELLED = "cancelled"
    ARCHIVED = "archived"


class Invoice(BaseModel, table=True):
    """
    Invoice - Customer invoice for lessons and other services

    Domain Rules:
    - invoice_number is unique within the workspace
    - subtotal = sum(item totals), tax_total = sum(item taxes),
      total = subtotal + tax_total (all in cents)
    - Editing and deletion are only allowed while status is draft
    - sent_at / paid_at are stamped on the first transition into sent / paid
    """

    __tablename__ = "invoices"
    __table_args__ = (
        UniqueConstraint("workspace_id", "invoice_number", name="uq_invoices_workspace_number"),
        Index("ix_invoices_workspace_status", "workspace_id", "status"),
    )

    id: Optional[int] = Field(default=None, sa_column=id_column())

    workspace_id: int = Field(sa_column=fk_column("workspaces.id", ondelete="CASCADE", index=False))

    customer_id: int = Field(sa_column=fk_column("customers.id"))

    invoice_number: str = Field(
        sa_column=Column(String(50), nullable=False),
        description="Invoice number (e.g., 25/03/1000)"
    )

    date: datetime = Field(description="Invoice date", sa_column=datetime_column())

    due_date: datetime = Field(description="Payment due date", sa_column=datetime_column())

    status: InvoiceStatus = Field(default=InvoiceStatus.DRAFT)

    subtotal: int = Field(
        default=0,
        sa_column=Column(BigInteger, nullable=False, default=0),
        description="Net amount in cents"
    )

    tax_total: int = Field(
        default=0,
        sa_column=Column(BigInteger, nullable=False, default=0),
        description="Tax amount in cents"
    )

    total: int = Field(
        default=0,
        sa_column=Column(BigInteger, nullable=False, default=0),
        description="Gross amount in cents"
    )

    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    payment_terms: Optional[str] = Field(default=None, sa_column=Column(String(100), nullable=True))

    sent_at: Optional[datetime] = Field(default=None, sa_column=datetime_column(nullable=True))

    paid_at: Optional[datetime] = Field(default=None, sa_column=datetime_column(nullable=True))

    created_at: datetime = Field(default_factory=utc_now, sa_column=datetime_column())

    updated_at: datetime = Field(default_factory=utc_now, sa_column=datetime_column())

    @property
    def is_draft(self) -> bool:
        return self.status == InvoiceStatus.DRAFT
