"""Company Settings Domain Entity

Per-workspace invoicing settings, including the invoice number counter.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import CheckConstraint, Numeric, String
from src.domain.base import BaseModel, datetime_column, fk_column, id_column, utc_now

DEFAULT_NEXT_INVOICE_NUMBER = 1000
DEFAULT_TAX_RATE = Decimal("19")
DEFAULT_PAYMENT_TERMS_DAYS = 14


class CompanySettings(BaseModel, table=True):
    """
    Company Settings - Invoicing defaults and counter for a workspace

    Domain Rules:
    - One settings row per workspace (workspace_id is unique)
    - next_invoice_number only ever increases
    - Created lazily with defaults the first time an invoice number is issued
    """

    __tablename__ = "company_settings"
    __table_args__ = (
        CheckConstraint("next_invoice_number > 0", name="next_invoice_number_positive"),
    )

    id: Optional[int] = Field(default=None, sa_column=id_column())

    workspace_id: int = Field(
        sa_column=fk_column("workspaces.id", ondelete="CASCADE", unique=True),
        description="Workspace (unique - one settings row per workspace)"
    )

    company_name: str = Field(
        default="My Company",
        sa_column=Column(String(255), nullable=False, default="My Company"),
    )

    invoice_prefix: str = Field(
        default="",
        sa_column=Column(String(20), nullable=False, default=""),
        description="Prepended to auto-generated invoice numbers"
    )

    next_invoice_number: int = Field(
        default=DEFAULT_NEXT_INVOICE_NUMBER,
        description="Sequence number the next auto-generated invoice receives"
    )

    default_payment_terms_days: int = Field(default=DEFAULT_PAYMENT_TERMS_DAYS)

    default_tax_rate: Decimal = Field(
        default=DEFAULT_TAX_RATE,
        sa_column=Column(Numeric(5, 2), nullable=False, default=DEFAULT_TAX_RATE),
        description="Tax rate in percent"
    )

    default_hourly_rate: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(10, 2), nullable=True),
        description="Fallback hourly rate in major units"
    )

    created_at: datetime = Field(default_factory=utc_now, sa_column=datetime_column())

    updated_at: datetime = Field(default_factory=utc_now, sa_column=datetime_column())
