"""Customer Domain Entity

A paying customer (a family or a company). Carries the billing defaults the
invoice generator falls back on when a lesson has no fixed rate.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from sqlmodel import Field, Column
from sqlalchemy import JSON, Numeric, String
from src.domain.base import BaseModel, datetime_column, fk_column, id_column, utc_now


class Customer(BaseModel, table=True):
    """
    Customer - Billing party for lessons

    Domain Rules:
    - Belongs to exactly one workspace
    - default_hourly_rate is in major currency units (e.g. euros)
    - VAT-exempt customers are invoiced with a 0% tax rate
    - service_descriptions[0] is used as the line item description on
      generated invoices
    """

    __tablename__ = "customers"

    id: Optional[int] = Field(default=None, sa_column=id_column())

    workspace_id: int = Field(sa_column=fk_column("workspaces.id", ondelete="CASCADE"))

    name: str = Field(sa_column=Column(String(255), nullable=False))

    email: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))

    customer_number: Optional[str] = Field(default=None, sa_column=Column(String(50), nullable=True))

    default_hourly_rate: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(10, 2), nullable=True),
        description="Hourly rate in major units (None = workspace default)"
    )

    payment_terms_days: Optional[int] = Field(
        default=None,
        description="Payment terms in days (None = workspace default)"
    )

    is_vat_exempt: bool = Field(default=False)

    service_descriptions: List[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False, default=list),
        description="Invoice line description templates"
    )

    created_at: datetime = Field(default_factory=utc_now, sa_column=datetime_column())
