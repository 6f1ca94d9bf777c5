"""Invoice Item Domain Entity

A single line on an invoice.
"""

from datetime import date
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import BigInteger, Date, Numeric, String
from src.domain.base import BaseModel, fk_column, id_column


class InvoiceItem(BaseModel, table=True):
    """
    Invoice Item - Line item within an invoice

    Domain Rules:
    - Belongs to exactly one invoice, ordered by position
    - unit_price and total are in cents, total = round(quantity * unit_price)
    - lesson_id points back at the lesson the line was generated from
    - Items are replaced wholesale when a draft invoice is edited
    """

    __tablename__ = "invoice_items"

    id: Optional[int] = Field(default=None, sa_column=id_column())

    invoice_id: int = Field(sa_column=fk_column("invoices.id", ondelete="CASCADE"))

    position: int = Field(default=0)

    description: str = Field(sa_column=Column(String(255), nullable=False))

    quantity: Decimal = Field(
        sa_column=Column(Numeric(10, 2), nullable=False),
        description="Quantity (hours or lessons)"
    )

    unit: str = Field(sa_column=Column(String(20), nullable=False))

    unit_price: int = Field(
        sa_column=Column(BigInteger, nullable=False),
        description="Price per unit in cents"
    )

    tax_rate: Decimal = Field(
        sa_column=Column(Numeric(5, 2), nullable=False),
        description="Tax rate in percent"
    )

    total: int = Field(
        sa_column=Column(BigInteger, nullable=False),
        description="Net line total in cents"
    )

    service_date: Optional[date] = Field(default=None, sa_column=Column(Date, nullable=True))

    start_time: Optional[str] = Field(default=None, sa_column=Column(String(5), nullable=True))

    end_time: Optional[str] = Field(default=None, sa_column=Column(String(5), nullable=True))

    lesson_id: Optional[int] = Field(
        default=None,
        sa_column=fk_column("lessons.id", nullable=True, ondelete="SET NULL"),
        description="Lesson this line was generated from"
    )
