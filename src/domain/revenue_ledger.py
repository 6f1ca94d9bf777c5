"""Revenue Ledger Domain Entity

Advisory monthly income aggregate per workspace. Fed by lesson scheduling
(credit) and on-time cancellations (debit). Invoices, not this table, are the
authoritative record of billed revenue.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import CheckConstraint, Numeric, String, UniqueConstraint
from src.domain.base import BaseModel, datetime_column, fk_column, id_column, utc_now


class RevenueLedgerEntry(BaseModel, table=True):
    """
    Revenue Ledger Entry - Projected income for one workspace month

    Domain Rules:
    - One entry per (workspace_id, year, month)
    - amount never goes below 0
    - Created lazily on the first credit for the month, never deleted
    - The month is the calendar month of the lesson start, not of the mutation
    """

    __tablename__ = "revenue_ledger"
    __table_args__ = (
        UniqueConstraint("workspace_id", "year", "month", name="uq_revenue_ledger_period"),
        CheckConstraint("amount >= 0", name="revenue_amount_non_negative"),
        CheckConstraint("month >= 1 AND month <= 12", name="revenue_month_range"),
    )

    id: Optional[int] = Field(default=None, sa_column=id_column())

    workspace_id: int = Field(sa_column=fk_column("workspaces.id", ondelete="CASCADE"))

    user_id: Optional[int] = Field(
        default=None,
        sa_column=fk_column("users.id", nullable=True, index=False),
        description="User whose lesson created the entry"
    )

    year: int = Field(description="Calendar year of the lesson start")

    month: int = Field(description="Calendar month (1-12) of the lesson start")

    amount: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(12, 2), nullable=False, default=0),
        description="Accumulated projected revenue in major units (>= 0)"
    )

    notes: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))

    created_at: datetime = Field(default_factory=utc_now, sa_column=datetime_column())

    updated_at: datetime = Field(default_factory=utc_now, sa_column=datetime_column())
