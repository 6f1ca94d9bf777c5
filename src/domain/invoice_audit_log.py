"""Invoice Audit Log Domain Entity

Append-only trail of invoice mutations.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import String
from src.domain.base import BaseModel, datetime_column, IdType, id_column, utc_now


class InvoiceAuditLog(BaseModel, table=True):
    __tablename__ = "invoice_audit_log"
    __table_args__ = (
        Index("ix_invoice_audit_log_invoice", "invoice_id"),
    )

    id: Optional[int] = Field(default=None, sa_column=id_column())

    workspace_id: int = Field(sa_column=Column(IdType, nullable=False))

    # Kept without a foreign key so entries survive invoice deletion
    invoice_id: int = Field(sa_column=Column(IdType, nullable=False))

    user_id: Optional[int] = Field(default=None, sa_column=Column(IdType, nullable=True))

    action: str = Field(
        sa_column=Column(String(50), nullable=False),
        description="created, updated, deleted or status_change_to_<status>"
    )

    timestamp: datetime = Field(default_factory=utc_now, sa_column=datetime_column())
