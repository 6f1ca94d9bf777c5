"""Workspace Domain Entity

The tenant boundary. Lessons, customers, invoices, the invoice counter and
the revenue ledger are all scoped to a workspace.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import String
from src.domain.base import BaseModel, datetime_column, id_column, utc_now


class Workspace(BaseModel, table=True):
    __tablename__ = "workspaces"

    id: Optional[int] = Field(default=None, sa_column=id_column())

    name: str = Field(sa_column=Column(String(255), nullable=False))

    created_at: datetime = Field(default_factory=utc_now, sa_column=datetime_column())
