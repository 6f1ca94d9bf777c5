"""Student Domain Entity

The person attending a lesson. Only used here as the recipient of lesson
notifications.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import String
from src.domain.base import BaseModel, datetime_column, fk_column, id_column, utc_now


class Student(BaseModel, table=True):
    __tablename__ = "students"

    id: Optional[int] = Field(default=None, sa_column=id_column())

    workspace_id: int = Field(sa_column=fk_column("workspaces.id", ondelete="CASCADE"))

    customer_id: Optional[int] = Field(
        default=None, sa_column=fk_column("customers.id", nullable=True, ondelete="SET NULL")
    )

    name: str = Field(sa_column=Column(String(255), nullable=False))

    email: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))

    created_at: datetime = Field(default_factory=utc_now, sa_column=datetime_column())
