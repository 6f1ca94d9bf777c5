"""User Domain Entity

Only the identity fields the billing lifecycle needs: who acted and whether
they carry the admin role.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import String
from src.domain.base import BaseModel, datetime_column, id_column, utc_now


class User(BaseModel, table=True):
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, sa_column=id_column())

    email: str = Field(
        sa_column=Column(String(255), nullable=False, unique=True, index=True),
        description="Login e-mail (unique)"
    )

    name: str = Field(sa_column=Column(String(255), nullable=False))

    is_admin: bool = Field(
        default=False,
        description="Admins may override the cancellation policy"
    )

    created_at: datetime = Field(default_factory=utc_now, sa_column=datetime_column())


@dataclass(frozen=True)
class Actor:
    """The authenticated user performing an operation"""

    user_id: int
    is_admin: bool
