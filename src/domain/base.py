"""Shared base for domain entities"""

from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import BigInteger, Column, DateTime, ForeignKey, Integer
from sqlmodel import SQLModel

# SQLite only auto-increments INTEGER PRIMARY KEY columns
IdType = BigInteger().with_variant(Integer(), "sqlite")


class BaseModel(SQLModel):
    pass


def utc_now() -> datetime:
    """Naive UTC timestamp, the convention used for every stored datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def id_column() -> Column:
    return Column(IdType, primary_key=True, autoincrement=True)


def datetime_column(nullable: bool = False, index: bool = False) -> Column:
    # Explicitly naive; stored values are UTC by convention
    return Column(DateTime(timezone=False), nullable=nullable, index=index)


def fk_column(
    target: str,
    nullable: bool = False,
    ondelete: Optional[str] = None,
    index: bool = True,
    unique: bool = False,
) -> Column:
    return Column(
        IdType, ForeignKey(target, ondelete=ondelete), nullable=nullable, index=index, unique=unique
    )


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Convert an aware datetime to naive UTC; naive values are taken as UTC."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
