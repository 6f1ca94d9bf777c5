"""Data Transfer Objects for Revenue Use Cases"""

from decimal import Decimal
from typing import List
from pydantic import BaseModel, Field


class MonthlyRevenueDTO(BaseModel):
    month: int = Field(..., ge=1, le=12)
    amount: Decimal = Field(..., description="Projected revenue in major units")


class RevenueOverviewDTO(BaseModel):
    """
    Response DTO for the yearly revenue overview

    Always contains twelve months; months without a ledger entry are 0.
    """

    workspace_id: int
    year: int
    months: List[MonthlyRevenueDTO]
    total: Decimal
