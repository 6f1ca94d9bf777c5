"""GetRevenueOverview Use Case

Reads the twelve revenue ledger months of a year.
"""

from decimal import Decimal
from src.libs.result import Result, Return, Error
from src.app.repositories.revenue_ledger_repository import RevenueLedgerRepository
from .dtos import MonthlyRevenueDTO, RevenueOverviewDTO


class GetRevenueOverview:
    def __init__(self, ledger_repo: RevenueLedgerRepository):
        self.ledger_repo = ledger_repo

    async def execute(self, workspace_id: int, year: int) -> Result[RevenueOverviewDTO]:
        try:
            entries = await self.ledger_repo.list_for_year(workspace_id, year)
            amounts = {entry.month: Decimal(str(entry.amount)) for entry in entries}

            months = [
                MonthlyRevenueDTO(month=month, amount=amounts.get(month, Decimal("0")))
                for month in range(1, 13)
            ]
            return Return.ok(
                RevenueOverviewDTO(
                    workspace_id=workspace_id,
                    year=year,
                    months=months,
                    total=sum((m.amount for m in months), Decimal("0")),
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="GET_REVENUE_OVERVIEW_FAILED",
                    message="Failed to load revenue overview",
                    reason=str(e),
                )
            )
