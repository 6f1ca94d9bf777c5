import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.revenue.get_revenue_overview import GetRevenueOverview
from src.domain.revenue_ledger import RevenueLedgerEntry


def entry(month, amount):
    return RevenueLedgerEntry(id=month, workspace_id=1, year=2025, month=month, amount=Decimal(amount))


@pytest.mark.asyncio
class TestGetRevenueOverview:
    async def test_fills_missing_months_with_zero(self):
        """
        Given: Ledger entries for March and November only
        When: The 2025 overview is requested
        Then: All twelve months are listed, the rest at 0, and the total sums them
        """
        repo = MagicMock()
        repo.list_for_year = AsyncMock(return_value=[entry(3, "320.00"), entry(11, "80.50")])

        result = await GetRevenueOverview(repo).execute(workspace_id=1, year=2025)

        assert result.is_ok()
        overview = result.value
        assert [m.month for m in overview.months] == list(range(1, 13))
        assert overview.months[2].amount == Decimal("320.00")
        assert overview.months[10].amount == Decimal("80.50")
        assert overview.months[0].amount == Decimal("0")
        assert overview.total == Decimal("400.50")
        repo.list_for_year.assert_awaited_once_with(1, 2025)

    async def test_empty_year(self):
        repo = MagicMock()
        repo.list_for_year = AsyncMock(return_value=[])

        result = await GetRevenueOverview(repo).execute(workspace_id=1, year=2024)

        assert result.is_ok()
        assert result.value.total == Decimal("0")
        assert all(m.amount == 0 for m in result.value.months)

    async def test_repository_failure(self):
        repo = MagicMock()
        repo.list_for_year = AsyncMock(side_effect=RuntimeError("timeout"))

        result = await GetRevenueOverview(repo).execute(workspace_id=1, year=2025)

        assert result.is_err()
        assert result.error.code == "GET_REVENUE_OVERVIEW_FAILED"
