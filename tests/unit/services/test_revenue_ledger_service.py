"""Unit tests for RevenueLedgerService

Tests cover:
- Lazy creation of the month entry on first credit
- Credits accumulate into the month of the lesson start
- Debits floor at zero
- Debits without an entry or with non-positive amounts are ignored
"""

import pytest
from datetime import datetime, timedelta
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.services.revenue_ledger import RevenueLedgerService
from src.domain.revenue_ledger import RevenueLedgerEntry


@pytest.fixture
def mock_ledger_repo():
    repo = MagicMock()
    repo.get_for_period = AsyncMock(return_value=None)
    repo.create = AsyncMock(side_effect=lambda entry: entry)
    repo.update_amount = AsyncMock()
    return repo


@pytest.fixture
def mock_customer_repo(customer):
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=customer)
    return repo


@pytest.fixture
def mock_settings_repo():
    repo = MagicMock()
    repo.get_by_workspace_id = AsyncMock(return_value=None)
    return repo


@pytest.fixture
def service(mock_ledger_repo, mock_customer_repo, mock_settings_repo):
    return RevenueLedgerService(mock_ledger_repo, mock_customer_repo, mock_settings_repo)


def existing_entry(amount):
    return RevenueLedgerEntry(id=5, workspace_id=1, year=2025, month=3, amount=Decimal(amount))


@pytest.mark.asyncio
class TestCredit:
    async def test_first_credit_creates_entry(self, service, mock_ledger_repo):
        """
        Given: No ledger entry for March 2025
        When: 60 is credited for a lesson starting in March
        Then: An entry with amount 60 is created
        """
        result = await service.credit(1, datetime(2025, 3, 14, 10), Decimal("60"), user_id=7)

        assert result == Decimal("60")
        created = mock_ledger_repo.create.call_args[0][0]
        assert (created.workspace_id, created.year, created.month) == (1, 2025, 3)
        assert created.user_id == 7
        assert created.notes == "Auto-calculated from lessons"
        mock_ledger_repo.update_amount.assert_not_called()

    async def test_credit_adds_to_existing_entry(self, service, mock_ledger_repo):
        mock_ledger_repo.get_for_period.return_value = existing_entry("100")

        result = await service.credit(1, datetime(2025, 3, 1), Decimal("40"))

        assert result == Decimal("140")
        mock_ledger_repo.update_amount.assert_called_once_with(5, Decimal("140"))

    async def test_negative_credit_is_ignored(self, service, mock_ledger_repo):
        assert await service.credit(1, datetime(2025, 3, 1), Decimal("-1")) is None
        mock_ledger_repo.get_for_period.assert_not_called()

    async def test_credit_lesson_uses_customer_rate(self, service, mock_ledger_repo, make_lesson):
        lesson = make_lesson(duration=timedelta(minutes=90))

        result = await service.credit_lesson(lesson)

        assert result == Decimal("60")
        mock_ledger_repo.get_for_period.assert_called_once_with(
            1, lesson.start.year, lesson.start.month, for_update=True
        )


@pytest.mark.asyncio
class TestDebit:
    async def test_debit_subtracts(self, service, mock_ledger_repo):
        mock_ledger_repo.get_for_period.return_value = existing_entry("100")

        result = await service.debit(1, datetime(2025, 3, 1), Decimal("40"))

        assert result == Decimal("60")
        mock_ledger_repo.update_amount.assert_called_once_with(5, Decimal("60"))

    async def test_debit_floors_at_zero(self, service, mock_ledger_repo):
        """
        Given: A month entry of 30
        When: 50 is debited
        Then: The amount becomes 0, never negative
        """
        mock_ledger_repo.get_for_period.return_value = existing_entry("30")

        result = await service.debit(1, datetime(2025, 3, 1), Decimal("50"))

        assert result == Decimal("0")
        mock_ledger_repo.update_amount.assert_called_once_with(5, Decimal("0"))

    async def test_debit_without_entry_is_noop(self, service, mock_ledger_repo):
        result = await service.debit(1, datetime(2025, 3, 1), Decimal("50"))

        assert result is None
        mock_ledger_repo.create.assert_not_called()
        mock_ledger_repo.update_amount.assert_not_called()

    async def test_zero_debit_is_noop(self, service, mock_ledger_repo):
        assert await service.debit(1, datetime(2025, 3, 1), Decimal("0")) is None
        mock_ledger_repo.get_for_period.assert_not_called()
