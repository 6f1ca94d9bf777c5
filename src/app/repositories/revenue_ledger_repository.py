"""Revenue Ledger Repository Interface"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional
from src.domain.revenue_ledger import RevenueLedgerEntry


class RevenueLedgerRepository(ABC):
    """
    Repository interface for RevenueLedgerEntry persistence

    Entries are read with an optional row lock and then patched, so each
    credit or debit is atomic within its transaction.
    """

    @abstractmethod
    async def get_for_period(
        self, workspace_id: int, year: int, month: int, for_update: bool = False
    ) -> Optional[RevenueLedgerEntry]:
        """
        Retrieve the ledger entry for a workspace month

        Args:
            workspace_id: Workspace identifier
            year: Calendar year
            month: Calendar month (1-12)
            for_update: If True, lock the row with SELECT FOR UPDATE

        Returns:
            RevenueLedgerEntry if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, entry: RevenueLedgerEntry) -> RevenueLedgerEntry:
        pass

    @abstractmethod
    async def update_amount(self, entry_id: int, amount: Decimal) -> None:
        pass

    @abstractmethod
    async def list_for_year(self, workspace_id: int, year: int) -> List[RevenueLedgerEntry]:
        pass
