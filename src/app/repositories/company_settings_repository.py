"""Company Settings Repository Interface

Defines the contract for per-workspace invoicing settings, including the
invoice number counter.
"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.company_settings import CompanySettings


class CompanySettingsRepository(ABC):
    """
    Repository interface for CompanySettings persistence

    The invoice counter is never written with a plain read-modify-write.
    compare_and_increment() and advance_counter() are conditional updates,
    so a concurrent issuer can never hand out the same number twice.
    """

    @abstractmethod
    async def get_by_workspace_id(self, workspace_id: int) -> Optional[CompanySettings]:
        """
        Retrieve settings for a workspace

        Args:
            workspace_id: Workspace identifier

        Returns:
            CompanySettings if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, settings: CompanySettings) -> CompanySettings:
        pass

    @abstractmethod
    async def compare_and_increment(self, workspace_id: int, expected: int) -> bool:
        """
        Advance the counter by one if it still holds ``expected``

        Args:
            workspace_id: Workspace identifier
            expected: Counter value the caller read

        Returns:
            True if the caller now owns ``expected``, False if another
            issuer got there first
        """
        pass

    @abstractmethod
    async def advance_counter(self, workspace_id: int, next_number: int) -> bool:
        """
        Move the counter forward to ``next_number``

        The counter is only changed while it is below ``next_number``; it
        never moves backwards.

        Returns:
            True if the counter was advanced
        """
        pass
