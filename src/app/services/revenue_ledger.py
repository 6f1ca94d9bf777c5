"""Revenue Ledger Service

Keeps the advisory monthly income figure of a workspace in step with lesson
scheduling and cancellations.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional
from src.app.repositories.company_settings_repository import CompanySettingsRepository
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.revenue_ledger_repository import RevenueLedgerRepository
from src.domain.billing_rules import lesson_revenue
from src.domain.lesson import Lesson
from src.domain.revenue_ledger import RevenueLedgerEntry

logger = logging.getLogger(__name__)

AUTO_NOTES = "Auto-calculated from lessons"
ZERO = Decimal("0")


class RevenueLedgerService:
    """
    Credits and debits the per-month revenue ledger

    Business Rules:
    1. The ledger month is the calendar month of the lesson start
    2. credit() creates the month entry lazily
    3. debit() ignores amounts <= 0 and months without an entry
    4. The amount is floored at 0

    The service never commits: the calling use case owns the transaction.
    """

    def __init__(
        self,
        ledger_repo: RevenueLedgerRepository,
        customer_repo: CustomerRepository,
        settings_repo: CompanySettingsRepository,
    ):
        self.ledger_repo = ledger_repo
        self.customer_repo = customer_repo
        self.settings_repo = settings_repo

    async def credit(
        self, workspace_id: int, start: datetime, amount: Decimal, user_id: Optional[int] = None
    ) -> Optional[Decimal]:
        """
        Add projected revenue to the month containing ``start``

        Args:
            workspace_id: Workspace identifier
            start: Lesson start, selects the ledger month
            amount: Revenue in major units
            user_id: User recorded on a newly created entry

        Returns:
            The new month amount, or None if nothing was applied
        """
        if amount < 0:
            return None

        entry = await self.ledger_repo.get_for_period(
            workspace_id, start.year, start.month, for_update=True
        )

        if entry is None:
            entry = await self.ledger_repo.create(
                RevenueLedgerEntry(
                    workspace_id=workspace_id,
                    user_id=user_id,
                    year=start.year,
                    month=start.month,
                    amount=amount,
                    notes=AUTO_NOTES,
                )
            )
            logger.info(
                f"Created revenue ledger {workspace_id}/{start.year}-{start.month:02d} "
                f"with {amount}"
            )
            return Decimal(str(entry.amount))

        new_amount = Decimal(str(entry.amount)) + amount
        await self.ledger_repo.update_amount(entry.id, new_amount)
        logger.info(
            f"Credited {amount} to revenue ledger {workspace_id}/{start.year}-{start.month:02d}, "
            f"now {new_amount}"
        )
        return new_amount

    async def debit(self, workspace_id: int, start: datetime, amount: Decimal) -> Optional[Decimal]:
        """
        Remove projected revenue from the month containing ``start``

        Args:
            workspace_id: Workspace identifier
            start: Lesson start, selects the ledger month
            amount: Revenue in major units

        Returns:
            The new month amount, or None if nothing was applied
        """
        if amount <= 0:
            return None

        entry = await self.ledger_repo.get_for_period(
            workspace_id, start.year, start.month, for_update=True
        )
        if entry is None:
            logger.warning(
                f"No revenue ledger entry for {workspace_id}/{start.year}-{start.month:02d}, "
                f"skipping debit of {amount}"
            )
            return None

        new_amount = max(ZERO, Decimal(str(entry.amount)) - amount)
        await self.ledger_repo.update_amount(entry.id, new_amount)
        logger.info(
            f"Debited {amount} from revenue ledger {workspace_id}/{start.year}-{start.month:02d}, "
            f"now {new_amount}"
        )
        return new_amount

    async def revenue_for(self, lesson: Lesson) -> Decimal:
        """Projected revenue of a lesson at today's rates."""
        customer = await self.customer_repo.get_by_id(lesson.customer_id)
        settings = await self.settings_repo.get_by_workspace_id(lesson.workspace_id)
        return lesson_revenue(lesson, customer, settings)

    async def credit_lesson(self, lesson: Lesson) -> Optional[Decimal]:
        revenue = await self.revenue_for(lesson)
        return await self.credit(lesson.workspace_id, lesson.start, revenue, user_id=lesson.teacher_id)

    async def debit_lesson(self, lesson: Lesson) -> Optional[Decimal]:
        revenue = await self.revenue_for(lesson)
        return await self.debit(lesson.workspace_id, lesson.start, revenue)
