"""SQLAlchemy Revenue Ledger Repository Implementation"""

from decimal import Decimal
from typing import List, Optional
from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.revenue_ledger_repository import RevenueLedgerRepository
from src.domain.base import utc_now
from src.domain.revenue_ledger import RevenueLedgerEntry


class SqlAlchemyRevenueLedgerRepository(RevenueLedgerRepository):
    """
    SQLAlchemy implementation of RevenueLedgerRepository

    Uses SELECT FOR UPDATE (PostgreSQL) to serialize mutations of the same
    month entry.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_for_period(
        self, workspace_id: int, year: int, month: int, for_update: bool = False
    ) -> Optional[RevenueLedgerEntry]:
        stmt = (
            select(RevenueLedgerEntry)
            .where(
                RevenueLedgerEntry.workspace_id == workspace_id,
                RevenueLedgerEntry.year == year,
                RevenueLedgerEntry.month == month,
            )
            .execution_options(populate_existing=True)
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, entry: RevenueLedgerEntry) -> RevenueLedgerEntry:
        self.session.add(entry)
        await self.session.flush()
        await self.session.refresh(entry)
        return entry

    async def update_amount(self, entry_id: int, amount: Decimal) -> None:
        stmt = (
            update(RevenueLedgerEntry)
            .where(RevenueLedgerEntry.id == entry_id)
            .values(amount=amount, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)

    async def list_for_year(self, workspace_id: int, year: int) -> List[RevenueLedgerEntry]:
        stmt = (
            select(RevenueLedgerEntry)
            .where(
                RevenueLedgerEntry.workspace_id == workspace_id,
                RevenueLedgerEntry.year == year,
            )
            .order_by(RevenueLedgerEntry.month)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
