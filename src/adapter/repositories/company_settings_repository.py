"""SQLAlchemy Company Settings Repository Implementation

The invoice counter is only ever changed with conditional UPDATE statements.
Under READ COMMITTED (PostgreSQL) a concurrent increment makes the WHERE
clause miss, so exactly one issuer wins each number.
"""

from typing import Optional
from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.company_settings_repository import CompanySettingsRepository
from src.domain.base import utc_now
from src.domain.company_settings import CompanySettings


class SqlAlchemyCompanySettingsRepository(CompanySettingsRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_workspace_id(self, workspace_id: int) -> Optional[CompanySettings]:
        stmt = (
            select(CompanySettings)
            .where(CompanySettings.workspace_id == workspace_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, settings: CompanySettings) -> CompanySettings:
        self.session.add(settings)
        await self.session.flush()
        await self.session.refresh(settings)
        return settings

    async def compare_and_increment(self, workspace_id: int, expected: int) -> bool:
        """
        UPDATE ... SET next = next + 1 WHERE next = expected

        Returns:
            True if exactly one row was updated
        """
        stmt = (
            update(CompanySettings)
            .where(
                CompanySettings.workspace_id == workspace_id,
                CompanySettings.next_invoice_number == expected,
            )
            .values(
                next_invoice_number=CompanySettings.next_invoice_number + 1,
                updated_at=utc_now(),
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def advance_counter(self, workspace_id: int, next_number: int) -> bool:
        stmt = (
            update(CompanySettings)
            .where(
                CompanySettings.workspace_id == workspace_id,
                CompanySettings.next_invoice_number < next_number,
            )
            .values(next_invoice_number=next_number, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1
