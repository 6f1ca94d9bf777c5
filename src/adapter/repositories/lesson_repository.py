"""SQLAlchemy Lesson Repository Implementation

Implements lesson persistence using SQLAlchemy async session.
"""

from datetime import datetime
from typing import List, Optional
from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.lesson_repository import LessonRepository
from src.domain.base import utc_now
from src.domain.lesson import Lesson


class SqlAlchemyLessonRepository(LessonRepository):
    """
    SQLAlchemy implementation of LessonRepository

    Invoice linkage is written with conditional bulk UPDATEs, so reads use
    populate_existing to avoid serving stale rows from the identity map.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, lesson: Lesson) -> Lesson:
        self.session.add(lesson)
        await self.session.flush()
        await self.session.refresh(lesson)
        return lesson

    async def get_by_id(self, lesson_id: int, for_update: bool = False) -> Optional[Lesson]:
        """
        Retrieve lesson by ID

        Args:
            lesson_id: Lesson ID
            for_update: If True, lock the row (ignored by SQLite)

        Returns:
            Lesson if found, None otherwise
        """
        stmt = (
            select(Lesson)
            .where(Lesson.id == lesson_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update(self, lesson: Lesson) -> Lesson:
        lesson.updated_at = utc_now()
        self.session.add(lesson)
        await self.session.flush()
        await self.session.refresh(lesson)
        return lesson

    async def delete(self, lesson: Lesson) -> None:
        await self.session.delete(lesson)
        await self.session.flush()

    async def get_billable_uninvoiced(
        self, customer_id: int, period_start: datetime, period_end: datetime
    ) -> List[Lesson]:
        stmt = (
            select(Lesson)
            .where(
                Lesson.customer_id == customer_id,
                Lesson.start >= period_start,
                Lesson.start <= period_end,
                Lesson.is_billable == True,  # noqa: E712
                Lesson.invoice_id.is_(None),
            )
            .order_by(Lesson.start, Lesson.id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def assign_invoice(self, lesson_ids: List[int], invoice_id: int) -> int:
        """
        Link still un-invoiced lessons to an invoice

        Returns:
            Number of rows updated
        """
        if not lesson_ids:
            return 0
        stmt = (
            update(Lesson)
            .where(Lesson.id.in_(lesson_ids), Lesson.invoice_id.is_(None))
            .values(invoice_id=invoice_id, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def unlink_invoice(self, invoice_id: int) -> int:
        stmt = (
            update(Lesson)
            .where(Lesson.invoice_id == invoice_id)
            .values(invoice_id=None, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount
