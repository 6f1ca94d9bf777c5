"""Integration tests for MonthlyInvoiceWorker against a real database"""

import pytest
from datetime import datetime, timedelta
from decimal import Decimal

from sqlmodel import select
from src.domain.customer import Customer
from src.domain.invoice import Invoice
from src.domain.workspace import Workspace
from src.worker.monthly_invoicing import MonthlyInvoiceWorker


@pytest.mark.asyncio
class TestMonthlyInvoiceWorker:
    async def test_bills_previous_month_for_every_workspace(self, db_session, session_factory, seed, add_lesson):
        """
        Given: Two workspaces with March lessons
        When: The worker runs on 2 April without arguments
        Then: Both workspaces get one March invoice; a second run adds none
        """
        second = Workspace(name="Nachhilfe Nord")
        db_session.add(second)
        await db_session.flush()
        other = Customer(workspace_id=second.id, name="Schmidt", default_hourly_rate=Decimal("35"))
        db_session.add(other)
        await db_session.commit()

        await add_lesson(datetime(2025, 3, 4, 15, 0))
        await add_lesson(datetime(2025, 3, 18, 15, 0), customer=other, duration=timedelta(hours=2))
        await add_lesson(datetime(2025, 4, 1, 15, 0))

        worker = MonthlyInvoiceWorker(session_factory=session_factory, clock=lambda: datetime(2025, 4, 2, 3, 0))

        result = await worker.run_once()
        rerun = await worker.run_once()

        assert (result.year, result.month) == (2025, 3)
        assert result.total_workspaces == 2
        assert result.successful_workspaces == 2
        assert result.invoices_created == 2
        assert result.lessons_invoiced == 2
        assert result.failures == []
        assert rerun.invoices_created == 0

        invoices = (await db_session.execute(select(Invoice))).scalars().all()
        assert sorted(invoice.workspace_id for invoice in invoices) == [seed["workspace"].id, second.id]
        second_invoice = next(invoice for invoice in invoices if invoice.workspace_id == second.id)
        assert second_invoice.subtotal == 7000
