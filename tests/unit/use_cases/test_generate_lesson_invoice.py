"""Unit tests for GenerateLessonInvoice use case

Tests cover:
- A billable, uninvoiced lesson is handed to the invoicer and committed
- Unknown, non-billable and already invoiced lessons are rejected and the
  locked lesson row is released by rolling back
"""

import pytest
from datetime import datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.invoicing.dtos import GenerateLessonInvoiceCommandDTO
from src.app.use_cases.invoicing.generate_lesson_invoice import GenerateLessonInvoice
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.lesson_state import CancelledOnTime
from src.libs.result import Return


@pytest.fixture
def mock_lesson_repo(make_lesson):
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=make_lesson(lesson_id=3))
    return repo


@pytest.fixture
def mock_customer_repo(customer):
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=customer)
    return repo


@pytest.fixture
def mock_invoicer():
    invoice = Invoice(
        id=12,
        workspace_id=1,
        customer_id=42,
        invoice_number="25/03/1000",
        date=datetime(2025, 3, 10),
        due_date=datetime(2025, 3, 10) + timedelta(days=14),
        status=InvoiceStatus.DRAFT,
        subtotal=4000,
        tax_total=760,
        total=4760,
        created_at=datetime(2025, 3, 10),
    )
    invoicer = MagicMock()
    invoicer.invoice_lessons = AsyncMock(return_value=Return.ok((invoice, [])))
    return invoicer


@pytest.fixture
def use_case(mock_uow, mock_lesson_repo, mock_customer_repo, mock_invoicer):
    return GenerateLessonInvoice(mock_uow, mock_lesson_repo, mock_customer_repo, mock_invoicer)


@pytest.mark.asyncio
class TestGenerateLessonInvoice:
    async def test_invoices_single_lesson(self, use_case, mock_uow, mock_invoicer, customer):
        result = await use_case.execute(GenerateLessonInvoiceCommandDTO(lesson_id=3, user_id=7))

        assert result.is_ok()
        assert result.value.invoice_id == 12
        invoiced_customer, lessons, user_id = mock_invoicer.invoice_lessons.call_args[0]
        assert invoiced_customer is customer
        assert [lesson.id for lesson in lessons] == [3]
        assert user_id == 7
        mock_uow.commit.assert_called_once()

    async def test_unknown_lesson_releases_lock(self, use_case, mock_uow, mock_lesson_repo, mock_invoicer):
        mock_lesson_repo.get_by_id = AsyncMock(return_value=None)

        result = await use_case.execute(GenerateLessonInvoiceCommandDTO(lesson_id=404))

        assert result.error.code == "LESSON_NOT_FOUND"
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()
        mock_invoicer.invoice_lessons.assert_not_called()

    async def test_not_billable_releases_lock(self, use_case, mock_uow, mock_lesson_repo, make_lesson, now):
        lesson = make_lesson(lesson_id=3)
        lesson.apply_state(CancelledOnTime(cancelled_at=now, cancelled_by=7))
        mock_lesson_repo.get_by_id = AsyncMock(return_value=lesson)

        result = await use_case.execute(GenerateLessonInvoiceCommandDTO(lesson_id=3))

        assert result.error.code == "LESSON_NOT_BILLABLE"
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()

    async def test_already_invoiced_releases_lock(self, use_case, mock_uow, mock_lesson_repo, make_lesson):
        mock_lesson_repo.get_by_id = AsyncMock(return_value=make_lesson(lesson_id=3, invoice_id=5))

        result = await use_case.execute(GenerateLessonInvoiceCommandDTO(lesson_id=3))

        assert result.error.code == "LESSON_ALREADY_INVOICED"
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()

    async def test_missing_customer_releases_lock(self, use_case, mock_uow, mock_customer_repo, mock_invoicer):
        """
        Given: A billable lesson whose customer row is gone
        When: The lesson is invoiced
        Then: CUSTOMER_NOT_FOUND is returned and nothing is committed
        """
        mock_customer_repo.get_by_id = AsyncMock(return_value=None)

        result = await use_case.execute(GenerateLessonInvoiceCommandDTO(lesson_id=3))

        assert result.error.code == "CUSTOMER_NOT_FOUND"
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()
        mock_invoicer.invoice_lessons.assert_not_called()
