"""Unit tests for the read-side invoice use cases

Tests cover:
- GetInvoice: header plus items, not found, repository failure
- GenerateInvoicePdf: filename derived from the number, missing invoice
  or customer, settings passed through to the renderer
"""

import pytest
from datetime import date, datetime, timedelta
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.invoicing.get_invoice import GetInvoice
from src.app.use_cases.invoicing.generate_invoice_pdf import GenerateInvoicePdf
from src.domain.company_settings import CompanySettings
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_item import InvoiceItem

INVOICE_DATE = datetime(2025, 4, 1)


@pytest.fixture
def invoice():
    return Invoice(
        id=9,
        workspace_id=1,
        customer_id=42,
        invoice_number="RE-25/04/1003",
        date=INVOICE_DATE,
        due_date=INVOICE_DATE + timedelta(days=14),
        status=InvoiceStatus.DRAFT,
        subtotal=8000,
        tax_total=1520,
        total=9520,
        created_at=INVOICE_DATE,
    )


@pytest.fixture
def items():
    return [
        InvoiceItem(
            id=1,
            invoice_id=9,
            position=0,
            description="English tutoring",
            quantity=Decimal("2"),
            unit="hrs",
            unit_price=4000,
            tax_rate=Decimal("19"),
            total=8000,
            service_date=date(2025, 3, 12),
            start_time="15:00",
            end_time="17:00",
            lesson_id=3,
        )
    ]


@pytest.fixture
def mock_invoice_repo(invoice):
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=invoice)
    return repo


@pytest.fixture
def mock_item_repo(items):
    repo = MagicMock()
    repo.get_by_invoice_id = AsyncMock(return_value=items)
    return repo


@pytest.mark.asyncio
class TestGetInvoice:
    async def test_returns_invoice_with_items(self, mock_invoice_repo, mock_item_repo):
        result = await GetInvoice(mock_invoice_repo, mock_item_repo).execute(9)

        assert result.is_ok()
        dto = result.value
        assert dto.invoice_id == 9
        assert dto.total == 9520
        assert len(dto.items) == 1
        assert dto.items[0].lesson_id == 3
        assert dto.items[0].start_time == "15:00"
        mock_item_repo.get_by_invoice_id.assert_awaited_once_with(9)

    async def test_unknown_invoice(self, mock_invoice_repo, mock_item_repo):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=None)

        result = await GetInvoice(mock_invoice_repo, mock_item_repo).execute(404)

        assert result.is_err()
        assert result.error.code == "INVOICE_NOT_FOUND"
        mock_item_repo.get_by_invoice_id.assert_not_awaited()

    async def test_repository_failure_is_reported(self, mock_invoice_repo, mock_item_repo):
        mock_item_repo.get_by_invoice_id = AsyncMock(side_effect=RuntimeError("db gone"))

        result = await GetInvoice(mock_invoice_repo, mock_item_repo).execute(9)

        assert result.is_err()
        assert result.error.code == "GET_INVOICE_FAILED"
        assert result.error.reason == "db gone"


@pytest.fixture
def settings():
    return CompanySettings(
        workspace_id=1,
        company_name="Lernstudio Nord",
        next_invoice_number=1004,
        default_tax_rate=Decimal("19"),
        default_payment_terms_days=14,
    )


@pytest.fixture
def pdf_use_case(mock_invoice_repo, mock_item_repo, customer, settings):
    customer_repo = MagicMock()
    customer_repo.get_by_id = AsyncMock(return_value=customer)
    settings_repo = MagicMock()
    settings_repo.get_by_workspace_id = AsyncMock(return_value=settings)
    pdf_service = MagicMock()
    pdf_service.generate_invoice = MagicMock(return_value=b"%PDF-1.4 fake")
    return GenerateInvoicePdf(
        mock_invoice_repo, mock_item_repo, customer_repo, settings_repo, pdf_service
    )


@pytest.mark.asyncio
class TestGenerateInvoicePdf:
    async def test_renders_with_items_customer_and_settings(
        self, pdf_use_case, invoice, items, customer, settings
    ):
        result = await pdf_use_case.execute(9)

        assert result.is_ok()
        assert result.value.content == b"%PDF-1.4 fake"
        assert result.value.invoice_number == "RE-25/04/1003"
        assert result.value.filename == "invoice_RE-25-04-1003.pdf"
        pdf_use_case.pdf_service.generate_invoice.assert_called_once_with(
            invoice, items, customer, settings
        )

    async def test_unknown_invoice(self, pdf_use_case, mock_invoice_repo):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=None)

        result = await pdf_use_case.execute(404)

        assert result.is_err()
        assert result.error.code == "INVOICE_NOT_FOUND"
        pdf_use_case.pdf_service.generate_invoice.assert_not_called()

    async def test_missing_customer(self, pdf_use_case):
        pdf_use_case.customer_repo.get_by_id = AsyncMock(return_value=None)

        result = await pdf_use_case.execute(9)

        assert result.is_err()
        assert result.error.code == "CUSTOMER_NOT_FOUND"

    async def test_renderer_failure_is_reported(self, pdf_use_case):
        pdf_use_case.pdf_service.generate_invoice = MagicMock(side_effect=ValueError("bad font"))

        result = await pdf_use_case.execute(9)

        assert result.is_err()
        assert result.error.code == "GENERATE_INVOICE_PDF_FAILED"
