"""Lesson Invoicer

Turns a customer's billable lessons into one draft invoice. Shared by the
monthly generator and the single-lesson invoice.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, List, Optional
from src.libs.result import Result, Return, Error
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.lesson_repository import LessonRepository
from src.app.services.invoice_numbering import InvoiceNumberingService
from src.domain.base import utc_now
from src.domain.billing_rules import (
    build_lesson_line,
    compute_totals,
    resolve_payment_terms,
    resolve_tax_rate,
)
from src.domain.customer import Customer
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_item import InvoiceItem
from src.domain.lesson import Lesson
from .invoice_builder import items_from_drafts, record_audit

logger = logging.getLogger(__name__)


class LessonInvoicer:
    """
    Builds and persists a draft invoice for a set of lessons

    Business Rules:
    1. Tax rate is 0 for VAT-exempt customers, else the workspace default
    2. Payment terms come from the customer, else the workspace
    3. One line per lesson (fixed price or hourly)
    4. Invoice date is now, due date is now + payment terms
    5. Lessons are linked only if still un-invoiced; if any was claimed
       meanwhile the invoice is rejected with LESSON_ALREADY_INVOICED and
       the caller must roll back

    The invoicer never commits.
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        invoice_item_repo: InvoiceItemRepository,
        lesson_repo: LessonRepository,
        numbering_service: InvoiceNumberingService,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.invoice_repo = invoice_repo
        self.invoice_item_repo = invoice_item_repo
        self.lesson_repo = lesson_repo
        self.numbering_service = numbering_service
        self.clock = clock

    async def invoice_lessons(
        self,
        customer: Customer,
        lessons: List[Lesson],
        user_id: Optional[int] = None,
    ) -> Result[tuple[Invoice, List[InvoiceItem]]]:
        """
        Create a draft invoice for ``lessons``

        Args:
            customer: Customer the lessons belong to
            lessons: Billable, un-invoiced lessons of that customer
            user_id: User recorded in the audit log, if any

        Returns:
            Result with the created invoice and its items
        """
        workspace_id = customer.workspace_id
        settings = await self.numbering_service.get_or_create_settings(workspace_id)

        tax_rate = resolve_tax_rate(customer, settings)
        payment_terms = resolve_payment_terms(customer, settings)
        lines = [build_lesson_line(lesson, customer, settings, tax_rate) for lesson in lessons]
        totals = compute_totals(lines)

        now = self.clock()
        number_result = await self.numbering_service.issue(workspace_id, now)
        if number_result.is_err():
            return number_result

        invoice = await self.invoice_repo.create(
            Invoice(
                workspace_id=workspace_id,
                customer_id=customer.id,
                invoice_number=number_result.value,
                date=now,
                due_date=now + timedelta(days=payment_terms),
                status=InvoiceStatus.DRAFT,
                subtotal=totals.subtotal,
                tax_total=totals.tax_total,
                total=totals.total,
                payment_terms=f"{payment_terms} Days",
            )
        )
        items = await self.invoice_item_repo.create_many(items_from_drafts(invoice.id, lines))

        lesson_ids = [lesson.id for lesson in lessons]
        linked = await self.lesson_repo.assign_invoice(lesson_ids, invoice.id)
        if linked != len(lesson_ids):
            return Return.err(
                Error(
                    code="LESSON_ALREADY_INVOICED",
                    message=f"{len(lesson_ids) - linked} of {len(lesson_ids)} lesson(s) "
                            f"of customer {customer.id} were invoiced concurrently",
                    reason="Lesson invoice_id was set by another run",
                )
            )

        for lesson in lessons:
            lesson.invoice_id = invoice.id

        await record_audit(self.invoice_repo, invoice, "created", user_id)

        logger.info(
            f"Created invoice {invoice.invoice_number} (id={invoice.id}) for customer {customer.id}: "
            f"{len(lessons)} lesson(s), total {invoice.total}"
        )
        return Return.ok((invoice, items))
