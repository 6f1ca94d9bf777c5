"""GenerateMonthlyInvoices Use Case

Bills every customer of a workspace for the billable, un-invoiced lessons of
one calendar month.
"""

import logging
from src.libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.lesson_repository import LessonRepository
from src.app.repositories.workspace_repository import WorkspaceRepository
from src.domain.billing_rules import month_bounds
from .dtos import GenerateMonthlyInvoicesCommandDTO, MonthlyInvoicesResultDTO
from .lesson_invoicer import LessonInvoicer

logger = logging.getLogger(__name__)


class GenerateMonthlyInvoices:
    """
    Use Case: Generate the monthly draft invoices of a workspace

    Business Rules:
    1. One draft invoice per customer with billable, un-invoiced lessons
       starting inside the month (both month bounds inclusive)
    2. Customers without such lessons get no invoice
    3. Consumed lessons are linked to their invoice, so a re-run bills
       nothing twice
    4. Each customer is committed on its own. A failure stops the run and
       leaves already committed customers invoiced; re-running is safe
    5. A customer whose lessons were claimed by a concurrent run is skipped

    Flow:
    1. Validate workspace
    2. Compute month bounds
    3. For each customer: select lessons, invoice them, commit
    4. Return generated invoice IDs
    """

    def __init__(
        self,
        uow: UnitOfWork,
        workspace_repo: WorkspaceRepository,
        customer_repo: CustomerRepository,
        lesson_repo: LessonRepository,
        invoicer: LessonInvoicer,
    ):
        self.uow = uow
        self.workspace_repo = workspace_repo
        self.customer_repo = customer_repo
        self.lesson_repo = lesson_repo
        self.invoicer = invoicer

    async def execute(
        self, command: GenerateMonthlyInvoicesCommandDTO
    ) -> Result[MonthlyInvoicesResultDTO]:
        """
        Execute monthly invoice generation

        Args:
            command: Workspace, year and month to bill

        Returns:
            Result[MonthlyInvoicesResultDTO]: Generated invoice IDs or error
        """
        result = MonthlyInvoicesResultDTO(
            workspace_id=command.workspace_id,
            year=command.year,
            month=command.month,
        )

        try:
            # Step 1: Validate workspace
            workspace = await self.workspace_repo.get_by_id(command.workspace_id)
            if workspace is None:
                return Return.err(
                    Error(
                        code="WORKSPACE_NOT_FOUND",
                        message=f"Workspace {command.workspace_id} not found",
                    )
                )

            # Step 2: Month bounds
            period_start, period_end = month_bounds(command.year, command.month)
            logger.info(
                f"Generating invoices for workspace {command.workspace_id}, "
                f"{command.year}-{command.month:02d}"
            )

            # Step 3: Invoice each customer
            # Rollbacks expire loaded rows, so customers are re-read one by one
            customers = await self.customer_repo.list_by_workspace(command.workspace_id)
            customer_ids = [customer.id for customer in customers]
            for customer_id in customer_ids:
                customer = await self.customer_repo.get_by_id(customer_id)
                if customer is None:
                    continue
                lessons = await self.lesson_repo.get_billable_uninvoiced(
                    customer_id, period_start, period_end
                )
                if not lessons:
                    continue

                invoiced = await self.invoicer.invoice_lessons(customer, lessons)
                if invoiced.is_err():
                    await self.uow.rollback()
                    if invoiced.error.code == "LESSON_ALREADY_INVOICED":
                        logger.warning(
                            f"Skipping customer {customer_id}: {invoiced.error.message}"
                        )
                        result.skipped_customer_ids.append(customer_id)
                        continue
                    return Return.err(
                        Error(
                            code=invoiced.error.code,
                            message=f"{invoiced.error.message} (customer {customer_id}; "
                                    f"{len(result.invoice_ids)} invoice(s) already committed)",
                            reason=invoiced.error.reason,
                        )
                    )

                await self.uow.commit()
                invoice, _ = invoiced.value
                result.invoice_ids.append(invoice.id)
                result.lessons_invoiced += len(lessons)

            # Step 4: Report
            logger.info(
                f"Generated {len(result.invoice_ids)} invoice(s) for workspace {command.workspace_id}, "
                f"{command.year}-{command.month:02d}"
            )
            return Return.ok(result)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="GENERATE_MONTHLY_INVOICES_FAILED",
                    message=f"Failed to generate invoices for workspace {command.workspace_id} "
                            f"({len(result.invoice_ids)} invoice(s) already committed)",
                    reason=str(e),
                )
            )
