"""Monthly Invoicing Background Worker

Generates the draft invoices of the previous calendar month for every
workspace. Can be run as a standalone script or integrated with a scheduler.
"""

import asyncio
import logging
import time
from datetime import datetime
from typing import Callable, Optional, Tuple
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories import (
    SqlAlchemyCustomerRepository,
    SqlAlchemyInvoiceItemRepository,
    SqlAlchemyInvoiceRepository,
    SqlAlchemyLessonRepository,
    SqlAlchemyWorkspaceRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.invoicing import (
    GenerateMonthlyInvoices,
    GenerateMonthlyInvoicesCommandDTO,
    LessonInvoicer,
    MonthlyInvoicingRunResultDTO,
    WorkspaceRunFailureDTO,
)
from src.depends import build_numbering_service
from src.domain.base import utc_now
from src.domain.billing_rules import previous_month

logger = logging.getLogger(__name__)


class MonthlyInvoiceWorker:
    """
    Background worker for the monthly invoice run

    Features:
    - Bills the previous calendar month (December of the prior year in January)
    - One session and one generator call per workspace
    - A failing workspace is logged and recorded, later workspaces still run
    - Idempotent: invoiced lessons are linked and never billed twice

    Usage:
        # Run for previous month (typical cron usage)
        worker = MonthlyInvoiceWorker()
        result = await worker.run_once()

        # Run once for a specific month
        result = await worker.run_once(year=2025, month=3)

        # Run continuously (checks daily whether the run day was reached)
        await worker.run_forever()
    """

    def __init__(
        self,
        db_uri: Optional[str] = None,
        session_factory: Optional[Callable[[], AsyncSession]] = None,
        run_day: Optional[int] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize the worker

        Args:
            db_uri: Database URI (defaults to ApplicationConfig.DB_URI)
            session_factory: Prebuilt session factory, skips engine creation
            run_day: Day of month from which the run fires
            clock: Source of the current time
        """
        self.engine = None
        if session_factory is None:
            self.engine = create_async_engine(db_uri or ApplicationConfig.DB_URI, echo=False, future=True)
            session_factory = sessionmaker(
                self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
            )
        self.async_session_factory = session_factory
        self.run_day = run_day or ApplicationConfig.MONTHLY_INVOICING_RUN_DAY
        self.clock = clock

        logger.info("MonthlyInvoiceWorker initialized")

    def _get_billing_period(
        self, year: Optional[int] = None, month: Optional[int] = None
    ) -> Tuple[int, int]:
        """Year and month to bill, the previous month unless both are given."""
        if year is None or month is None:
            return previous_month(self.clock().date())
        return year, month

    async def _run_workspace(self, workspace_id: int, year: int, month: int):
        async with self.async_session_factory() as session:
            use_case = GenerateMonthlyInvoices(
                SqlAlchemyUnitOfWork(session),
                SqlAlchemyWorkspaceRepository(session),
                SqlAlchemyCustomerRepository(session),
                SqlAlchemyLessonRepository(session),
                LessonInvoicer(
                    SqlAlchemyInvoiceRepository(session),
                    SqlAlchemyInvoiceItemRepository(session),
                    SqlAlchemyLessonRepository(session),
                    build_numbering_service(session),
                ),
            )
            return await use_case.execute(
                GenerateMonthlyInvoicesCommandDTO(workspace_id=workspace_id, year=year, month=month)
            )

    async def run_once(
        self,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> MonthlyInvoicingRunResultDTO:
        """
        Run the generator once for every workspace

        Args:
            year: Year (optional, defaults to previous month)
            month: Month (optional, defaults to previous month)

        Returns:
            MonthlyInvoicingRunResultDTO with summary and per-workspace failures
        """
        start_time = time.time()
        year, month = self._get_billing_period(year, month)

        logger.info(f"Starting monthly invoicing for {year:04d}-{month:02d}")

        async with self.async_session_factory() as session:
            workspaces = await SqlAlchemyWorkspaceRepository(session).list_all()
            workspace_ids = [workspace.id for workspace in workspaces]

        logger.info(f"Found {len(workspace_ids)} workspaces")

        successful = 0
        invoices_created = 0
        lessons_invoiced = 0
        failures = []

        for workspace_id in workspace_ids:
            try:
                result = await self._run_workspace(workspace_id, year, month)
            except Exception as e:
                logger.error(f"Unexpected error processing workspace {workspace_id}: {e}")
                failures.append(
                    WorkspaceRunFailureDTO(
                        workspace_id=workspace_id, code="UNEXPECTED_ERROR", message=str(e)
                    )
                )
                continue

            if result.is_err():
                logger.error(
                    f"Monthly invoicing failed for workspace {workspace_id}: "
                    f"{result.error.message}"
                )
                failures.append(
                    WorkspaceRunFailureDTO(
                        workspace_id=workspace_id,
                        code=result.error.code,
                        message=result.error.message,
                    )
                )
                continue

            successful += 1
            invoices_created += len(result.value.invoice_ids)
            lessons_invoiced += result.value.lessons_invoiced
            logger.info(
                f"Workspace {workspace_id}: {len(result.value.invoice_ids)} invoices, "
                f"{result.value.lessons_invoiced} lessons"
            )

        execution_time_ms = int((time.time() - start_time) * 1000)

        result = MonthlyInvoicingRunResultDTO(
            year=year,
            month=month,
            total_workspaces=len(workspace_ids),
            successful_workspaces=successful,
            invoices_created=invoices_created,
            lessons_invoiced=lessons_invoiced,
            failures=failures,
            execution_time_ms=execution_time_ms,
        )

        logger.info(
            f"Monthly invoicing complete: "
            f"{successful}/{len(workspace_ids)} workspaces, "
            f"{invoices_created} invoices created, "
            f"{execution_time_ms}ms"
        )

        return result

    def should_run(self, today: datetime, last_processed_month: Optional[Tuple[int, int]]) -> bool:
        """True once per calendar month, on or after the run day."""
        return today.day >= self.run_day and last_processed_month != (today.year, today.month)

    async def run_forever(self, check_interval_seconds: Optional[int] = None):
        """
        Run continuously, firing once per calendar month

        Args:
            check_interval_seconds: Seconds between checks (default from config)
        """
        interval = check_interval_seconds or ApplicationConfig.MONTHLY_INVOICING_CHECK_INTERVAL_SECONDS
        logger.info(f"Starting continuous monthly invoicing with {interval}s interval")

        last_processed_month = None

        while True:
            try:
                today = self.clock()
                if self.should_run(today, last_processed_month):
                    result = await self.run_once()
                    last_processed_month = (today.year, today.month)
                    logger.info(
                        f"Processed {result.year:04d}-{result.month:02d}: "
                        f"{result.invoices_created} invoices, {len(result.failures)} failures"
                    )
                else:
                    logger.debug("Skipping invoicing check - before run day or already processed")

            except Exception as e:
                logger.error(f"Invoicing cycle failed: {e}")

            await asyncio.sleep(interval)

    async def shutdown(self):
        """Cleanup resources"""
        if self.engine is not None:
            await self.engine.dispose()
        logger.info("MonthlyInvoiceWorker shutdown complete")


async def main() -> int:
    """
    Entry point for running the worker as a standalone script

    Usage:
        # Run for previous month
        python -m src.worker.monthly_invoicing

        # Run for specific month
        python -m src.worker.monthly_invoicing --year 2025 --month 3

        # Run continuously
        python -m src.worker.monthly_invoicing --continuous
    """
    import argparse

    logging.basicConfig(
        level=getattr(logging, str(ApplicationConfig.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Monthly Invoicing Worker")
    parser.add_argument("--year", type=int, help="Year to invoice")
    parser.add_argument("--month", type=int, choices=range(1, 13), help="Month to invoice")
    parser.add_argument(
        "--continuous", action="store_true", help="Run continuously"
    )
    args = parser.parse_args()

    if args.continuous and not ApplicationConfig.MONTHLY_INVOICING_ENABLED:
        logger.info("Monthly invoicing disabled, not starting")
        return 0

    worker = MonthlyInvoiceWorker()
    exit_code = 0

    try:
        if args.continuous:
            await worker.run_forever()
        else:
            result = await worker.run_once(year=args.year, month=args.month)
            print(f"Invoicing complete for {result.year:04d}-{result.month:02d}:")
            print(f"  Workspaces: {result.successful_workspaces}/{result.total_workspaces}")
            print(f"  Invoices created: {result.invoices_created}")
            print(f"  Lessons invoiced: {result.lessons_invoiced}")
            print(f"  Execution time: {result.execution_time_ms}ms")
            for failure in result.failures:
                print(f"  FAILED workspace {failure.workspace_id}: {failure.code} {failure.message}")
            if result.failures:
                exit_code = 1
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()

    return exit_code


if __name__ == "__main__":
    import sys

    sys.exit(asyncio.run(main()))
