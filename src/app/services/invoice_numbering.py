"""Invoice Numbering Service

Issues invoice numbers per workspace, either from the settings counter or
from a caller-supplied (migrated) number.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional
from src.libs.result import Result, Return, Error
from src.app.repositories.company_settings_repository import CompanySettingsRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.company_settings import (
    CompanySettings,
    DEFAULT_NEXT_INVOICE_NUMBER,
    DEFAULT_PAYMENT_TERMS_DAYS,
    DEFAULT_TAX_RATE,
)
from src.domain.invoice_number import format_invoice_number, parse_sequence

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 5


class InvoiceNumberingService:
    """
    Issues unique invoice numbers

    Business Rules:
    1. Auto numbers are {prefix}{YY}/{MM}/{counter}, YY/MM from the invoice date
    2. The counter is claimed with compare-and-increment; a lost race is
       retried with the fresh counter value
    3. Manual numbers must not exist yet in the workspace
    4. A manual number ending in /{digits} at or above the counter moves the
       counter to digits + 1
    5. Settings are created with defaults the first time a number is needed

    The service never commits: the calling use case owns the transaction.
    """

    def __init__(
        self,
        settings_repo: CompanySettingsRepository,
        invoice_repo: InvoiceRepository,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        default_next_number: int = DEFAULT_NEXT_INVOICE_NUMBER,
        default_tax_rate: Decimal = DEFAULT_TAX_RATE,
        default_payment_terms_days: int = DEFAULT_PAYMENT_TERMS_DAYS,
    ):
        self.settings_repo = settings_repo
        self.invoice_repo = invoice_repo
        self.max_attempts = max_attempts
        self.default_next_number = default_next_number
        self.default_tax_rate = default_tax_rate
        self.default_payment_terms_days = default_payment_terms_days

    async def get_or_create_settings(self, workspace_id: int) -> CompanySettings:
        settings = await self.settings_repo.get_by_workspace_id(workspace_id)
        if settings is not None:
            return settings

        logger.info(f"Creating default company settings for workspace {workspace_id}")
        return await self.settings_repo.create(
            CompanySettings(
                workspace_id=workspace_id,
                next_invoice_number=self.default_next_number,
                default_tax_rate=Decimal(str(self.default_tax_rate)),
                default_payment_terms_days=self.default_payment_terms_days,
            )
        )

    async def issue(
        self, workspace_id: int, invoice_date: datetime, manual_number: Optional[str] = None
    ) -> Result[str]:
        """
        Issue an invoice number

        Args:
            workspace_id: Workspace identifier
            invoice_date: Invoice date, supplies YY/MM of auto numbers
            manual_number: Literal number to ingest instead of the counter

        Returns:
            Result[str]: The issued number, DUPLICATE_INVOICE_NUMBER or
            INVOICE_NUMBER_CONFLICT
        """
        if manual_number is not None and manual_number.strip():
            return await self._issue_manual(workspace_id, manual_number.strip())
        return await self._issue_auto(workspace_id, invoice_date)

    async def _issue_manual(self, workspace_id: int, number: str) -> Result[str]:
        existing = await self.invoice_repo.get_by_invoice_number(workspace_id, number)
        if existing is not None:
            return Return.err(
                Error(
                    code="DUPLICATE_INVOICE_NUMBER",
                    message=f"Invoice number {number} already exists",
                    reason=f"Used by invoice {existing.id}",
                )
            )

        settings = await self.get_or_create_settings(workspace_id)
        sequence = parse_sequence(number)
        if sequence is not None and sequence >= settings.next_invoice_number:
            await self.settings_repo.advance_counter(workspace_id, sequence + 1)
            logger.info(
                f"Advanced invoice counter of workspace {workspace_id} to {sequence + 1} "
                f"after importing {number}"
            )
        return Return.ok(number)

    async def _issue_auto(self, workspace_id: int, invoice_date: datetime) -> Result[str]:
        for attempt in range(1, self.max_attempts + 1):
            settings = await self.get_or_create_settings(workspace_id)
            expected = settings.next_invoice_number

            if await self.settings_repo.compare_and_increment(workspace_id, expected):
                number = format_invoice_number(invoice_date, expected, settings.invoice_prefix)
                logger.info(f"Issued invoice number {number} for workspace {workspace_id}")
                return Return.ok(number)

            logger.warning(
                f"Invoice counter of workspace {workspace_id} moved past {expected} "
                f"(attempt {attempt}/{self.max_attempts}), retrying"
            )

        return Return.err(
            Error(
                code="INVOICE_NUMBER_CONFLICT",
                message="Could not reserve an invoice number",
                reason=f"Counter contention after {self.max_attempts} attempts",
            )
        )
