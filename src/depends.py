from datetime import timedelta
from decimal import Decimal
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.adapter.services.notification_service import create_notification_service
from src.adapter.repositories import (
    SqlAlchemyCompanySettingsRepository,
    SqlAlchemyCustomerRepository,
    SqlAlchemyInvoiceRepository,
    SqlAlchemyRevenueLedgerRepository,
)
from src.app.services.invoice_numbering import InvoiceNumberingService
from src.app.services.notification_service import NotificationService
from src.app.services.revenue_ledger import RevenueLedgerService
from src.domain.cancellation_policy import CancellationPolicy
import src.domain  # noqa: F401  registers all tables on SQLModel.metadata

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

_notification_service = None


async def init_db():
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_notification_service() -> NotificationService:
    global _notification_service
    if _notification_service is None:
        _notification_service = create_notification_service(
            api_url=ApplicationConfig.EMAIL_API_URL,
            api_key=ApplicationConfig.EMAIL_API_KEY,
            sender=ApplicationConfig.EMAIL_SENDER,
            timeout=float(ApplicationConfig.EMAIL_TIMEOUT_SECONDS),
        )
    return _notification_service


def get_cancellation_policy() -> CancellationPolicy:
    return CancellationPolicy(
        online_window=timedelta(hours=ApplicationConfig.ONLINE_CANCELLATION_WINDOW_HOURS),
        offline_window=timedelta(hours=ApplicationConfig.OFFLINE_CANCELLATION_WINDOW_HOURS),
    )


def build_revenue_ledger_service(session: AsyncSession) -> RevenueLedgerService:
    return RevenueLedgerService(
        SqlAlchemyRevenueLedgerRepository(session),
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyCompanySettingsRepository(session),
    )


def build_numbering_service(session: AsyncSession) -> InvoiceNumberingService:
    return InvoiceNumberingService(
        SqlAlchemyCompanySettingsRepository(session),
        SqlAlchemyInvoiceRepository(session),
        max_attempts=ApplicationConfig.INVOICE_NUMBER_MAX_ATTEMPTS,
        default_next_number=ApplicationConfig.DEFAULT_NEXT_INVOICE_NUMBER,
        default_tax_rate=Decimal(str(ApplicationConfig.DEFAULT_TAX_RATE)),
        default_payment_terms_days=ApplicationConfig.DEFAULT_PAYMENT_TERMS_DAYS,
    )
