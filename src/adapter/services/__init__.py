from .unit_of_work import SqlAlchemyUnitOfWork
from .authorization_service import RepositoryAuthorizationService
from .notification_service import (
    LoggingNotificationService,
    HttpEmailNotificationService,
    CompositeNotificationService,
    BackgroundNotificationService,
    create_notification_service,
)
from .pdf_service import ReportLabPdfService

__all__ = [
    "SqlAlchemyUnitOfWork",
    "RepositoryAuthorizationService",
    "LoggingNotificationService",
    "HttpEmailNotificationService",
    "CompositeNotificationService",
    "BackgroundNotificationService",
    "create_notification_service",
    "ReportLabPdfService",
]
