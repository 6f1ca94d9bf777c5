"""Notification Service Implementations

Provides concrete implementations for sending e-mail notifications.
"""

import asyncio
import logging
from typing import Optional, Set
import httpx
from src.app.services.notification_service import EmailNotification, NotificationService

logger = logging.getLogger(__name__)


class LoggingNotificationService(NotificationService):
    """
    Notification service that only logs e-mails

    Useful for development and testing, or as a fallback.
    """

    async def send_email(self, notification: EmailNotification) -> bool:
        """
        Log e-mail

        Args:
            notification: E-mail to log

        Returns:
            Always True (logging never fails)
        """
        logger.info(f"[EMAIL] To: {notification.to}, Subject: {notification.subject}")
        return True


class HttpEmailNotificationService(NotificationService):
    """
    Notification service that delivers e-mail through an HTTP e-mail API

    Sends ``{"from", "to", "subject", "html"}`` as JSON with a bearer API key.
    """

    def __init__(self, api_url: str, api_key: str, sender: str, timeout: float = 10.0):
        """
        Initialize HTTP e-mail notification service

        Args:
            api_url: URL to POST e-mails to
            api_key: Bearer token for the e-mail API
            sender: From address
            timeout: Request timeout in seconds
        """
        self.api_url = api_url
        self.api_key = api_key
        self.sender = sender
        self.timeout = timeout

    async def send_email(self, notification: EmailNotification) -> bool:
        """
        Send e-mail via the HTTP API

        Args:
            notification: E-mail to send

        Returns:
            True if the API accepted the e-mail, False otherwise
        """
        payload = {
            "from": self.sender,
            "to": notification.to,
            "subject": notification.subject,
            "html": notification.html,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.api_url,
                    json=payload,
                    headers={
                        "Authorization": f"Bearer {self.api_key}",
                        "Content-Type": "application/json",
                    },
                )
                response.raise_for_status()
                logger.info(f"E-mail '{notification.subject}' sent to {notification.to}")
                return True
        except httpx.HTTPError as e:
            logger.error(f"Failed to send e-mail '{notification.subject}' to {notification.to}: {e}")
            return False
        except Exception as e:
            logger.error(
                f"Unexpected error sending e-mail '{notification.subject}' to {notification.to}: {e}"
            )
            return False


class CompositeNotificationService(NotificationService):
    """
    Notification service that delegates to multiple services

    Useful for sending to multiple channels (e.g., log + HTTP API).
    """

    def __init__(self, services: list[NotificationService]):
        self.services = services

    async def send_email(self, notification: EmailNotification) -> bool:
        """
        Send e-mail through all configured services

        Returns:
            True if at least one service succeeded, False otherwise
        """
        success = False
        for service in self.services:
            try:
                if await service.send_email(notification):
                    success = True
            except Exception as e:
                logger.error(f"Notification service {type(service).__name__} failed: {e}")
        return success


class BackgroundNotificationService(NotificationService):
    """
    Fire-and-forget wrapper

    send_email() schedules delivery on the running event loop and returns
    immediately. Failures are logged when the task finishes.
    """

    def __init__(self, delegate: NotificationService):
        self.delegate = delegate
        self._tasks: Set[asyncio.Task] = set()

    async def send_email(self, notification: EmailNotification) -> bool:
        task = asyncio.create_task(self.delegate.send_email(notification))
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return True

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Background e-mail delivery failed: {error}")

    async def drain(self) -> None:
        """Wait for all scheduled sends to finish."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)


def create_notification_service(
    api_url: Optional[str] = None,
    api_key: Optional[str] = None,
    sender: Optional[str] = None,
    timeout: float = 10.0,
    background: bool = True,
) -> NotificationService:
    """
    Factory function to create appropriate notification service

    Args:
        api_url: Optional e-mail API URL. If provided, creates composite
                 service with logging + HTTP delivery. Otherwise, just logging.
        api_key: Bearer token for the e-mail API
        sender: From address
        timeout: Request timeout in seconds
        background: Wrap the service so sends never block the caller

    Returns:
        Configured NotificationService
    """
    services: list[NotificationService] = [LoggingNotificationService()]

    if api_url:
        services.append(
            HttpEmailNotificationService(api_url, api_key or "", sender or "", timeout=timeout)
        )

    service = services[0] if len(services) == 1 else CompositeNotificationService(services)

    if background and len(services) > 1:
        return BackgroundNotificationService(service)
    return service
