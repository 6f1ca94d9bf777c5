"""Notification Service Interface

Defines the contract for outbound e-mail notifications.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class EmailNotification:
    """A single e-mail to deliver"""

    to: str
    subject: str
    html: str


class NotificationService(ABC):
    """
    Abstract notification service for outbound e-mail

    Callers treat sends as fire-and-forget: a failed send is logged by the
    implementation and reported as False, never raised into the business
    operation that requested it.

    Implementations can deliver via:
    - Logging only (development, tests)
    - An HTTP e-mail API
    - A background task queue wrapping another service
    """

    @abstractmethod
    async def send_email(self, notification: EmailNotification) -> bool:
        """
        Request delivery of an e-mail

        Args:
            notification: Recipient, subject and HTML body

        Returns:
            True if the send was accepted, False otherwise
        """
        pass
