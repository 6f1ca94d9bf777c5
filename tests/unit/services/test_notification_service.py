"""Unit tests for notification service implementations"""

import asyncio
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

import httpx

from src.adapter.services.notification_service import (
    BackgroundNotificationService,
    CompositeNotificationService,
    HttpEmailNotificationService,
    LoggingNotificationService,
    create_notification_service,
)
from src.app.services.notification_service import EmailNotification

EMAIL = EmailNotification(to="student@example.com", subject="Lesson Scheduled", html="<p>Hi</p>")


@pytest.mark.asyncio
class TestHttpEmailNotificationService:
    async def test_posts_payload_with_bearer_key(self):
        response = MagicMock()
        response.raise_for_status = MagicMock()
        client = MagicMock()
        client.post = AsyncMock(return_value=response)
        client.__aenter__ = AsyncMock(return_value=client)
        client.__aexit__ = AsyncMock(return_value=False)

        service = HttpEmailNotificationService("https://mail.example.com/emails", "key", "tutor@example.com")
        with patch("src.adapter.services.notification_service.httpx.AsyncClient", return_value=client):
            sent = await service.send_email(EMAIL)

        assert sent is True
        _, kwargs = client.post.call_args
        assert kwargs["json"] == {
            "from": "tutor@example.com",
            "to": "student@example.com",
            "subject": "Lesson Scheduled",
            "html": "<p>Hi</p>",
        }
        assert kwargs["headers"]["Authorization"] == "Bearer key"

    async def test_http_error_returns_false(self):
        client = MagicMock()
        client.post = AsyncMock(side_effect=httpx.ConnectError("refused"))
        client.__aenter__ = AsyncMock(return_value=client)
        client.__aexit__ = AsyncMock(return_value=False)

        service = HttpEmailNotificationService("https://mail.example.com/emails", "key", "tutor@example.com")
        with patch("src.adapter.services.notification_service.httpx.AsyncClient", return_value=client):
            sent = await service.send_email(EMAIL)

        assert sent is False


@pytest.mark.asyncio
class TestCompositeNotificationService:
    async def test_one_success_is_enough(self):
        failing = MagicMock()
        failing.send_email = AsyncMock(side_effect=RuntimeError("boom"))

        service = CompositeNotificationService([failing, LoggingNotificationService()])

        assert await service.send_email(EMAIL) is True

    async def test_all_failing(self):
        failing = MagicMock()
        failing.send_email = AsyncMock(return_value=False)

        assert await CompositeNotificationService([failing]).send_email(EMAIL) is False


@pytest.mark.asyncio
class TestBackgroundNotificationService:
    async def test_returns_before_delivery(self):
        started = asyncio.Event()
        release = asyncio.Event()

        async def slow_send(notification):
            started.set()
            await release.wait()
            return True

        delegate = MagicMock()
        delegate.send_email = slow_send
        service = BackgroundNotificationService(delegate)

        assert await service.send_email(EMAIL) is True

        await started.wait()
        release.set()
        await service.drain()

    async def test_delivery_failure_does_not_propagate(self):
        delegate = MagicMock()
        delegate.send_email = AsyncMock(side_effect=RuntimeError("smtp down"))
        service = BackgroundNotificationService(delegate)

        assert await service.send_email(EMAIL) is True
        await service.drain()

        delegate.send_email.assert_called_once_with(EMAIL)


def test_factory_logs_only_without_api_url():
    assert isinstance(create_notification_service(), LoggingNotificationService)


def test_factory_wraps_http_delivery_in_background():
    service = create_notification_service(api_url="https://mail.example.com", api_key="k", sender="s")

    assert isinstance(service, BackgroundNotificationService)
    assert isinstance(service.delegate, CompositeNotificationService)


def test_factory_without_background():
    service = create_notification_service(api_url="https://mail.example.com", background=False)

    assert isinstance(service, CompositeNotificationService)
