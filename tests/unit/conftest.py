from datetime import datetime, timedelta
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.domain.customer import Customer
from src.domain.lesson import Lesson, LessonType
from src.domain.lesson_state import LessonStatus


@pytest.fixture
def mock_uow():
    """Mock unit of work"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def now():
    return datetime(2025, 3, 10, 12, 0, 0)


@pytest.fixture
def make_lesson(now):
    """Factory for lessons starting relative to ``now``"""

    def _make(
        lesson_id=1,
        starts_in=timedelta(days=3),
        duration=timedelta(hours=1),
        lesson_type=LessonType.ONLINE,
        rate=None,
        status=LessonStatus.SCHEDULED,
        is_billable=True,
        invoice_id=None,
        customer_id=42,
        student_id=None,
    ):
        start = now + starts_in
        return Lesson(
            id=lesson_id,
            workspace_id=1,
            teacher_id=7,
            customer_id=customer_id,
            student_id=student_id,
            title="English B2",
            start=start,
            end=start + duration,
            lesson_type=lesson_type,
            rate=rate,
            status=status,
            is_billable=is_billable,
            invoice_id=invoice_id,
        )

    return _make


@pytest.fixture
def customer():
    return Customer(
        id=42,
        workspace_id=1,
        name="Familie Müller",
        email="mueller@example.com",
        default_hourly_rate=Decimal("40.00"),
        service_descriptions=["English tutoring"],
    )
