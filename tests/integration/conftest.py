from datetime import timedelta
from decimal import Decimal

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain  # noqa: F401  registers all tables
from src.depends import get_session
from src.domain.company_settings import CompanySettings
from src.domain.customer import Customer
from src.domain.lesson import Lesson, LessonType
from src.domain.lesson_state import Scheduled
from src.domain.student import Student
from src.domain.user import User
from src.domain.workspace import Workspace


@pytest_asyncio.fixture(scope="function")
async def engine():
    """In-memory SQLite database shared by every connection of one test"""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        echo=False,
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Create a new database session for each test"""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seed(db_session):
    """
    One workspace with settings, a teacher, an admin, a customer at 40/h
    and a student with an e-mail address
    """
    workspace = Workspace(name="Sprachschule")
    db_session.add(workspace)
    await db_session.flush()

    teacher = User(email="teacher@example.com", name="Tom", is_admin=False)
    admin = User(email="admin@example.com", name="Ada", is_admin=True)
    customer = Customer(
        workspace_id=workspace.id,
        name="Familie Müller",
        default_hourly_rate=Decimal("40"),
        service_descriptions=["English tutoring"],
    )
    settings = CompanySettings(
        workspace_id=workspace.id,
        next_invoice_number=1000,
        default_tax_rate=Decimal("19"),
        default_payment_terms_days=14,
    )
    db_session.add_all([teacher, admin, customer, settings])
    await db_session.flush()

    student = Student(
        workspace_id=workspace.id, customer_id=customer.id, name="Anna", email="anna@example.com"
    )
    db_session.add(student)
    await db_session.commit()

    return {
        "workspace": workspace,
        "teacher": teacher,
        "admin": admin,
        "customer": customer,
        "student": student,
    }


@pytest_asyncio.fixture
def add_lesson(db_session, seed):
    """Insert a scheduled lesson directly"""

    async def _add(start, duration=timedelta(hours=1), rate=None, customer=None, lesson_type=LessonType.ONLINE):
        customer = customer or seed["customer"]
        lesson = Lesson(
            workspace_id=customer.workspace_id,
            teacher_id=seed["teacher"].id,
            customer_id=customer.id,
            title="English B2",
            start=start,
            end=start + duration,
            lesson_type=lesson_type,
            rate=rate,
        )
        lesson.apply_state(Scheduled())
        db_session.add(lesson)
        await db_session.commit()
        return lesson

    return _add


@pytest_asyncio.fixture
async def client(db_session):
    """Create test client with database session override"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    # Override the session dependency to use test session
    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session

    # Use ASGITransport for httpx AsyncClient
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

