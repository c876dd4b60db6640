import os
from datetime import date

# Settings are read at import time; point them at SQLite before the app loads
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["CACHE_ENABLED"] = "false"
os.environ["LINK_POLICY"] = "fail"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from pta_dashboard.core.database import _enable_sqlite_foreign_keys, get_db
from pta_dashboard.main import app
from pta_dashboard.models import Base
from pta_dashboard.services.parent_service import ParentService
from pta_dashboard.services.student_service import StudentService
from pta_dashboard.services.teacher_service import TeacherService


@pytest.fixture
async def engine():
    """Fresh in-memory database per test, with foreign keys enforced."""
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    event.listen(test_engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    """HTTP client whose requests each get their own session on the test database."""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http_client:
        yield http_client
    app.dependency_overrides.clear()


def parent_payload(**overrides):
    data = {
        "name": "Jane Doe",
        "contact_number": "09171234567",
        "email": "jane.doe@example.com",
        "address": "12 Mabini St, Quezon City",
    }
    data.update(overrides)
    return data


def student_payload(**overrides):
    data = {
        "name": "Alice Doe",
        "class_name": "Grade 5 - Rizal",
        "grade_level": "5",
        "date_of_birth": date(2014, 3, 2),
        "contact_number": "09171234567",
        "address": "12 Mabini St, Quezon City",
        "enrollment_date": date(2023, 6, 5),
    }
    data.update(overrides)
    return data


def teacher_payload(**overrides):
    data = {
        "name": "Maria Santos",
        "employee_id": "T-001",
        "contact_number": "09181112222",
        "email": "maria.santos@example.com",
        "address": "8 Luna St, Quezon City",
        "date_of_birth": date(1985, 9, 14),
        "hire_date": date(2012, 6, 1),
        "department": "Elementary",
        "position": "Adviser",
        "assigned_classes": ["Grade 5 - Rizal"],
    }
    data.update(overrides)
    return data


def as_json(payload):
    """Dates as ISO strings for request bodies."""
    return {k: v.isoformat() if isinstance(v, date) else v for k, v in payload.items()}


@pytest.fixture
def make_parent(db_session):
    async def _make(**overrides):
        return await ParentService(db_session).create(parent_payload(**overrides))
    return _make


@pytest.fixture
def make_student(db_session):
    async def _make(**overrides):
        return await StudentService(db_session).create(student_payload(**overrides))
    return _make


@pytest.fixture
def make_teacher(db_session):
    async def _make(**overrides):
        return await TeacherService(db_session).create(teacher_payload(**overrides))
    return _make


@pytest.fixture
async def jane_family(make_parent, make_student):
    """Jane Doe with Alice and Bob linked, plus an unlinked Carlo."""
    jane = await make_parent()
    alice = await make_student(name="Alice Doe", parent_id=jane.id)
    bob = await make_student(name="Bob Doe", class_name="Grade 3 - Bonifacio", grade_level="3", parent_id=jane.id)
    carlo = await make_student(name="Carlo Reyes", class_name="Grade 3 - Bonifacio", grade_level="3")
    return jane, alice, bob, carlo
