"""
Shared test fixtures and configuration for Employee Directory backend tests.
"""
import os
import uuid
from datetime import date, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession

# Set test environment before importing app modules
os.environ["ENVIRONMENT"] = "development"
os.environ["DEBUG"] = "true"
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing-only-min-32-chars")

from app.models.employee import Employee, EmployeeRole  # noqa: E402
from app.repositories.employee_repository import EmployeeRepository  # noqa: E402

ADULT_BIRTH_DATE = date(1990, 6, 15)
# bcrypt hash of "Admin@123"
ADMIN_PASSWORD_HASH = "$2a$11$Ey8TKH0BmJnmnsg1ei30OuG0.N9CdgxGWaDiTtCwFzLN9p2fBMIh6"


@pytest.fixture
def mock_settings(monkeypatch):
    """Mock settings for testing."""
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.setenv("DEBUG", "true")
    monkeypatch.setenv("SECRET_KEY", "test-secret-key-for-testing-only-min-32-chars")
    monkeypatch.setenv("POSTGRES_PASSWORD", "testpassword")
    monkeypatch.setenv("POSTGRES_USER", "testuser")
    monkeypatch.setenv("POSTGRES_DB", "testdb")


@pytest.fixture
def mock_db_session():
    """Create a mock async database session."""
    session = AsyncMock(spec=AsyncSession)
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.refresh = AsyncMock()
    session.add = MagicMock()
    session.delete = AsyncMock()
    session.close = AsyncMock()
    return session


@pytest.fixture
def make_employee():
    """Factory for transient Employee rows with unique email and document."""
    def _make(role: EmployeeRole = EmployeeRole.EMPLOYEE, **overrides) -> Employee:
        suffix = uuid.uuid4().hex[:8]
        phones = overrides.pop("phones", ["+5511999990000"])
        fields = {
            "id": uuid.uuid4(),
            "first_name": "Ana",
            "last_name": f"Silva-{suffix}",
            "email": f"ana.{suffix}@company.com",
            "doc_number": f"DOC{suffix}",
            "birth_date": ADULT_BIRTH_DATE,
            "role": int(role),
            "manager_id": None,
            "password_hash": ADMIN_PASSWORD_HASH,
        }
        fields.update(overrides)
        employee = Employee(**fields)
        employee.replace_phones(phones)
        return employee

    return _make


@pytest.fixture
def director(make_employee):
    return make_employee(EmployeeRole.DIRECTOR, first_name="Diana")


@pytest.fixture
def leader(make_employee):
    return make_employee(EmployeeRole.LEADER, first_name="Leo")


@pytest.fixture
def employee(make_employee):
    return make_employee(EmployeeRole.EMPLOYEE, first_name="Eva")


@pytest.fixture
def roster():
    """In-memory id -> Employee map backing mock_repository.get_by_id."""
    return {}


@pytest.fixture
def seed(roster):
    """Register employees so the mock repository can find them by id."""
    def _seed(*employees: Employee) -> None:
        for item in employees:
            roster[item.id] = item

    return _seed


def _assign_id(employee: Employee) -> Employee:
    # The database assigns the primary key on flush
    if employee.id is None:
        employee.id = uuid.uuid4()
    return employee


@pytest.fixture
def mock_repository(roster):
    """EmployeeRepository stand-in: lookups hit ``roster``, uniqueness checks pass."""
    repository = AsyncMock(spec=EmployeeRepository)
    repository.get_by_id.side_effect = lambda employee_id: roster.get(employee_id)
    repository.get_by_email.side_effect = lambda email: next(
        (e for e in roster.values() if e.email == email), None
    )
    repository.list.side_effect = lambda skip=0, limit=100: sorted(
        roster.values(), key=lambda e: (e.last_name, e.first_name)
    )[skip:skip + limit]
    repository.exists_by_document.return_value = False
    repository.exists_by_email.return_value = False
    repository.has_subordinates.return_value = False
    repository.has_subordinates_with_role_at_least.return_value = False
    repository.add.side_effect = _assign_id
    repository.update.side_effect = lambda e: e
    repository.delete.return_value = None
    return repository


@pytest.fixture
def employee_payload():
    """Valid create/update request body as a dict."""
    def _payload(**overrides) -> dict:
        suffix = uuid.uuid4().hex[:8]
        body = {
            "first_name": "Bruno",
            "last_name": "Costa",
            "email": f"bruno.{suffix}@company.com",
            "doc_number": f"NEW{suffix}",
            "birth_date": ADULT_BIRTH_DATE.isoformat(),
            "role": int(EmployeeRole.EMPLOYEE),
            "manager_id": None,
            "phones": ["+5511988887777"],
            "password": "Str0ngPass!",
        }
        body.update(overrides)
        return body

    return _payload


@pytest.fixture
def minor_birth_date():
    return date.today() - timedelta(days=365 * 10)


@pytest.fixture
def valid_jwt_token(director):
    """Generate a valid JWT token for testing."""
    from app.core.security import create_access_token
    return create_access_token(
        subject=director.id, role="Director", expires_delta=timedelta(hours=1)
    )


@pytest.fixture
def expired_jwt_token(director):
    """Generate an expired JWT token for testing."""
    from app.core.security import create_access_token
    return create_access_token(subject=director.id, expires_delta=timedelta(seconds=-1))


@pytest.fixture
def mock_request():
    """Create a mock FastAPI request object."""
    request = MagicMock()
    request.cookies = {}
    request.client = MagicMock()
    request.client.host = "127.0.0.1"
    request.headers = {}
    request.url = MagicMock()
    request.url.path = "/api/v1/test"
    request.method = "GET"
    return request


@pytest.fixture
def fastapi_app():
    """The application with the login rate limit switched off."""
    from app.core.rate_limiter import limiter
    from app.main import app

    limiter.enabled = False
    yield app
    app.dependency_overrides.clear()
    limiter.enabled = True


@pytest_asyncio.fixture
async def client(fastapi_app):
    transport = ASGITransport(app=fastapi_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
