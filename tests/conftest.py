import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from app.main import create_app
from app.repositories.memory_task_repository import InMemoryTaskRepository
from app.repositories.task_repository import TaskRepository

# Test database URL (in-memory SQLite for testing)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def make_sql_repository() -> TaskRepository:
    return TaskRepository(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
def memory_store():
    return InMemoryTaskRepository()


@pytest.fixture
async def sql_store():
    """SQL repository over a fresh in-memory database"""
    repo = make_sql_repository()
    await repo.create_tables()
    yield repo
    await repo.close()


@pytest.fixture
async def broken_sql_store():
    """SQL repository whose tables were never created"""
    repo = make_sql_repository()
    yield repo
    await repo.close()


@pytest.fixture(params=["memory", "sql"])
async def task_store(request):
    """Every store implementation, for contract tests"""
    if request.param == "memory":
        yield InMemoryTaskRepository()
    else:
        repo = make_sql_repository()
        await repo.create_tables()
        yield repo
        await repo.close()


@pytest.fixture
async def test_client(task_store):
    """HTTP client against an app wired to the parametrized store"""
    app = create_app(task_store)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
async def broken_client(broken_sql_store):
    app = create_app(broken_sql_store)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
