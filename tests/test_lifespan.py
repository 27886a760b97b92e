import logging
import pytest
from httpx import ASGITransport, AsyncClient

from app.core.config import settings
from app.core.lifespan import build_task_store, lifespan
from app.main import create_app
from app.repositories.memory_task_repository import InMemoryTaskRepository
from app.repositories.task_repository import TaskRepository


class TrackingStore(InMemoryTaskRepository):
    def __init__(self):
        super().__init__()
        self.tables_created = False
        self.closed = False

    async def create_tables(self):
        self.tables_created = True

    async def close(self):
        self.closed = True


class ExplodingStore(InMemoryTaskRepository):
    async def list_all(self):
        raise RuntimeError("store exploded")


def test_build_memory_store(monkeypatch):
    monkeypatch.setattr(settings, "STORAGE_BACKEND", "memory")

    assert isinstance(build_task_store(), InMemoryTaskRepository)


@pytest.mark.asyncio
async def test_build_sql_store(monkeypatch):
    monkeypatch.setattr(settings, "STORAGE_BACKEND", "sql")
    monkeypatch.setattr(settings, "DATABASE_URL", "sqlite+aiosqlite:///:memory:")

    store = build_task_store()

    assert isinstance(store, TaskRepository)
    await store.close()


@pytest.mark.asyncio
async def test_lifespan_uses_configured_store(monkeypatch):
    monkeypatch.setattr(settings, "STORAGE_BACKEND", "memory")
    app = create_app()

    async with lifespan(app):
        assert isinstance(app.state.task_store, InMemoryTaskRepository)


@pytest.mark.asyncio
async def test_lifespan_creates_sql_tables(monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "STORAGE_BACKEND", "sql")
    monkeypatch.setattr(settings, "DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'tasks.db'}")
    app = create_app()

    async with lifespan(app):
        store = app.state.task_store
        assert isinstance(store, TaskRepository)
        # Tables exist, so queries work
        assert await store.list_all() == []


@pytest.mark.asyncio
async def test_lifespan_prefers_injected_store_and_closes_it(monkeypatch):
    monkeypatch.setattr(settings, "STORAGE_BACKEND", "sql")
    store = TrackingStore()
    app = create_app(store)

    async with lifespan(app):
        assert app.state.task_store is store
        assert store.tables_created
        assert not store.closed

    assert store.closed


@pytest.mark.asyncio
async def test_request_without_store_is_500():
    app = create_app()
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/tasks")

    assert response.status_code == 500
    assert response.content == b""


@pytest.mark.asyncio
async def test_unexpected_error_is_empty_500_and_logged(caplog):
    app = create_app(ExplodingStore())
    transport = ASGITransport(app=app, raise_app_exceptions=False)

    with caplog.at_level(logging.ERROR, logger="app.main"):
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/api/tasks")

    assert response.status_code == 500
    assert response.content == b""
    records = [r for r in caplog.records if r.name == "app.main"]
    assert records
    assert isinstance(records[0].exc_info[1], RuntimeError)
