from fastapi import FastAPI

from contextlib import asynccontextmanager
from app.core.config import settings
from app.core.logging import get_logger
from app.interfaces.task_store import BaseTaskStore
from app.repositories.memory_task_repository import InMemoryTaskRepository
from app.repositories.task_repository import TaskRepository

logger = get_logger(__name__)


def build_task_store() -> BaseTaskStore:
    """Create the task store selected by STORAGE_BACKEND"""
    if settings.STORAGE_BACKEND == "memory":
        return InMemoryTaskRepository()
    return TaskRepository(db_url=settings.DATABASE_URL, echo=settings.DB_ECHO)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: an injected store wins over the configured one
    task_store = getattr(app.state, "task_store", None) or build_task_store()

    try:
        await task_store.create_tables()
    except Exception as e:
        logger.error(f"Failed to initialize task store: {e}")
        raise

    app.state.task_store = task_store
    logger.info(f"Task store initialized ({type(task_store).__name__})")

    yield

    # Shutdown
    await app.state.task_store.close()
    logger.info("Task store closed")
