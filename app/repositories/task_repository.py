from typing import Any, Dict, List, Optional
from sqlalchemy import delete, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.future import select

from app.core.exceptions import PersistenceError
from app.core.logging import get_logger
from app.interfaces.task_store import BaseTaskStore
from app.models.base import Base
from app.models.task_model import Task

logger = get_logger(__name__)


class TaskRepository(BaseTaskStore):
    """SQLAlchemy-backed task store"""

    def __init__(self, db_url: str, echo: bool = False, **engine_kwargs):
        self.engine = create_async_engine(db_url, echo=echo, **engine_kwargs)
        self.Session = async_sessionmaker(bind=self.engine, class_=AsyncSession, expire_on_commit=False)

    async def create_tables(self):
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created")

    async def close(self):
        """Close the database engine."""
        await self.engine.dispose()

    async def list_all(self) -> List[Task]:
        try:
            async with self.Session() as session:
                result = await session.execute(select(Task).order_by(Task.id))
                return list(result.scalars().all())
        except (SQLAlchemyError, OSError) as e:
            raise PersistenceError("Failed to list tasks") from e

    async def find_by_id(self, task_id: int) -> Optional[Task]:
        try:
            async with self.Session() as session:
                return await session.get(Task, task_id)
        except (SQLAlchemyError, OSError) as e:
            raise PersistenceError(f"Failed to load task {task_id}") from e

    async def save(self, task: Task) -> Task:
        try:
            async with self.Session() as session:
                async with session.begin():
                    if task.id is None:
                        session.add(task)
                    else:
                        task = await session.merge(task)
                await session.refresh(task)
                return task
        except (SQLAlchemyError, OSError) as e:
            raise PersistenceError("Failed to save task") from e

    async def delete_by_id(self, task_id: int) -> None:
        try:
            async with self.Session.begin() as session:
                await session.execute(delete(Task).where(Task.id == task_id))
        except (SQLAlchemyError, OSError) as e:
            raise PersistenceError(f"Failed to delete task {task_id}") from e

    async def health_check(self) -> Dict[str, Any]:
        """Check database connection health"""
        try:
            async with self.Session() as session:
                result = await session.execute(text("SELECT 1"))
                result.fetchone()
                return {"status": "healthy", "connected": True}
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return {"status": "unhealthy", "connected": False, "error": str(e)}
