from typing import List

from app.core.exceptions import TaskNotFoundError
from app.core.logging import get_logger
from app.interfaces.task_store import BaseTaskStore
from app.models.task_model import Task
from app.schemas.task_schema import TaskCreate, TaskUpdate

logger = get_logger(__name__)


class TaskService:
    """
    Stateless CRUD operations over a task store.
    Each call is a single round trip to the store; no state is kept between calls.
    """

    def __init__(self, store: BaseTaskStore):
        self.store = store

    async def list_tasks(self) -> List[Task]:
        return await self.store.list_all()

    async def get_task(self, task_id: int) -> Task:
        task = await self.store.find_by_id(task_id)
        if task is None:
            logger.debug(f"Task {task_id} not found")
            raise TaskNotFoundError(task_id)
        return task

    async def create_task(self, data: TaskCreate) -> Task:
        # The store assigns the id; never trust one from the client
        task = Task(title=data.title, description=data.description, priority=data.priority)
        created = await self.store.save(task)
        logger.info(f"Created task {created.id}")
        return created

    async def update_task(self, task_id: int, data: TaskUpdate) -> Task:
        task = await self.get_task(task_id)
        task.title = data.title
        task.description = data.description
        task.priority = data.priority
        updated = await self.store.save(task)
        logger.info(f"Updated task {task_id}")
        return updated

    async def delete_task(self, task_id: int) -> None:
        await self.store.delete_by_id(task_id)
        logger.info(f"Deleted task {task_id}")
