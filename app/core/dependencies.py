from fastapi import Depends, Request

from app.core.logging import get_logger
from app.interfaces.task_store import BaseTaskStore
from app.services.task_service import TaskService

logger = get_logger(__name__)

async def get_task_store(request: Request) -> BaseTaskStore:
    try:
        return request.app.state.task_store
    except AttributeError:
        logger.error(f"Task store not initialized in app.state ({request.method} {request.url})")
        raise ValueError("Task store not initialized in app.state")

async def get_task_service(store: BaseTaskStore = Depends(get_task_store)) -> TaskService:
    return TaskService(store)
