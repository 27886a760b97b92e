import asyncio
from typing import Dict, List, Optional

from app.interfaces.task_store import BaseTaskStore
from app.models.task_model import Task


def _copy(task: Task) -> Task:
    return Task(id=task.id, title=task.title, description=task.description, priority=task.priority)


class InMemoryTaskRepository(BaseTaskStore):
    """
    Dict-backed task store for tests and throwaway deployments.
    Ids come from a monotonic counter and are never handed out twice.
    """

    def __init__(self):
        self._tasks: Dict[int, Task] = {}
        self._last_id = 0
        self._lock = asyncio.Lock()

    async def list_all(self) -> List[Task]:
        async with self._lock:
            return [_copy(self._tasks[task_id]) for task_id in sorted(self._tasks)]

    async def find_by_id(self, task_id: int) -> Optional[Task]:
        async with self._lock:
            task = self._tasks.get(task_id)
            return _copy(task) if task is not None else None

    async def save(self, task: Task) -> Task:
        async with self._lock:
            stored = _copy(task)
            if stored.id is None:
                self._last_id += 1
                stored.id = self._last_id
            else:
                self._last_id = max(self._last_id, stored.id)
            self._tasks[stored.id] = stored
            return _copy(stored)

    async def delete_by_id(self, task_id: int) -> None:
        async with self._lock:
            self._tasks.pop(task_id, None)
