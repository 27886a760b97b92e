from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from app.models.task_model import Task


class BaseTaskStore(ABC):
    """
    Abstract persistence contract for Task records.
    Implementations own id assignment and raise PersistenceError on
    storage failures instead of leaking driver exceptions.
    """

    @abstractmethod
    async def list_all(self) -> List[Task]:
        """Return every stored task"""
        pass

    @abstractmethod
    async def find_by_id(self, task_id: int) -> Optional[Task]:
        """Return the task with this id, or None"""
        pass

    @abstractmethod
    async def save(self, task: Task) -> Task:
        """Insert a task without id (assigning one) or overwrite an existing one"""
        pass

    @abstractmethod
    async def delete_by_id(self, task_id: int) -> None:
        """Delete the task if present; deleting a missing id is not an error"""
        pass

    async def create_tables(self) -> None:
        pass

    async def close(self) -> None:
        pass

    async def health_check(self) -> Dict[str, Any]:
        return {"status": "healthy", "connected": True}
