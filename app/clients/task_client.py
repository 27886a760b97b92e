# app/clients/task_client.py
import httpx
from typing import List, Optional

from app.core.config import settings
from app.core.exceptions import ServiceError, TaskNotFoundError
from app.core.logging import get_logger
from app.schemas.task_schema import TaskRead

logger = get_logger(__name__)


class TaskClientError(ServiceError):
    """Raised when the task service answers with an unexpected status or is unreachable"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class TaskValidationError(ServiceError):
    """Raised before sending when client-side input checks fail"""
    pass


def validate_task_input(title: str, description: str, priority: int) -> None:
    """Require a non-blank title and description and a priority from 1 to 10"""
    if not title or not title.strip():
        raise TaskValidationError("Title must not be blank")
    if not description or not description.strip():
        raise TaskValidationError("Description must not be blank")
    if priority is None or not 1 <= priority <= 10:
        raise TaskValidationError("Priority must be between 1 and 10")


class TaskClient:
    """
    Async client for the task service HTTP API.
    Can be used directly (one connection per call) or as an async context
    manager sharing a single httpx.AsyncClient.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        validate: bool = False,
    ):
        self.base_url = (base_url or settings.TASK_SERVICE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.CLIENT_TIMEOUT
        self.transport = transport
        self.validate = validate
        self.headers = {"Content-Type": "application/json"}
        self._client: Optional[httpx.AsyncClient] = None

    def _new_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=self.headers,
            transport=self.transport,
        )

    async def __aenter__(self) -> "TaskClient":
        self._client = self._new_client()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self._client.aclose()
        self._client = None

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            if self._client is not None:
                return await self._client.request(method, path, **kwargs)
            async with self._new_client() as client:
                return await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Error calling task service {method} {path}: {e}")
            raise TaskClientError(f"Task service request failed: {e}") from e

    @staticmethod
    def _check(response: httpx.Response, expected: int, task_id: Optional[int] = None) -> None:
        if response.status_code == expected:
            return
        if response.status_code == 404 and task_id is not None:
            raise TaskNotFoundError(task_id)
        logger.error(f"Task service returned {response.status_code} - {response.text}")
        raise TaskClientError(
            f"Unexpected status {response.status_code} from task service",
            status_code=response.status_code,
        )

    async def list_tasks(self) -> List[TaskRead]:
        response = await self._request("GET", "/api/tasks")
        self._check(response, 200)
        return [TaskRead.model_validate(item) for item in response.json()]

    async def get_task(self, task_id: int) -> TaskRead:
        response = await self._request("GET", f"/api/tasks/{task_id}")
        self._check(response, 200, task_id)
        return TaskRead.model_validate(response.json())

    async def create_task(self, title: str, description: str, priority: int) -> TaskRead:
        if self.validate:
            validate_task_input(title, description, priority)
        payload = {"title": title, "description": description, "priority": priority}
        response = await self._request("POST", "/api/tasks", json=payload)
        self._check(response, 201)
        return TaskRead.model_validate(response.json())

    async def update_task(self, task_id: int, title: str, description: str, priority: int) -> TaskRead:
        if self.validate:
            validate_task_input(title, description, priority)
        payload = {"title": title, "description": description, "priority": priority}
        response = await self._request("PUT", f"/api/tasks/{task_id}", json=payload)
        self._check(response, 200, task_id)
        return TaskRead.model_validate(response.json())

    async def delete_task(self, task_id: int) -> None:
        response = await self._request("DELETE", f"/api/tasks/{task_id}")
        self._check(response, 204)
