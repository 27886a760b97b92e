from fastapi import APIRouter, Depends, Response, status
from typing import List

from app.core.dependencies import get_task_service
from app.schemas.task_schema import TaskCreate, TaskRead, TaskUpdate
from app.services.task_service import TaskService

router = APIRouter(prefix="/api/tasks", tags=["tasks"])

# Not-found and store failures are mapped to empty 404/500 responses by the
# exception handlers registered in app.main


@router.get("", response_model=List[TaskRead])
@router.get("/", response_model=List[TaskRead], include_in_schema=False)
async def list_tasks(service: TaskService = Depends(get_task_service)):
    """List all tasks"""
    return await service.list_tasks()


@router.get("/{task_id}", response_model=TaskRead)
async def get_task(task_id: int, service: TaskService = Depends(get_task_service)):
    """Get a task by id"""
    return await service.get_task(task_id)


@router.post("", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
@router.post("/", response_model=TaskRead, status_code=status.HTTP_201_CREATED, include_in_schema=False)
async def create_task(task: TaskCreate, service: TaskService = Depends(get_task_service)):
    """Create a task; the id is always assigned by the store"""
    return await service.create_task(task)


@router.put("/{task_id}", response_model=TaskRead)
async def update_task(task_id: int, update_data: TaskUpdate, service: TaskService = Depends(get_task_service)):
    """Overwrite title, description and priority of an existing task"""
    return await service.update_task(task_id, update_data)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_task(task_id: int, service: TaskService = Depends(get_task_service)):
    """Delete a task; deleting a missing id still succeeds"""
    await service.delete_task(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
