from typing import List

from fastapi import APIRouter, Depends, Response, status

from dependencies import get_task_service
from errors import NotFoundError
from middleware.auth import get_current_user_id
from schemas import TaskCreate, TaskPatch, TaskResponse, TaskUpdate
from services.tasks import TaskService

router = APIRouter()

TASK_NOT_FOUND = "Task not found"


@router.get("", response_model=List[TaskResponse])
async def list_tasks(
    user_id: int = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
) -> List[TaskResponse]:
    """
    Get all tasks for authenticated user

    Args:
        user_id: Authenticated user ID from the bearer token
        service: Task service

    Returns:
        List of the user's tasks in creation order
    """
    return service.list_for_user(user_id)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: int,
    user_id: int = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    """
    Get task details

    Args:
        task_id: Task ID
        user_id: Authenticated user ID
        service: Task service

    Returns:
        Task details
    """
    task = service.get(task_id, user_id)

    if task is None:
        raise NotFoundError(TASK_NOT_FOUND)

    return task


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    task_data: TaskCreate,
    response: Response,
    user_id: int = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    """
    Create a new task

    Args:
        task_data: Task creation data
        response: Outgoing response, receives the Location header
        user_id: Authenticated user ID
        service: Task service

    Returns:
        Created task
    """
    task = service.create(task_data, user_id)
    response.headers["Location"] = f"/api/tasks/{task.id}"
    return task


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: int,
    task_data: TaskUpdate,
    user_id: int = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    """
    Replace a task

    Args:
        task_id: Task ID
        task_data: Complete set of editable fields
        user_id: Authenticated user ID
        service: Task service

    Returns:
        Updated task
    """
    task = service.update_full(task_id, task_data, user_id)

    if task is None:
        raise NotFoundError(TASK_NOT_FOUND)

    return task


@router.patch("/{task_id}", response_model=TaskResponse)
async def patch_task(
    task_id: int,
    task_data: TaskPatch,
    user_id: int = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    """
    Update only the supplied fields of a task

    Args:
        task_id: Task ID
        task_data: Fields to change; omitted fields stay as they are
        user_id: Authenticated user ID
        service: Task service

    Returns:
        Updated task
    """
    task = service.update_partial(task_id, task_data, user_id)

    if task is None:
        raise NotFoundError(TASK_NOT_FOUND)

    return task


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: int,
    user_id: int = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
) -> Response:
    """
    Delete a task

    Args:
        task_id: Task ID
        user_id: Authenticated user ID
        service: Task service
    """
    if not service.delete(task_id, user_id):
        raise NotFoundError(TASK_NOT_FOUND)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
