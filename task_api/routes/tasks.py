"""Task management CRUD routes."""

import logging
from typing import Any, List

from fastapi import APIRouter, Body, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from ..deps import get_task_service
from ..errors import ValidationError, error_body
from ..models.task import Task
from ..schemas import ErrorResponse, TaskDeleteResponse, TaskResponse, TaskStatsResponse
from ..services.task_service import TaskService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])

NOT_FOUND_RESPONSES = {404: {"model": ErrorResponse, "description": "Task not found"}}
VALIDATION_RESPONSES = {400: {"model": ErrorResponse, "description": "Validation error"}}


def to_response(task: Task) -> TaskResponse:
    """Convert a stored task to its API representation."""
    return TaskResponse(
        id=task.id,
        title=task.title,
        description=task.description,
        status=task.status,
        created_at=task.created_at,
        updated_at=task.updated_at
    )


def task_not_found(task_id: str) -> JSONResponse:
    """Build the 404 response for a missing task."""
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=error_body(
            status.HTTP_404_NOT_FOUND,
            "Task not found",
            f"Task with ID {task_id} does not exist"
        )
    )


def internal_error(action: str) -> HTTPException:
    """Build the generic 500 error; details stay in the server log."""
    logger.error(f"Unexpected error {action}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Something went wrong"
    )


@router.get("", response_model=List[TaskResponse])
@router.get("/", response_model=List[TaskResponse], include_in_schema=False)
async def list_tasks(
    task_service: TaskService = Depends(get_task_service)
) -> List[TaskResponse]:
    """List all tasks in creation order.

    Args:
        task_service: Task service instance

    Returns:
        List of task responses
    """
    try:
        tasks = task_service.get_all_tasks()
        logger.info(f"Retrieved {len(tasks)} tasks")

        return [to_response(task) for task in tasks]

    except Exception:
        raise internal_error("while listing tasks")


@router.get("/stats", response_model=TaskStatsResponse)
async def get_task_statistics(
    task_service: TaskService = Depends(get_task_service)
) -> TaskStatsResponse:
    """Get the total task count and the breakdown by status."""
    try:
        stats = task_service.get_stats()
        logger.info("Retrieved task statistics")

        return TaskStatsResponse(**stats)

    except Exception:
        raise internal_error("while retrieving statistics")


@router.get("/{task_id}", response_model=TaskResponse, responses=NOT_FOUND_RESPONSES)
async def get_task(
    task_id: str,
    task_service: TaskService = Depends(get_task_service)
):
    """Get a specific task by ID.

    Args:
        task_id: Task ID
        task_service: Task service instance

    Returns:
        Task response, or a 404 error body if the task does not exist
    """
    try:
        task = task_service.get_task(task_id)

        if not task:
            logger.warning(f"Task not found: {task_id}")
            return task_not_found(task_id)

        logger.info(f"Retrieved task: {task_id}")
        return to_response(task)

    except Exception:
        raise internal_error(f"getting task {task_id}")


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    responses=VALIDATION_RESPONSES,
)
@router.post(
    "/",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
async def create_task(
    payload: Any = Body(..., description="Task with title and optional description and status"),
    task_service: TaskService = Depends(get_task_service)
) -> TaskResponse:
    """Create a new task.

    Args:
        payload: Task creation data
        task_service: Task service instance

    Returns:
        Created task response

    Raises:
        ValidationError: If the payload breaks a validation rule
    """
    try:
        task = task_service.create_task(payload)
        logger.info(f"Task created: {task.id}")

        return to_response(task)

    except ValidationError as e:
        logger.warning(f"Validation error creating task: {e.message}")
        raise
    except Exception:
        raise internal_error("creating task")


@router.put(
    "/{task_id}",
    response_model=TaskResponse,
    responses={**NOT_FOUND_RESPONSES, **VALIDATION_RESPONSES},
)
async def update_task(
    task_id: str,
    payload: Any = Body(None, description="Fields to change"),
    task_service: TaskService = Depends(get_task_service)
):
    """Update a task.

    Args:
        task_id: Task ID
        payload: Task update data, a missing body changes nothing
        task_service: Task service instance

    Returns:
        Updated task response, or a 404 error body if the task does not exist

    Raises:
        ValidationError: If the payload breaks a validation rule
    """
    if payload is None:
        payload = {}

    try:
        task = task_service.update_task(task_id, payload)

        if not task:
            logger.warning(f"Task not found for update: {task_id}")
            return task_not_found(task_id)

        logger.info(f"Task updated: {task_id}")
        return to_response(task)

    except ValidationError as e:
        logger.warning(f"Validation error updating task {task_id}: {e.message}")
        raise
    except Exception:
        raise internal_error(f"updating task {task_id}")


@router.delete("/{task_id}", response_model=TaskDeleteResponse, responses=NOT_FOUND_RESPONSES)
async def delete_task(
    task_id: str,
    task_service: TaskService = Depends(get_task_service)
):
    """Delete a task.

    Args:
        task_id: Task ID
        task_service: Task service instance

    Returns:
        Deletion confirmation, or a 404 error body if the task does not exist
    """
    try:
        deleted = task_service.delete_task(task_id)

        if not deleted:
            logger.warning(f"Task not found for deletion: {task_id}")
            return task_not_found(task_id)

        logger.info(f"Task deleted: {task_id}")
        return TaskDeleteResponse(id=task_id)

    except Exception:
        raise internal_error(f"deleting task {task_id}")
