"""Task API endpoints backed by the caller's synchronizer."""

from uuid import UUID

from fastapi import APIRouter, status

from tasksync.api.deps import CurrentSession
from tasksync.models.task import (
    TaskInput,
    TaskListResponse,
    TaskOperationResponse,
    TaskToggle,
)

router = APIRouter(prefix="/api/tasks", tags=["Tasks"])


@router.get("", response_model=TaskListResponse)
async def list_tasks_endpoint(session: CurrentSession) -> TaskListResponse:
    """Current task list of the authenticated user."""
    return session.synchronizer.snapshot()


@router.post("/reload", response_model=TaskListResponse)
async def reload_tasks_endpoint(session: CurrentSession) -> TaskListResponse:
    """Reload the task list from the store."""
    await session.synchronizer.load()
    return session.synchronizer.snapshot()


@router.post("", response_model=TaskOperationResponse, status_code=status.HTTP_201_CREATED)
async def create_task_endpoint(
    session: CurrentSession,
    task_data: TaskInput,
) -> TaskOperationResponse:
    """Create a new task for the authenticated user."""
    synchronizer = session.synchronizer
    task = await synchronizer.create(task_data.title, task_data.description)
    return TaskOperationResponse(
        ok=task is not None,
        task=task,
        snapshot=synchronizer.snapshot(),
    )


@router.put("/{task_id}", response_model=TaskOperationResponse)
async def update_task_endpoint(
    session: CurrentSession,
    task_id: UUID,
    task_data: TaskInput,
) -> TaskOperationResponse:
    """Update a task's title and description."""
    synchronizer = session.synchronizer
    ok = await synchronizer.update(task_id, task_data.title, task_data.description)
    return TaskOperationResponse(
        ok=ok,
        task=synchronizer.get(task_id),
        snapshot=synchronizer.snapshot(),
    )


@router.post("/{task_id}/toggle", response_model=TaskOperationResponse)
async def toggle_task_endpoint(
    session: CurrentSession,
    task_id: UUID,
    toggle: TaskToggle | None = None,
) -> TaskOperationResponse:
    """Set or invert task completion status."""
    synchronizer = session.synchronizer
    completed = toggle.completed if toggle else None
    ok = await synchronizer.toggle(task_id, completed)
    return TaskOperationResponse(
        ok=ok,
        task=synchronizer.get(task_id),
        snapshot=synchronizer.snapshot(),
    )


@router.delete("/{task_id}", response_model=TaskOperationResponse)
async def delete_task_endpoint(
    session: CurrentSession,
    task_id: UUID,
) -> TaskOperationResponse:
    """Delete a task."""
    synchronizer = session.synchronizer
    ok = await synchronizer.delete(task_id)
    return TaskOperationResponse(ok=ok, snapshot=synchronizer.snapshot())
