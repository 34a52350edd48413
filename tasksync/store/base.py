"""Remote store interface consumed by the task synchronizer."""

from abc import ABC, abstractmethod
from uuid import UUID

from tasksync.models.task import TaskCreate, TaskRecord, TaskUpdate


class TaskStore(ABC):
    """Query interface over the task collection.

    Every call is scoped to rows owned by ``user_id``. Implementations
    raise ``StoreError`` for any failure and nothing else.
    """

    @abstractmethod
    async def list_tasks(
        self,
        user_id: UUID,
        completed: bool | None = None,
    ) -> list[TaskRecord]:
        """Return the user's tasks ordered by created_at, newest first."""

    @abstractmethod
    async def insert_task(self, user_id: UUID, data: TaskCreate) -> TaskRecord:
        """Insert one task and return the stored record."""

    @abstractmethod
    async def update_task(self, user_id: UUID, task_id: UUID, changes: TaskUpdate) -> None:
        """Apply a partial field set to one task."""

    @abstractmethod
    async def delete_task(self, user_id: UUID, task_id: UUID) -> None:
        """Delete one task."""

    async def close(self) -> None:
        """Release any held resources."""
