"""Task synchronizer: the current user's task list, kept in step with the store.

Every mutation goes to the store first. The local list is only patched
after the store confirms, so a failed call leaves nothing to roll back.
Each operation catches its own failure, reports it once through the
notifier, and returns a falsy result instead of raising.

Lifecycle:
    LOADING  --load() resolves (success or failure)-->  READY
    any      --identity changes-->  LOADING (list cleared, reloaded)
"""

import logging
from collections.abc import Callable
from enum import Enum
from uuid import UUID

from tasksync.errors import TaskSyncError, WriteFailure
from tasksync.models.identity import Identity
from tasksync.models.notification import Severity
from tasksync.models.task import (
    TaskListResponse,
    TaskRecord,
    TaskSummary,
    TaskUpdate,
    build_task_create,
    build_task_edit,
    utcnow,
)
from tasksync.services.auth import AuthProvider
from tasksync.services.notifications import Notifier
from tasksync.store.base import TaskStore

logger = logging.getLogger(__name__)


class SyncState(str, Enum):
    """Externally visible synchronizer state."""

    LOADING = "loading"
    READY = "ready"


class TaskSynchronizer:
    """Owns the in-memory task list for one signed-in session."""

    def __init__(self, store: TaskStore, auth: AuthProvider, notifier: Notifier) -> None:
        self.store = store
        self.auth = auth
        self.notifier = notifier
        self._tasks: list[TaskRecord] = []
        self._is_loading = True
        self._unsubscribe: Callable[[], None] | None = None

    # ------------------------------------------------------------------
    # Read-only snapshot
    # ------------------------------------------------------------------

    @property
    def tasks(self) -> list[TaskRecord]:
        """Copy of the task list, newest first."""
        return list(self._tasks)

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def state(self) -> SyncState:
        return SyncState.LOADING if self._is_loading else SyncState.READY

    def get(self, task_id: UUID) -> TaskRecord | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def summary(self) -> TaskSummary:
        completed = sum(1 for task in self._tasks if task.completed)
        return TaskSummary(
            total=len(self._tasks),
            completed=completed,
            pending=len(self._tasks) - completed,
        )

    def snapshot(self) -> TaskListResponse:
        summary = self.summary()
        return TaskListResponse(
            tasks=self.tasks,
            total=summary.total,
            completed=summary.completed,
            is_loading=self._is_loading,
        )

    # ------------------------------------------------------------------
    # Identity binding
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Follow identity changes and load if someone is already signed in."""
        if self._unsubscribe is None:
            self._unsubscribe = self.auth.subscribe(self._on_identity_changed)
        if self.auth.identity is not None:
            await self.load()

    def stop(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def _on_identity_changed(
        self,
        previous: Identity | None,
        current: Identity | None,
    ) -> None:
        # Never keep one user's tasks visible to another
        self._tasks = []
        self._is_loading = True
        if current is not None:
            await self.load()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def load(self) -> bool:
        """Replace the list with the owner's tasks from the store.

        Skipped when nobody is signed in. On failure the previous list is
        kept and loading still resolves.
        """
        identity = self.auth.identity
        if identity is None:
            logger.debug("Load skipped: no identity")
            return False

        try:
            tasks = await self.store.list_tasks(identity.id)
        except TaskSyncError as e:
            if self._owner_is(identity):
                self._is_loading = False
                self._report_failure("Error loading tasks", e)
            return False

        if not self._owner_is(identity):
            logger.info("Discarding tasks loaded for previous identity %s", identity.id)
            return False

        self._tasks = list(tasks)
        self._is_loading = False
        logger.info("Loaded %d tasks for user %s", len(self._tasks), identity.id)
        return True

    async def create(self, title: str, description: str | None = None) -> TaskRecord | None:
        """Insert a task and prepend the stored record.

        If the identity changed while the insert was in flight the record is
        still returned and reported, but not added to the new owner's list.
        """
        try:
            identity = self._require_identity()
            data = build_task_create(title, description)
            record = await self.store.insert_task(identity.id, data)
        except TaskSyncError as e:
            self._report_failure("Error adding task", e)
            return None

        if self._owner_is(identity):
            # created_at is always "now", so the head keeps the list sorted
            self._tasks.insert(0, record)
        else:
            logger.info("Identity changed while creating task %s; list left as is", record.id)

        logger.info("Created task %s", record.id)
        self.notifier.notify("Task added!", "Your new task was created successfully.")
        return record

    async def toggle(self, task_id: UUID, completed: bool | None = None) -> bool:
        """Set a task's completion flag.

        Callers normally pass the new value. When it is omitted the current
        local value is negated.
        """
        if completed is None:
            current = self.get(task_id)
            if current is None:
                logger.warning("Toggle ignored for unknown task %s", task_id)
                return False
            completed = not current.completed

        try:
            identity = self._require_identity()
            changes = TaskUpdate(completed=completed, updated_at=utcnow())
            await self.store.update_task(identity.id, task_id, changes)
        except TaskSyncError as e:
            self._report_failure("Error updating task", e)
            return False

        if self._owner_is(identity) and not self._patch(task_id, completed=completed):
            logger.info("Toggled task %s is not in the list", task_id)
            return False

        logger.info("Task %s marked %s", task_id, "completed" if completed else "pending")
        if completed:
            self.notifier.notify("Task completed!", "Congratulations on finishing the task!")
        else:
            self.notifier.notify("Task reopened", "Task marked as pending.")
        return True

    async def update(self, task_id: UUID, title: str, description: str | None = None) -> bool:
        """Save a new title and description for a task."""
        try:
            identity = self._require_identity()
            changes = build_task_edit(title, description)
            await self.store.update_task(identity.id, task_id, changes)
        except TaskSyncError as e:
            self._report_failure("Error updating task", e)
            return False

        if self._owner_is(identity) and not self._patch(
            task_id, title=changes.title, description=changes.description
        ):
            logger.info("Updated task %s is not in the list", task_id)
            return False

        logger.info("Updated task %s", task_id)
        self.notifier.notify("Task updated!", "Your changes were saved successfully.")
        return True

    async def delete(self, task_id: UUID) -> bool:
        """Delete a task and drop it from the list."""
        try:
            identity = self._require_identity()
            await self.store.delete_task(identity.id, task_id)
        except TaskSyncError as e:
            self._report_failure("Error removing task", e)
            return False

        if self._owner_is(identity):
            remaining = [task for task in self._tasks if task.id != task_id]
            if len(remaining) == len(self._tasks):
                logger.info("Deleted task %s is not in the list", task_id)
                return False
            self._tasks = remaining

        logger.info("Deleted task %s", task_id)
        self.notifier.notify("Task removed", "The task was removed successfully.")
        return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_identity(self) -> Identity:
        identity = self.auth.identity
        if identity is None:
            raise WriteFailure("You must be signed in to change tasks")
        return identity

    def _owner_is(self, identity: Identity) -> bool:
        current = self.auth.identity
        return current is not None and current.id == identity.id

    def _patch(self, task_id: UUID, **fields) -> bool:
        # Looked up after the await, so concurrent patches on other ids are kept
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                self._tasks[index] = task.model_copy(update=fields)
                return True
        return False

    def _report_failure(self, title: str, error: TaskSyncError) -> None:
        logger.error("%s: %s", title, error.message)
        self.notifier.notify(title, error.message, Severity.ERROR)
