"""Models for the task synchronization client."""

from tasksync.models.identity import Identity
from tasksync.models.notification import Notification, Severity
from tasksync.models.task import (
    Task,
    TaskCreate,
    TaskInput,
    TaskListResponse,
    TaskOperationResponse,
    TaskRecord,
    TaskSummary,
    TaskToggle,
    TaskUpdate,
)

__all__ = [
    "Identity",
    "Notification",
    "Severity",
    "Task",
    "TaskCreate",
    "TaskInput",
    "TaskListResponse",
    "TaskOperationResponse",
    "TaskRecord",
    "TaskSummary",
    "TaskToggle",
    "TaskUpdate",
]
