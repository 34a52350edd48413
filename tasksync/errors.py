"""Error taxonomy for task synchronization.

Every error raised below the synchronizer is one of these. The synchronizer
catches them at its operation boundary and turns each into a single
user-facing notification.
"""


class TaskSyncError(Exception):
    """Base class for task synchronization errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationFailure(TaskSyncError):
    """Input rejected before any store call (e.g. empty title)."""


class StoreError(TaskSyncError):
    """The remote store rejected or failed a request."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class LoadFailure(StoreError):
    """Reading the task collection failed."""


class WriteFailure(StoreError):
    """Insert, update or delete failed."""
