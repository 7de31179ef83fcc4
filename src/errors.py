"""Error types raised by the store and service layers."""


class TaskNotFoundError(LookupError):
    """Raised when no task exists for the requested ID."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class StorageError(RuntimeError):
    """Raised when the underlying database operation fails."""
