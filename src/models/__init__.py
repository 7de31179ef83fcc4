"""Models package."""

from .task import (
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    Task,
    TaskCreate,
    TaskResponse,
    TaskStatus,
    TaskType,
    TaskUpdate,
    as_utc,
)

__all__ = [
    "TITLE_MAX_LENGTH",
    "DESCRIPTION_MAX_LENGTH",
    "TaskStatus",
    "TaskType",
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
    "as_utc",
]
