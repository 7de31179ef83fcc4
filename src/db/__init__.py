"""Database package."""

from .client import SqliteTaskStore
from .ports import TaskStore

__all__ = [
    "TaskStore",
    "SqliteTaskStore",
]
