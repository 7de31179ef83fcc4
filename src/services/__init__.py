"""Service layer package."""

from . import task_service

__all__ = ["task_service"]
